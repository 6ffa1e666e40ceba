# === FILE: linkwalk/walker/traverser.py ===
"""
Concurrent depth-bounded walker over a linked document graph.

Each call claims its node in the shared :class:`VisitTracker`, fetches it,
records the outcome and fans out one task per outbound link. The call returns
only after every task it started has finished, so the outermost call returns
once the whole reachable subgraph is visited.
"""
from __future__ import annotations

import asyncio
import contextlib
import time
from dataclasses import dataclass
from typing import AsyncContextManager, Mapping, Optional

from linkwalk.logger import logger
from linkwalk.walker.fetcher import Fetcher
from linkwalk.walker.models import FetchError, NodeID, VisitRecord
from linkwalk.walker.tracker import VisitTracker

__all__ = ("CrawlResult", "traverse", "crawl")


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Everything a reporter needs once the walk has joined."""

    root: NodeID
    max_depth: int
    records: Mapping[NodeID, VisitRecord]
    duration: float

    @property
    def fetched(self) -> int:
        return sum(1 for r in self.records.values() if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.records.values() if r.error is not None)


def _wrap(node_id: NodeID, exc: Exception) -> FetchError:
    """Fetch failure carrying a foreign exception as its cause."""
    error = FetchError(f"{node_id}: {type(exc).__name__}: {exc}")
    error.__cause__ = exc
    return error


async def traverse(
    node_id: NodeID,
    depth: int,
    fetcher: Fetcher,
    tracker: VisitTracker,
    *,
    limiter: Optional[AsyncContextManager] = None,
) -> None:
    """Visit *node_id* and everything reachable from it within *depth* hops.

    A node reached with ``depth <= 0`` is neither claimed nor fetched. A node
    already claimed by any branch is skipped. Fetch failures are stored in the
    node's record and stop expansion of that node only.
    """
    if depth <= 0:
        return
    if not tracker.try_claim(node_id):
        logger.debug("Skip %s: already claimed", node_id)
        return

    try:
        async with limiter or contextlib.nullcontext():
            page = await fetcher.fetch(node_id)
    except Exception as exc:
        error = exc if isinstance(exc, FetchError) else _wrap(node_id, exc)
        tracker.finalize(node_id, VisitRecord.failed(node_id, error))
        logger.warning("Failed %s: %s", node_id, error)
        return

    record = VisitRecord.fetched(node_id, page)
    tracker.finalize(node_id, record)
    logger.debug("Fetched %s (%d links, depth budget %d)", node_id, len(record.links), depth)

    if not record.links:
        return
    # One task per link, duplicates included; the group exits only when all are done.
    async with asyncio.TaskGroup() as group:
        for link in record.links:
            group.create_task(traverse(link, depth - 1, fetcher, tracker, limiter=limiter))


async def crawl(
    root: NodeID,
    max_depth: int,
    fetcher: Fetcher,
    *,
    max_concurrency: Optional[int] = None,
) -> CrawlResult:
    """Walk from *root* with a fresh tracker and return the joined result.

    ``max_concurrency`` bounds simultaneous fetches; ``None`` leaves fan-out
    unbounded.
    """
    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")
    if max_concurrency is not None and max_concurrency < 1:
        raise ValueError("max_concurrency must be >= 1")

    tracker = VisitTracker()
    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    logger.info("Walk started: %s (max depth %d)", root, max_depth)
    start = time.monotonic()
    await traverse(root, max_depth, fetcher, tracker, limiter=limiter)
    duration = time.monotonic() - start

    result = CrawlResult(root, max_depth, tracker.snapshot(), duration)
    logger.info(
        "Walk finished: %d nodes (%d fetched, %d failed) in %.2f s",
        len(result.records), result.fetched, result.failed, duration,
    )
    return result
