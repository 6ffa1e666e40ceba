# File: linkwalk/aggregator.py
"""linkwalk.aggregator: turns a joined walk into a serialisable report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import List, TypedDict

from linkwalk.walker.traverser import CrawlResult


class FetchedInfo(TypedDict):
    """A node that was fetched successfully."""

    id: str
    content: str
    links: List[str]


class FailedInfo(TypedDict):
    """A node whose fetch failed."""

    id: str
    error: str


@dataclass(slots=True)
class CrawlReport:
    """Outcome of one walk: fetched and failed nodes, sorted by id."""

    root: str
    max_depth: int
    duration: float = 0.0
    fetched: List[FetchedInfo] = field(default_factory=list)
    failed: List[FailedInfo] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.fetched) + len(self.failed)

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(result: CrawlResult) -> CrawlReport:
    """Split the final records into fetched and failed entries.

    Records still marked as claimed (a walk that did not join) are left out.
    """
    report = CrawlReport(root=str(result.root), max_depth=result.max_depth, duration=result.duration)
    for node_id, record in sorted(result.records.items(), key=lambda kv: str(kv[0])):
        if not record.is_final:
            continue
        if record.error is not None:
            report.failed.append({"id": str(node_id), "error": str(record.error)})
        else:
            report.fetched.append(
                {
                    "id": str(node_id),
                    "content": record.content,
                    "links": [str(link) for link in record.links],
                }
            )
    return report
