# File: tests/test_traverser.py
from __future__ import annotations

import asyncio
import random
import time

import pytest

from linkwalk.fixtures import DEMO_ROOT, demo_fetcher
from linkwalk.walker.fetcher import BlockingFetcher, FakeFetcher
from linkwalk.walker.models import FetchError, NotFoundError, Page, VisitState
from linkwalk.walker.tracker import VisitTracker
from linkwalk.walker.traverser import crawl, traverse


# --------------------------------------------------------------------------- #
#                               Helper fetchers                               #
# --------------------------------------------------------------------------- #


class InFlightFetcher(FakeFetcher):
    """Tracks the highest number of fetches running at the same time."""

    def __init__(self, pages, *, delay: float = 0.0) -> None:
        super().__init__(pages, delay=delay)
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, node_id):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            return await super().fetch(node_id)
        finally:
            self.in_flight -= 1


class JitterFetcher(FakeFetcher):
    """Random per-call delay so siblings finish in arbitrary order."""

    async def fetch(self, node_id):
        await asyncio.sleep(random.uniform(0, 0.02))
        return await super().fetch(node_id)


class BrokenFetcher(FakeFetcher):
    """Raises a non-fetch error for one node."""

    def __init__(self, pages, broken) -> None:
        super().__init__(pages)
        self.broken = broken

    async def fetch(self, node_id):
        if node_id == self.broken:
            raise RuntimeError("fetcher malfunction")
        return await super().fetch(node_id)


# --------------------------------------------------------------------------- #
#                         Letters graph scenarios                             #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_full_depth_visits_each_node_once(letters_fetcher):
    result = await crawl("A", 4, letters_fetcher)

    assert set(result.records) == {"A", "B", "C", "D1", "D2"}
    assert all(count == 1 for count in letters_fetcher.calls.values())
    assert letters_fetcher.total_calls == 5
    assert result.records["A"].content == "Page A"
    assert result.records["B"].links == ("A", "C", "D1", "D2")
    for missing in ("D1", "D2"):
        assert isinstance(result.records[missing].error, NotFoundError)
    assert result.fetched == 3
    assert result.failed == 2


@pytest.mark.asyncio()
async def test_depth_one_fetches_root_only(letters_fetcher):
    result = await crawl("A", 1, letters_fetcher)

    assert set(result.records) == {"A"}
    assert set(letters_fetcher.calls) == {"A"}


@pytest.mark.asyncio()
async def test_depth_two_stops_before_distance_three(letters_fetcher):
    result = await crawl("A", 2, letters_fetcher)

    assert set(result.records) == {"A", "B", "C"}
    assert "D1" not in letters_fetcher.calls
    assert "D2" not in letters_fetcher.calls
    # nodes at the depth limit are fetched with their links, but not expanded
    assert result.records["B"].links == ("A", "C", "D1", "D2")


@pytest.mark.asyncio()
async def test_depth_zero_claims_nothing(letters_fetcher):
    result = await crawl("A", 0, letters_fetcher)
    assert dict(result.records) == {}

    tracker = VisitTracker()
    await traverse("A", 0, letters_fetcher, tracker)
    assert "A" not in tracker
    assert letters_fetcher.total_calls == 0


@pytest.mark.asyncio()
async def test_negative_depth_rejected(letters_fetcher):
    with pytest.raises(ValueError):
        await crawl("A", -1, letters_fetcher)


@pytest.mark.asyncio()
async def test_cycle_terminates():
    fetcher = FakeFetcher.from_mapping({"A": ("a", ["B"]), "B": ("b", ["A"])})
    result = await asyncio.wait_for(crawl("A", 10, fetcher), timeout=5)

    assert set(result.records) == {"A", "B"}
    assert fetcher.calls == {"A": 1, "B": 1}


@pytest.mark.asyncio()
async def test_failed_node_is_not_expanded():
    fetcher = FakeFetcher.from_mapping({"R": ("root", ["X", "Y"]), "Y": ("y", [])})
    result = await crawl("R", 5, fetcher)

    x = result.records["X"]
    assert x.state is VisitState.FINAL
    assert str(x.error) == "not found: X"
    assert x.links == ()
    assert x.content == ""
    assert result.records["Y"].ok
    assert result.records["R"].ok


@pytest.mark.asyncio()
async def test_failed_root_records_error():
    fetcher = FakeFetcher({})
    result = await crawl("X", 3, fetcher)

    assert set(result.records) == {"X"}
    assert result.records["X"].error is not None
    assert fetcher.total_calls == 1


@pytest.mark.asyncio()
async def test_duplicate_links_fetch_once():
    fetcher = FakeFetcher.from_mapping(
        {"A": ("a", ["B", "B", "B", "C", "B"]), "B": ("b", ["C", "C"]), "C": ("c", [])},
        delay=0.01,
    )
    result = await crawl("A", 3, fetcher)

    assert set(result.records) == {"A", "B", "C"}
    assert fetcher.calls == {"A": 1, "B": 1, "C": 1}


@pytest.mark.asyncio()
async def test_empty_content_is_final_not_pending():
    fetcher = FakeFetcher({"E": Page("", ())})
    result = await crawl("E", 1, fetcher)

    record = result.records["E"]
    assert record.state is VisitState.FINAL
    assert record.ok
    assert record.content == ""


@pytest.mark.asyncio()
async def test_demo_graph():
    fetcher = demo_fetcher()
    result = await crawl(DEMO_ROOT, 4, fetcher)

    assert len(result.records) == 5
    assert result.records["http://golang.org/cmd/"].error is not None
    assert result.records["http://golang.org/pkg/fmt/"].content == "Package fmt"
    assert fetcher.total_calls == 5


# --------------------------------------------------------------------------- #
#                         Concurrency and join                                #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_shared_child_claimed_once_under_contention():
    width = 30
    graph = {"root": ("root", [f"n{i}" for i in range(width)])}
    for i in range(width):
        graph[f"n{i}"] = (f"n{i}", ["shared", "root", f"n{(i + 1) % width}"])
    graph["shared"] = ("shared", [])
    fetcher = FakeFetcher.from_mapping(graph, delay=0.01)

    result = await crawl("root", 3, fetcher)

    assert len(result.records) == width + 2
    assert all(count == 1 for count in fetcher.calls.values())


@pytest.mark.asyncio()
async def test_siblings_fetched_concurrently():
    delay = 0.2
    graph = {"root": ("root", ["s1", "s2", "s3"])}
    graph.update({f"s{i}": (f"s{i}", []) for i in (1, 2, 3)})
    fetcher = InFlightFetcher(FakeFetcher.from_mapping(graph).pages, delay=delay)

    start = time.perf_counter()
    await crawl("root", 2, fetcher)
    elapsed = time.perf_counter() - start

    assert fetcher.peak == 3
    assert elapsed < delay * 3


@pytest.mark.asyncio()
async def test_nothing_pending_after_return():
    graph = {f"n{i}": (f"n{i}", [f"n{(i * 7 + k) % 40}" for k in range(4)]) for i in range(40)}
    fetcher = JitterFetcher(FakeFetcher.from_mapping(graph).pages)
    tracker = VisitTracker()

    await traverse("n0", 6, fetcher, tracker)

    assert tracker.pending() == []
    assert all(r.is_final for r in tracker.snapshot().values())
    assert all(count == 1 for count in fetcher.calls.values())


@pytest.mark.asyncio()
async def test_snapshot_is_stable_after_completion(letters_fetcher):
    tracker = VisitTracker()
    await traverse("A", 4, letters_fetcher, tracker)

    first = dict(tracker.snapshot())
    second = dict(tracker.snapshot())
    assert first == second


@pytest.mark.asyncio()
async def test_max_concurrency_bounds_in_flight_fetches():
    graph = {"root": ("root", [f"c{i}" for i in range(10)])}
    graph.update({f"c{i}": (f"c{i}", []) for i in range(10)})
    fetcher = InFlightFetcher(FakeFetcher.from_mapping(graph).pages, delay=0.02)

    result = await crawl("root", 2, fetcher, max_concurrency=2)

    assert len(result.records) == 11
    assert fetcher.peak <= 2


@pytest.mark.asyncio()
async def test_invalid_max_concurrency(letters_fetcher):
    with pytest.raises(ValueError):
        await crawl("A", 2, letters_fetcher, max_concurrency=0)


@pytest.mark.asyncio()
async def test_tracker_is_not_shared_between_walks(letters_fetcher):
    first = await crawl("A", 1, letters_fetcher)
    second = await crawl("A", 1, letters_fetcher)

    assert set(first.records) == set(second.records) == {"A"}
    assert letters_fetcher.calls["A"] == 2


@pytest.mark.asyncio()
async def test_preclaimed_root_is_skipped(letters_fetcher):
    tracker = VisitTracker()
    assert tracker.try_claim("A")

    await traverse("A", 4, letters_fetcher, tracker)

    assert letters_fetcher.total_calls == 0
    assert tracker.state("A") is VisitState.CLAIMED


@pytest.mark.asyncio()
async def test_unexpected_fetcher_error_is_contained():
    fetcher = BrokenFetcher(
        FakeFetcher.from_mapping({"A": ("a", ["B", "C"]), "C": ("c", [])}).pages, broken="B"
    )
    result = await crawl("A", 3, fetcher)

    b = result.records["B"]
    assert b.state is VisitState.FINAL
    assert isinstance(b.error, FetchError)
    assert isinstance(b.error.__cause__, RuntimeError)
    assert "fetcher malfunction" in str(b.error)
    assert b.links == ()
    assert result.records["A"].ok
    assert result.records["C"].ok


@pytest.mark.asyncio()
async def test_blocking_fetcher_os_error_is_contained():
    graph = {"A": ("a", ["B", "C"]), "C": ("c", ["D"]), "D": ("d", [])}

    def fetch(node_id):
        if node_id == "B":
            raise OSError(f"connection refused: {node_id}")
        return graph[node_id]

    result = await crawl("A", 3, BlockingFetcher(fetch))

    assert set(result.records) == {"A", "B", "C", "D"}
    assert "connection refused: B" in str(result.records["B"].error)
    assert result.records["C"].ok
    assert result.records["D"].ok
    assert result.failed == 1
