"""linkwalk.walker: deduplicated concurrent traversal core."""

from linkwalk.walker.fetcher import BlockingFetcher, FakeFetcher, Fetcher, HttpFetcher
from linkwalk.walker.models import (
    FetchError,
    NotFoundError,
    Page,
    TrackerError,
    VisitRecord,
    VisitState,
)
from linkwalk.walker.tracker import VisitTracker
from linkwalk.walker.traverser import CrawlResult, crawl, traverse

__all__ = [
    "BlockingFetcher",
    "CrawlResult",
    "FakeFetcher",
    "FetchError",
    "Fetcher",
    "HttpFetcher",
    "NotFoundError",
    "Page",
    "TrackerError",
    "VisitRecord",
    "VisitState",
    "VisitTracker",
    "crawl",
    "traverse",
]
