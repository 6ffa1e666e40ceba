"""
LinkWalk package initializer.
Defines package version and exposes the walking API.
"""
__version__ = "0.1.0"

from linkwalk.walker import (  # noqa: E402
    CrawlResult,
    FetchError,
    Page,
    VisitRecord,
    VisitState,
    VisitTracker,
    crawl,
    traverse,
)

__all__ = [
    "__version__",
    "CrawlResult",
    "FetchError",
    "Page",
    "VisitRecord",
    "VisitState",
    "VisitTracker",
    "crawl",
    "traverse",
]
