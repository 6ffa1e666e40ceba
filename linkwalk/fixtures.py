# File: linkwalk/fixtures.py
"""linkwalk.fixtures: built-in demo graph used when no graph file is configured."""

from __future__ import annotations

from linkwalk.walker.fetcher import FakeFetcher
from linkwalk.walker.models import Page

DEMO_ROOT = "http://golang.org/"

DEMO_GRAPH: dict[str, Page] = {
    "http://golang.org/": Page(
        "The Go Programming Language",
        ("http://golang.org/pkg/", "http://golang.org/cmd/"),
    ),
    "http://golang.org/pkg/": Page(
        "Packages",
        (
            "http://golang.org/",
            "http://golang.org/cmd/",
            "http://golang.org/pkg/fmt/",
            "http://golang.org/pkg/os/",
        ),
    ),
    "http://golang.org/pkg/fmt/": Page(
        "Package fmt",
        ("http://golang.org/", "http://golang.org/pkg/"),
    ),
    "http://golang.org/pkg/os/": Page(
        "Package os",
        ("http://golang.org/", "http://golang.org/pkg/"),
    ),
}


def demo_fetcher(*, delay: float = 0.0) -> FakeFetcher:
    """Fresh fetcher over :data:`DEMO_GRAPH` (``/cmd/`` is deliberately missing)."""
    return FakeFetcher(DEMO_GRAPH, delay=delay)
