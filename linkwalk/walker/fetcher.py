# linkwalk/walker/fetcher.py
"""
Fetcher implementations: the pluggable capability that turns a node id into a
:class:`Page` or raises :class:`FetchError`.
"""
from __future__ import annotations

import asyncio
import json
from collections import Counter
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol, Sequence, Tuple, Union

import yaml
from aiohttp import ClientError, ClientSession, ClientTimeout

from linkwalk.walker.link_extractor import extract_links
from linkwalk.walker.models import FetchError, NodeID, NotFoundError, Page

__all__ = (
    "Fetcher",
    "FakeFetcher",
    "BlockingFetcher",
    "HttpFetcher",
    "HttpStatusError",
    "load_graph",
)


class Fetcher(Protocol):
    """Anything the walker can ask for a node. Must tolerate concurrent calls."""

    async def fetch(self, node_id: NodeID) -> Page:
        ...


class HttpStatusError(FetchError):
    """Server answered with an error status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"HTTP {status}: {url}")
        self.url = url
        self.status = status


# --------------------------------------------------------------------------- #
# Canned graph                                                                #
# --------------------------------------------------------------------------- #


class FakeFetcher:
    """Fetcher over an in-memory graph; unknown ids fail with ``not found``.

    ``calls`` counts every fetch per id. ``delay`` suspends each fetch so
    concurrent branches actually interleave in tests.
    """

    def __init__(self, pages: Mapping[NodeID, Page], *, delay: float = 0.0) -> None:
        self.pages: Dict[NodeID, Page] = dict(pages)
        self.delay = delay
        self.calls: Counter = Counter()

    @classmethod
    def from_mapping(cls, graph: Mapping[NodeID, Any], *, delay: float = 0.0) -> FakeFetcher:
        """Build from ``{id: (body, [links])}`` or ``{id: {"body": ..., "links": [...]}}``."""
        pages: Dict[NodeID, Page] = {}
        for node_id, entry in graph.items():
            if isinstance(entry, Page):
                pages[node_id] = entry
            elif isinstance(entry, Mapping):
                pages[node_id] = Page(str(entry.get("body", "")), tuple(entry.get("links") or ()))
            else:
                body, links = entry
                pages[node_id] = Page(body, tuple(links))
        return cls(pages, delay=delay)

    @classmethod
    def from_file(cls, path: Union[str, Path], *, delay: float = 0.0) -> FakeFetcher:
        return cls.from_mapping(load_graph(path), delay=delay)

    async def fetch(self, node_id: NodeID) -> Page:
        self.calls[node_id] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        try:
            return self.pages[node_id]
        except KeyError:
            raise NotFoundError(f"not found: {node_id}") from None

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


def load_graph(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a graph fixture file (YAML or JSON) shaped as
    ``{pages: {id: {body: str, links: [id, ...]}}}`` and return the ``pages`` mapping.
    """
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(f"Graph file not found: {p}")
    text = p.read_text(encoding="utf-8")
    suffix = p.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        elif suffix == ".json":
            data = json.loads(text) or {}
        else:
            raise ValueError(f"Unsupported graph file format: {suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ValueError(f"Malformed graph file {p}: {exc}") from exc
    pages = data.get("pages") if isinstance(data, dict) else None
    if not isinstance(pages, dict):
        raise TypeError(f"Graph file {p} must contain a 'pages' mapping")
    return pages


# --------------------------------------------------------------------------- #
# Synchronous callables                                                       #
# --------------------------------------------------------------------------- #


class BlockingFetcher:
    """Runs a blocking ``fn(node_id) -> (content, links)`` in a worker thread.

    *fn* is called from several threads at once and must be thread-safe. It
    signals failure by raising; the walker records any exception as a fetch error.
    """

    def __init__(self, fn: Callable[[NodeID], Tuple[str, Iterable[NodeID]]]) -> None:
        self._fn = fn

    async def fetch(self, node_id: NodeID) -> Page:
        content, links = await asyncio.to_thread(self._fn, node_id)
        return Page(content, tuple(links))


# --------------------------------------------------------------------------- #
# HTTP                                                                        #
# --------------------------------------------------------------------------- #


class HttpFetcher:
    """One GET per node over a shared aiohttp session. No retries."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        user_agent: str = "LinkWalk/1.0",
        same_host: bool = True,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.same_host = same_host
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> HttpFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    async def fetch(self, node_id: NodeID) -> Page:
        if not self.session:
            raise RuntimeError("Session not initialized")
        url = str(node_id)
        try:
            async with self.session.get(url) as resp:
                if resp.status >= 400:
                    raise HttpStatusError(url, resp.status)
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                text = await resp.text()
                final_url = str(resp.url)
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            raise FetchError(f"{url}: {str(exc) or type(exc).__name__}") from exc

        links: Sequence[str] = ()
        if mime in ("text/html", "application/xhtml+xml"):
            links = extract_links(final_url, text, same_host=self.same_host)
        return Page(text, tuple(links))
