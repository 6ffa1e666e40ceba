# linkwalk/walker/models.py
"""
Data models for the LinkWalk traversal core.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Hashable, Optional, Tuple

NodeID = Hashable


class FetchError(Exception):
    """A single node could not be fetched. Recorded, never propagated by the walker."""


class NotFoundError(FetchError):
    """The fetcher has no document for the requested node."""


class TrackerError(RuntimeError):
    """A tracker entry was finalized without holding the claim for it."""


class VisitState(str, enum.Enum):
    CLAIMED = "claimed"
    FINAL = "final"


@dataclass(frozen=True, slots=True)
class Page:
    """Successful fetch payload: document body and outbound links in page order."""

    content: str
    links: Tuple[NodeID, ...] = ()


@dataclass(frozen=True, slots=True)
class VisitRecord:
    """Outcome of visiting one node.

    A CLAIMED record marks a fetch in flight and carries no payload; a FINAL
    record holds either the page content and links or the fetch error.
    """

    node_id: NodeID
    state: VisitState
    content: str = ""
    links: Tuple[NodeID, ...] = field(default_factory=tuple)
    error: Optional[FetchError] = None

    @classmethod
    def claimed(cls, node_id: NodeID) -> VisitRecord:
        return cls(node_id, VisitState.CLAIMED)

    @classmethod
    def fetched(cls, node_id: NodeID, page: Page) -> VisitRecord:
        return cls(node_id, VisitState.FINAL, page.content, tuple(page.links))

    @classmethod
    def failed(cls, node_id: NodeID, error: FetchError) -> VisitRecord:
        return cls(node_id, VisitState.FINAL, error=error)

    @property
    def is_final(self) -> bool:
        return self.state is VisitState.FINAL

    @property
    def ok(self) -> bool:
        return self.is_final and self.error is None
