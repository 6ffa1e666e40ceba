# linkwalk/walker/tracker.py
"""
Shared visited-set with atomic claim semantics.
"""
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from linkwalk.walker.models import NodeID, TrackerError, VisitRecord, VisitState


class VisitTracker:
    """Concurrency-safe registry of claimed and visited nodes.

    Every read and write happens under one lock, so :meth:`try_claim` is the
    single dedup gate for all traversal branches. Critical sections never
    await, which makes the tracker usable from the event loop and from worker
    threads.
    """

    def __init__(self) -> None:
        self._records: Dict[NodeID, VisitRecord] = {}
        self._lock = threading.Lock()

    def try_claim(self, node_id: NodeID) -> bool:
        """Reserve *node_id* for fetching. Returns False if anyone got there first."""
        with self._lock:
            if node_id in self._records:
                return False
            self._records[node_id] = VisitRecord.claimed(node_id)
            return True

    def finalize(self, node_id: NodeID, record: VisitRecord) -> None:
        """Replace the claim on *node_id* with its final outcome."""
        if not record.is_final:
            raise TrackerError(f"record for {node_id!r} is not final")
        with self._lock:
            current = self._records.get(node_id)
            if current is None:
                raise TrackerError(f"{node_id!r} was never claimed")
            if current.is_final:
                raise TrackerError(f"{node_id!r} is already final")
            self._records[node_id] = record

    def snapshot(self) -> Mapping[NodeID, VisitRecord]:
        """Read-only copy of all entries, in claim order."""
        with self._lock:
            return MappingProxyType(dict(self._records))

    def state(self, node_id: NodeID) -> Optional[VisitState]:
        with self._lock:
            record = self._records.get(node_id)
        return None if record is None else record.state

    def pending(self) -> List[NodeID]:
        with self._lock:
            return [k for k, r in self._records.items() if not r.is_final]

    def __contains__(self, node_id: object) -> bool:
        with self._lock:
            return node_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
