"""
detection_registry.py
---------------------
Bounded, newest-first store of detections.  Owns the detection lifecycle:
nobody else swaps entries in or out.  The backing tuple is replaced in a
single step on every mutation, so a snapshot taken at any point is
internally consistent.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from models.detection import Detection
from utils.ring import bounded_prepend, replace_first

logger = logging.getLogger(__name__)

RegistryListener = Callable[["DetectionRegistry"], None]


class DetectionRegistry:
    def __init__(self, capacity: int = 10) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: Tuple[Detection, ...] = ()
        self._listeners: List[RegistryListener] = []

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def create(self, detection: Detection) -> str:
        """Prepend *detection*; the oldest entry falls off past capacity."""
        if self.get(detection.id) is not None:
            raise ValueError(f"duplicate detection id {detection.id!r}")
        before = self._items
        self._items = bounded_prepend(before, detection, self.capacity)
        if len(before) == self.capacity:
            logger.debug("[Registry] evicted %s (%s)", before[-1].id, before[-1].symbol)
        self._notify()
        return detection.id

    def update_by_id(self, detection_id: str, patch: Dict[str, Any]) -> bool:
        """Apply *patch* to the entry with *detection_id* if it is still held.

        Returns ``False`` (and changes nothing) when the id is unknown,
        typically because the entry was evicted.  Illegal status moves raise
        ``InvalidTransitionError``.
        """
        items, updated = replace_first(
            self._items,
            lambda d: d.id == detection_id,
            lambda d: d.apply(patch),
        )
        if updated is None:
            return False
        self._items = items
        self._notify()
        return True

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def query(self, predicate: Callable[[Detection], bool]) -> Optional[Detection]:
        """First match scanning newest-first, or ``None``."""
        return next((d for d in self._items if predicate(d)), None)

    def get(self, detection_id: str) -> Optional[Detection]:
        return self.query(lambda d: d.id == detection_id)

    def snapshot(self) -> Tuple[Detection, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    # ------------------------------------------------------------------ #
    # Observers
    # ------------------------------------------------------------------ #
    def subscribe(self, listener: RegistryListener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
