# modules/activity_journal.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from models.activity import ActivityEntry, ActivityKind
from utils.random_source import BaseRandomSource, SystemRandomSource
from utils.ring import bounded_prepend

Publisher = Callable[[str, object], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityJournal:
    """Newest-first feed of human readable events, capped at *capacity*."""

    TOPIC = "activity"

    def __init__(
        self,
        capacity: int = 50,
        *,
        rng: Optional[BaseRandomSource] = None,
        clock: Callable[[], datetime] = _utcnow,
        publish: Optional[Publisher] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._rng = rng or SystemRandomSource()
        self._clock = clock
        self._publish = publish
        self._entries: Tuple[ActivityEntry, ...] = ()

    def append(self, kind: ActivityKind, message: str) -> ActivityEntry:
        entry = ActivityEntry(
            id=self._rng.token(),
            kind=ActivityKind(kind),
            message=message,
            timestamp=self._clock(),
        )
        self._entries = bounded_prepend(self._entries, entry, self.capacity)
        if self._publish is not None:
            self._publish(self.TOPIC, entry)
        return entry

    def snapshot(self) -> Tuple[ActivityEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)
