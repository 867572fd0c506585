"""
notifiers/hub.py
----------------
Fan-out layer that owns multiple back-end notifiers and relays every
activity entry the desk publishes on its event bus.
"""
from __future__ import annotations
import logging
from typing import Iterable, List

from models.activity import ActivityEntry, ActivityKind
from notifiers.base import BaseNotifier
from utils.event_bus import EventBus

logger = logging.getLogger(__name__)

ICONS = {
    ActivityKind.DETECTION: "🎯",
    ActivityKind.ANALYSIS: "🔍",
    ActivityKind.TRADE: "💰",
    ActivityKind.SYSTEM: "⚙️",
}


class NotifierHub:
    """Collects back-ends and broadcasts formatted feed lines."""

    def __init__(self, backends: Iterable[BaseNotifier] = ()) -> None:
        self.backends: List[BaseNotifier] = list(backends)

    def attach(self, bus: EventBus) -> None:
        bus.subscribe("activity", self.send_activity)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def send_activity(self, entry: ActivityEntry) -> None:
        text = self._format_entry(entry)
        for b in self.backends:
            try:
                b.send(text)
            except Exception:  # noqa: BLE001 (keep hub robust)
                # do NOT let one failing back-end starve the others
                logger.exception("[NotifierHub] back-end %s failed", b.__class__.__name__)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _format_entry(entry: ActivityEntry) -> str:
        ts = entry.timestamp.strftime("%H:%M:%S")
        return f"{ICONS.get(entry.kind, '•')} {ts} [{entry.kind.value}] {entry.message}"
