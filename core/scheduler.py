"""
core/scheduler.py
-----------------
Central dispatcher for the desk's delayed work (analysis, auto-trade).

Callers never close over live objects: they hand in a ``TaskRecord`` that
names the handler kind and the target detection id.  When the delay
elapses the registered handler receives the record and must re-read the
current state before acting, so an evicted or already-advanced target
turns into a quiet no-op.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Set

TaskHandler = Callable[["TaskRecord"], None]


@dataclass(frozen=True)
class TaskRecord:
    kind: str
    target_id: str
    delay: float


class TaskScheduler:
    """Runs each record once, ``delay`` seconds after ``schedule()``."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._handlers: Dict[str, TaskHandler] = {}
        self._pending: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------ #
    def register(self, kind: str, handler: TaskHandler) -> None:
        if kind in self._handlers:
            raise ValueError(f"handler for {kind!r} already registered")
        self._handlers[kind] = handler

    def schedule(self, kind: str, target_id: str, delay: float) -> TaskRecord:
        if kind not in self._handlers:
            raise KeyError(f"no handler registered for {kind!r}")
        record = TaskRecord(kind=kind, target_id=target_id, delay=max(0.0, float(delay)))
        task = asyncio.get_running_loop().create_task(self._run(record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self.logger.debug("⏱️ Scheduled %s for %s in %.2fs", kind, target_id, record.delay)
        return record

    @property
    def pending(self) -> int:
        return len(self._pending)

    # ------------------------------------------------------------------ #
    async def _run(self, record: TaskRecord) -> None:
        await asyncio.sleep(record.delay)
        self.dispatch(record)

    def dispatch(self, record: TaskRecord) -> None:
        handler = self._handlers[record.kind]
        try:
            handler(record)
        except Exception:  # noqa: BLE001 (keep the loop alive, but loudly)
            self.logger.exception("[SCHEDULER] %s handler failed for %s", record.kind, record.target_id)

    # ------------------------------------------------------------------ #
    async def wait_idle(self) -> None:
        """Block until nothing is pending, including tasks scheduled meanwhile."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel whatever is still waiting; only used on shutdown."""
        tasks = list(self._pending)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()
