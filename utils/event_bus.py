# --------------------------------------------------------------------
# utils/event_bus.py
# --------------------------------------------------------------------
"""A super-light, asyncio-based pub/sub between the desk and whatever is
watching it (activity feed, notifiers).  One bus per desk so separate
desks, and separate test event loops, never share a worker."""
from __future__ import annotations
import asyncio
import logging
from collections import defaultdict
from typing import Awaitable, Callable, Dict, List, Optional, Union

_Handler = Callable[[object], Union[Awaitable[None], None]]

logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[_Handler]] = defaultdict(list)
        self._q: asyncio.Queue[tuple[str, object]] = asyncio.Queue()
        # background task started lazily on first publish
        self._task: Optional[asyncio.Task] = None

    # -------------------------------------------------------------- #
    def subscribe(self, topic: str, fn: _Handler) -> None:
        self._subs[topic].append(fn)

    def publish(self, topic: str, payload: object) -> None:
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._worker())
        self._q.put_nowait((topic, payload))

    async def drain(self) -> None:
        """Wait until every queued event has been handed to its subscribers."""
        if self._task is not None:
            await self._q.join()

    async def aclose(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    # -------------------------------------------------------------- #
    async def _worker(self) -> None:
        while True:
            topic, payload = await self._q.get()
            try:
                for fn in self._subs.get(topic, []):
                    try:
                        res = fn(payload)
                        if asyncio.iscoroutine(res):
                            await res
                    except Exception:  # keep bus alive
                        logger.exception("[event_bus] handler error on %r", topic)
            finally:
                self._q.task_done()
