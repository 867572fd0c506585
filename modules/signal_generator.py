"""
signal_generator.py
-------------------
Pretend social-media scanner.  While running it sleeps a random interval,
then reports one (symbol, handle) mention picked uniformly from the
catalog and the currently active handles.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Optional, Sequence, Tuple

from utils.random_source import BaseRandomSource

SignalSink = Callable[[str, str], None]


class RandomSignalGenerator:
    def __init__(
        self,
        symbols: Sequence[str],
        rng: BaseRandomSource,
        emit: SignalSink,
        *,
        interval: Tuple[float, float] = (5.0, 10.0),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not symbols:
            raise ValueError("symbol catalog must not be empty")
        low, high = interval
        if low < 0 or high < low:
            raise ValueError(f"bad scan interval {interval!r}")
        self.symbols = tuple(symbols)
        self.rng = rng
        self.emit = emit
        self.interval = (float(low), float(high))
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._active_handles: Tuple[str, ...] = ()
        self._task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------ #
    def set_active_handles(self, handles: Iterable[str]) -> None:
        labels = tuple(dict.fromkeys(handles))
        if any(not isinstance(label, str) or not label.strip() for label in labels):
            raise ValueError(f"handle labels must be non-empty strings: {labels!r}")
        self._active_handles = labels

    @property
    def active_handles(self) -> Tuple[str, ...]:
        return self._active_handles

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ------------------------------------------------------------------ #
    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    def stop(self) -> None:
        """Abandon the current wait; no further cycles will run."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    # ------------------------------------------------------------------ #
    async def _loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.rng.uniform(*self.interval))
                try:
                    self.run_cycle()
                except Exception:
                    self.logger.exception("[SCAN] detection cycle failed")
        except asyncio.CancelledError:
            self.logger.debug("Scan loop cancelled")
            raise

    def run_cycle(self) -> Optional[Tuple[str, str]]:
        """One detection cycle; returns the emitted pair or ``None`` if skipped."""
        if not self._active_handles:
            self.logger.debug("⏭️ No active handles, skipping scan cycle")
            return None
        handle = self.rng.choice(self._active_handles)
        symbol = self.rng.choice(self.symbols)
        self.emit(symbol, handle)
        return symbol, handle
