"""
core/desk.py
------------
``SignalDesk`` owns the whole simulation: the detection registry, trade
ledger, P&L tracker and activity journal, plus the generator, analysis
engine, auto-trade supervisor and executor that move detections through

    analyzing -> ready -> traded

Everything the presentation layer may touch goes through the methods
below; the component objects are exposed for wiring and tests only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from core.scheduler import TaskScheduler
from models.activity import ActivityEntry, ActivityKind
from models.detection import Detection
from models.trade import Trade
from modules.activity_journal import ActivityJournal
from modules.analysis_engine import AnalysisEngine
from modules.auto_trader import AutoTradeSupervisor
from modules.detection_registry import DetectionRegistry
from modules.portfolio import PnLTracker, win_rate
from modules.signal_generator import RandomSignalGenerator
from modules.trader import TradeExecutor, TradeLedger
from utils.config_manager import ConfigManager
from utils.event_bus import EventBus
from utils.random_source import BaseRandomSource, SystemRandomSource


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DeskSnapshot:
    detections: Tuple[Detection, ...]
    trades: Tuple[Trade, ...]
    activity: Tuple[ActivityEntry, ...]
    total_pnl: float
    scanning: bool


class SignalDesk:
    def __init__(
        self,
        config: Dict[str, Any],
        *,
        rng: Optional[BaseRandomSource] = None,
        scheduler: Optional[TaskScheduler] = None,
        bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = _utcnow,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = ConfigManager(config)
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.rng = rng or SystemRandomSource(self.config.get_seed())
        self.scheduler = scheduler or TaskScheduler(logger=self.logger)
        self.bus = bus or EventBus()
        self.clock = clock

        # state
        self.registry = DetectionRegistry(self.config.get_max_detections())
        self.ledger = TradeLedger(self.config.get_max_trades())
        self.tracker = PnLTracker()
        self.journal = ActivityJournal(
            self.config.get_max_activity(),
            rng=self.rng,
            clock=clock,
            publish=self.bus.publish,
        )

        # pipeline
        self.executor = TradeExecutor(
            self.registry,
            self.ledger,
            self.tracker,
            self.journal,
            self.rng,
            clock=clock,
            logger=self.logger,
        )
        self.analysis = AnalysisEngine(
            self.registry,
            self.journal,
            self.scheduler,
            self.rng,
            delay=self.config.get_analysis_delay(),
            logger=self.logger,
        )
        self.supervisor = AutoTradeSupervisor(
            self.registry,
            self.executor,
            self.scheduler,
            threshold=self.config.get_auto_trade_threshold(),
            delay=self.config.get_auto_trade_delay(),
            enabled=self.config.is_auto_trade_enabled(),
            logger=self.logger,
        )
        self.generator = RandomSignalGenerator(
            self.config.get_symbols(),
            self.rng,
            self._on_signal,
            interval=self.config.get_scan_interval(),
            logger=self.logger,
        )
        self.generator.set_active_handles(self.config.get_active_handles())

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def start(self) -> None:
        self.logger.info(
            "✅ SignalDesk ready – %d symbols, %d active handles",
            len(self.generator.symbols),
            len(self.generator.active_handles),
        )
        if self.config.scan_on_start():
            self.toggle_scanning(True)

    async def aclose(self) -> None:
        """Stop scanning and drop any delayed work still waiting."""
        try:
            await self.generator.aclose()
        finally:
            await self.scheduler.aclose()
            await self.bus.drain()
            await self.bus.aclose()

    # ------------------------------------------------------------------ #
    # External interface
    # ------------------------------------------------------------------ #
    @property
    def scanning(self) -> bool:
        return self.generator.running

    def toggle_scanning(self, enabled: bool) -> None:
        """Start or pause the scanner.

        Pausing only stops new detection cycles; analyses and auto-trades
        already scheduled still run.
        """
        if enabled == self.scanning:
            return
        if enabled:
            self.generator.start()
            self.journal.append(ActivityKind.SYSTEM, "Scanning resumed")
            self.logger.info("● Scanning")
        else:
            self.generator.stop()
            self.journal.append(ActivityKind.SYSTEM, "Scanning paused")
            self.logger.info("○ Paused")

    def manual_execute(self, detection_id: str) -> Trade:
        """User-initiated trade; raises if the detection is unknown or not ready."""
        return self.executor.execute(detection_id, origin="manual")

    def set_active_handles(self, handles: Iterable[str]) -> None:
        self.generator.set_active_handles(handles)
        self.logger.debug("Active handles: %s", self.generator.active_handles)

    # ------------------------------------------------------------------ #
    # Read-only views
    # ------------------------------------------------------------------ #
    def detections(self) -> Tuple[Detection, ...]:
        return self.registry.snapshot()

    def trades(self) -> Tuple[Trade, ...]:
        return self.ledger.snapshot()

    def activity(self) -> Tuple[ActivityEntry, ...]:
        return self.journal.snapshot()

    @property
    def total_pnl(self) -> float:
        return self.tracker.total_pnl

    def snapshot(self) -> DeskSnapshot:
        return DeskSnapshot(
            detections=self.detections(),
            trades=self.trades(),
            activity=self.activity(),
            total_pnl=self.total_pnl,
            scanning=self.scanning,
        )

    def stats(self) -> Dict[str, Any]:
        """Dashboard figures.

        ``trade_count`` and ``win_rate`` describe the trades still held in the
        ledger; ``total_trades`` and ``total_pnl`` are running totals.
        """
        recent = self.ledger.snapshot()
        pnl = self.tracker.snapshot()
        return {
            "active_handles": len(self.generator.active_handles),
            "signals_detected": len(self.registry),
            "trade_count": len(recent),
            "win_rate": win_rate(recent),
            "total_trades": pnl["trade_count"],
            "total_pnl": pnl["total_pnl"],
            "scanning": self.scanning,
        }

    # ------------------------------------------------------------------ #
    # Pipeline hooks
    # ------------------------------------------------------------------ #
    def _on_signal(self, symbol: str, handle: str) -> Detection:
        detection = Detection(
            id=self.rng.token(),
            symbol=symbol,
            source_handle=handle,
            created_at=self.clock(),
        )
        self.registry.create(detection)
        self.journal.append(ActivityKind.DETECTION, f"Detected {symbol} mention from {handle}")
        self.analysis.submit(detection.id)
        self.logger.info("🎯 %s via %s (%s)", symbol, handle, detection.id)
        return detection
