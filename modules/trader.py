# modules/trader.py
"""
Simulated execution.  ``TradeExecutor`` turns a ``ready`` detection into a
``Trade``; ``TradeLedger`` keeps the most recent ones.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from core.exceptions import DetectionNotFoundError, TradeRejectedError
from models.activity import ActivityKind
from models.detection import Action, DetectionStatus
from models.trade import Trade
from modules.activity_journal import ActivityJournal
from modules.analysis_engine import BUY_CUTOFF
from modules.detection_registry import DetectionRegistry
from modules.portfolio import PnLTracker
from utils.random_source import BaseRandomSource
from utils.ring import bounded_prepend

PRICE_RANGE: Tuple[int, int] = (100, 50000)
AMOUNT_CENTS: Tuple[int, int] = (1, 100)  # amount = cents / 100, so (0, 1]
PNL_SKEW = 0.3
PNL_SCALE = 20.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TradeLedger:
    """Newest-first record of executed trades, capped at *capacity*."""

    def __init__(self, capacity: int = 20) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._trades: Tuple[Trade, ...] = ()

    def record(self, trade: Trade) -> None:
        self._trades = bounded_prepend(self._trades, trade, self.capacity)

    def snapshot(self) -> Tuple[Trade, ...]:
        return self._trades

    def __len__(self) -> int:
        return len(self._trades)


class TradeExecutor:
    def __init__(
        self,
        registry: DetectionRegistry,
        ledger: TradeLedger,
        tracker: PnLTracker,
        journal: ActivityJournal,
        rng: BaseRandomSource,
        *,
        clock: Callable[[], datetime] = _utcnow,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.ledger = ledger
        self.tracker = tracker
        self.journal = journal
        self.rng = rng
        self.clock = clock
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def execute(self, detection_id: str, *, origin: str = "manual") -> Trade:
        """Fill a simulated order for the detection and mark it traded.

        * The detection must exist, else ``DetectionNotFoundError``.
        * It must be ``ready``, else ``TradeRejectedError``.  A second
          execution of the same detection is therefore always refused.
        * Side is BUY when confidence >= 70, SELL otherwise; the stored
          BUY/HOLD/SELL recommendation is not consulted.
        """
        detection = self.registry.get(detection_id)
        if detection is None:
            raise DetectionNotFoundError(detection_id)
        if detection.status is not DetectionStatus.READY:
            raise TradeRejectedError(detection_id, detection.status.value)

        action = Action.BUY if detection.confidence >= BUY_CUTOFF else Action.SELL
        price = self.rng.randint(*PRICE_RANGE)
        amount = self.rng.randint(*AMOUNT_CENTS) / 100
        trade = Trade(
            id=self.rng.token(),
            detection_id=detection.id,
            symbol=detection.symbol,
            action=action,
            amount=amount,
            price=price,
            executed_at=self.clock(),
            pnl=self._synth_pnl(),
        )

        self.ledger.record(trade)
        self.tracker.on_trade(trade)
        self.registry.update_by_id(detection.id, {"status": DetectionStatus.TRADED})
        self.journal.append(
            ActivityKind.TRADE,
            f"Executed {action.value} for {trade.symbol} at ${trade.price:,}",
        )
        self.logger.info(
            "💰 [%s] %s %s amount=%.2f price=%s pnl=%+.2f%%",
            origin,
            action.value,
            trade.symbol,
            trade.amount,
            trade.price,
            trade.pnl,
        )
        return trade

    def _synth_pnl(self) -> float:
        # roughly -6% .. +14%, so most fills win but losses still happen
        return (self.rng.random() - PNL_SKEW) * PNL_SCALE
