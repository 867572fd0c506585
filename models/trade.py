# --------------------------------------------------------------------
# models/trade.py
# Immutable record of one simulated execution.  Created by TradeExecutor,
# kept in the TradeLedger and consumed by PnLTracker.
# --------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models.detection import Action


@dataclass(frozen=True)
class Trade:
    id: str
    detection_id: str
    symbol: str
    action: Action  # BUY or SELL only
    amount: float
    price: float
    executed_at: datetime
    pnl: Optional[float] = None  # percent

    def __post_init__(self) -> None:
        if self.action not in (Action.BUY, Action.SELL):
            raise ValueError(f"trade action must be BUY or SELL, got {self.action}")
        if self.amount <= 0:
            raise ValueError("amount must be positive")
        if self.price <= 0:
            raise ValueError("price must be positive")

    @property
    def is_win(self) -> bool:
        return (self.pnl or 0.0) > 0
