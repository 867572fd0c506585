"""
portfolio.py
------------
Running P&L for the simulated desk.

The ledger only keeps the most recent trades, so totals are accumulated
here on every fill instead of being recomputed from the ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable

from models.trade import Trade


logger = logging.getLogger(__name__)


@dataclass
class PnLState:
    total_pnl: float = 0.0  # percent, summed over every trade ever recorded
    trade_count: int = 0
    wins: int = 0

    @property
    def win_rate(self) -> int:
        """Share of winning trades as a rounded percentage."""
        if self.trade_count == 0:
            return 0
        return round(self.wins / self.trade_count * 100)


def win_rate(trades: Iterable[Trade]) -> int:
    """Rounded percentage of *trades* that closed in profit."""
    trades = tuple(trades)
    if not trades:
        return 0
    return round(sum(1 for t in trades if t.is_win) / len(trades) * 100)


class PnLTracker:
    def __init__(self) -> None:
        self.state = PnLState()

    # ------------------------------------------------------------------ #
    # Event hooks
    # ------------------------------------------------------------------ #
    def on_trade(self, trade: Trade) -> None:
        pnl = trade.pnl or 0.0
        self.state.total_pnl += pnl
        self.state.trade_count += 1
        if trade.is_win:
            self.state.wins += 1

        logger.debug(
            "[PnL] %s %s pnl=%+.2f%% total=%+.2f%% trades=%d",
            trade.symbol,
            trade.action.value,
            pnl,
            self.state.total_pnl,
            self.state.trade_count,
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    @property
    def total_pnl(self) -> float:
        return self.state.total_pnl

    @property
    def win_rate(self) -> int:
        return self.state.win_rate

    def snapshot(self) -> Dict[str, object]:
        data = asdict(self.state)
        data["win_rate"] = self.state.win_rate
        return data
