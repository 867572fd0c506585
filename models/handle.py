# --------------------------------------------------------------------
# models/handle.py
# Social accounts on the watchlist.  The handle book itself lives outside
# the desk; the desk only ever sees the labels of the active ones.
# --------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass
class Handle:
    id: str
    handle: str
    name: str
    followers: str
    active: bool = True


DEFAULT_HANDLES: List[Handle] = [
    Handle("1", "@elonmusk", "Elon Musk", "180.5M", True),
    Handle("2", "@caborockz", "Murad Mahmudov", "592K", True),
    Handle("3", "@CryptoWizardd", "Crypto Wizard", "1.2M", True),
    Handle("4", "@VitalikButerin", "Vitalik Buterin", "5.4M", False),
    Handle("5", "@APompliano", "Anthony Pompliano", "1.6M", True),
]

DEFAULT_SYMBOLS: List[str] = [
    "$BTC", "$ETH", "$SOL", "$DOGE", "$PEPE", "$WIF", "$BONK", "$SHIB",
    "$ARB", "$OP", "$AVAX", "$LINK", "$UNI", "$AAVE", "$CRV",
]


def active_labels(handles: Iterable[Handle]) -> List[str]:
    """Labels (e.g. ``@elonmusk``) of the handles currently switched on."""
    return [h.handle for h in handles if h.active]
