from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ActivityKind(str, Enum):
    DETECTION = "detection"
    ANALYSIS = "analysis"
    TRADE = "trade"
    SYSTEM = "system"


@dataclass(frozen=True)
class ActivityEntry:
    id: str
    kind: ActivityKind
    message: str
    timestamp: datetime
