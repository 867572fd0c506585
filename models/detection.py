# --------------------------------------------------------------------
# models/detection.py
# One ticker mention tracked from "analyzing" through "ready" to an
# optional "traded".  Instances are frozen; every update is a validated copy.
# --------------------------------------------------------------------
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.exceptions import InvalidTransitionError


class DetectionStatus(str, Enum):
    ANALYZING = "analyzing"
    READY = "ready"
    TRADED = "traded"


class Action(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


# analyzing -> ready -> traded, nothing else
_NEXT_STATUS = {
    DetectionStatus.ANALYZING: DetectionStatus.READY,
    DetectionStatus.READY: DetectionStatus.TRADED,
}


class Detection(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    source_handle: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    confidence: int = Field(0, ge=0, le=100)
    virality: int = Field(0, ge=0, le=100)
    trend: int = Field(0, ge=0, le=100)
    mentions: int = Field(0, ge=0, le=100)
    status: DetectionStatus = DetectionStatus.ANALYZING
    action: Optional[Action] = None

    @model_validator(mode="after")
    def _action_tracks_status(self) -> "Detection":
        analyzing = self.status is DetectionStatus.ANALYZING
        if analyzing and self.action is not None:
            raise ValueError("an analyzing detection cannot carry an action")
        if not analyzing and self.action is None:
            raise ValueError(f"a {self.status.value} detection needs an action")
        return self

    def apply(self, patch: Dict[str, Any]) -> "Detection":
        """Return a validated copy with *patch* merged in.

        The status may stay put or move exactly one step forward.
        """
        if "id" in patch and patch["id"] != self.id:
            raise ValueError("detection id is immutable")
        requested = DetectionStatus(patch.get("status", self.status))
        if requested is not self.status and _NEXT_STATUS.get(self.status) is not requested:
            raise InvalidTransitionError(self.status.value, requested.value)
        return Detection.model_validate({**self.model_dump(), **patch})

    @property
    def is_terminal(self) -> bool:
        return self.status is DetectionStatus.TRADED
