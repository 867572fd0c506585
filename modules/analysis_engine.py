"""
analysis_engine.py
------------------
Simulated multi-factor scoring of a fresh detection.

Each detection is analysed once, ``delay`` seconds after it is created.
Three sub-scores are drawn independently, blended into a confidence and
mapped onto an action:

    confidence = round(0.35 * virality + 0.35 * trend + 0.30 * mentions)

    confidence >= 70        -> BUY
    40 <= confidence < 70   -> HOLD
    confidence < 40         -> SELL

Rounding is half-up and done in integer arithmetic so e.g. 42.5 always
becomes 43.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from core.scheduler import TaskRecord, TaskScheduler
from models.activity import ActivityKind
from models.detection import Action, DetectionStatus
from modules.activity_journal import ActivityJournal
from modules.detection_registry import DetectionRegistry
from utils.random_source import BaseRandomSource

VIRALITY_RANGE: Tuple[int, int] = (30, 100)
TREND_RANGE: Tuple[int, int] = (30, 100)
MENTIONS_RANGE: Tuple[int, int] = (10, 100)

BUY_CUTOFF = 70
HOLD_CUTOFF = 40


@dataclass(frozen=True)
class AnalysisResult:
    virality: int
    trend: int
    mentions: int
    confidence: int
    action: Action

    def as_patch(self) -> dict:
        return {
            "virality": self.virality,
            "trend": self.trend,
            "mentions": self.mentions,
            "confidence": self.confidence,
            "action": self.action,
            "status": DetectionStatus.READY,
        }


def blend_confidence(virality: int, trend: int, mentions: int) -> int:
    """Weighted 35/35/30 blend, rounded half-up."""
    return (35 * virality + 35 * trend + 30 * mentions + 50) // 100


def action_for(confidence: int) -> Action:
    if confidence >= BUY_CUTOFF:
        return Action.BUY
    if confidence >= HOLD_CUTOFF:
        return Action.HOLD
    return Action.SELL


def score(rng: BaseRandomSource) -> AnalysisResult:
    virality = rng.randint(*VIRALITY_RANGE)
    trend = rng.randint(*TREND_RANGE)
    mentions = rng.randint(*MENTIONS_RANGE)
    confidence = blend_confidence(virality, trend, mentions)
    return AnalysisResult(virality, trend, mentions, confidence, action_for(confidence))


class AnalysisEngine:
    """Schedules and applies the delayed analysis of each detection."""

    TASK_KIND = "analysis"

    def __init__(
        self,
        registry: DetectionRegistry,
        journal: ActivityJournal,
        scheduler: TaskScheduler,
        rng: BaseRandomSource,
        *,
        delay: float = 2.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.journal = journal
        self.scheduler = scheduler
        self.rng = rng
        self.delay = delay
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        scheduler.register(self.TASK_KIND, self._on_due)

    def submit(self, detection_id: str) -> TaskRecord:
        return self.scheduler.schedule(self.TASK_KIND, detection_id, self.delay)

    def _on_due(self, record: TaskRecord) -> None:
        detection = self.registry.get(record.target_id)
        if detection is None:
            self.logger.debug("⏭️ Analysis target %s already evicted", record.target_id)
            return
        if detection.status is not DetectionStatus.ANALYZING:
            self.logger.debug("⏭️ Analysis target %s is %s", record.target_id, detection.status.value)
            return

        result = score(self.rng)
        self.registry.update_by_id(detection.id, result.as_patch())
        self.journal.append(
            ActivityKind.ANALYSIS,
            f"Analysis complete for {detection.symbol}: "
            f"{result.confidence}% confidence → {result.action.value}",
        )
        self.logger.debug(
            "🔍 %s v=%d t=%d m=%d -> %d%% %s",
            detection.symbol,
            result.virality,
            result.trend,
            result.mentions,
            result.confidence,
            result.action.value,
        )
