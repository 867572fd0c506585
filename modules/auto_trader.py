"""
auto_trader.py
--------------
Watches the registry and fires an automatic trade for high-confidence
detections.

After every registry mutation the registry is scanned newest-first for a
``ready`` detection with ``confidence >= threshold`` that has not been
scheduled yet.  The trade itself runs ``delay`` seconds later and only if
the detection is still ``ready`` at that moment; a manual trade that got
there first simply wins.
"""

from __future__ import annotations

import logging
from typing import Optional, Set

from core.scheduler import TaskRecord, TaskScheduler
from models.detection import Detection, DetectionStatus
from modules.detection_registry import DetectionRegistry
from modules.trader import TradeExecutor


class AutoTradeSupervisor:
    TASK_KIND = "auto_trade"

    def __init__(
        self,
        registry: DetectionRegistry,
        executor: TradeExecutor,
        scheduler: TaskScheduler,
        *,
        threshold: int = 85,
        delay: float = 1.0,
        enabled: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.executor = executor
        self.scheduler = scheduler
        self.threshold = threshold
        self.delay = delay
        self.enabled = enabled
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        # ids with an auto-trade in flight; cleared when the task fires
        self._scheduled: Set[str] = set()

        scheduler.register(self.TASK_KIND, self._on_due)
        registry.subscribe(self.on_registry_change)

    # ------------------------------------------------------------------ #
    def qualifies(self, detection: Detection) -> bool:
        return (
            detection.status is DetectionStatus.READY
            and detection.confidence >= self.threshold
            and detection.id not in self._scheduled
        )

    def on_registry_change(self, registry: DetectionRegistry) -> Optional[TaskRecord]:
        if not self.enabled:
            return None
        candidate = registry.query(self.qualifies)
        if candidate is None:
            return None
        self._scheduled.add(candidate.id)
        self.logger.info(
            "🤖 Auto-trade queued for %s (%d%% >= %d%%)",
            candidate.symbol,
            candidate.confidence,
            self.threshold,
        )
        return self.scheduler.schedule(self.TASK_KIND, candidate.id, self.delay)

    @property
    def in_flight(self) -> int:
        return len(self._scheduled)

    # ------------------------------------------------------------------ #
    def _on_due(self, record: TaskRecord) -> None:
        self._scheduled.discard(record.target_id)
        detection = self.registry.get(record.target_id)
        if detection is None or detection.status is not DetectionStatus.READY:
            self.logger.debug("⏭️ Auto-trade for %s dropped: no longer ready", record.target_id)
            return
        self.executor.execute(detection.id, origin="auto")
