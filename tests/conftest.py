import itertools
import logging
from collections import deque
from datetime import datetime, timedelta, timezone

import pytest

from core.desk import SignalDesk
from models.detection import Detection, DetectionStatus
from modules.analysis_engine import action_for
from utils.random_source import BaseRandomSource, SystemRandomSource


class ScriptedRandom(BaseRandomSource):
    """Hands out queued values per method, then falls back to a seeded RNG."""

    def __init__(self, *, randint=(), uniform=(), random=(), choice=(), seed=0):
        self.queues = {
            "randint": deque(randint),
            "uniform": deque(uniform),
            "random": deque(random),
            "choice": deque(choice),
        }
        self._fallback = SystemRandomSource(seed)
        self._ids = itertools.count(1)

    def push(self, method, *values):
        self.queues[method].extend(values)

    def randint(self, low, high):
        if self.queues["randint"]:
            value = self.queues["randint"].popleft()
            assert low <= value <= high, f"scripted {value} outside [{low}, {high}]"
            return value
        return self._fallback.randint(low, high)

    def uniform(self, low, high):
        if self.queues["uniform"]:
            return self.queues["uniform"].popleft()
        return self._fallback.uniform(low, high)

    def random(self):
        if self.queues["random"]:
            return self.queues["random"].popleft()
        return self._fallback.random()

    def choice(self, seq):
        if self.queues["choice"]:
            value = self.queues["choice"].popleft()
            assert value in seq, f"scripted {value!r} not in {seq!r}"
            return value
        return self._fallback.choice(seq)

    def token(self):
        return f"id{next(self._ids):04d}"


class FakeClock:
    def __init__(self, start=datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


# ------------------------- Fixtures ------------------------- #

@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fast_config():
    """Stock settings with every delay shrunk to a few milliseconds."""
    return {
        "SYMBOLS": ["$BTC", "$ETH", "$SOL"],
        "ACTIVE_HANDLES": ["@elonmusk"],
        "SCAN_INTERVAL_MIN": 0.01,
        "SCAN_INTERVAL_MAX": 0.02,
        "ANALYSIS_DELAY": 0.01,
        "AUTO_TRADE_DELAY": 0.01,
        "AUTO_TRADE_THRESHOLD": 85,
        "AUTO_TRADE_ENABLED": True,
        "MAX_DETECTIONS": 10,
        "MAX_TRADES": 20,
        "MAX_ACTIVITY": 50,
        "RANDOM_SEED": 1234,
        "SCAN_ON_START": False,
    }


@pytest.fixture
def make_desk(fast_config, clock):
    def _make(rng=None, **overrides):
        config = {**fast_config, **overrides}
        return SignalDesk(
            config,
            rng=rng or ScriptedRandom(seed=config["RANDOM_SEED"]),
            clock=clock,
            logger=logging.getLogger("test.desk"),
        )
    return _make


@pytest.fixture
def make_detection():
    def _make(detection_id, symbol="$BTC", handle="@elonmusk"):
        return Detection(id=detection_id, symbol=symbol, source_handle=handle)
    return _make


@pytest.fixture
def ready_patch():
    """Patch that completes analysis with the given confidence."""
    def _patch(confidence, action=None):
        return {
            "virality": confidence,
            "trend": confidence,
            "mentions": confidence,
            "confidence": confidence,
            "action": action or action_for(confidence),
            "status": DetectionStatus.READY,
        }
    return _patch


@pytest.fixture
def ready_detection(make_detection, ready_patch):
    """Insert a ready detection straight into a registry; returns its id."""
    def _insert(registry, detection_id, confidence, symbol="$BTC", action=None):
        registry.create(make_detection(detection_id, symbol=symbol))
        assert registry.update_by_id(detection_id, ready_patch(confidence, action))
        return detection_id
    return _insert
