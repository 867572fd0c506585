from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.exceptions import InvalidTransitionError
from models.detection import Action, Detection, DetectionStatus
from models.handle import DEFAULT_HANDLES, DEFAULT_SYMBOLS, active_labels
from models.trade import Trade

NOW = datetime(2024, 1, 5, tzinfo=timezone.utc)


def test_new_detection_starts_analyzing_with_zero_scores(make_detection):
    d = make_detection("a")
    assert d.status is DetectionStatus.ANALYZING
    assert (d.confidence, d.virality, d.trend, d.mentions) == (0, 0, 0, 0)
    assert d.action is None


def test_action_required_once_ready():
    with pytest.raises(ValidationError):
        Detection(id="a", symbol="$BTC", source_handle="@x", status=DetectionStatus.READY)


def test_analyzing_detection_cannot_carry_action():
    with pytest.raises(ValidationError):
        Detection(id="a", symbol="$BTC", source_handle="@x", action=Action.BUY)


def test_scores_are_bounded():
    with pytest.raises(ValidationError):
        Detection(id="a", symbol="$BTC", source_handle="@x", confidence=101)


def test_detection_is_frozen(make_detection):
    d = make_detection("a")
    with pytest.raises(ValidationError):
        d.status = DetectionStatus.READY


def test_apply_returns_new_instance(make_detection, ready_patch):
    d = make_detection("a")
    ready = d.apply(ready_patch(72))
    assert d.status is DetectionStatus.ANALYZING
    assert ready.status is DetectionStatus.READY
    assert ready.action is Action.BUY
    assert ready.id == d.id


@pytest.mark.parametrize(
    "start, target",
    [
        (DetectionStatus.ANALYZING, DetectionStatus.TRADED),
        (DetectionStatus.READY, DetectionStatus.ANALYZING),
        (DetectionStatus.TRADED, DetectionStatus.READY),
    ],
)
def test_apply_rejects_illegal_moves(make_detection, ready_patch, start, target):
    d = make_detection("a")
    if start is not DetectionStatus.ANALYZING:
        d = d.apply(ready_patch(50))
    if start is DetectionStatus.TRADED:
        d = d.apply({"status": DetectionStatus.TRADED})
    with pytest.raises(InvalidTransitionError):
        d.apply({"status": target, "action": None})


def test_traded_keeps_recommended_action(make_detection, ready_patch):
    d = make_detection("a").apply(ready_patch(55)).apply({"status": DetectionStatus.TRADED})
    assert d.status is DetectionStatus.TRADED
    assert d.action is Action.HOLD
    assert d.is_terminal


def test_trade_rejects_hold_and_non_positive_values():
    with pytest.raises(ValueError):
        Trade("t", "d", "$BTC", Action.HOLD, 0.5, 100, NOW, 1.0)
    with pytest.raises(ValueError):
        Trade("t", "d", "$BTC", Action.BUY, 0, 100, NOW, 1.0)
    with pytest.raises(ValueError):
        Trade("t", "d", "$BTC", Action.SELL, 0.5, 0, NOW, 1.0)


def test_trade_win_flag():
    assert Trade("t", "d", "$BTC", Action.BUY, 0.5, 100, NOW, 0.01).is_win
    assert not Trade("t", "d", "$BTC", Action.BUY, 0.5, 100, NOW, -2.0).is_win
    assert not Trade("t", "d", "$BTC", Action.BUY, 0.5, 100, NOW).is_win


def test_default_watchlist():
    assert len(DEFAULT_SYMBOLS) == 15
    assert "@VitalikButerin" not in active_labels(DEFAULT_HANDLES)
    assert active_labels(DEFAULT_HANDLES)[0] == "@elonmusk"
