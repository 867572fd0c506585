import asyncio
from unittest.mock import MagicMock

import pytest

from modules.signal_generator import RandomSignalGenerator

SYMBOLS = ["$BTC", "$ETH", "$SOL"]

# ------------------------- Fixtures ------------------------- #

@pytest.fixture
def emit():
    return MagicMock()

@pytest.fixture
def make_generator(scripted, emit):
    def _make(interval=(0.01, 0.01), rng=None):
        return RandomSignalGenerator(SYMBOLS, rng or scripted(), emit, interval=interval)
    return _make

# ------------------------- Tests ------------------------- #

def test_cycle_without_active_handles_is_skipped(make_generator, emit):
    gen = make_generator()
    assert gen.run_cycle() is None
    emit.assert_not_called()


def test_cycle_emits_one_scripted_pick(make_generator, emit, scripted):
    gen = make_generator(rng=scripted(choice=["@caborockz", "$ETH"]))
    gen.set_active_handles(["@elonmusk", "@caborockz"])

    assert gen.run_cycle() == ("$ETH", "@caborockz")
    emit.assert_called_once_with("$ETH", "@caborockz")


def test_active_handles_are_deduplicated(make_generator):
    gen = make_generator()
    gen.set_active_handles(["@a", "@b", "@a"])
    assert gen.active_handles == ("@a", "@b")


@pytest.mark.parametrize("interval", [(-1, 2), (5, 1)])
def test_bad_interval_rejected(scripted, emit, interval):
    with pytest.raises(ValueError):
        RandomSignalGenerator(SYMBOLS, scripted(), emit, interval=interval)


def test_empty_catalog_rejected(scripted, emit):
    with pytest.raises(ValueError):
        RandomSignalGenerator([], scripted(), emit)


@pytest.mark.asyncio
async def test_loop_emits_until_stopped(make_generator, emit):
    gen = make_generator(interval=(0.01, 0.01))
    gen.set_active_handles(["@elonmusk"])

    gen.start()
    await asyncio.sleep(0.1)
    gen.stop()
    emitted = emit.call_count
    await asyncio.sleep(0.05)

    assert emitted >= 1
    assert emit.call_count == emitted
    assert not gen.running


@pytest.mark.asyncio
async def test_stop_abandons_inflight_wait(make_generator, emit):
    gen = make_generator(interval=(0.2, 0.2))
    gen.set_active_handles(["@elonmusk"])

    gen.start()
    await asyncio.sleep(0.05)
    gen.stop()
    await asyncio.sleep(0.3)

    emit.assert_not_called()


@pytest.mark.asyncio
async def test_loop_survives_empty_handle_cycles(make_generator, emit):
    gen = make_generator(interval=(0.01, 0.01))
    gen.start()
    await asyncio.sleep(0.05)
    assert gen.running
    emit.assert_not_called()

    gen.set_active_handles(["@APompliano"])
    await asyncio.sleep(0.05)
    await gen.aclose()

    assert emit.call_count >= 1


@pytest.mark.asyncio
async def test_start_is_idempotent(make_generator):
    gen = make_generator(interval=(1, 1))
    gen.start()
    task = gen._task
    gen.start()
    assert gen._task is task
    await gen.aclose()
    assert not gen.running


@pytest.mark.parametrize("handles", [[""], ["@elonmusk", "  "], [None]])
def test_blank_handle_labels_rejected(make_generator, handles):
    gen = make_generator()
    gen.set_active_handles(["@elonmusk"])
    with pytest.raises(ValueError):
        gen.set_active_handles(handles)
    assert gen.active_handles == ("@elonmusk",)


@pytest.mark.asyncio
async def test_failing_cycle_is_logged_and_loop_keeps_running(scripted, caplog):
    calls = []

    def flaky_emit(symbol, handle):
        calls.append((symbol, handle))
        if len(calls) == 1:
            raise RuntimeError("downstream rejected the mention")

    gen = RandomSignalGenerator(SYMBOLS, scripted(), flaky_emit, interval=(0.01, 0.01))
    gen.set_active_handles(["@elonmusk"])

    with caplog.at_level("ERROR"):
        gen.start()
        await asyncio.sleep(0.1)
        assert gen.running
        await gen.aclose()

    assert len(calls) >= 2
    assert any("detection cycle failed" in r.getMessage() for r in caplog.records)
    assert not gen.running
