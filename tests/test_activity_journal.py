from unittest.mock import MagicMock

from models.activity import ActivityKind
from modules.activity_journal import ActivityJournal


def test_append_is_newest_first_and_stamped(scripted, clock):
    journal = ActivityJournal(rng=scripted(), clock=clock)
    first = journal.append(ActivityKind.SYSTEM, "boot")
    second = journal.append(ActivityKind.DETECTION, "Detected $BTC mention from @x")

    assert journal.snapshot() == (second, first)
    assert second.timestamp > first.timestamp
    assert first.id != second.id


def test_journal_keeps_most_recent_fifty(scripted):
    journal = ActivityJournal(rng=scripted())
    for i in range(60):
        journal.append(ActivityKind.ANALYSIS, f"entry {i}")

    entries = journal.snapshot()
    assert len(journal) == 50
    assert entries[0].message == "entry 59"
    assert entries[-1].message == "entry 10"


def test_append_accepts_plain_kind_string(scripted):
    journal = ActivityJournal(rng=scripted())
    entry = journal.append("trade", "Executed BUY for $ETH at $1,000")
    assert entry.kind is ActivityKind.TRADE


def test_append_publishes_entry(scripted):
    publish = MagicMock()
    journal = ActivityJournal(rng=scripted(), publish=publish)
    entry = journal.append(ActivityKind.SYSTEM, "Scanning paused")
    publish.assert_called_once_with("activity", entry)
