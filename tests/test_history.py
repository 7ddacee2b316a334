"""
Tests for outcome history
"""

import pytest
from racesignal.history import OutcomeHistory, is_valid_value


@pytest.fixture
def history():
    return OutcomeHistory()


def test_append_keeps_newest_first(history):
    """Test that appended outcomes are stored newest first"""
    for value in (2, 1, 4):
        history.append(value)

    assert len(history) == 3
    assert history.values() == [4, 1, 2]
    assert history[0].value == 4


def test_outcome_ids_are_unique(history):
    outcomes = [history.append(3) for _ in range(50)]
    assert len({o.id for o in outcomes}) == 50


def test_length_tracks_adds_minus_undos(history):
    """Test history length after interleaved appends and undos"""
    for value in (1, 2, 3, 4, 5):
        history.append(value)
    history.remove_head()
    history.remove_head()
    history.append(6)

    assert len(history) == 4
    assert history.values() == [6, 3, 2, 1]


def test_remove_head_returns_newest(history):
    history.append(1)
    newest = history.append(6)

    removed = history.remove_head()

    assert removed == newest
    assert history.values() == [1]


def test_remove_head_on_empty_history(history):
    """Test that undo on an empty history is a no-op"""
    revision = history.revision

    assert history.remove_head() is None
    assert len(history) == 0
    assert history.revision == revision


def test_revision_changes_on_every_mutation(history):
    seen = {history.revision}
    history.append(1)
    seen.add(history.revision)
    history.append(2)
    seen.add(history.revision)
    history.remove_head()
    seen.add(history.revision)
    history.clear()
    seen.add(history.revision)

    assert len(seen) == 5


def test_clear(history):
    for value in (1, 2, 3):
        history.append(value)
    history.clear()

    assert len(history) == 0
    assert history.snapshot() == ()


def test_recent_window_is_chronological(history):
    """Test that the window reverses storage order"""
    for value in range(1, 7):
        history.append(value)

    window = history.recent_window(4)

    assert [o.value for o in window] == [3, 4, 5, 6]


def test_recent_window_caps_at_available(history):
    history.append(5)
    history.append(2)

    assert [o.value for o in history.recent_window(20)] == [5, 2]
    assert history.recent_window(0) == []


def test_recent_window_never_exceeds_n(history):
    for i in range(45):
        history.append(i % 6 + 1)

    window = history.recent_window(20)

    assert len(window) == 20
    assert window == list(reversed(history.snapshot()[:20]))


@pytest.mark.parametrize("value,expected", [
    (1, True), (6, True), (0, False), (7, False), (3.0, False), ("3", False), (True, False),
])
def test_is_valid_value(value, expected):
    assert is_valid_value(value) is expected
