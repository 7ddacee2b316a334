"""
Tests for the analysis gate
"""

import pytest
from racesignal.gate import AnalysisGate, ANALYSIS_WINDOW, MIN_HISTORY
from racesignal.history import OutcomeHistory


def _history(*values):
    """Build a history by adding values in the given (chronological) order"""
    history = OutcomeHistory()
    for value in values:
        history.append(value)
    return history


@pytest.fixture
def gate():
    return AnalysisGate()


@pytest.mark.parametrize("values", [(), (6,), (3, 3), (1, 6)])
def test_skip_below_minimum(gate, values):
    """Test that short histories never produce a request"""
    assert gate.evaluate(_history(*values)) is None


def test_proceeds_at_minimum(gate):
    request = gate.evaluate(_history(2, 1, 4))

    assert request is not None
    assert request.winners == (2, 1, 4)
    assert request.watched == (3, 4, 5, 6)


def test_window_is_bounded_and_chronological(gate):
    """Test that only the 20 most recent winners are sent, oldest first"""
    values = [i % 6 + 1 for i in range(27)]

    request = gate.evaluate(_history(*values))

    assert len(request.winners) == ANALYSIS_WINDOW
    assert list(request.winners) == values[-20:]


def test_instructions_carry_winners(gate):
    request = gate.evaluate(_history(5, 5, 2, 6))

    assert "[5, 5, 2, 6]" in request.instructions
    assert "3, 4, 5 and 6" in request.instructions


def test_defaults():
    assert MIN_HISTORY == 3
    assert ANALYSIS_WINDOW == 20
