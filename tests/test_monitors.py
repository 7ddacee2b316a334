"""
Tests for analysis metrics
"""

import pytest
from racesignal.monitors import AnalysisMonitor


@pytest.fixture
def monitor():
    return AnalysisMonitor(max_history=3)


def test_empty_metrics(monitor):
    metrics = monitor.get_metrics()

    assert metrics["analyses_started"] == 0
    assert metrics["surfaced"] == 0
    assert metrics["latency"] == {}


def test_record_outcomes(monitor):
    monitor.record_started()
    monitor.record_outcome("surfaced", 0.4)
    monitor.record_started()
    monitor.record_outcome("filtered", 0.2)

    metrics = monitor.get_metrics()

    assert metrics["analyses_started"] == 2
    assert metrics["surfaced"] == 1
    assert metrics["filtered"] == 1
    assert metrics["latency"]["count"] == 2
    assert metrics["latency"]["max"] == 0.4
    assert metrics["latency"]["latest"] == 0.2


def test_latency_history_is_bounded(monitor):
    for latency in (1.0, 2.0, 3.0, 4.0):
        monitor.record_outcome("failed", latency)

    assert monitor.get_metrics()["latency"]["min"] == 2.0


def test_unknown_outcome(monitor):
    with pytest.raises(ValueError):
        monitor.record_outcome("lost", 0.1)


def test_reset(monitor):
    monitor.record_started()
    monitor.reset()
    assert monitor.get_metrics()["analyses_started"] == 0


def test_reset_is_logged(monitor, caplog):
    with caplog.at_level("INFO", logger="racesignal.monitors"):
        monitor.reset()

    assert "reset" in caplog.text
