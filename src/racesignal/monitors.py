"""
Analysis Monitor - in-memory metrics for analysis calls
"""

import logging
import time
from collections import Counter, deque
from typing import Any, Dict

logger = logging.getLogger(__name__)

OUTCOMES = ("surfaced", "filtered", "failed", "stale")


class AnalysisMonitor:
    """Counts analysis outcomes and keeps recent latencies"""

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self.latencies = deque(maxlen=max_history)
        self.counts = Counter()
        self.start_time = time.time()

    def record_started(self):
        self.counts["started"] += 1

    def record_outcome(self, outcome: str, latency: float):
        """Record how an analysis call ended and how long it took"""
        if outcome not in OUTCOMES:
            logger.error(f"Unknown analysis outcome: {outcome}")
            raise ValueError(f"unknown analysis outcome: {outcome}")
        self.counts[outcome] += 1
        self.latencies.append(latency)

    def get_metrics(self) -> Dict[str, Any]:
        """Get current analysis metrics"""
        latencies = list(self.latencies)
        summary = {}
        if latencies:
            summary = {
                "count": len(latencies),
                "average": sum(latencies) / len(latencies),
                "min": min(latencies),
                "max": max(latencies),
                "latest": latencies[-1]
            }

        return {
            "uptime": time.time() - self.start_time,
            "analyses_started": self.counts["started"],
            **{outcome: self.counts[outcome] for outcome in OUTCOMES},
            "latency": summary
        }

    def reset(self):
        """Clear collected metrics"""
        logger.info("Analysis metrics reset")
        self.latencies.clear()
        self.counts.clear()
