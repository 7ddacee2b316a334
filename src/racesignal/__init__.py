"""
Race Signal - race outcome tracking with AI recommendations

Records the winners of a six-horse race as they are observed and, once enough
history exists, asks an inference service for a recommendation. Only
recommendations with confidence of at least 75 are surfaced.
"""

__version__ = "1.0.0"

from .orchestrator import Orchestrator, SessionState
from .settings import Settings

__all__ = ["Orchestrator", "SessionState", "Settings"]
