"""
Analysis Gate - decides whether the current history warrants an analysis
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .history import OutcomeHistory
from .promptvault import PromptVault, WATCHED_VALUES
from .recommendation_filter import CONFIDENCE_THRESHOLD

MIN_HISTORY = 3
ANALYSIS_WINDOW = 20


@dataclass(frozen=True)
class AnalysisRequest:
    """Payload for one analysis call"""
    winners: Tuple[int, ...]  # oldest first
    watched: Tuple[int, ...]
    instructions: str


class AnalysisGate:
    """Pure decision over history: None means skip"""

    def __init__(self, prompt_vault: Optional[PromptVault] = None,
                 min_history: int = MIN_HISTORY, window: int = ANALYSIS_WINDOW):
        self.prompt_vault = prompt_vault or PromptVault()
        self.min_history = min_history
        self.window = window

    def evaluate(self, history: OutcomeHistory) -> Optional[AnalysisRequest]:
        """Build a request when the history holds enough outcomes"""
        if len(history) < self.min_history:
            return None
        winners = tuple(item.value for item in history.recent_window(self.window))
        return AnalysisRequest(
            winners=winners,
            watched=WATCHED_VALUES,
            instructions=self.prompt_vault.race_analysis(
                winners, WATCHED_VALUES, CONFIDENCE_THRESHOLD
            ),
        )
