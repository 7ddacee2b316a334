"""
Prompt Vault - analysis instruction template
"""

import logging
from typing import Dict, Iterable, List, Sequence

logger = logging.getLogger(__name__)

WATCHED_VALUES = (3, 4, 5, 6)


class PromptVault:
    """Centralized prompt management for race analysis"""

    def __init__(self):
        self.prompts: Dict[str, str] = {}
        self._load_default_prompts()

    def _load_default_prompts(self):
        """Load default prompts"""
        self.prompts = {
            "race_analysis": (
                'You are an expert betting analyst for the "Evolution Race Track" game.\n\n'
                "RECENT WINNERS (oldest to newest):\n"
                "[{winners}]\n\n"
                "GOAL:\n"
                "Estimate which horses are most likely to win the next races.\n"
                "We are ESPECIALLY interested in horses {watched}.\n\n"
                "ANALYSIS LOGIC:\n"
                "1. Frequency: which horses are winning a lot?\n"
                "2. Absence: is any horse (especially {watched}) overdue, "
                "i.e. has not won for a long time?\n"
                "3. Patterns: repeated sequences (e.g. 1-3-1).\n\n"
                "RULES:\n"
                "- Recommend exactly 3 horses.\n"
                "- Confidence must be statistically grounded, from 0 to 100.\n"
                "- If confidence is below {threshold}%, say so honestly.\n\n"
                'Return STRICT JSON only: {{"confidence":0..100,'
                '"recommended_horses":[h1,h2,h3],"reasoning":"short explanation"}}'
            ),
        }

    def get_prompt(self, prompt_name: str, **kwargs) -> str:
        """Get a prompt by name with variable substitution"""
        if prompt_name not in self.prompts:
            logger.warning(f"Prompt '{prompt_name}' not found")
            raise KeyError(f"Prompt '{prompt_name}' not found")
        return self.prompts[prompt_name].format(**kwargs)

    def race_analysis(self, winners: Sequence[int],
                      watched: Iterable[int] = WATCHED_VALUES,
                      threshold: int = 75) -> str:
        """Render the analysis instructions for a chronological list of winners"""
        return self.get_prompt(
            "race_analysis",
            winners=", ".join(str(w) for w in winners),
            watched=_join_watched(list(watched)),
            threshold=threshold,
        )

    def list_prompts(self) -> List[str]:
        """List all available prompts"""
        return list(self.prompts.keys())


def _join_watched(values: List[int]) -> str:
    if len(values) <= 1:
        return "".join(str(v) for v in values)
    return ", ".join(str(v) for v in values[:-1]) + f" and {values[-1]}"
