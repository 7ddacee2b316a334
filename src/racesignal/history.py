"""
Outcome History - ordered log of observed race winners
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

MIN_VALUE = 1
MAX_VALUE = 6


def is_valid_value(value) -> bool:
    """Check that value is a horse number between 1 and 6"""
    return isinstance(value, int) and not isinstance(value, bool) and MIN_VALUE <= value <= MAX_VALUE


@dataclass(frozen=True)
class Outcome:
    """One recorded winner"""
    value: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    observed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class OutcomeHistory:
    """Newest-first log of outcomes.

    Storage keeps the most recent outcome at index 0. ``revision`` changes on
    every mutation and identifies the history state an analysis was issued
    against.
    """

    def __init__(self):
        self._items: List[Outcome] = []
        self.revision = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Outcome:
        return self._items[index]

    def append(self, value: int) -> Outcome:
        """Record a new outcome at the head"""
        outcome = Outcome(value=value)
        self._items.insert(0, outcome)
        self.revision += 1
        return outcome

    def remove_head(self) -> Optional[Outcome]:
        """Remove the most recent outcome, or return None when empty"""
        if not self._items:
            logger.debug("Undo requested on empty history")
            return None
        outcome = self._items.pop(0)
        self.revision += 1
        return outcome

    def clear(self):
        """Drop every outcome"""
        self._items.clear()
        self.revision += 1

    def recent_window(self, n: int) -> List[Outcome]:
        """Return the n most recent outcomes, oldest first"""
        if n <= 0:
            return []
        return list(reversed(self._items[:n]))

    def values(self) -> List[int]:
        """Outcome values, newest first"""
        return [item.value for item in self._items]

    def snapshot(self) -> Tuple[Outcome, ...]:
        return tuple(self._items)
