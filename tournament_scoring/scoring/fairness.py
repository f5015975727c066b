"""
Incremental load balance aggregate.

FairnessState keeps how often each group key occurs and the sum of the
squared counts (the squared deviation from zero). Minimizing that sum
balances the group sizes. Both insert and its undo run in O(1): only the
touched key's count is needed to update the sum.
"""

import math
from typing import Dict, Hashable

from tournament_scoring.core.config import PENALTY_SCALE


class InsertUndo:
    """
    Reverses exactly one FairnessState.insert().

    Carries only the state and the key, never a snapshot. It may be called
    once; a second call raises RuntimeError.
    """

    __slots__ = ("_state", "_key", "_applied")

    def __init__(self, state: 'FairnessState', key: Hashable):
        self._state = state
        self._key = key
        self._applied = False

    @property
    def applied(self) -> bool:
        return self._applied

    def __call__(self):
        if self._applied:
            raise RuntimeError(f"Undo for group key {self._key!r} was already applied")
        self._applied = True
        self._state._retract(self._key)

    def __repr__(self):
        return f"InsertUndo(key={self._key!r}, applied={self._applied})"


class FairnessState:
    """Per-group occurrence counts and their running sum of squares."""

    __slots__ = ("counts", "squared_sum")

    def __init__(self):
        self.counts: Dict[Hashable, int] = {}
        self.squared_sum = 0

    def insert(self, key: Hashable) -> InsertUndo:
        """Count one more occurrence of key and return the action that reverses it."""
        count = self.counts.get(key, 0) + 1
        self.counts[key] = count
        # count² - (count - 1)² == 2 * count - 1
        self.squared_sum += 2 * count - 1
        return InsertUndo(self, key)

    def _retract(self, key: Hashable):
        count = self.counts.get(key)
        if count is None:
            raise RuntimeError(f"Group key {key!r} retracted more often than inserted")
        if count == 1:
            del self.counts[key]
            self.squared_sum -= 1
        else:
            count -= 1
            self.counts[key] = count
            # (count + 1)² - count² == 2 * count + 1
            self.squared_sum -= 2 * count + 1

    def penalty(self) -> int:
        """
        sqrt(sum of squares) in thousandths, truncated toward zero, never rounded.
        """
        return int(math.sqrt(self.squared_sum) * PENALTY_SCALE)

    def is_empty(self) -> bool:
        return not self.counts

    def __len__(self):
        return len(self.counts)

    def __repr__(self):
        return f"FairnessState(groups={len(self.counts)}, squared_sum={self.squared_sum})"
