"""
Three-level score used by the scoring rules.
"""

import re
from dataclasses import dataclass

_SCORE_PATTERN = re.compile(r"^\s*(-?\d+)hard/(-?\d+)medium/(-?\d+)soft\s*$")


@dataclass(frozen=True)
class HardMediumSoftScore:
    """
    Integer (hard, medium, soft) score vector.

    A rule only ever contributes to one component. Ranking scores is left
    to the solver that consumes them.
    """
    hard: int = 0
    medium: int = 0
    soft: int = 0

    ZERO = None
    ONE_HARD = None
    ONE_MEDIUM = None
    ONE_SOFT = None

    @classmethod
    def of(cls, hard: int, medium: int, soft: int) -> 'HardMediumSoftScore':
        return cls(hard, medium, soft)

    @classmethod
    def parse(cls, text: str) -> 'HardMediumSoftScore':
        """Parse the "0hard/-3medium/-10soft" format produced by str()."""
        match = _SCORE_PATTERN.match(text)
        if not match:
            raise ValueError(f"Invalid score format: {text!r}")
        return cls(*(int(group) for group in match.groups()))

    @property
    def is_feasible(self) -> bool:
        return self.hard >= 0

    def multiply(self, factor: int) -> 'HardMediumSoftScore':
        return HardMediumSoftScore(self.hard * factor, self.medium * factor, self.soft * factor)

    def __add__(self, other: 'HardMediumSoftScore') -> 'HardMediumSoftScore':
        return HardMediumSoftScore(self.hard + other.hard, self.medium + other.medium, self.soft + other.soft)

    def __sub__(self, other: 'HardMediumSoftScore') -> 'HardMediumSoftScore':
        return HardMediumSoftScore(self.hard - other.hard, self.medium - other.medium, self.soft - other.soft)

    def __neg__(self) -> 'HardMediumSoftScore':
        return HardMediumSoftScore(-self.hard, -self.medium, -self.soft)

    def __str__(self):
        return f"{self.hard}hard/{self.medium}medium/{self.soft}soft"


HardMediumSoftScore.ZERO = HardMediumSoftScore(0, 0, 0)
HardMediumSoftScore.ONE_HARD = HardMediumSoftScore(1, 0, 0)
HardMediumSoftScore.ONE_MEDIUM = HardMediumSoftScore(0, 1, 0)
HardMediumSoftScore.ONE_SOFT = HardMediumSoftScore(0, 0, 1)
