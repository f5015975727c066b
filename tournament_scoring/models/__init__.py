"""
Data models for the scoring service.
"""

from .models import (
    Team,
    TeamAssignment,
    UnavailabilityPenalty,
    TeamPair,
    TournamentSchedule
)

__all__ = [
    "Team",
    "TeamAssignment",
    "UnavailabilityPenalty",
    "TeamPair",
    "TournamentSchedule"
]
