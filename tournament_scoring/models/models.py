"""
Data models for the Tournament Schedule Scoring service.
Defines the facts the scoring rules react to and the schedule container.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class Team:
    """Represents a team taking part in the tournament."""
    id: int
    name: str = ""

    def __str__(self):
        return self.name or f"Team {self.id}"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Team):
            return self.id == other.id
        return False

    def __lt__(self, other: 'Team') -> bool:
        return self.id < other.id


@dataclass
class TeamAssignment:
    """
    A match-slot on a given day, filled by one team.

    The id is unique and only used to break ties between assignments.
    The team is the value a solver changes between candidate moves.
    """
    id: int
    day: date
    team: Optional[Team] = None

    @property
    def is_initialized(self) -> bool:
        """Unassigned slots are invisible to the scoring rules."""
        return self.team is not None

    def __str__(self):
        return f"#{self.id} {self.team} on {self.day}"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, TeamAssignment):
            return self.id == other.id
        return False


@dataclass(frozen=True)
class UnavailabilityPenalty:
    """A day on which a team must not be assigned."""
    team: Team
    day: date

    def __str__(self):
        return f"{self.team} unavailable on {self.day}"


@dataclass(frozen=True)
class TeamPair:
    """
    Group key for a confrontation between two teams.

    Built from a join that guarantees first.id < second.id, so A-vs-B and
    B-vs-A always produce the same pair.
    """
    first: Team
    second: Team

    def __str__(self):
        return f"{self.first} vs {self.second}"


@dataclass
class TournamentSchedule:
    """Represents a complete candidate tournament schedule."""
    teams: List[Team] = field(default_factory=list)
    days: List[date] = field(default_factory=list)
    team_assignments: List[TeamAssignment] = field(default_factory=list)
    unavailability_penalties: List[UnavailabilityPenalty] = field(default_factory=list)
    score: Optional[object] = None

    def get_team(self, team_id: int) -> Optional[Team]:
        """Get a team by id."""
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def get_team_assignments(self, team: Team) -> List[TeamAssignment]:
        """Get all assignments for a specific team."""
        return [assignment for assignment in self.team_assignments if assignment.team == team]

    def get_assignments_by_day(self, day: date) -> List[TeamAssignment]:
        """Get all assignments on a specific day."""
        return [assignment for assignment in self.team_assignments if assignment.day == day]

    def get_facts(self) -> List[object]:
        """All facts the scoring rules consume."""
        return [*self.team_assignments, *self.unavailability_penalties]
