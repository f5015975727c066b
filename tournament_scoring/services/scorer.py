"""
Schedule scoring module for the Tournament Schedule Scoring service.
Scores schedules against all hard, medium and soft rules and explains the result.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from tournament_scoring.core.config import ASSERT_INCREMENTAL_SCORE
from tournament_scoring.core.logging_config import get_logger
from tournament_scoring.models import (
    Team, TeamAssignment, UnavailabilityPenalty, TournamentSchedule
)
from tournament_scoring.scoring import (
    ConstraintFactory, HardMediumSoftScore, ScoreDirector, define_constraints
)

logger = get_logger(__name__)


@dataclass
class ConstraintSummary:
    """Score contribution of one rule."""
    name: str
    level: str
    score: HardMediumSoftScore
    match_count: int = 0


@dataclass
class ScoreExplanation:
    """Results from scoring a schedule."""
    score: HardMediumSoftScore
    constraints: List[ConstraintSummary] = field(default_factory=list)

    @property
    def is_feasible(self) -> bool:
        return self.score.is_feasible

    def get_constraint(self, name: str) -> Optional[ConstraintSummary]:
        for summary in self.constraints:
            if summary.name == name:
                return summary
        return None

    def get_summary(self) -> str:
        """Get a summary of the scoring results."""
        summary = f"Score: {self.score}\n"
        summary += f"Feasible: {self.is_feasible}\n"
        for constraint in self.constraints:
            summary += f"  {constraint.name} ({constraint.level}): {constraint.score} [{constraint.match_count} matches]\n"
        return summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": str(self.score),
            "hard": self.score.hard,
            "medium": self.score.medium,
            "soft": self.score.soft,
            "feasible": self.is_feasible,
            "constraints": [
                {
                    "name": constraint.name,
                    "level": constraint.level,
                    "score": str(constraint.score),
                    "match_count": constraint.match_count
                }
                for constraint in self.constraints
            ]
        }


class ScheduleScorer:
    """
    Scores tournament schedules.
    Every call builds a fresh ScoreDirector, so no aggregate state is shared between schedules.
    """

    def __init__(self, assert_incremental_score: bool = ASSERT_INCREMENTAL_SCORE):
        self.constraints = define_constraints(ConstraintFactory())
        self.assert_incremental_score = assert_incremental_score

    def create_director(self, schedule: TournamentSchedule) -> ScoreDirector:
        """Build a director loaded with every fact of the schedule."""
        director = ScoreDirector(self.constraints)
        director.insert_all(schedule.get_facts())
        return director

    def score_schedule(self, schedule: TournamentSchedule) -> ScoreExplanation:
        """
        Score a complete schedule.

        Args:
            schedule: The schedule to score

        Returns:
            ScoreExplanation with the total score and per-rule breakdown
        """
        director = self.create_director(schedule)
        if self.assert_incremental_score:
            director.assert_incremental_score()

        constraint_scores = director.constraint_scores()
        summaries = [
            ConstraintSummary(
                name=constraint.name,
                level=constraint.level,
                score=constraint_scores[constraint.name][0],
                match_count=constraint_scores[constraint.name][1]
            )
            for constraint in self.constraints
        ]
        score = director.calculate_score()
        schedule.score = score

        logger.info(
            "Scored schedule with %d assignments and %d unavailability penalties: %s",
            len(schedule.team_assignments), len(schedule.unavailability_penalties), score
        )
        return ScoreExplanation(score=score, constraints=summaries)

    def generate_score_report(self, schedule: TournamentSchedule) -> str:
        """
        Generate a report of the schedule's score.

        Args:
            schedule: The schedule to report on

        Returns:
            Formatted report string
        """
        explanation = self.score_schedule(schedule)

        report = []
        report.append("=" * 80)
        report.append("SCORE REPORT")
        report.append("=" * 80)
        report.append(f"Teams: {len(schedule.teams)}")
        report.append(f"Assignments: {len(schedule.team_assignments)}")
        report.append(f"Unavailability penalties: {len(schedule.unavailability_penalties)}")
        report.append("")
        report.append(explanation.get_summary().rstrip())
        report.append("")

        # Assignments per team
        report.append("Assignments per Team:")
        for team in sorted(schedule.teams, key=lambda t: t.id):
            report.append(f"  {team}: {len(schedule.get_team_assignments(team))}")
        report.append("")

        # Confrontations per pair of teams
        report.append("Confrontations:")
        confrontations = defaultdict(int)
        for day in sorted({assignment.day for assignment in schedule.team_assignments}):
            day_teams = sorted(
                (a.team for a in schedule.get_assignments_by_day(day) if a.team is not None),
                key=lambda t: t.id
            )
            for i, team in enumerate(day_teams):
                for other_team in day_teams[i + 1:]:
                    if team.id < other_team.id:
                        confrontations[(team, other_team)] += 1
        for (team, other_team), count in sorted(confrontations.items(), key=lambda item: (item[0][0].id, item[0][1].id)):
            report.append(f"  {team} vs {other_team}: {count}")

        report.append("=" * 80)

        return "\n".join(report)


def _parse_day(value) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"Invalid day {value!r}, expected YYYY-MM-DD")


def _parse_id(value, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {what} id {value!r}, expected an integer")


def schedule_from_payload(payload: Dict[str, Any]) -> TournamentSchedule:
    """
    Build a schedule from a JSON-style payload.

    Expected keys: teams [{id, name}], team_assignments [{id, team_id, day}],
    unavailability_penalties [{team_id, day}], and optionally days.

    Raises:
        ValueError: If the payload references unknown teams or repeats ids
    """
    try:
        return _build_schedule(payload)
    except KeyError as e:
        raise ValueError(f"Missing field in payload: {e}")


def _build_schedule(payload: Dict[str, Any]) -> TournamentSchedule:
    teams: Dict[int, Team] = {}
    for team_data in payload.get("teams", []):
        team_id = _parse_id(team_data["id"], "team")
        if team_id in teams:
            raise ValueError(f"Duplicate team id: {team_id}")
        teams[team_id] = Team(id=team_id, name=team_data.get("name") or "")

    def lookup_team(team_id, required: bool = True) -> Optional[Team]:
        # only an assignment slot may be left without a team
        if team_id is None and not required:
            return None
        team = teams.get(_parse_id(team_id, "team"))
        if team is None:
            raise ValueError(f"Unknown team id: {team_id}")
        return team

    assignments = []
    assignment_ids = set()
    for assignment_data in payload.get("team_assignments", []):
        assignment_id = _parse_id(assignment_data["id"], "team assignment")
        if assignment_id in assignment_ids:
            raise ValueError(f"Duplicate team assignment id: {assignment_id}")
        assignment_ids.add(assignment_id)
        assignments.append(TeamAssignment(
            id=assignment_id,
            day=_parse_day(assignment_data["day"]),
            team=lookup_team(assignment_data.get("team_id"), required=False)
        ))

    penalties = []
    seen_penalties = set()
    for penalty_data in payload.get("unavailability_penalties", []):
        penalty = UnavailabilityPenalty(
            team=lookup_team(penalty_data["team_id"]),
            day=_parse_day(penalty_data["day"])
        )
        # the same team/day pair twice is one fact
        if penalty in seen_penalties:
            continue
        seen_penalties.add(penalty)
        penalties.append(penalty)

    days = payload.get("days")
    if days:
        days = sorted({_parse_day(day) for day in days})
    else:
        days = sorted({assignment.day for assignment in assignments})

    return TournamentSchedule(
        teams=list(teams.values()),
        days=days,
        team_assignments=assignments,
        unavailability_penalties=penalties
    )
