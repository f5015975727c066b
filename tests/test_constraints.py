"""
Tests for the four tournament scoring rules.
"""

from datetime import date
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tournament_scoring.core.config import (
    CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM,
    CONSTRAINT_UNAVAILABILITY_PENALTY,
    CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM,
    CONSTRAINT_EVENLY_CONFRONTATION_COUNT
)
from tournament_scoring.models import Team, TeamAssignment, UnavailabilityPenalty, TeamPair
from tournament_scoring.scoring import (
    ConstraintFactory, HardMediumSoftScore, ScoreDirector, define_constraints
)

DAY_1 = date(2026, 3, 1)
DAY_2 = date(2026, 3, 2)


def _director(*facts) -> ScoreDirector:
    director = ScoreDirector(define_constraints(ConstraintFactory()))
    director.insert_all(facts)
    return director


def _impact(director: ScoreDirector, name: str):
    return director.constraint_scores()[name]


def test_constraint_names_and_levels():
    constraints = define_constraints(ConstraintFactory())
    assert [(c.name, c.level) for c in constraints] == [
        (CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM, "hard"),
        (CONSTRAINT_UNAVAILABILITY_PENALTY, "hard"),
        (CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM, "medium"),
        (CONSTRAINT_EVENLY_CONFRONTATION_COUNT, "soft"),
    ]


def test_same_team_twice_on_a_day_is_penalized_once():
    team = Team(1, "A")
    director = _director(TeamAssignment(1, DAY_1, team), TeamAssignment(2, DAY_1, team))

    assert _impact(director, CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM) == (HardMediumSoftScore.of(-1, 0, 0), 1)


def test_same_team_three_times_on_a_day_counts_every_pair_once():
    team = Team(1, "A")
    director = _director(*(TeamAssignment(i, DAY_1, team) for i in range(1, 4)))

    assert _impact(director, CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM) == (HardMediumSoftScore.of(-3, 0, 0), 3)


def test_same_team_on_different_days_is_not_penalized():
    team = Team(1, "A")
    director = _director(TeamAssignment(1, DAY_1, team), TeamAssignment(2, DAY_2, team))

    assert _impact(director, CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM) == (HardMediumSoftScore.ZERO, 0)


def test_unavailability_with_matching_assignment():
    team = Team(1, "A")
    director = _director(UnavailabilityPenalty(team, DAY_1), TeamAssignment(1, DAY_1, team))

    assert _impact(director, CONSTRAINT_UNAVAILABILITY_PENALTY) == (HardMediumSoftScore.of(-1, 0, 0), 1)


def test_unavailability_without_matching_assignment():
    team = Team(1, "A")
    other_team = Team(2, "B")
    director = _director(
        UnavailabilityPenalty(team, DAY_1),
        TeamAssignment(1, DAY_2, team),
        TeamAssignment(2, DAY_1, other_team)
    )

    assert _impact(director, CONSTRAINT_UNAVAILABILITY_PENALTY) == (HardMediumSoftScore.ZERO, 0)


def test_unavailability_is_penalized_once_whatever_the_number_of_assignments():
    team = Team(1, "A")
    first = TeamAssignment(1, DAY_1, team)
    second = TeamAssignment(2, DAY_1, team)
    director = _director(first, second, UnavailabilityPenalty(team, DAY_1))

    assert _impact(director, CONSTRAINT_UNAVAILABILITY_PENALTY) == (HardMediumSoftScore.of(-1, 0, 0), 1)

    director.retract(first)
    assert _impact(director, CONSTRAINT_UNAVAILABILITY_PENALTY) == (HardMediumSoftScore.of(-1, 0, 0), 1)

    director.retract(second)
    assert _impact(director, CONSTRAINT_UNAVAILABILITY_PENALTY) == (HardMediumSoftScore.ZERO, 0)


def test_fair_assignment_count_per_team():
    team_a = Team(1, "A")
    team_b = Team(2, "B")
    director = _director(
        TeamAssignment(1, DAY_1, team_a),
        TeamAssignment(2, DAY_2, team_a),
        TeamAssignment(3, date(2026, 3, 3), team_a),
        TeamAssignment(4, DAY_1, team_b)
    )

    assert director.get_container(CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM).counts == {team_a: 3, team_b: 1}
    assert _impact(director, CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM) == (HardMediumSoftScore.of(0, -3162, 0), 1)


def test_confrontation_is_grouped_as_one_unordered_pair():
    team_x = Team(1, "X")
    team_y = Team(2, "Y")
    # insertion order must not matter
    director = _director(TeamAssignment(1, DAY_1, team_y), TeamAssignment(2, DAY_1, team_x))

    container = director.get_container(CONSTRAINT_EVENLY_CONFRONTATION_COUNT)
    assert container.counts == {TeamPair(team_x, team_y): 1}
    assert _impact(director, CONSTRAINT_EVENLY_CONFRONTATION_COUNT) == (HardMediumSoftScore.of(0, 0, -1000), 1)


def test_repeated_confrontations_cost_more_than_spread_ones():
    team_x = Team(1, "X")
    team_y = Team(2, "Y")
    team_z = Team(3, "Z")

    repeated = _director(
        TeamAssignment(1, DAY_1, team_x), TeamAssignment(2, DAY_1, team_y),
        TeamAssignment(3, DAY_2, team_x), TeamAssignment(4, DAY_2, team_y)
    )
    spread = _director(
        TeamAssignment(1, DAY_1, team_x), TeamAssignment(2, DAY_1, team_y),
        TeamAssignment(3, DAY_2, team_x), TeamAssignment(4, DAY_2, team_z)
    )

    assert _impact(repeated, CONSTRAINT_EVENLY_CONFRONTATION_COUNT)[0] == HardMediumSoftScore.of(0, 0, -2000)
    assert _impact(spread, CONSTRAINT_EVENLY_CONFRONTATION_COUNT)[0] == HardMediumSoftScore.of(0, 0, -1414)


def test_unassigned_slots_are_ignored():
    team = Team(1, "A")
    director = _director(
        TeamAssignment(1, DAY_1, None),
        TeamAssignment(2, DAY_1, None),
        UnavailabilityPenalty(team, DAY_1)
    )

    assert director.calculate_score() == HardMediumSoftScore.ZERO


def test_full_schedule_score():
    team_x = Team(1, "X")
    team_y = Team(2, "Y")
    director = _director(TeamAssignment(1, DAY_1, team_x), TeamAssignment(2, DAY_1, team_y))

    # one assignment each: sqrt(1 + 1); one confrontation: sqrt(1)
    assert director.calculate_score() == HardMediumSoftScore.of(0, -1414, -1000)
