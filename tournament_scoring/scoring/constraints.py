"""
Scoring rules for tournament schedules.

Two hard rules keep a schedule valid (no team plays twice on a day, no team
plays on a day it is unavailable). A medium rule balances how often each
team plays, a soft rule balances how often each pair of teams meets.

The less_than joiners on the self-joins make each unordered pair match
exactly once; without them every pair would also match reversed.
"""

from operator import attrgetter
from typing import List

from tournament_scoring.core.config import (
    CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM,
    CONSTRAINT_UNAVAILABILITY_PENALTY,
    CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM,
    CONSTRAINT_EVENLY_CONFRONTATION_COUNT
)
from tournament_scoring.models import TeamAssignment, UnavailabilityPenalty, TeamPair
from tournament_scoring.scoring.collectors import load_balance, load_balance_pairs
from tournament_scoring.scoring.fairness import FairnessState
from tournament_scoring.scoring.score import HardMediumSoftScore
from tournament_scoring.scoring.streams import Constraint, ConstraintFactory, equal, less_than


def define_constraints(constraint_factory: ConstraintFactory) -> List[Constraint]:
    return [
        one_assignment_per_date_per_team(constraint_factory),
        unavailability_penalty(constraint_factory),
        fair_assignment_count_per_team(constraint_factory),
        evenly_confrontation_count(constraint_factory)
    ]


def one_assignment_per_date_per_team(constraint_factory: ConstraintFactory) -> Constraint:
    return (constraint_factory.for_each(TeamAssignment)
            .join(TeamAssignment,
                  equal(attrgetter("team")),
                  equal(attrgetter("day")),
                  less_than(attrgetter("id")))
            .penalize(HardMediumSoftScore.ONE_HARD)
            .as_constraint(CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM))


def unavailability_penalty(constraint_factory: ConstraintFactory) -> Constraint:
    return (constraint_factory.for_each(UnavailabilityPenalty)
            .if_exists(TeamAssignment,
                       equal(attrgetter("team"), attrgetter("team")),
                       equal(attrgetter("day"), attrgetter("day")))
            .penalize(HardMediumSoftScore.ONE_HARD)
            .as_constraint(CONSTRAINT_UNAVAILABILITY_PENALTY))


def fair_assignment_count_per_team(constraint_factory: ConstraintFactory) -> Constraint:
    return (constraint_factory.for_each(TeamAssignment)
            .group_by(load_balance(attrgetter("team")))
            .penalize(HardMediumSoftScore.ONE_MEDIUM, FairnessState.penalty)
            .as_constraint(CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM))


def evenly_confrontation_count(constraint_factory: ConstraintFactory) -> Constraint:
    return (constraint_factory.for_each(TeamAssignment)
            .join(TeamAssignment,
                  equal(attrgetter("day")),
                  less_than(attrgetter("team.id")))
            .group_by(load_balance_pairs(_confrontation))
            .penalize(HardMediumSoftScore.ONE_SOFT, FairnessState.penalty)
            .as_constraint(CONSTRAINT_EVENLY_CONFRONTATION_COUNT))


def _confrontation(assignment: TeamAssignment, other_assignment: TeamAssignment) -> TeamPair:
    return TeamPair(assignment.team, other_assignment.team)
