"""
Declarative constraint streams.

Rules are written as pipelines over fact types:

    factory.for_each(TeamAssignment)
        .join(TeamAssignment, equal(attrgetter("day")))
        .group_by(collector)
        .penalize(HardMediumSoftScore.ONE_SOFT, match_weigher)
        .as_constraint("name")

Streams only describe a rule. ScoreDirector turns each Constraint into an
incremental node and evaluates it.
"""

import operator
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Type

from tournament_scoring.scoring.score import HardMediumSoftScore


class Joiner:
    """Compares a mapping of the left fact with a mapping of the right fact."""

    __slots__ = ("left_mapping", "right_mapping", "comparison")

    def __init__(self, left_mapping: Callable, right_mapping: Callable, comparison: Callable):
        self.left_mapping = left_mapping
        self.right_mapping = right_mapping
        self.comparison = comparison

    @property
    def indexable(self) -> bool:
        # equality joiners can be resolved with a hash lookup
        return self.comparison is operator.eq

    def matches(self, a, b) -> bool:
        return self.comparison(self.left_mapping(a), self.right_mapping(b))


def equal(left_mapping: Callable, right_mapping: Optional[Callable] = None) -> Joiner:
    return Joiner(left_mapping, right_mapping or left_mapping, operator.eq)


def less_than(left_mapping: Callable, right_mapping: Optional[Callable] = None) -> Joiner:
    return Joiner(left_mapping, right_mapping or left_mapping, operator.lt)


class _Stream:

    def penalize(self, weight: HardMediumSoftScore, match_weigher: Optional[Callable] = None) -> 'ConstraintBuilder':
        return ConstraintBuilder(self, weight, match_weigher)


class UniConstraintStream(_Stream):
    """Single facts of one type, optionally only those with a matching fact of another type."""

    def __init__(self, source_type: Type, exists_type: Optional[Type] = None,
                 exists_joiners: Tuple[Joiner, ...] = ()):
        self.source_type = source_type
        self.exists_type = exists_type
        self.exists_joiners = exists_joiners

    def join(self, other_type: Type, *joiners: Joiner) -> 'BiConstraintStream':
        if self.exists_type is not None:
            raise ValueError("join() after if_exists() is not supported")
        return BiConstraintStream(self.source_type, other_type, joiners)

    def if_exists(self, other_type: Type, *joiners: Joiner) -> 'UniConstraintStream':
        if self.exists_type is not None:
            raise ValueError("Only one if_exists() per stream is supported")
        return UniConstraintStream(self.source_type, other_type, joiners)

    def group_by(self, collector) -> 'GroupedConstraintStream':
        if collector.arity != 1:
            raise ValueError("A single fact stream needs a single fact collector")
        return GroupedConstraintStream(self, collector)


class BiConstraintStream(_Stream):
    """Pairs (a, b) of facts accepted by every joiner."""

    def __init__(self, left_type: Type, right_type: Type, joiners: Tuple[Joiner, ...]):
        self.left_type = left_type
        self.right_type = right_type
        self.joiners = joiners

    def group_by(self, collector) -> 'GroupedConstraintStream':
        if collector.arity != 2:
            raise ValueError("A joined stream needs a pair collector")
        return GroupedConstraintStream(self, collector)


class GroupedConstraintStream(_Stream):
    """
    All tuples of the parent stream collected into one container.

    The match weigher receives the finished container.
    """

    def __init__(self, parent: _Stream, collector):
        self.parent = parent
        self.collector = collector


class ConstraintBuilder:

    def __init__(self, stream: _Stream, weight: HardMediumSoftScore,
                 match_weigher: Optional[Callable]):
        self.stream = stream
        self.weight = weight
        self.match_weigher = match_weigher

    def as_constraint(self, name: str) -> 'Constraint':
        return Constraint(name=name, stream=self.stream, weight=self.weight,
                          match_weigher=self.match_weigher)


@dataclass(frozen=True)
class Constraint:
    """A named rule: a stream, a score weight and an optional match weigher."""
    name: str
    stream: _Stream
    weight: HardMediumSoftScore
    match_weigher: Optional[Callable] = None

    @property
    def level(self) -> str:
        if self.weight.hard:
            return "hard"
        if self.weight.medium:
            return "medium"
        return "soft"


class ConstraintFactory:
    """Entry point for writing rules."""

    def for_each(self, fact_type: Type) -> UniConstraintStream:
        return UniConstraintStream(fact_type)
