"""
Incremental evaluation of constraint streams.

A ScoreDirector owns one node per constraint. Inserting or retracting a
fact only touches the tuples that fact takes part in; grouped constraints
keep the undo returned by their collector for each tuple and call it when
the tuple goes away. The score is the sum of each node's running total,
so reading it never walks the working memory.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from tournament_scoring.core.logging_config import get_logger
from tournament_scoring.scoring.score import HardMediumSoftScore
from tournament_scoring.scoring.streams import (
    Constraint, UniConstraintStream, BiConstraintStream, GroupedConstraintStream
)

logger = get_logger(__name__)


def _accepts(fact, fact_type) -> bool:
    # facts that are not fully assigned yet (e.g. a slot without a team) are skipped
    return isinstance(fact, fact_type) and getattr(fact, "is_initialized", True)


class _JoinIndex:
    """Hash buckets over the equality joiners, the rest are checked per candidate."""

    def __init__(self, joiners):
        self.equal_joiners = [joiner for joiner in joiners if joiner.indexable]
        self.filter_joiners = [joiner for joiner in joiners if not joiner.indexable]
        self.left_buckets = defaultdict(dict)
        self.right_buckets = defaultdict(dict)
        self.left_keys = {}
        self.right_keys = {}

    def left_key(self, fact):
        return tuple(joiner.left_mapping(fact) for joiner in self.equal_joiners)

    def right_key(self, fact):
        return tuple(joiner.right_mapping(fact) for joiner in self.equal_joiners)

    def add_left(self, fact):
        key = self.left_key(fact)
        self.left_keys[fact] = key
        self.left_buckets[key][fact] = None
        return key

    def add_right(self, fact):
        key = self.right_key(fact)
        self.right_keys[fact] = key
        self.right_buckets[key][fact] = None
        return key

    def remove_left(self, fact):
        key = self.left_keys.pop(fact)
        self._discard(self.left_buckets, key, fact)

    def remove_right(self, fact):
        key = self.right_keys.pop(fact)
        self._discard(self.right_buckets, key, fact)

    def rights_for(self, left_fact):
        key = self.left_keys[left_fact]
        return [right for right in self.right_buckets.get(key, ()) if self.filter(left_fact, right)]

    def lefts_for(self, right_fact):
        key = self.right_keys[right_fact]
        return [left for left in self.left_buckets.get(key, ()) if self.filter(left, right_fact)]

    def filter(self, left, right) -> bool:
        return all(joiner.matches(left, right) for joiner in self.filter_joiners)

    @staticmethod
    def _discard(buckets, key, fact):
        bucket = buckets.get(key)
        if bucket is not None:
            bucket.pop(fact, None)
            if not bucket:
                del buckets[key]


class _ConstraintNode:
    """Match bookkeeping shared by the node shapes."""

    def __init__(self, constraint: Constraint, collector=None):
        self.constraint = constraint
        self.collector = collector
        self.container = collector.create_container() if collector is not None else None
        # tuple -> (undo, match weight); undo is only set for grouped constraints
        self.matches: Dict[Tuple, Tuple[Optional[object], int]] = {}
        self.matches_by_fact: Dict[object, Dict[Tuple, None]] = {}
        self.weight_total = 0

    def insert(self, fact):
        raise NotImplementedError

    def retract(self, fact):
        raise NotImplementedError

    def _add_match(self, match: Tuple):
        if self.collector is not None:
            undo = self.collector.accumulate(self.container, *match)
            weight = 0
        else:
            undo = None
            weigher = self.constraint.match_weigher
            weight = weigher(*match) if weigher is not None else 1
            self.weight_total += weight
        self.matches[match] = (undo, weight)
        for fact in set(match):
            self.matches_by_fact.setdefault(fact, {})[match] = None

    def _remove_match(self, match: Tuple):
        undo, weight = self.matches.pop(match)
        if undo is not None:
            undo()
        self.weight_total -= weight
        for fact in set(match):
            fact_matches = self.matches_by_fact.get(fact)
            if fact_matches is not None:
                fact_matches.pop(match, None)
                if not fact_matches:
                    del self.matches_by_fact[fact]

    def _remove_matches_of(self, fact):
        for match in list(self.matches_by_fact.get(fact, ())):
            self._remove_match(match)

    @property
    def match_count(self) -> int:
        if self.collector is not None:
            # everything collapses into a single group
            return 1 if self.matches else 0
        return len(self.matches)

    def score(self) -> HardMediumSoftScore:
        constraint = self.constraint
        if self.collector is not None:
            if not self.matches:
                return HardMediumSoftScore.ZERO
            result = self.collector.finish(self.container)
            weigher = constraint.match_weigher
            impact = weigher(result) if weigher is not None else 1
        else:
            impact = self.weight_total
        # every rule penalizes
        return constraint.weight.multiply(-impact)


class _UniNode(_ConstraintNode):
    """for_each(type), optionally followed by if_exists(other_type, ...)."""

    def __init__(self, constraint: Constraint, stream: UniConstraintStream, collector=None):
        super().__init__(constraint, collector)
        self.source_type = stream.source_type
        self.exists_type = stream.exists_type
        self.index = _JoinIndex(stream.exists_joiners) if stream.exists_type is not None else None
        # source fact -> matching exists facts
        self.supports: Dict[object, Dict[object, None]] = {}

    def insert(self, fact):
        if _accepts(fact, self.source_type):
            if self.index is None:
                self._add_match((fact,))
            else:
                self.index.add_left(fact)
                self.supports[fact] = dict.fromkeys(self.index.rights_for(fact))
                if self.supports[fact]:
                    self._add_match((fact,))
        if self.index is not None and _accepts(fact, self.exists_type):
            self.index.add_right(fact)
            for source in self.index.lefts_for(fact):
                supporting = self.supports[source]
                supporting[fact] = None
                if len(supporting) == 1:
                    self._add_match((source,))

    def retract(self, fact):
        if self.index is not None and fact in self.index.right_keys:
            for source in self.index.lefts_for(fact):
                supporting = self.supports[source]
                supporting.pop(fact, None)
                if not supporting:
                    self._remove_match((source,))
            self.index.remove_right(fact)
        if self.index is not None and fact in self.index.left_keys:
            self.index.remove_left(fact)
            del self.supports[fact]
        self._remove_matches_of(fact)


class _BiNode(_ConstraintNode):
    """for_each(left_type).join(right_type, *joiners)."""

    def __init__(self, constraint: Constraint, stream: BiConstraintStream, collector=None):
        super().__init__(constraint, collector)
        self.left_type = stream.left_type
        self.right_type = stream.right_type
        self.index = _JoinIndex(stream.joiners)

    def insert(self, fact):
        is_left = _accepts(fact, self.left_type)
        is_right = _accepts(fact, self.right_type)
        if is_left:
            self.index.add_left(fact)
        if is_right:
            self.index.add_right(fact)
        if is_left:
            for right in self.index.rights_for(fact):
                self._add_match((fact, right))
        if is_right:
            for left in self.index.lefts_for(fact):
                if is_left and left is fact:
                    continue  # (fact, fact) was handled as a left fact
                self._add_match((left, fact))

    def retract(self, fact):
        self._remove_matches_of(fact)
        if fact in self.index.left_keys:
            self.index.remove_left(fact)
        if fact in self.index.right_keys:
            self.index.remove_right(fact)


def _build_node(constraint: Constraint) -> _ConstraintNode:
    stream = constraint.stream
    collector = None
    if isinstance(stream, GroupedConstraintStream):
        collector = stream.collector
        stream = stream.parent
    if isinstance(stream, UniConstraintStream):
        return _UniNode(constraint, stream, collector)
    if isinstance(stream, BiConstraintStream):
        return _BiNode(constraint, stream, collector)
    raise ValueError(f"Unsupported stream for constraint {constraint.name}: {type(stream).__name__}")


class ChangeUndo:
    """Restores the attribute values a ScoreDirector.change() replaced. One use only."""

    __slots__ = ("_director", "_fact", "_previous_values", "_applied")

    def __init__(self, director: 'ScoreDirector', fact, previous_values: Dict[str, object]):
        self._director = director
        self._fact = fact
        self._previous_values = previous_values
        self._applied = False

    def __call__(self):
        if self._applied:
            raise RuntimeError(f"Change of {self._fact} was already undone")
        self._applied = True
        self._director._apply(self._fact, self._previous_values)


class ScoreDirector:
    """
    Incrementally scores a working set of facts against a list of constraints.

    Each director gets fresh nodes and therefore fresh aggregate containers;
    nothing is shared between directors. A director is not thread-safe and
    is meant to be owned by a single solving run.
    """

    def __init__(self, constraints: Iterable[Constraint]):
        self.constraints: List[Constraint] = list(constraints)
        names = [constraint.name for constraint in self.constraints]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate constraint names: {', '.join(duplicates)}")
        self._nodes = [_build_node(constraint) for constraint in self.constraints]
        self._facts: Dict[object, None] = {}
        logger.debug("Created score director for %d constraints", len(self._nodes))

    @property
    def facts(self) -> List[object]:
        return list(self._facts)

    def insert(self, fact):
        """Add a fact to the working memory."""
        if fact in self._facts:
            raise ValueError(f"Fact {fact} is already inserted")
        self._facts[fact] = None
        for node in self._nodes:
            node.insert(fact)

    def insert_all(self, facts: Iterable[object]):
        for fact in facts:
            self.insert(fact)

    def retract(self, fact):
        """Remove a fact from the working memory, reversing every match it produced."""
        if fact not in self._facts:
            raise ValueError(f"Fact {fact} is not in the working memory")
        for node in self._nodes:
            node.retract(fact)
        del self._facts[fact]

    def change(self, fact, **values) -> Tuple[HardMediumSoftScore, ChangeUndo]:
        """
        Set attributes of an inserted fact and rescore it.

        Returns:
            Tuple of (score delta, undo action restoring the previous values)
        """
        for name in values:
            if not hasattr(fact, name):
                raise ValueError(f"{type(fact).__name__} has no attribute {name!r}")
        before = self.calculate_score()
        previous_values = {name: getattr(fact, name) for name in values}
        self._apply(fact, values)
        return self.calculate_score() - before, ChangeUndo(self, fact, previous_values)

    def _apply(self, fact, values: Dict[str, object]):
        previous_values = {name: getattr(fact, name) for name in values}
        changed = []
        self.retract(fact)
        try:
            for name, value in values.items():
                setattr(fact, name, value)
                changed.append(name)
        except Exception:
            # a partial change is rolled back before the fact is re-inserted
            for name in reversed(changed):
                setattr(fact, name, previous_values[name])
            raise
        finally:
            self.insert(fact)

    def calculate_score(self) -> HardMediumSoftScore:
        score = HardMediumSoftScore.ZERO
        for node in self._nodes:
            score = score + node.score()
        return score

    def constraint_scores(self) -> Dict[str, Tuple[HardMediumSoftScore, int]]:
        """Per constraint name: (score contribution, match count)."""
        return {node.constraint.name: (node.score(), node.match_count) for node in self._nodes}

    def get_container(self, constraint_name: str):
        """The live aggregate container of a grouped constraint."""
        for node in self._nodes:
            if node.constraint.name == constraint_name:
                if node.collector is None:
                    raise ValueError(f"Constraint {constraint_name} does not group its matches")
                return node.collector.finish(node.container)
        raise ValueError(f"Unknown constraint: {constraint_name}")

    def assert_incremental_score(self):
        """Recompute from scratch and fail if the incremental score drifted."""
        fresh = calculate_score_from_scratch(self.constraints, self._facts)
        expected = fresh.constraint_scores()
        actual = self.constraint_scores()
        if expected != actual:
            drifted = [name for name in expected if expected[name] != actual.get(name)]
            logger.error("Score corruption in constraints: %s", ", ".join(drifted))
            raise AssertionError(
                f"Incremental score {self.calculate_score()} differs from "
                f"recomputed score {fresh.calculate_score()} for: {', '.join(drifted)}"
            )


def calculate_score_from_scratch(constraints: Iterable[Constraint], facts: Iterable[object]) -> ScoreDirector:
    """Score a full working set in a new director."""
    director = ScoreDirector(constraints)
    director.insert_all(facts)
    return director
