"""
Grouping collectors that route facts into a FairnessState.

A collector follows the engine lifecycle: create a container once per
session, accumulate each matching fact (or joined pair) and keep the
returned undo for its retraction, then finish. Finishing returns the live
container itself so the penalty can be read after every change.
"""

from typing import Callable, Hashable

from tournament_scoring.scoring.fairness import FairnessState, InsertUndo


class LoadBalanceCollector:
    """Groups single facts by group_key(fact)."""

    arity = 1

    def __init__(self, group_key: Callable[[object], Hashable]):
        self.group_key = group_key

    def create_container(self) -> FairnessState:
        return FairnessState()

    def accumulate(self, container: FairnessState, a) -> InsertUndo:
        return container.insert(self.group_key(a))

    def finish(self, container: FairnessState) -> FairnessState:
        return container


class LoadBalanceBiCollector:
    """Groups joined fact pairs by group_key(a, b)."""

    arity = 2

    def __init__(self, group_key: Callable[[object, object], Hashable]):
        self.group_key = group_key

    def create_container(self) -> FairnessState:
        return FairnessState()

    def accumulate(self, container: FairnessState, a, b) -> InsertUndo:
        return container.insert(self.group_key(a, b))

    def finish(self, container: FairnessState) -> FairnessState:
        return container


def load_balance(group_key: Callable[[object], Hashable]) -> LoadBalanceCollector:
    """Balance the number of facts per group_key(fact)."""
    return LoadBalanceCollector(group_key)


def load_balance_pairs(group_key: Callable[[object, object], Hashable]) -> LoadBalanceBiCollector:
    """Balance the number of joined pairs per group_key(a, b)."""
    return LoadBalanceBiCollector(group_key)
