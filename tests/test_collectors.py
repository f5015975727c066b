"""
Tests for the load balance collectors.
"""

from datetime import date
from operator import attrgetter
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tournament_scoring.models import Team, TeamAssignment, TeamPair
from tournament_scoring.scoring import ConstraintFactory
from tournament_scoring.scoring.collectors import (
    LoadBalanceCollector, LoadBalanceBiCollector, load_balance, load_balance_pairs
)


def test_single_fact_collector_groups_by_key():
    team_a = Team(1, "A")
    team_b = Team(2, "B")
    collector = load_balance(attrgetter("team"))
    assert isinstance(collector, LoadBalanceCollector)

    container = collector.create_container()
    collector.accumulate(container, TeamAssignment(1, date(2026, 3, 1), team_a))
    collector.accumulate(container, TeamAssignment(2, date(2026, 3, 2), team_a))
    undo = collector.accumulate(container, TeamAssignment(3, date(2026, 3, 2), team_b))

    assert container.counts == {team_a: 2, team_b: 1}
    undo()
    assert container.counts == {team_a: 2}


def test_pair_collector_groups_by_pair_key():
    team_x = Team(1, "X")
    team_y = Team(2, "Y")
    collector = load_balance_pairs(lambda a, b: TeamPair(a.team, b.team))
    assert isinstance(collector, LoadBalanceBiCollector)

    container = collector.create_container()
    day = date(2026, 3, 1)
    collector.accumulate(container, TeamAssignment(1, day, team_x), TeamAssignment(2, day, team_y))

    assert container.counts == {TeamPair(team_x, team_y): 1}


def test_finish_returns_the_live_container():
    collector = load_balance(attrgetter("team"))
    container = collector.create_container()
    result = collector.finish(container)
    assert result is container

    collector.accumulate(container, TeamAssignment(1, date(2026, 3, 1), Team(1)))
    assert result.penalty() == 1000


def test_each_container_is_independent():
    collector = load_balance(attrgetter("team"))
    first = collector.create_container()
    second = collector.create_container()
    collector.accumulate(first, TeamAssignment(1, date(2026, 3, 1), Team(1)))

    assert first is not second
    assert second.is_empty()


def test_group_by_rejects_collector_of_wrong_arity():
    factory = ConstraintFactory()

    with pytest.raises(ValueError):
        factory.for_each(TeamAssignment).group_by(load_balance_pairs(TeamPair))

    with pytest.raises(ValueError):
        factory.for_each(TeamAssignment).join(TeamAssignment).group_by(load_balance(attrgetter("team")))
