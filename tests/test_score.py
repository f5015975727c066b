"""
Tests for the hard/medium/soft score type.
"""

import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tournament_scoring.scoring.score import HardMediumSoftScore


def test_string_format_and_parse():
    score = HardMediumSoftScore.of(-1, -3162, -1000)
    assert str(score) == "-1hard/-3162medium/-1000soft"
    assert HardMediumSoftScore.parse(str(score)) == score


def test_parse_rejects_other_formats():
    with pytest.raises(ValueError):
        HardMediumSoftScore.parse("-1hard/-2soft")


def test_arithmetic():
    a = HardMediumSoftScore.of(-1, 2, -3)
    b = HardMediumSoftScore.of(4, -5, 6)
    assert a + b == HardMediumSoftScore.of(3, -3, 3)
    assert a - b == HardMediumSoftScore.of(-5, 7, -9)
    assert -a == HardMediumSoftScore.of(1, -2, 3)
    assert HardMediumSoftScore.ONE_MEDIUM.multiply(-1414) == HardMediumSoftScore.of(0, -1414, 0)


def test_feasibility():
    assert HardMediumSoftScore.ZERO.is_feasible
    assert HardMediumSoftScore.of(0, -5, -5).is_feasible
    assert not HardMediumSoftScore.of(-1, 0, 0).is_feasible
