"""
Tests for the schedule scorer and payload parsing.
"""

from datetime import date
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tournament_scoring.core.config import (
    CONSTRAINT_NAMES,
    CONSTRAINT_UNAVAILABILITY_PENALTY,
    CONSTRAINT_EVENLY_CONFRONTATION_COUNT
)
from tournament_scoring.scoring import HardMediumSoftScore
from tournament_scoring.services import ScheduleScorer, schedule_from_payload


def _payload():
    return {
        "teams": [
            {"id": 1, "name": "Eagles"},
            {"id": 2, "name": "Hawks"},
            {"id": 3, "name": "Owls"}
        ],
        "team_assignments": [
            {"id": 1, "team_id": 1, "day": "2026-03-01"},
            {"id": 2, "team_id": 2, "day": "2026-03-01"},
            {"id": 3, "team_id": 1, "day": "2026-03-02"},
            {"id": 4, "team_id": 3, "day": "2026-03-02"},
            {"id": 5, "team_id": None, "day": "2026-03-02"}
        ],
        "unavailability_penalties": [
            {"team_id": 3, "day": "2026-03-02"},
            {"team_id": 3, "day": "2026-03-02"}
        ]
    }


def test_schedule_from_payload():
    schedule = schedule_from_payload(_payload())

    assert [team.name for team in schedule.teams] == ["Eagles", "Hawks", "Owls"]
    assert schedule.days == [date(2026, 3, 1), date(2026, 3, 2)]
    assert len(schedule.team_assignments) == 5
    assert schedule.team_assignments[4].team is None
    assert schedule.team_assignments[0].team is schedule.get_team(1)
    # repeated team/day penalties are one fact
    assert len(schedule.unavailability_penalties) == 1


def test_schedule_from_payload_uses_explicit_days():
    payload = _payload()
    payload["days"] = ["2026-03-03", "2026-03-01", "2026-03-02"]

    schedule = schedule_from_payload(payload)

    assert schedule.days == [date(2026, 3, 1), date(2026, 3, 2), date(2026, 3, 3)]


@pytest.mark.parametrize("mutate", [
    lambda p: p["team_assignments"].append({"id": 9, "team_id": 42, "day": "2026-03-01"}),
    lambda p: p["team_assignments"].append({"id": 1, "team_id": 1, "day": "2026-03-03"}),
    lambda p: p["teams"].append({"id": 1, "name": "Copy"}),
    lambda p: p["team_assignments"].append({"id": 9, "team_id": 1}),
    lambda p: p["unavailability_penalties"].append({"team_id": 1, "day": "not a day"}),
    lambda p: p["teams"].append({"id": None, "name": "Nameless"}),
    lambda p: p["team_assignments"].append({"id": "ten", "team_id": 1, "day": "2026-03-01"}),
    lambda p: p["unavailability_penalties"].append({"team_id": None, "day": "2026-03-01"}),
])
def test_schedule_from_payload_rejects_invalid_input(mutate):
    payload = _payload()
    mutate(payload)

    with pytest.raises(ValueError):
        schedule_from_payload(payload)


def test_score_schedule():
    schedule = schedule_from_payload(_payload())
    explanation = ScheduleScorer(assert_incremental_score=True).score_schedule(schedule)

    # Owls play on a day they are unavailable
    assert explanation.score.hard == -1
    assert not explanation.is_feasible
    assert schedule.score == explanation.score
    assert [summary.name for summary in explanation.constraints] == CONSTRAINT_NAMES

    unavailability = explanation.get_constraint(CONSTRAINT_UNAVAILABILITY_PENALTY)
    assert unavailability.score == HardMediumSoftScore.of(-1, 0, 0)
    assert unavailability.match_count == 1

    # Eagles-Hawks once, Eagles-Owls once
    confrontation = explanation.get_constraint(CONSTRAINT_EVENLY_CONFRONTATION_COUNT)
    assert confrontation.score == HardMediumSoftScore.of(0, 0, -1414)

    assert explanation.get_constraint("noSuchConstraint") is None


def test_explanation_to_dict():
    schedule = schedule_from_payload(_payload())
    result = ScheduleScorer().score_schedule(schedule).to_dict()

    assert result["score"] == str(schedule.score)
    assert result["hard"] == -1
    assert result["feasible"] is False
    assert len(result["constraints"]) == 4
    assert set(result["constraints"][0]) == {"name", "level", "score", "match_count"}


def test_generate_score_report():
    schedule = schedule_from_payload(_payload())
    report = ScheduleScorer().generate_score_report(schedule)

    assert "SCORE REPORT" in report
    assert "Eagles: 2" in report
    assert "Eagles vs Hawks: 1" in report
    assert "Eagles vs Owls: 1" in report
    assert "Hawks vs Owls" not in report
