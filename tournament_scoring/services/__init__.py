"""
Services for scoring schedules.
"""

from .scorer import ScheduleScorer, ScoreExplanation, ConstraintSummary, schedule_from_payload

__all__ = [
    "ScheduleScorer",
    "ScoreExplanation",
    "ConstraintSummary",
    "schedule_from_payload"
]
