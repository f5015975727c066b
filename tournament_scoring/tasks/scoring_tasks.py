"""
Celery tasks for schedule scoring.
"""

from datetime import datetime
import traceback

from tournament_scoring.core.celery_app import celery_app
from tournament_scoring.core.logging_config import get_logger
from tournament_scoring.services.scorer import ScheduleScorer, schedule_from_payload

logger = get_logger(__name__)


@celery_app.task(bind=True, name="score_schedule")
def score_schedule_task(self, payload: dict):
    """
    Async task to score a tournament schedule.

    Args:
        payload: Schedule in the same JSON shape the /api/score endpoint accepts

    Returns:
        dict: Score, per-rule breakdown and scoring time
    """
    try:
        # Progress is only published from a worker, not for direct calls
        if not self.request.called_directly:
            self.update_state(
                state="PROGRESS",
                meta={"status": "Building schedule..."}
            )

        start_time = datetime.now()
        schedule = schedule_from_payload(payload)

        if not self.request.called_directly:
            self.update_state(
                state="PROGRESS",
                meta={"status": f"Scoring {len(schedule.team_assignments)} assignments..."}
            )

        explanation = ScheduleScorer().score_schedule(schedule)
        scoring_time = (datetime.now() - start_time).total_seconds()

        result = explanation.to_dict()
        result.update({
            "success": True,
            "message": f"Schedule scored: {explanation.score}",
            "scoring_time": scoring_time
        })
        return result

    except Exception as e:
        # Return error result
        error_trace = traceback.format_exc()
        logger.error("Error in score_schedule_task: %s", error_trace)

        return {
            "success": False,
            "message": f"Schedule scoring failed: {str(e)}",
            "error": str(e),
            "traceback": error_trace
        }
