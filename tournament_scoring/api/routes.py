"""
API routes for schedule scoring.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime, date
from celery.result import AsyncResult

from tournament_scoring.core.celery_app import celery_app
from tournament_scoring.core.logging_config import get_logger
from tournament_scoring.scoring import ConstraintFactory, define_constraints
from tournament_scoring.services.scorer import ScheduleScorer, schedule_from_payload
from tournament_scoring.tasks.scoring_tasks import score_schedule_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["score"])


class TeamRequest(BaseModel):
    """A team taking part in the tournament."""
    id: int
    name: str = ""


class TeamAssignmentRequest(BaseModel):
    """A match-slot on a day, optionally filled by a team."""
    id: int
    day: date
    team_id: Optional[int] = None


class UnavailabilityPenaltyRequest(BaseModel):
    """A day a team must not play."""
    team_id: int
    day: date


class ScheduleRequest(BaseModel):
    """Request model for scoring a schedule."""
    teams: List[TeamRequest] = Field(default_factory=list)
    days: List[date] = Field(default_factory=list)
    team_assignments: List[TeamAssignmentRequest] = Field(default_factory=list)
    unavailability_penalties: List[UnavailabilityPenaltyRequest] = Field(default_factory=list)


class ConstraintScoreResponse(BaseModel):
    """Score contribution of one rule."""
    name: str
    level: str
    score: str
    match_count: int


class ScoreResponse(BaseModel):
    """Response model for schedule scoring."""
    score: str
    hard: int
    medium: int
    soft: int
    feasible: bool
    constraints: List[ConstraintScoreResponse]


class ConstraintInfo(BaseModel):
    """A rule the scorer applies."""
    name: str
    level: str
    weight: str


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/constraints", response_model=List[ConstraintInfo])
async def list_constraints():
    """List every rule with its score level."""
    return [
        ConstraintInfo(name=constraint.name, level=constraint.level, weight=str(constraint.weight))
        for constraint in define_constraints(ConstraintFactory())
    ]


@router.post("/score", response_model=ScoreResponse)
async def score_schedule(request: ScheduleRequest):
    """
    Score a candidate schedule.

    This endpoint:
    1. Builds the schedule from the request
    2. Scores it against every rule
    3. Returns the total score and per-rule breakdown
    """
    try:
        schedule = schedule_from_payload(request.model_dump(mode="json"))
        explanation = ScheduleScorer().score_schedule(schedule)
        return ScoreResponse(**explanation.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Schedule scoring failed")
        raise HTTPException(status_code=500, detail=f"Schedule scoring failed: {str(e)}")


@router.post("/score/async")
async def score_schedule_async(request: ScheduleRequest):
    """
    Start async schedule scoring task.

    Returns:
        dict: Task ID for polling status
    """
    try:
        task = score_schedule_task.delay(request.model_dump(mode="json"))

        return {
            "task_id": task.id,
            "status": "PENDING",
            "message": "Schedule scoring started"
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")


@router.get("/score/status/{task_id}")
async def get_score_status(task_id: str):
    """
    Get status of async schedule scoring task.

    Args:
        task_id: Celery task ID

    Returns:
        dict: Task status and result (if complete)
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)

        if task_result.state == "PENDING":
            response = {
                "task_id": task_id,
                "status": "PENDING",
                "message": "Task is waiting to start..."
            }
        elif task_result.state == "PROGRESS":
            response = {
                "task_id": task_id,
                "status": "PROGRESS",
                "message": task_result.info.get("status", "Processing...")
            }
        elif task_result.state == "SUCCESS":
            response = {
                "task_id": task_id,
                "status": "SUCCESS",
                "result": task_result.result
            }
        elif task_result.state == "FAILURE":
            response = {
                "task_id": task_id,
                "status": "FAILURE",
                "message": str(task_result.info)
            }
        else:
            response = {
                "task_id": task_id,
                "status": task_result.state,
                "message": f"Task state: {task_result.state}"
            }

        return response
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")
