"""
Configuration constants for the Tournament Schedule Scoring service.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Fairness penalty scaling
# sqrt(sum of squared counts) is multiplied by this and truncated to an integer
PENALTY_SCALE = 1000

# Constraint names (stable identifiers, reported in score explanations)
CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM = "oneAssignmentPerDatePerTeam"
CONSTRAINT_UNAVAILABILITY_PENALTY = "unavailabilityPenalty"
CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM = "fairAssignmentCountPerTeam"
CONSTRAINT_EVENLY_CONFRONTATION_COUNT = "evenlyConfrontationCount"

CONSTRAINT_NAMES = [
    CONSTRAINT_ONE_ASSIGNMENT_PER_DATE_PER_TEAM,
    CONSTRAINT_UNAVAILABILITY_PENALTY,
    CONSTRAINT_FAIR_ASSIGNMENT_COUNT_PER_TEAM,
    CONSTRAINT_EVENLY_CONFRONTATION_COUNT,
]

# Recompute the score from scratch after every scoring call and fail on drift
ASSERT_INCREMENTAL_SCORE = os.getenv("ASSERT_INCREMENTAL_SCORE", "false").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

# API server
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_RELOAD = os.getenv("API_RELOAD", "false").lower() in ("1", "true", "yes")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Redis connection URL (Celery broker and result backend)
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Async scoring limits
TASK_TIME_LIMIT = 600  # 10 minutes max
TASK_SOFT_TIME_LIMIT = 540  # 9 minutes soft limit
TASK_RESULT_EXPIRES = int(os.getenv("TASK_RESULT_EXPIRES", "3600"))
WORKER_CONCURRENCY = int(os.getenv("WORKER_CONCURRENCY", "2"))
