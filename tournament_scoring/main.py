"""
Main FastAPI application for the Tournament Schedule Scoring service.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tournament_scoring import __version__
from tournament_scoring.api import routes
from tournament_scoring.core.config import CORS_ORIGINS
from tournament_scoring.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Tournament Schedule Scoring API",
    description="API for scoring tournament schedules against hard, medium and soft rules",
    version=__version__
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Tournament Schedule Scoring API",
        "version": __version__,
        "endpoints": {
            "score": "/api/score",
            "constraints": "/api/constraints",
            "health": "/api/health"
        }
    }
