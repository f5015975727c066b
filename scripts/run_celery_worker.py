"""
Run Celery worker for async schedule scoring.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tournament_scoring.core.celery_app import celery_app
from tournament_scoring.core.config import LOG_LEVEL, REDIS_URL, WORKER_CONCURRENCY
from tournament_scoring.core.logging_config import setup_logging


def worker_arguments():
    """Command line for the worker; prefork is not available on Windows."""
    return [
        "worker",
        f"--loglevel={LOG_LEVEL.lower()}",
        f"--concurrency={WORKER_CONCURRENCY}",
        "--pool=solo" if os.name == "nt" else "--pool=prefork"
    ]


if __name__ == "__main__":
    setup_logging()

    print("=" * 60)
    print("Tournament Schedule Scoring - Celery Worker")
    print("=" * 60)
    print(f"Broker: {REDIS_URL}")
    print(f"Concurrency: {WORKER_CONCURRENCY}")
    print("=" * 60)

    celery_app.worker_main(worker_arguments())
