"""
Run the FastAPI scoring server.
"""

import uvicorn

from tournament_scoring.core.config import API_HOST, API_PORT, API_RELOAD, LOG_LEVEL

if __name__ == "__main__":
    print("=" * 60)
    print("Tournament Schedule Scoring API Server")
    print("=" * 60)
    print(f"Starting server on http://{API_HOST}:{API_PORT}")
    print(f"API Documentation: http://{API_HOST}:{API_PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        "tournament_scoring.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD,
        log_level=LOG_LEVEL.lower()
    )
