"""
FastAPI application entry point.
"""

from fastapi import FastAPI

from commit_tracker import __version__
from commit_tracker.api import widget
from commit_tracker.config import settings
from commit_tracker.utils.logging import setup_logging, get_logger

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Commit Tracker Widget",
    description="Latest commit on a GitHub repository branch, ready for a home-screen widget",
    version=__version__
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Commit Tracker Widget API",
        "version": __version__,
        "docs": "/docs"
    }


# Include API routers
app.include_router(widget.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
