#!/usr/bin/env python3
"""
Resume Job Matcher - FastAPI Application

Serves stored resume/job-role matches and triggers recomputation.

Usage:
    resume-job-matcher-web

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from jobmatch.exceptions import MatchingError
from .config import get_config
from .exceptions import (
    matching_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import matches_router, stats_router

# Load configuration
config = get_config()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.logging.level.upper(), logging.INFO),
    format=config.logging.format
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Resume Job Matcher API",
    description="API for scoring resumes against job roles",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Register exception handlers
app.add_exception_handler(MatchingError, matching_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(matches_router)
app.include_router(stats_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "resume-job-matcher"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting Resume Job Matcher on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level=config.logging.level.lower()
    )


if __name__ == "__main__":
    main()
