#!/usr/bin/env python3
"""
Error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from jobmatch.exceptions import MatchingError, ResumeNotFound, PersistenceFailure

logger = logging.getLogger(__name__)


async def matching_exception_handler(
    request: Request,
    exc: MatchingError
) -> JSONResponse:
    """
    Handle matching engine exceptions.

    Args:
        request: The FastAPI request.
        exc: The matching exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, ResumeNotFound):
        status_code = 404
        logger.warning(f"{request.url.path}: {exc}")
    elif isinstance(exc, PersistenceFailure):
        status_code = 503
        logger.error(f"Persistence error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.error(f"Matching error in {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
