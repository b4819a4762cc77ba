#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from jobmatch.app_context import AppContext
from jobmatch.engine import MatchingEngine
from .config import get_config
from .services.match_service import MatchService


@lru_cache()
def get_app_context() -> AppContext:
    """Build the application context once per process."""
    return AppContext.build(get_config())


def get_matching_engine() -> MatchingEngine:
    """
    FastAPI dependency that returns the shared MatchingEngine.

    Each engine call opens and closes its own unit of work, so the
    engine itself is safe to share between requests.
    """
    return get_app_context().matching_engine


def get_match_service() -> MatchService:
    """
    FastAPI dependency that yields a MatchService.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(service: MatchService = Depends(get_match_service)):
            ...
    """
    return MatchService(get_matching_engine())
