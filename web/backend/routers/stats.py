#!/usr/bin/env python3
"""
Stats endpoints - view match statistics of a resume.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_match_service
from ..services.match_service import MatchService
from ..models.responses import StatsResponse, UserStatsResponse

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/{resume_id}", response_model=StatsResponse)
def get_stats(
    resume_id: int,
    top: Optional[int] = Query(default=None, ge=1, le=100, description="Number of top matches to return"),
    service: MatchService = Depends(get_match_service)
):
    """
    Get match count, average score and best matches of a resume.

    Returns 404 if the resume does not exist.
    """
    return StatsResponse(
        success=True,
        stats=service.get_stats(resume_id, top_n=top)
    )


@router.get("/user/{user_id}", response_model=UserStatsResponse)
def get_user_stats(
    user_id: str,
    top: Optional[int] = Query(default=None, ge=1, le=100, description="Number of top matches to return"),
    service: MatchService = Depends(get_match_service)
):
    """
    Get dashboard statistics across every resume of a user.

    Returns resume and match counts, the average score, the best matches
    with their resume titles, and the most common skills. A user without
    resumes gets zero counts.
    """
    return UserStatsResponse(
        success=True,
        stats=service.get_user_stats(user_id, top_n=top)
    )
