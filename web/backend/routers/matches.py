#!/usr/bin/env python3
"""
Match endpoints - view and refresh the job matches of a resume.
"""

import logging
from fastapi import APIRouter, Depends

from ..dependencies import get_match_service
from ..services.match_service import MatchService
from ..models.responses import MatchesResponse, RefreshResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("/{resume_id}", response_model=MatchesResponse)
def get_matches(
    resume_id: int,
    service: MatchService = Depends(get_match_service)
):
    """
    Get the stored job matches of a resume.

    Returns matches sorted by score (highest first). Nothing is recomputed;
    an unknown resume yields an empty list.
    """
    matches = service.get_matches(resume_id)

    return MatchesResponse(
        success=True,
        count=len(matches),
        matches=matches
    )


@router.post("/{resume_id}/refresh", response_model=RefreshResponse)
def refresh_matches(
    resume_id: int,
    service: MatchService = Depends(get_match_service)
):
    """
    Recompute the resume against every active job role and store the scores.
    """
    logger.info(f"Refreshing matches for resume {resume_id}")
    service.refresh_matches(resume_id)

    return RefreshResponse(
        success=True,
        message="Matches refreshed successfully"
    )
