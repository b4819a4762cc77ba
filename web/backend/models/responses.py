#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class MatchSummary(BaseModel):
    """One scored (resume, job role) pair."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "match_id": 12,
                "resume_id": 1,
                "job_role_id": 10,
                "job_role_name": "Backend Developer",
                "job_role_description": "Builds and runs our APIs",
                "match_score": 34.83,
                "matched_skills": ["C#"],
                "missing_skills": ["Sql", "Api"],
                "matched_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    match_id: Optional[int]
    resume_id: int
    job_role_id: int
    job_role_name: str
    job_role_description: Optional[str] = None

    # Capped at 100; large experience shortfalls can push it below 0
    match_score: float = Field(le=100)

    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    matched_at: Optional[str]
    resume_title: Optional[str] = None


class MatchesResponse(BaseModel):
    """Response containing list of matches."""
    success: bool
    count: int
    matches: List[MatchSummary]


class RefreshResponse(BaseModel):
    """Response after recomputing the matches of a resume."""
    success: bool
    message: str


class ResumeStats(BaseModel):
    resume_id: int
    total_matches: int = Field(ge=0)
    average_score: float
    top_matches: List[MatchSummary]


class StatsResponse(BaseModel):
    """Response containing match statistics of a resume."""
    success: bool
    stats: ResumeStats


class SkillCountSummary(BaseModel):
    skill_name: str
    count: int = Field(ge=1)


class UserStats(BaseModel):
    """Dashboard statistics across every resume of a user."""
    user_id: str
    total_resumes: int = Field(ge=0)
    total_matches: int = Field(ge=0)
    average_score: float
    top_matches: List[MatchSummary]
    skill_distribution: List[SkillCountSummary]


class UserStatsResponse(BaseModel):
    success: bool
    stats: UserStats
