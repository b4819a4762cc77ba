#!/usr/bin/env python3
"""
Match service - business logic for job match operations.
"""

import logging
from typing import List, Optional

from jobmatch.dto import MatchResult
from jobmatch.engine import MatchingEngine
from ..models.responses import MatchSummary, ResumeStats, SkillCountSummary, UserStats
from ..utils import safe_float, safe_datetime_iso

logger = logging.getLogger(__name__)


class MatchService:
    """Service for reading and refreshing the job matches of a resume."""

    def __init__(self, matching_engine: MatchingEngine):
        self.matching_engine = matching_engine

    def get_matches(self, resume_id: int) -> List[MatchSummary]:
        """
        Get stored matches of a resume without recomputing.

        Args:
            resume_id: The resume ID.

        Returns:
            Match summaries, highest score first. Empty for an unknown resume.
        """
        matches = self.matching_engine.get_existing(resume_id)
        return [self._to_match_summary(m) for m in matches]

    def refresh_matches(self, resume_id: int) -> None:
        """
        Recompute and store every match of a resume.

        Raises:
            PersistenceFailure: If the batch could not be saved.
        """
        self.matching_engine.refresh(resume_id)

    def get_stats(self, resume_id: int, top_n: Optional[int] = None) -> ResumeStats:
        """
        Get count, average score and top matches of a resume.

        Args:
            resume_id: The resume ID.
            top_n: Number of top matches (defaults to matching.top_matches).

        Raises:
            ResumeNotFound: If the resume does not exist.
        """
        summary = self.matching_engine.summarize(resume_id, top_n=top_n)
        return ResumeStats(
            resume_id=summary.resume_id,
            total_matches=summary.total_matches,
            average_score=safe_float(summary.average_score),
            top_matches=[self._to_match_summary(m) for m in summary.top_matches]
        )

    def get_user_stats(self, user_id: str, top_n: Optional[int] = None) -> UserStats:
        """
        Get dashboard statistics across all resumes of a user.

        Args:
            user_id: Owner of the resumes.
            top_n: Number of top matches (defaults to matching.top_matches).
        """
        summary = self.matching_engine.summarize_user(user_id, top_n=top_n)
        return UserStats(
            user_id=summary.user_id,
            total_resumes=summary.total_resumes,
            total_matches=summary.total_matches,
            average_score=safe_float(summary.average_score),
            top_matches=[self._to_match_summary(m) for m in summary.top_matches],
            skill_distribution=[
                SkillCountSummary(skill_name=s.skill_name, count=s.count)
                for s in summary.skill_distribution
            ]
        )

    def _to_match_summary(self, match: MatchResult) -> MatchSummary:
        return MatchSummary(
            match_id=match.match_id,
            resume_id=match.resume_id,
            job_role_id=match.role_id,
            job_role_name=match.role_name,
            job_role_description=match.role_description,
            match_score=safe_float(match.score),
            matched_skills=list(match.matched_skills),
            missing_skills=list(match.missing_skills),
            matched_at=safe_datetime_iso(match.computed_at),
            resume_title=match.resume_title
        )
