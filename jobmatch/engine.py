#!/usr/bin/env python3
"""
Matching Engine - scores a resume against every active job role.

A recompute pass runs through four stages:
- Loading: resume aggregate and active roles, converted to DTOs
- Scoring: one ScoreCalculator call per role (pure, optionally threaded)
- Persisting: one upsert per (resume, role) pair, single commit
- Ranked: results sorted by score, highest first, stable on ties
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, ContextManager, Dict, List, Optional, Sequence
import logging

from sqlalchemy.exc import SQLAlchemyError

from database.models import JobRole, Resume, ResumeJobMatch
from database.uow import UnitOfWork, match_uow
from jobmatch.config_loader import MatchingConfig
from jobmatch.dto import (
    ExperienceLevel,
    ExperiencePeriod,
    JobRoleRequirement,
    MatchResult,
    MatchSummaryStats,
    ResumeProfile,
    SkillCount,
    SkillEntry,
    UserDashboardStats,
    DEFAULT_RESUME_TITLE,
    UNKNOWN_ROLE_NAME,
)
from jobmatch.exceptions import PersistenceFailure, ResumeNotFound
from jobmatch.scorer import ScoreBreakdown, ScoreCalculator, round_score
from jobmatch.skills import display_skill, normalize_skill, parse_skill_tokens, split_required_skills

logger = logging.getLogger(__name__)

UowFactory = Callable[[], ContextManager[UnitOfWork]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def profile_from_resume(resume: Resume) -> ResumeProfile:
    skills = tuple(
        SkillEntry(skill_name=s.skill_name, proficiency=s.proficiency_level)
        for s in (resume.skills or [])
    )
    experience = tuple(
        ExperiencePeriod(start_date=e.start_date, end_date=e.end_date, is_current=bool(e.is_current))
        for e in (resume.experience_details or [])
    )
    return ResumeProfile(resume_id=resume.id, skills=skills, experience=experience, title=resume.title)


def requirement_from_role(role: JobRole) -> JobRoleRequirement:
    return JobRoleRequirement(
        role_id=role.id,
        role_name=role.role_name,
        description=role.description,
        required_skills=tuple(split_required_skills(role.required_skills)),
        experience_level=ExperienceLevel.parse(role.experience_level),
        is_active=bool(role.is_active),
    )


def rank_matches(results: Sequence[MatchResult]) -> List[MatchResult]:
    """Highest score first; equal scores keep their input order."""
    return sorted(results, key=lambda m: m.score, reverse=True)


class MatchingEngine:
    """
    Keeps one persisted score per (resume, role) pair up to date.

    DB access goes through the unit-of-work factory, so one recompute is one
    transaction: either every role's match is written or none is.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        uow_factory: UowFactory = match_uow,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.config = config or MatchingConfig()
        self.calculator = ScoreCalculator(self.config.scorer)
        self.uow_factory = uow_factory
        self.clock = clock

    def recompute(self, resume_id: int, now: Optional[datetime] = None) -> List[MatchResult]:
        """Score the resume against all active roles and persist the results.

        Args:
            resume_id: Resume to score
            now: Reference time for experience durations (defaults to clock())

        Returns:
            Match results ranked by score descending; empty if the resume does not exist

        Raises:
            PersistenceFailure: the batch could not be written; nothing was committed
        """
        now = now or self.clock()

        try:
            with self.uow_factory() as uow:
                logger.debug(f"Loading resume {resume_id}")
                resume = uow.resumes.get_with_skills_and_experience(resume_id)
                if resume is None:
                    logger.warning(f"Resume {resume_id} not found, no matches computed")
                    return []

                profile = profile_from_resume(resume)
                roles = [requirement_from_role(r) for r in uow.job_roles.get_active()]

                logger.debug(f"Scoring resume {resume_id} against {len(roles)} active roles")
                breakdowns = self._score_roles(profile, roles, now)

                results = []
                for role, breakdown in zip(roles, breakdowns):
                    matched = [display_skill(t) for t in breakdown.matched]
                    missing = [display_skill(t) for t in breakdown.missing]
                    record = uow.matches.upsert(
                        resume_id, role.role_id, breakdown.score, matched, missing, now
                    )
                    results.append(MatchResult(
                        match_id=record.id,
                        resume_id=resume_id,
                        role_id=role.role_id,
                        role_name=role.role_name,
                        role_description=role.description,
                        score=breakdown.score,
                        matched_skills=matched,
                        missing_skills=missing,
                        computed_at=now,
                        resume_title=profile.title,
                    ))
        except SQLAlchemyError as e:
            logger.error(f"Failed to persist matches for resume {resume_id}: {e}")
            raise PersistenceFailure(f"Could not save matches for resume {resume_id}") from e

        logger.info(f"Recomputed {len(results)} matches for resume {resume_id}")
        return rank_matches(results)

    def refresh(self, resume_id: int) -> None:
        self.recompute(resume_id)

    def get_existing(self, resume_id: int) -> List[MatchResult]:
        """Read persisted matches without recomputing, ranked by score."""
        with self.uow_factory() as uow:
            return rank_matches(self._load_existing(uow, uow.matches.find_by_resume(resume_id)))

    def summarize(self, resume_id: int, top_n: Optional[int] = None) -> MatchSummaryStats:
        """Count, average score and best matches of one resume.

        Raises:
            ResumeNotFound: the resume does not exist
            ValueError: top_n is below 1
        """
        top_n = self._resolve_top_n(top_n)

        with self.uow_factory() as uow:
            if not uow.resumes.exists(resume_id):
                raise ResumeNotFound(f"Resume {resume_id} not found")
            matches = rank_matches(self._load_existing(uow, uow.matches.find_by_resume(resume_id)))

        return MatchSummaryStats(
            resume_id=resume_id,
            total_matches=len(matches),
            average_score=self._average_score(matches),
            top_matches=matches[:top_n],
        )

    def summarize_user(self, user_id: str, top_n: Optional[int] = None) -> UserDashboardStats:
        """Dashboard summary across every resume of a user.

        Counts resumes and matches, averages all match scores, and lists the
        best matches (each tagged with its resume title) and the most common
        skills. A user without resumes gets an all-zero summary.

        Raises:
            ValueError: top_n is below 1
        """
        top_n = self._resolve_top_n(top_n)

        with self.uow_factory() as uow:
            resumes = uow.resumes.get_by_user_id(user_id)
            titles = {r.id: r.title or DEFAULT_RESUME_TITLE for r in resumes}
            rows = uow.matches.find_by_resumes(list(titles))
            matches = rank_matches(self._load_existing(uow, rows, titles))
            skill_counts = Counter(
                normalize_skill(s.skill_name)
                for r in resumes
                for s in (r.skills or [])
                if s.skill_name and s.skill_name.strip()
            )

        logger.debug(f"User {user_id}: {len(resumes)} resumes, {len(matches)} matches")

        return UserDashboardStats(
            user_id=user_id,
            total_resumes=len(resumes),
            total_matches=len(matches),
            average_score=self._average_score(matches),
            top_matches=matches[:top_n],
            skill_distribution=[
                SkillCount(skill_name=display_skill(token), count=count)
                for token, count in skill_counts.most_common(self.config.top_skills)
            ],
        )

    def calculate_match_score(self, user_skills: Sequence[str], required_skills: Optional[str]) -> Decimal:
        return self.calculator.calculate_match_score(user_skills, required_skills)

    def _resolve_top_n(self, top_n: Optional[int]) -> int:
        if top_n is None:
            return self.config.top_matches
        if top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {top_n}")
        return top_n

    def _average_score(self, matches: Sequence[MatchResult]) -> Decimal:
        if not matches:
            return Decimal("0")
        total = sum((m.score for m in matches), Decimal("0"))
        return round_score(total / len(matches), self.config.scorer.score_precision)

    def _score_roles(
        self,
        profile: ResumeProfile,
        roles: Sequence[JobRoleRequirement],
        now: datetime
    ) -> List[ScoreBreakdown]:
        skills = profile.skill_tokens
        proficiency = profile.proficiency_by_token()

        def score_role(role: JobRoleRequirement) -> ScoreBreakdown:
            return self.calculator.score(
                skills, proficiency, profile.experience,
                role.required_skills, role.experience_level, now
            )

        if self.config.max_workers > 1 and len(roles) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                return list(pool.map(score_role, roles))
        return [score_role(role) for role in roles]

    def _load_existing(
        self,
        uow: UnitOfWork,
        rows: Sequence[ResumeJobMatch],
        titles: Optional[Dict[int, str]] = None
    ) -> List[MatchResult]:
        roles: Dict[int, Optional[JobRole]] = {}
        results = []
        for row in rows:
            if row.job_role_id not in roles:
                roles[row.job_role_id] = uow.job_roles.get_by_id(row.job_role_id)
            result = self._to_result(row, roles[row.job_role_id])
            if titles is not None:
                result.resume_title = titles.get(row.resume_id, DEFAULT_RESUME_TITLE)
            results.append(result)
        return results

    def _to_result(self, row: ResumeJobMatch, role: Optional[JobRole]) -> MatchResult:
        return MatchResult(
            match_id=row.id,
            resume_id=row.resume_id,
            role_id=row.job_role_id,
            role_name=role.role_name if role is not None else UNKNOWN_ROLE_NAME,
            role_description=role.description if role is not None else None,
            score=round_score(row.match_score, self.config.scorer.score_precision),
            matched_skills=[display_skill(s) for s in parse_skill_tokens(row.matched_skills)],
            missing_skills=[display_skill(s) for s in parse_skill_tokens(row.missing_skills)],
            computed_at=row.matched_at,
        )
