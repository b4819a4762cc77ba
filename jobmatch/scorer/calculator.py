#!/usr/bin/env python3
"""
Score Calculator - Deterministic skill/experience scoring for one role.

Pure: reads only its explicit inputs, including the current time,
so the same inputs always give the same score.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import AbstractSet, Iterable, Mapping, Optional, Sequence
import logging

from jobmatch.config_loader import ScorerConfig
from jobmatch.dto import ExperienceLevel, ExperiencePeriod
from jobmatch.skills import normalize_skill, split_required_skills
from jobmatch.scorer.models import ScoreBreakdown
from jobmatch.scorer import coverage
from jobmatch.scorer import bonuses

logger = logging.getLogger(__name__)


def round_score(value: float, precision: int = 2) -> Decimal:
    """Round half away from zero to `precision` decimal places."""
    quantum = Decimal(1).scaleb(-precision)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


class ScoreCalculator:
    """
    Computes the match score of a resume against one job role.

    score = base coverage + proficiency bonus + experience bonus,
    capped at max_score and never floored.
    """

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()

    def score(
        self,
        profile_skills: AbstractSet[str],
        profile_proficiency: Mapping[str, int],
        experience_periods: Sequence[ExperiencePeriod],
        required_tokens: Sequence[str],
        experience_level: ExperienceLevel,
        now: datetime
    ) -> ScoreBreakdown:
        matched, missing = coverage.partition_skills(profile_skills, required_tokens)
        base = coverage.calculate_base_score(len(matched), len(matched) + len(missing))

        proficiency_bonus = bonuses.calculate_proficiency_bonus(
            matched, profile_proficiency, self.config
        )
        experience_bonus = bonuses.calculate_experience_bonus(
            experience_periods, experience_level, now, self.config
        )

        total = base + proficiency_bonus + experience_bonus
        if total > self.config.max_score:
            total = self.config.max_score

        logger.debug(
            f"Matched {len(matched)}/{len(matched) + len(missing)}: base={base:.2f}, "
            f"proficiency={proficiency_bonus:+.2f}, experience={experience_bonus:+.2f}, total={total:.2f}"
        )

        return ScoreBreakdown(
            score=round_score(total, self.config.score_precision),
            matched=matched,
            missing=missing,
            base_score=base,
            proficiency_bonus=proficiency_bonus,
            experience_bonus=experience_bonus,
        )

    def calculate_match_score(
        self,
        user_skills: Iterable[str],
        required_skills: Optional[str]
    ) -> Decimal:
        """Plain coverage percentage of a comma-delimited requirement string.

        No bonuses, no persistence.
        """
        tokens = {normalize_skill(s) for s in user_skills}
        matched, missing = coverage.partition_skills(tokens, split_required_skills(required_skills))
        base = coverage.calculate_base_score(len(matched), len(matched) + len(missing))
        return round_score(base, self.config.score_precision)
