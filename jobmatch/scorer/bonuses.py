#!/usr/bin/env python3
"""
Bonus Calculations - Adjustments applied on top of the base coverage score.

Includes bonuses from:
- Proficiency of matched skills (self-rated 1-5)
- Total years of experience against the role's experience level
"""

from datetime import date, datetime, time, timezone
from typing import Iterable, Mapping, Sequence
import logging

from jobmatch.config_loader import ScorerConfig
from jobmatch.dto import DateLike, ExperienceLevel, ExperiencePeriod

logger = logging.getLogger(__name__)


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _as_utc(value: DateLike) -> datetime:
    """Naive values are treated as UTC; plain dates as midnight UTC."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calculate_proficiency_bonus(
    matched: Sequence[str],
    proficiency: Mapping[str, int],
    config: ScorerConfig
) -> float:
    """
    Calculate the proficiency bonus over matched skills only.

    Formula: (avg_level - neutral_level) * weight. With levels in 1-5 and the
    default config this stays within [-3, 3].

    Args:
        matched: Matched skill tokens
        proficiency: Proficiency level per resume token
        config: ScorerConfig with proficiency settings

    Returns:
        Bonus in points, 0.0 when nothing matched
    """
    levels = [proficiency[token] for token in matched if token in proficiency]
    if not levels:
        return 0.0

    avg_level = sum(levels) / len(levels)
    return (avg_level - config.neutral_proficiency) * config.proficiency_weight


def calculate_total_years(
    periods: Iterable[ExperiencePeriod],
    now: datetime,
    days_per_year: float = 365.0
) -> float:
    """Sum the length of every experience period in years.

    Open-ended and current periods run until `now`.
    """
    now_utc = _as_utc(now)
    total_days = 0.0
    for period in periods:
        if period.is_current or period.end_date is None:
            end = now_utc
        else:
            end = _as_utc(period.end_date)
        delta = end - _as_utc(period.start_date)
        total_days += delta.total_seconds() / 86400.0
    return total_days / days_per_year


def expected_years_for(level: ExperienceLevel, config: ScorerConfig) -> float:
    return config.expected_years.get(level.value, config.default_expected_years)


def calculate_experience_bonus(
    periods: Sequence[ExperiencePeriod],
    level: ExperienceLevel,
    now: datetime,
    config: ScorerConfig
) -> float:
    """
    Calculate the experience bonus or penalty.

    Formula: clamp((total_years - expected_years) * multiplier, min, max),
    [-10, 5] with the default config.

    Returns:
        Bonus in points, 0.0 for an unspecified level or no experience
    """
    if level == ExperienceLevel.UNSPECIFIED or not periods:
        return 0.0

    total_years = calculate_total_years(periods, now, config.days_per_year)
    expected = expected_years_for(level, config)
    diff = total_years - expected

    bonus = _clamp(
        diff * config.experience_multiplier,
        config.experience_bonus_min,
        config.experience_bonus_max,
    )
    logger.debug(
        f"Experience: {total_years:.2f}y vs expected {expected}y ({level.value}) -> bonus {bonus:.2f}"
    )
    return bonus
