#!/usr/bin/env python3
"""
Scoring Module - Rule-based skill and experience scoring.

Public API:
- ScoreCalculator: Computes one bounded score per (resume, role)
- ScoreBreakdown: Dataclass for a score and its components

Split into focused, single-responsibility modules:

- models.py: Data structures (ScoreBreakdown)
- coverage.py: Matched/missing partition and base coverage score
- bonuses.py: Proficiency and experience bonuses
- calculator.py: ScoreCalculator combining them
"""

from jobmatch.scorer.models import ScoreBreakdown
from jobmatch.scorer.calculator import ScoreCalculator, round_score

__all__ = ['ScoreCalculator', 'ScoreBreakdown', 'round_score']
