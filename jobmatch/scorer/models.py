#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class ScoreBreakdown:
    """Score for one (resume, role) pair with its components.

    matched/missing hold normalized tokens in requirement order,
    de-duplicated. Display casing is applied by the engine.
    """
    score: Decimal
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    base_score: float = 0.0
    proficiency_bonus: float = 0.0
    experience_bonus: float = 0.0
