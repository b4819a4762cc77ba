#!/usr/bin/env python3
"""
Coverage Calculations - Skill coverage of a role's requirements.

Calculates what percentage of a role's distinct required skills
are present in the candidate's resume.
"""

from typing import AbstractSet, List, Sequence, Tuple

from jobmatch.skills import unique_tokens


def partition_skills(
    profile_skills: AbstractSet[str],
    required_tokens: Sequence[str]
) -> Tuple[List[str], List[str]]:
    """
    Split the distinct required tokens into matched and missing.

    Duplicates in required_tokens collapse; both lists keep requirement order.

    Returns: (matched, missing)
    """
    matched = []
    missing = []
    for token in unique_tokens(required_tokens):
        if token in profile_skills:
            matched.append(token)
        else:
            missing.append(token)
    return matched, missing


def calculate_base_score(matched_count: int, required_count: int) -> float:
    """
    Calculate base score before bonuses.

    Formula: 100 * matched / distinct_required

    Args:
        matched_count: Number of distinct required tokens found in the resume
        required_count: Number of distinct required tokens

    Returns:
        Base score (0.0-100.0), 0.0 when the role requires nothing
    """
    if required_count <= 0:
        return 0.0
    return matched_count / required_count * 100
