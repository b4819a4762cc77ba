"""
Skill token normalization.

Skills are compared as tokens: trimmed, lower-cased strings compared by
exact equality. "JS" and "JavaScript" are different tokens.
"""

from typing import Iterable, List, Optional

SKILL_DELIMITER = ","


def normalize_skill(raw: str) -> str:
    return raw.strip().lower()


def split_required_skills(raw: Optional[str]) -> List[str]:
    """Parse a comma-delimited requirement string into tokens.

    Empty segments are dropped. Order and duplicates are kept; set semantics
    are applied by the scorer.
    """
    if not raw:
        return []
    return [
        normalize_skill(part)
        for part in raw.split(SKILL_DELIMITER)
        if part.strip()
    ]


def display_skill(token: str) -> str:
    """Upper-case the first character only ("javascript" -> "Javascript").

    A first character whose upper case is longer than one character
    ("ß" -> "SS") is kept as is.
    """
    if not token:
        return token
    first = token[0].upper()
    if len(first) != 1:
        first = token[0]
    return first + token[1:]


def unique_tokens(tokens: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order."""
    seen = set()
    result = []
    for token in tokens:
        if token not in seen:
            seen.add(token)
            result.append(token)
    return result


# --- Storage codec ---
# matched/missing skills are persisted as a single comma-joined column.

def join_skill_tokens(skills: Iterable[str]) -> str:
    return SKILL_DELIMITER.join(s.strip() for s in skills if s and s.strip())


def parse_skill_tokens(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(SKILL_DELIMITER) if part.strip()]
