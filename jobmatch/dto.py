"""Data Transfer Objects for the matching engine.

DTOs carry resume, job-role and match data outside of the Unit of Work
context, so ORM objects are converted to plain Python objects while the
session is still open and the scorer never touches the database.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from jobmatch.skills import normalize_skill

DateLike = Union[date, datetime]

UNKNOWN_ROLE_NAME = "Unknown"
DEFAULT_RESUME_TITLE = "Current Resume"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    OTHER = "other"  # any non-empty level we do not recognise
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ExperienceLevel":
        if raw is None or not raw.strip():
            return cls.UNSPECIFIED
        value = raw.strip().lower()
        for member in cls:
            if member.value == value:
                return member
        return cls.OTHER


@dataclass(frozen=True)
class SkillEntry:
    skill_name: str
    proficiency: int = 3

    @property
    def token(self) -> str:
        return normalize_skill(self.skill_name)


@dataclass(frozen=True)
class ExperiencePeriod:
    start_date: DateLike
    end_date: Optional[DateLike] = None
    is_current: bool = False


@dataclass(frozen=True)
class ResumeProfile:
    """Skills and experience of one resume, frozen for a scoring pass."""
    resume_id: int
    skills: Tuple[SkillEntry, ...] = ()
    experience: Tuple[ExperiencePeriod, ...] = ()
    title: Optional[str] = None

    @property
    def skill_tokens(self) -> FrozenSet[str]:
        return frozenset(s.token for s in self.skills)

    def proficiency_by_token(self) -> Dict[str, int]:
        """Map each token to its proficiency; duplicates keep the highest level."""
        levels: Dict[str, int] = {}
        for skill in self.skills:
            token = skill.token
            if token not in levels or skill.proficiency > levels[token]:
                levels[token] = skill.proficiency
        return levels


@dataclass(frozen=True)
class JobRoleRequirement:
    role_id: int
    role_name: str
    required_skills: Tuple[str, ...] = ()
    experience_level: ExperienceLevel = ExperienceLevel.UNSPECIFIED
    is_active: bool = True
    description: Optional[str] = None


@dataclass
class MatchResult:
    """Scored (resume, role) pair as returned to callers."""
    resume_id: int
    role_id: int
    score: Decimal
    role_name: str = UNKNOWN_ROLE_NAME
    role_description: Optional[str] = None
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    computed_at: Optional[datetime] = None
    match_id: Optional[int] = None
    resume_title: Optional[str] = None


@dataclass
class MatchSummaryStats:
    """Simple counting summary of the persisted matches of one resume."""
    resume_id: int
    total_matches: int = 0
    average_score: Decimal = Decimal("0")
    top_matches: List[MatchResult] = field(default_factory=list)


@dataclass
class SkillCount:
    skill_name: str
    count: int


@dataclass
class UserDashboardStats:
    """Counting summary across every resume of one user."""
    user_id: str
    total_resumes: int = 0
    total_matches: int = 0
    average_score: Decimal = Decimal("0")
    top_matches: List[MatchResult] = field(default_factory=list)
    skill_distribution: List[SkillCount] = field(default_factory=list)
