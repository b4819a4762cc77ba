from .base import Base
from .resume import Resume, Skill, ExperienceDetail, EducationDetail
from .job_role import JobRole
from .match import ResumeJobMatch

__all__ = [
    'Base',
    'Resume',
    'Skill',
    'ExperienceDetail',
    'EducationDetail',
    'JobRole',
    'ResumeJobMatch',
]
