from database.repositories.base import BaseRepository
from database.repositories.resume import ResumeRepository
from database.repositories.job_role import JobRoleRepository
from database.repositories.match import MatchRepository

__all__ = [
    'BaseRepository',
    'ResumeRepository',
    'JobRoleRepository',
    'MatchRepository',
]
