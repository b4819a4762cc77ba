import contextlib
import logging
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from database import database
from database.repositories import ResumeRepository, JobRoleRepository, MatchRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Repositories bound to one Session, committed together."""

    def __init__(self, session: Session):
        self.session = session
        self.resumes = ResumeRepository(session)
        self.job_roles = JobRoleRepository(session)
        self.matches = MatchRepository(session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


@contextlib.contextmanager
def match_uow(session_factory: Optional[Callable[[], Session]] = None) -> Iterator[UnitOfWork]:
    """Per-unit-of-work transaction scope.

    Yields a UnitOfWork bound to a fresh Session. Commits once on success,
    rolls back on exception, always closes.

    Usage:
        with match_uow() as uow:
            resume = uow.resumes.get_with_skills_and_experience(resume_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or database.SessionLocal)()
    uow = UnitOfWork(session)
    try:
        yield uow
        uow.commit()
    except Exception:
        uow.rollback()
        raise
    finally:
        session.close()
