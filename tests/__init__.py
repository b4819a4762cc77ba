#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Run only pure unit tests (no database engine)
    python -m pytest tests/ -v -m "not db"

    # Using unittest
    python -m unittest discover tests -v

Database tests run against an in-memory SQLite engine built with
database.database.build_engine, so foreign keys and cascades behave
the same way as in a file-backed deployment.
"""

from datetime import datetime, timezone
from functools import partial
from typing import Iterable, Optional, Sequence, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from database.database import build_engine
from database.init_db import init_db
from database.models import ExperienceDetail, JobRole, Resume, Skill
from database.uow import match_uow

FIXED_NOW = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)


def make_test_engine() -> Engine:
    """Fresh in-memory database with all tables created."""
    engine = build_engine("sqlite://")
    init_db(engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_uow_factory(session_factory: sessionmaker):
    return partial(match_uow, session_factory)


def add_resume(
    session: Session,
    skills: Iterable[Tuple[str, int]] = (),
    experience: Sequence[Tuple[datetime, Optional[datetime]]] = (),
    title: str = "Software Engineer"
) -> Resume:
    """Insert a resume with (name, level) skills and (start, end) experience."""
    resume = Resume(user_id="user_1", title=title, full_name="Test User", email="test@example.com")
    for name, level in skills:
        resume.skills.append(Skill(skill_name=name, proficiency_level=level))
    for start, end in experience:
        resume.experience_details.append(ExperienceDetail(
            company_name="Acme",
            job_title="Engineer",
            start_date=start,
            end_date=end,
            is_current=end is None,
        ))
    session.add(resume)
    session.flush()
    return resume


def add_role(
    session: Session,
    role_name: str,
    required_skills: str,
    experience_level: Optional[str] = None,
    is_active: bool = True,
    description: Optional[str] = None
) -> JobRole:
    role = JobRole(
        role_name=role_name,
        required_skills=required_skills,
        experience_level=experience_level,
        is_active=is_active,
        description=description,
    )
    session.add(role)
    session.flush()
    return role
