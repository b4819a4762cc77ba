import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from database.models import ResumeJobMatch
from database.repositories.base import BaseRepository
from jobmatch.skills import join_skill_tokens

logger = logging.getLogger(__name__)

# Dialects with native INSERT .. ON CONFLICT DO UPDATE
_CONFLICT_INSERTS = {
    'postgresql': pg_insert,
    'sqlite': sqlite_insert,
}

_PAIR_COLUMNS = ['resume_id', 'job_role_id']
_SCORE_COLUMNS = ['match_score', 'matched_skills', 'missing_skills', 'matched_at']


class MatchRepository(BaseRepository):
    def find_by_pair(
        self,
        resume_id: int,
        role_id: int,
        refresh: bool = False
    ) -> Optional[ResumeJobMatch]:
        stmt = select(ResumeJobMatch).where(
            ResumeJobMatch.resume_id == resume_id,
            ResumeJobMatch.job_role_id == role_id
        )
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_resume(self, resume_id: int) -> List[ResumeJobMatch]:
        stmt = (
            select(ResumeJobMatch)
            .where(ResumeJobMatch.resume_id == resume_id)
            .order_by(ResumeJobMatch.id)
        )
        return self.db.execute(stmt).scalars().all()

    def find_by_resumes(self, resume_ids: Sequence[int]) -> List[ResumeJobMatch]:
        if not resume_ids:
            return []
        stmt = (
            select(ResumeJobMatch)
            .where(ResumeJobMatch.resume_id.in_(resume_ids))
            .order_by(ResumeJobMatch.id)
        )
        return self.db.execute(stmt).scalars().all()

    def upsert(
        self,
        resume_id: int,
        role_id: int,
        score: Decimal,
        matched_skills: Iterable[str],
        missing_skills: Iterable[str],
        now: datetime
    ) -> ResumeJobMatch:
        """
        Create or overwrite the single match row of a (resume, role) pair.

        The pair's unique constraint is the serialization point: concurrent
        writers for the same pair end up updating one row, never inserting two.
        Nothing is committed here.
        """
        values = {
            'resume_id': resume_id,
            'job_role_id': role_id,
            'match_score': score,
            'matched_skills': join_skill_tokens(matched_skills),
            'missing_skills': join_skill_tokens(missing_skills),
            'matched_at': now,
        }

        insert_fn = _CONFLICT_INSERTS.get(self.dialect_name)
        if insert_fn is not None:
            stmt = insert_fn(ResumeJobMatch).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=_PAIR_COLUMNS,
                set_={col: stmt.excluded[col] for col in _SCORE_COLUMNS}
            )
            self.db.execute(stmt)
        else:
            self._insert_or_update(values)

        return self.find_by_pair(resume_id, role_id, refresh=True)

    def _insert_or_update(self, values: dict) -> None:
        """Portable upsert: insert inside a SAVEPOINT, and if another writer
        won the race for the pair, update its row instead."""
        existing = self.find_by_pair(values['resume_id'], values['job_role_id'])

        if existing is None:
            try:
                with self.db.begin_nested():
                    self.db.add(ResumeJobMatch(**values))
                return
            except IntegrityError:
                logger.info(
                    f"Match for resume {values['resume_id']} / role {values['job_role_id']} "
                    f"was inserted concurrently, updating instead"
                )
                existing = self.find_by_pair(values['resume_id'], values['job_role_id'], refresh=True)

        for col in _SCORE_COLUMNS:
            setattr(existing, col, values[col])
        self.flush()
