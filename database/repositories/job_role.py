from typing import List, Optional
from sqlalchemy import select

from database.models import JobRole
from database.repositories.base import BaseRepository


class JobRoleRepository(BaseRepository):
    def get_active(self) -> List[JobRole]:
        """Active roles ordered by name, then id.

        This order is the tie-break order of ranked match results.
        """
        stmt = (
            select(JobRole)
            .where(JobRole.is_active.is_(True))
            .order_by(JobRole.role_name, JobRole.id)
        )
        return self.db.execute(stmt).scalars().all()

    def get_by_id(self, role_id: int) -> Optional[JobRole]:
        stmt = select(JobRole).where(JobRole.id == role_id)
        return self.db.execute(stmt).scalar_one_or_none()
