from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from database.models import Resume
from database.repositories.base import BaseRepository


class ResumeRepository(BaseRepository):
    def get_with_skills_and_experience(self, resume_id: int) -> Optional[Resume]:
        """Get a resume with its skills and experience eagerly loaded.

        Args:
            resume_id: Resume primary key

        Returns:
            Resume if found, None otherwise
        """
        stmt = (
            select(Resume)
            .options(
                selectinload(Resume.skills),
                selectinload(Resume.experience_details),
            )
            .where(Resume.id == resume_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_user_id(self, user_id: str) -> List[Resume]:
        """All resumes of a user, oldest first, with skills eagerly loaded."""
        stmt = (
            select(Resume)
            .options(selectinload(Resume.skills))
            .where(Resume.user_id == user_id)
            .order_by(Resume.id)
        )
        return self.db.execute(stmt).scalars().all()

    def exists(self, resume_id: int) -> bool:
        stmt = select(func.count()).select_from(Resume).where(Resume.id == resume_id)
        return self.db.execute(stmt).scalar_one() > 0
