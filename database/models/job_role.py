from sqlalchemy import Column, Integer, Text, DateTime, Boolean, Numeric, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class JobRole(Base):
    __tablename__ = 'job_role'

    id = Column(Integer, primary_key=True, autoincrement=True)

    role_name = Column(Text, nullable=False)
    description = Column(Text)
    required_skills = Column(Text, nullable=False, default='')  # comma-separated skills
    category = Column(Text)  # IT, Marketing, Finance, ...
    experience_level = Column(Text)  # entry|mid|senior|lead

    min_salary = Column(Numeric)
    max_salary = Column(Numeric)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    resume_matches = relationship("ResumeJobMatch", back_populates="job_role", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index('idx_job_role_active', 'is_active'),
    )
