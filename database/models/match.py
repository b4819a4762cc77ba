from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Numeric, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class ResumeJobMatch(Base):
    """
    Stores the match score between a resume and a job role.

    Exactly one row per (resume, job role) pair; every recompute
    overwrites it in place. No history is kept.
    """
    __tablename__ = 'resume_job_match'

    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(Integer, ForeignKey('resume.id', ondelete='CASCADE'), nullable=False)
    job_role_id = Column(Integer, ForeignKey('job_role.id', ondelete='CASCADE'), nullable=False)

    match_score = Column(Numeric(5, 2), nullable=False)  # 0.00 to 100.00

    matched_skills = Column(Text)  # comma-separated, display-cased
    missing_skills = Column(Text)  # comma-separated, display-cased

    matched_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    resume = relationship("Resume", back_populates="job_matches")
    job_role = relationship("JobRole", back_populates="resume_matches")

    __table_args__ = (
        UniqueConstraint('resume_id', 'job_role_id', name='uq_resume_job_match_pair'),
        Index('idx_resume_job_match_resume', 'resume_id'),
        Index('idx_resume_job_match_score', 'match_score'),
    )
