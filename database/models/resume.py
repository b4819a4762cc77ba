from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Boolean, Numeric, CheckConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class Resume(Base):
    """
    A user's resume aggregate.

    Only the parts the matching engine reads are modelled in detail
    (skills and experience). Deleting a resume cascades to its skills,
    experience, education and job matches.
    """
    __tablename__ = 'resume'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Text, nullable=False)

    title = Column(Text, nullable=False)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    summary = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    skills = relationship("Skill", back_populates="resume", cascade="all, delete-orphan", passive_deletes=True, order_by="Skill.id")
    experience_details = relationship("ExperienceDetail", back_populates="resume", cascade="all, delete-orphan", passive_deletes=True)
    education_details = relationship("EducationDetail", back_populates="resume", cascade="all, delete-orphan", passive_deletes=True)
    job_matches = relationship("ResumeJobMatch", back_populates="resume", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index('idx_resume_user', 'user_id'),
    )


class Skill(Base):
    __tablename__ = 'skill'

    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(Integer, ForeignKey('resume.id', ondelete='CASCADE'), nullable=False)

    skill_name = Column(Text, nullable=False)
    proficiency_level = Column(Integer, nullable=False, default=3)  # 1=Beginner .. 5=Expert
    category = Column(Text)  # Technical, Soft Skills, Languages, ...

    resume = relationship("Resume", back_populates="skills")

    __table_args__ = (
        CheckConstraint('proficiency_level BETWEEN 1 AND 5', name='ck_skill_proficiency_range'),
        Index('idx_skill_resume', 'resume_id'),
    )


class ExperienceDetail(Base):
    __tablename__ = 'experience_detail'

    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(Integer, ForeignKey('resume.id', ondelete='CASCADE'), nullable=False)

    company_name = Column(Text, nullable=False)
    job_title = Column(Text, nullable=False)
    location = Column(Text)
    description = Column(Text)

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime)
    is_current = Column(Boolean, nullable=False, default=False)

    resume = relationship("Resume", back_populates="experience_details")

    __table_args__ = (
        Index('idx_experience_resume', 'resume_id'),
    )


class EducationDetail(Base):
    __tablename__ = 'education_detail'

    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(Integer, ForeignKey('resume.id', ondelete='CASCADE'), nullable=False)

    institution = Column(Text, nullable=False)
    degree = Column(Text, nullable=False)
    field_of_study = Column(Text)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime)
    is_currently_studying = Column(Boolean, nullable=False, default=False)
    gpa = Column(Numeric(3, 2))

    resume = relationship("Resume", back_populates="education_details")
