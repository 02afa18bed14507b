from sqlalchemy import (
    Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, Float, Date, Index, func,
)
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class Candidate(Base):
    """
    A jobseeker account with its professional profile.

    Holds everything the scorer and the candidate search read:
    - account state (user_type, is_active, account_status)
    - professional attributes (experience, salary, location, skills)
    - trust signals (verification flags, profile completion)
    """
    __tablename__ = 'candidate'

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)

    user_type = Column(Text, nullable=False, default='jobseeker')
    is_active = Column(Boolean, nullable=False, default=True)
    account_status = Column(Text, nullable=False, default='active')

    headline = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)
    designation = Column(Text, nullable=True)
    current_role = Column(Text, nullable=True)
    current_company = Column(Text, nullable=True)
    current_location = Column(Text, nullable=True)
    preferred_locations = Column(JSONType, default=list)
    willing_to_relocate = Column(Boolean, default=False)

    experience_years = Column(Float, nullable=True)
    current_salary = Column(Float, nullable=True)  # LPA
    expected_salary = Column(Float, nullable=True)
    notice_period = Column(Integer, nullable=True)  # days

    skills = Column(JSONType, default=list)
    key_skills = Column(JSONType, default=list)

    gender = Column(Text, nullable=True)
    is_email_verified = Column(Boolean, default=False)
    is_phone_verified = Column(Boolean, default=False)
    profile_completion = Column(Integer, default=0)
    last_login_at = Column(TIMESTAMP(timezone=True), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    work_experiences = relationship(
        "WorkExperience",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="WorkExperience.start_date.desc()",
    )
    educations = relationship(
        "Education",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="Education.end_year.desc()",
    )
    resumes = relationship("Resume", back_populates="candidate", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_candidate_type_status', 'user_type', 'is_active', 'account_status'),
        Index('idx_candidate_experience', 'experience_years'),
        Index('idx_candidate_location', 'current_location'),
    )


class WorkExperience(Base):
    __tablename__ = 'work_experience'

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey('candidate.id', ondelete='CASCADE'), nullable=False)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False)
    description = Column(Text, nullable=True)
    skills = Column(JSONType, default=list)

    candidate = relationship("Candidate", back_populates="work_experiences")

    __table_args__ = (
        Index('idx_work_experience_candidate', 'candidate_id'),
    )


class Education(Base):
    __tablename__ = 'education'

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey('candidate.id', ondelete='CASCADE'), nullable=False)
    degree = Column(Text, nullable=False)
    field_of_study = Column(Text, nullable=True)
    institution = Column(Text, nullable=True)
    start_year = Column(Integer, nullable=True)
    end_year = Column(Integer, nullable=True)

    candidate = relationship("Candidate", back_populates="educations")

    __table_args__ = (
        Index('idx_education_candidate', 'candidate_id'),
    )
