"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
Row builders for database tests live in tests/fixtures/talent_fixtures.py
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.dto import CandidateDTO, EducationDTO, RequirementDTO, WorkExperienceDTO
from database.models import Base


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as using the in-memory database"
    )


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


# ---------------------------------------------------------------------------
# DTOs
# ---------------------------------------------------------------------------

@pytest.fixture
def ml_requirement():
    """Python + Machine Learning, 2-5 years, 10-20 LPA."""
    return RequirementDTO(
        id=7,
        title="Machine Learning Engineer",
        description="Build and ship ML models",
        skills=["Python", "Machine Learning"],
        experience_min=2,
        experience_max=5,
        salary_min=10,
        salary_max=20,
    )


@pytest.fixture
def ml_candidate():
    """python/tensorflow, 3 years, 15 LPA, 90% complete, verified."""
    return CandidateDTO(
        id=42,
        first_name="Asha",
        last_name="Rao",
        email="asha@example.com",
        headline="Data Engineer",
        current_location="Bengaluru",
        experience_years=3,
        current_salary=15,
        skills=["python", "tensorflow"],
        is_email_verified=True,
        is_phone_verified=True,
        profile_completion=90,
        last_login_at=datetime.now(timezone.utc) - timedelta(days=2),
        work_experiences=[
            WorkExperienceDTO(
                title="Data Engineer",
                company="Acme",
                start_date=date(2022, 1, 1),
                is_current=True,
                skills=["python"],
            ),
        ],
        educations=[EducationDTO(degree="B.Tech", field_of_study="Computer Science", institution="NIT")],
    )
