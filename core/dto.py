"""Data Transfer Objects for the matching engine.

DTOs are used to transfer data outside of the Unit of Work context,
allowing ORM objects to be converted to plain Python objects that
can be safely used after the database session is closed (model calls
are never made while a session is open).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Any, Dict, Optional


@dataclass
class WorkExperienceDTO:
    title: str
    company: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = None
    skills: List[str] = field(default_factory=list)


@dataclass
class EducationDTO:
    degree: str
    field_of_study: Optional[str] = None
    institution: Optional[str] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None


@dataclass
class CandidateDTO:
    """Jobseeker profile as read by the scorer and the search evaluator.

    Work experience and education are ordered most recent first.
    """
    id: Any
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    user_type: str = "jobseeker"
    is_active: bool = True
    account_status: str = "active"
    headline: Optional[str] = None
    summary: Optional[str] = None
    designation: Optional[str] = None
    current_role: Optional[str] = None
    current_company: Optional[str] = None
    current_location: Optional[str] = None
    preferred_locations: List[str] = field(default_factory=list)
    willing_to_relocate: bool = False
    experience_years: Optional[float] = None
    current_salary: Optional[float] = None
    expected_salary: Optional[float] = None
    notice_period: Optional[int] = None
    skills: List[str] = field(default_factory=list)
    key_skills: List[str] = field(default_factory=list)
    gender: Optional[str] = None
    is_email_verified: bool = False
    is_phone_verified: bool = False
    profile_completion: int = 0
    last_login_at: Optional[datetime] = None
    work_experiences: List[WorkExperienceDTO] = field(default_factory=list)
    educations: List[EducationDTO] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    def as_record(self) -> Dict[str, Any]:
        """Flat field mapping used by the in-memory predicate evaluator."""
        return {
            "user_type": self.user_type,
            "is_active": self.is_active,
            "account_status": self.account_status,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "headline": self.headline,
            "summary": self.summary,
            "designation": self.designation,
            "current_role": self.current_role,
            "current_location": self.current_location,
            "preferred_locations": list(self.preferred_locations or []),
            "willing_to_relocate": self.willing_to_relocate,
            "experience_years": self.experience_years,
            "current_salary": self.current_salary,
            "expected_salary": self.expected_salary,
            "notice_period": self.notice_period,
            "skills": list(self.skills or []),
            "key_skills": list(self.key_skills or []),
            "gender": self.gender,
            "last_login_at": self.last_login_at,
        }


@dataclass
class RequirementDTO:
    """Hiring requirement; ``metadata`` is the raw free-form JSON column."""
    id: Any
    title: str
    description: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    key_skills: List[str] = field(default_factory=list)
    experience_min: Optional[float] = None
    experience_max: Optional[float] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    currency: str = "INR"
    candidate_locations: List[str] = field(default_factory=list)
    candidate_designations: List[str] = field(default_factory=list)
    education: List[str] = field(default_factory=list)
    notice_period: Optional[int] = None
    diversity_preference: List[str] = field(default_factory=list)
    status: str = "active"
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResumeDTO:
    id: Any
    candidate_id: Any
    title: Optional[str] = None
    summary: Optional[str] = None
    objective: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    languages: List[Any] = field(default_factory=list)
    certifications: List[Any] = field(default_factory=list)
    projects: List[Any] = field(default_factory=list)
    achievements: List[Any] = field(default_factory=list)
    file_url: Optional[str] = None
    mime_type: Optional[str] = None
    is_default: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None


def _as_float(value) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def candidate_from_orm(candidate) -> CandidateDTO:
    """Copy a Candidate row (with its histories) into a CandidateDTO."""
    return CandidateDTO(
        id=candidate.id,
        first_name=candidate.first_name,
        last_name=candidate.last_name,
        email=candidate.email,
        phone=candidate.phone,
        user_type=candidate.user_type,
        is_active=bool(candidate.is_active),
        account_status=candidate.account_status,
        headline=candidate.headline,
        summary=candidate.summary,
        designation=candidate.designation,
        current_role=candidate.current_role,
        current_company=candidate.current_company,
        current_location=candidate.current_location,
        preferred_locations=list(candidate.preferred_locations or []),
        willing_to_relocate=bool(candidate.willing_to_relocate),
        experience_years=_as_float(candidate.experience_years),
        current_salary=_as_float(candidate.current_salary),
        expected_salary=_as_float(candidate.expected_salary),
        notice_period=candidate.notice_period,
        skills=list(candidate.skills or []),
        key_skills=list(candidate.key_skills or []),
        gender=candidate.gender,
        is_email_verified=bool(candidate.is_email_verified),
        is_phone_verified=bool(candidate.is_phone_verified),
        profile_completion=candidate.profile_completion or 0,
        last_login_at=candidate.last_login_at,
        work_experiences=[
            WorkExperienceDTO(
                title=exp.title,
                company=exp.company,
                start_date=exp.start_date,
                end_date=exp.end_date,
                is_current=bool(exp.is_current),
                description=exp.description,
                skills=list(exp.skills or []),
            )
            for exp in candidate.work_experiences
        ],
        educations=[
            EducationDTO(
                degree=edu.degree,
                field_of_study=edu.field_of_study,
                institution=edu.institution,
                start_year=edu.start_year,
                end_year=edu.end_year,
            )
            for edu in candidate.educations
        ],
    )


def requirement_from_orm(requirement) -> RequirementDTO:
    return RequirementDTO(
        id=requirement.id,
        title=requirement.title,
        description=requirement.description,
        skills=list(requirement.skills or []),
        key_skills=list(requirement.key_skills or []),
        experience_min=_as_float(requirement.experience_min),
        experience_max=_as_float(requirement.experience_max),
        salary_min=_as_float(requirement.salary_min),
        salary_max=_as_float(requirement.salary_max),
        currency=requirement.currency or "INR",
        candidate_locations=list(requirement.candidate_locations or []),
        candidate_designations=list(requirement.candidate_designations or []),
        education=list(requirement.education or []),
        notice_period=requirement.notice_period,
        diversity_preference=list(requirement.diversity_preference or []),
        status=requirement.status,
        metadata=dict(requirement.requirement_metadata or {}),
    )


def resume_from_orm(resume) -> ResumeDTO:
    return ResumeDTO(
        id=resume.id,
        candidate_id=resume.candidate_id,
        title=resume.title,
        summary=resume.summary,
        objective=resume.objective,
        skills=list(resume.skills or []),
        languages=list(resume.languages or []),
        certifications=list(resume.certifications or []),
        projects=list(resume.projects or []),
        achievements=list(resume.achievements or []),
        file_url=resume.file_url,
        mime_type=resume.mime_type,
        is_default=bool(resume.is_default),
        metadata=dict(resume.resume_metadata or {}),
        created_at=resume.created_at,
    )
