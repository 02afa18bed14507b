"""
Prompt Builder - Render the single ATS evaluation prompt.

The prompt carries the requirement, the candidate profile, the resume text
and the scoring rubric. Every strategy receives the same prompt.
"""
from typing import List, Optional

from core.criteria import MatchCriteria
from core.dto import CandidateDTO, RequirementDTO
from core.llm.system_prompts import ATS_SCORING_INSTRUCTIONS

NO_RESUME_TEXT = "No resume available"


def _join(values, empty: str = "Not specified") -> str:
    items = [str(v) for v in (values or []) if v]
    return ", ".join(items) if items else empty


def _range(low: Optional[float], high: Optional[float], unit: str = "") -> str:
    if low is None and high is None:
        return "Not specified"
    if high is None:
        return f"{low:g}+{unit}"
    if low is None:
        return f"up to {high:g}{unit}"
    return f"{low:g}-{high:g}{unit}"


def build_requirement_details(requirement: RequirementDTO, criteria: MatchCriteria) -> str:
    metadata = requirement.metadata or {}
    lines = [
        f"Position: {requirement.title}",
        f"Description: {requirement.description or 'Not provided'}",
        f"Required Skills: {_join(criteria.required_skills)}",
        f"Preferred Skills: {_join(criteria.preferred_skills)}",
        f"Experience Required: {_range(criteria.experience_min, criteria.experience_max, ' years')}",
        f"Salary Range: {_range(criteria.salary_min, criteria.salary_max)} {criteria.currency}",
        f"Locations: {_join(criteria.include_locations)}",
        f"Education: {_join(criteria.education)}",
    ]
    if criteria.designations:
        lines.append(f"Designations: {_join(criteria.designations)}")
    for label, key in (("Job Type", "jobType"), ("Department", "department"), ("Industry", "industry")):
        if metadata.get(key):
            lines.append(f"{label}: {metadata[key]}")
    return "\n".join(lines)


def build_candidate_profile(candidate: CandidateDTO) -> str:
    lines = [
        f"Name: {candidate.full_name or 'Not provided'}",
        f"Headline: {candidate.headline or 'Not provided'}",
        f"Current Role: {candidate.current_role or candidate.designation or 'Not provided'}",
        f"Experience: {candidate.experience_years:g} years" if candidate.experience_years is not None
        else "Experience: Not specified",
        f"Location: {candidate.current_location or 'Not specified'}",
        f"Preferred Locations: {_join(candidate.preferred_locations)}",
        f"Skills: {_join(list(candidate.skills) + list(candidate.key_skills))}",
    ]
    if candidate.summary:
        lines.append(f"Summary: {candidate.summary}")

    history: List[str] = []
    for exp in candidate.work_experiences[:5]:
        end = "Present" if exp.is_current else (exp.end_date or "N/A")
        history.append(f"- {exp.title} at {exp.company or 'Unknown'} ({exp.start_date or 'N/A'} to {end})")
    if history:
        lines.append("Work History:")
        lines.extend(history)

    for edu in candidate.educations[:3]:
        field = f" in {edu.field_of_study}" if edu.field_of_study else ""
        lines.append(f"Education: {edu.degree}{field}, {edu.institution or 'Unknown institution'}")
    return "\n".join(lines)


def build_scoring_prompt(
    candidate: CandidateDTO,
    resume_text: Optional[str],
    criteria: MatchCriteria,
    requirement: RequirementDTO,
    max_resume_chars: int = 15_000,
) -> str:
    """Assemble the evaluation prompt sent to every scoring model.

    Args:
        candidate: Candidate profile
        resume_text: Resume text, truncated to ``max_resume_chars``
        criteria: Resolved requirement criteria
        requirement: Requirement (title, description, metadata)
        max_resume_chars: Resume character cap

    Returns:
        Prompt text
    """
    resume = (resume_text or NO_RESUME_TEXT)[:max_resume_chars]
    return (
        "Analyze this candidate's resume against the job requirements and provide a detailed ATS evaluation.\n\n"
        f"**JOB REQUIREMENT:**\n{build_requirement_details(requirement, criteria)}\n\n"
        f"**CANDIDATE PROFILE:**\n{build_candidate_profile(candidate)}\n\n"
        f"**RESUME CONTENT:**\n{resume}\n\n"
        f"{ATS_SCORING_INSTRUCTIONS}"
    )
