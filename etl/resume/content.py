"""
Resume Content Builder - Assemble the resume text handed to the scorer.

Sources, in order of preference:
1. the stored resume sections plus the cached ``metadata.content`` text
2. text extracted from the uploaded file, appended to (1)
3. a resume synthesized from the candidate profile, when a file was
   expected but nothing could be read from it
"""
import logging
from typing import Any, Iterable, List, Optional

from core.dto import CandidateDTO, ResumeDTO
from etl.resume.extractor import DocumentExtractor

logger = logging.getLogger(__name__)


def _names(items: Iterable[Any], fmt) -> str:
    return ", ".join(fmt(item) for item in items)


def _language(item: Any) -> str:
    if isinstance(item, dict):
        return f"{item.get('name', '')} ({item.get('proficiency') or 'Not specified'})"
    return f"{item} (Not specified)"


def _certification(item: Any) -> str:
    if isinstance(item, dict):
        return f"{item.get('name', '')} - {item.get('issuer') or 'Unknown issuer'} ({item.get('year') or 'N/A'})"
    return str(item)


def _project(item: Any) -> str:
    if isinstance(item, dict):
        return f"{item.get('name', '')}: {item.get('description') or 'No description'}"
    return str(item)


def build_resume_content(resume: Optional[ResumeDTO]) -> str:
    """Flatten the stored resume sections into labelled text."""
    if resume is None:
        return ""

    parts: List[str] = []
    if resume.title:
        parts.append(f"Title: {resume.title}")
    if resume.summary:
        parts.append(f"Summary: {resume.summary}")
    if resume.objective:
        parts.append(f"Objective: {resume.objective}")

    content = (resume.metadata or {}).get("content")
    if content:
        parts.append(f"Detailed Content: {content}")

    if resume.skills:
        parts.append(f"Skills: {', '.join(str(s) for s in resume.skills)}")
    if resume.languages:
        parts.append(f"Languages: {_names(resume.languages, _language)}")
    if resume.certifications:
        parts.append(f"Certifications: {_names(resume.certifications, _certification)}")
    if resume.projects:
        parts.append(f"Projects: {_names(resume.projects, _project)}")
    if resume.achievements:
        parts.append(f"Achievements: {', '.join(str(a) for a in resume.achievements)}")

    return "\n\n".join(parts)


def _period(start, end, is_current: bool) -> str:
    return f"{start or 'N/A'} to {'Present' if is_current else (end or 'N/A')}"


def build_profile_resume_content(candidate: CandidateDTO, resume: Optional[ResumeDTO] = None) -> str:
    """Synthesize a resume from the candidate profile and histories."""
    parts: List[str] = []

    if candidate.full_name:
        parts.append(candidate.full_name)
    if candidate.headline:
        parts.append(candidate.headline)
    if candidate.summary:
        parts.append(f"\nSUMMARY:\n{candidate.summary}")
    if candidate.experience_years:
        parts.append(f"\nTOTAL EXPERIENCE: {candidate.experience_years:g} years")

    if candidate.work_experiences:
        parts.append("\nDETAILED WORK EXPERIENCE:")
        for exp in candidate.work_experiences:
            parts.append(f"- {exp.title} at {exp.company or 'Unknown company'}")
            parts.append(f"  Period: {_period(exp.start_date, exp.end_date, exp.is_current)}")
            if exp.description:
                parts.append(f"  Description: {exp.description}")
            if exp.skills:
                parts.append(f"  Skills used: {', '.join(exp.skills)}")

    if candidate.educations:
        parts.append("\nDETAILED EDUCATION:")
        for edu in candidate.educations:
            field = f" in {edu.field_of_study}" if edu.field_of_study else ""
            parts.append(f"- {edu.degree}{field}")
            if edu.institution:
                parts.append(f"  Institution: {edu.institution}")
            if edu.start_year or edu.end_year:
                parts.append(f"  Period: {edu.start_year or 'N/A'} to {edu.end_year or 'Present'}")

    all_skills: List[str] = []
    seen = set()
    for skill in list(candidate.skills or []) + list(resume.skills if resume else []):
        key = str(skill).strip().lower()
        if key and key not in seen:
            seen.add(key)
            all_skills.append(str(skill).strip())
    if all_skills:
        parts.append("\nTECHNICAL SKILLS:")
        parts.extend(f"- {skill}" for skill in all_skills)

    return "\n".join(parts)


def resume_file_hint(resume: ResumeDTO) -> Optional[str]:
    """Where the uploaded file should be: localPath, else filename, else the URL."""
    metadata = resume.metadata or {}
    return (
        metadata.get("localPath")
        or metadata.get("filename")
        or metadata.get("originalName")
        or resume.file_url
    )


def resolve_resume_text(
    candidate: CandidateDTO,
    resume: Optional[ResumeDTO],
    extractor: Optional[DocumentExtractor],
) -> Optional[str]:
    """Resume text for scoring.

    Args:
        candidate: Candidate profile
        resume: The candidate's primary resume, if any
        extractor: Document extractor used for uploaded files

    Returns:
        None when the candidate has no resume at all; otherwise the best text available
    """
    if resume is None:
        logger.info(f"No resume found for candidate {candidate.id}")
        return None

    content = build_resume_content(resume)
    if (resume.metadata or {}).get("content"):
        return content

    hint = resume_file_hint(resume)
    if not hint or extractor is None:
        return content

    try:
        extracted = extractor.extract(hint)
    except OSError as e:
        logger.warning(f"Could not read resume file {hint} for candidate {candidate.id}: {e}")
        extracted = None

    if extracted:
        extension = hint.rsplit(".", 1)[-1].upper() if "." in hint else "FILE"
        return f"{content}\n\nExtracted {extension} Content:\n{extracted}".strip()

    logger.info(f"Using profile-synthesized resume for candidate {candidate.id}")
    return build_profile_resume_content(candidate, resume)
