"""
Criteria Extractor - Requirement (+ overrides) -> MatchCriteria.

Per-field precedence:
    caller override -> structured column -> metadata -> parsed prose -> absent

List fields (skills, locations, designations) are unioned across all
sources instead, case-insensitively de-duplicated with the first spelling
kept. The function is pure.
"""
import logging
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from pydantic import ValidationError

from core.criteria.models import CriteriaOverrides, MatchCriteria, RequirementMetadata
from core.criteria.parsing import parse_range
from core.dto import RequirementDTO

logger = logging.getLogger(__name__)

EXPERIENCE_CEILING_YEARS = 50.0
SALARY_CEILING = 200.0


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _union(*sources: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    merged = []
    for source in sources:
        for item in source or ():
            if not isinstance(item, str):
                continue
            text = item.strip()
            key = text.lower()
            if not text or key in seen:
                continue
            seen.add(key)
            merged.append(text)
    return tuple(merged)


def _normalize_range(low: Optional[float], high: Optional[float], ceiling: float):
    """Close a half-open range; swap reversed bounds."""
    if low is None and high is None:
        return None, None
    if low is None:
        low = 0.0
    if high is None:
        high = max(ceiling, low)
    if low > high:
        low, high = high, low
    return float(low), float(high)


def _parse_metadata(raw: Optional[Dict[str, Any]], requirement_id: Any) -> RequirementMetadata:
    if not raw:
        return RequirementMetadata()
    try:
        return RequirementMetadata.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed metadata on requirement {requirement_id}: {e}")
        return RequirementMetadata()


def _coerce_overrides(overrides: Union[None, CriteriaOverrides, Dict[str, Any]]) -> CriteriaOverrides:
    if overrides is None:
        return CriteriaOverrides()
    if isinstance(overrides, CriteriaOverrides):
        return overrides
    return CriteriaOverrides.model_validate(overrides)


def build_criteria(
    requirement: RequirementDTO,
    overrides: Union[None, CriteriaOverrides, Dict[str, Any]] = None,
) -> MatchCriteria:
    """Resolve a requirement into MatchCriteria.

    Args:
        requirement: Requirement DTO (structured columns plus raw metadata)
        overrides: CriteriaOverrides or a dict of override / query parameters

    Returns:
        MatchCriteria; equal inputs always give equal results
    """
    meta = _parse_metadata(requirement.metadata, requirement.id)
    ovr = _coerce_overrides(overrides)

    exp_text_min, exp_text_max = parse_range(meta.experience_text)
    experience_min, experience_max = _normalize_range(
        _first(ovr.experience_min, requirement.experience_min, meta.experience_min, exp_text_min),
        _first(ovr.experience_max, requirement.experience_max, meta.experience_max, exp_text_max),
        EXPERIENCE_CEILING_YEARS,
    )

    sal_text_min, sal_text_max = parse_range(meta.salary_text)
    salary_min, salary_max = _normalize_range(
        _first(ovr.salary_min, requirement.salary_min, meta.salary_min, sal_text_min),
        _first(ovr.salary_max, requirement.salary_max, meta.salary_max, sal_text_max),
        SALARY_CEILING,
    )

    required_skills = _union(requirement.skills, meta.include_skills, ovr.include_skills)
    preferred_skills = _union(requirement.key_skills, meta.key_skills)

    diversity = _union(requirement.diversity_preference, meta.diversity_preference)
    if any(value.lower() == "all" for value in diversity):
        diversity = ()
    else:
        diversity = tuple(value.lower() for value in diversity)

    return MatchCriteria(
        experience_min=experience_min,
        experience_max=experience_max,
        salary_min=salary_min,
        salary_max=salary_max,
        currency=requirement.currency or "INR",
        required_skills=required_skills,
        preferred_skills=preferred_skills,
        include_skills=_union(required_skills, preferred_skills),
        exclude_skills=_union(meta.exclude_skills, ovr.exclude_skills),
        include_locations=_union(requirement.candidate_locations, meta.candidate_locations, ovr.include_locations),
        exclude_locations=_union(meta.exclude_locations, ovr.exclude_locations),
        designations=_union(requirement.candidate_designations, meta.candidate_designations, ovr.designations),
        education=_union(requirement.education, meta.education),
        institute=meta.institute,
        notice_period_max=_first(ovr.notice_period, requirement.notice_period, meta.notice_period),
        diversity=diversity,
        current_designation=meta.current_designation,
        current_company=meta.current_company,
        last_active_days=_first(ovr.last_active, meta.last_active),
        search=ovr.search,
        include_willing_to_relocate=_first(ovr.include_willing_to_relocate, meta.include_willing_to_relocate),
        include_not_mentioned=_first(ovr.include_not_mentioned, meta.include_not_mentioned),
    )
