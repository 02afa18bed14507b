#!/usr/bin/env python3
"""
Rule-Based Scorer - Deterministic scoring tier.

Used whenever no model strategy produced a usable answer. Each factor
earns a share of its configured weight:

    skills      fraction of required skills the candidate has
    experience  full inside [min, max], scaled below min, reduced above max
    salary      full inside [min, max] (current salary, else expected)
    education   any requirement value found in the candidate's degrees
    location    current or preferred location match, or relocation
    quality     profile completeness and verified contact details

Factors the requirement does not constrain earn the neutral share.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from core.config_loader import ScorerConfig
from core.criteria import MatchCriteria
from core.dto import CandidateDTO, RequirementDTO
from core.scorer.models import (
    MatchResult,
    ScoringTier,
    clamp_score,
    experience_level_for,
    recommendation_for,
)
from core.skills import SkillExtractor
from core.skills.aliases import any_skill_matches, mentions_skill, normalize_skill

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return f"{value:g}"


def _text_contains(haystack: Optional[str], needle: Optional[str]) -> bool:
    if not haystack or not needle:
        return False
    return needle.strip().lower() in haystack.strip().lower()


def _either_contains(a: Optional[str], b: Optional[str]) -> bool:
    return _text_contains(a, b) or _text_contains(b, a)


def experience_fit(
    years: Optional[float],
    criteria: MatchCriteria,
    neutral_ratio: float = 0.5,
    over_max_ratio: float = 0.8,
) -> Tuple[float, Optional[str], Optional[str]]:
    """Share of the experience weight a candidate earns.

    Args:
        years: Candidate's total years of experience (None when unknown)
        criteria: Resolved requirement criteria
        neutral_ratio: Share earned when the requirement sets no range
        over_max_ratio: Share earned above the maximum

    Returns:
        (ratio in [0, 1], matching point or None, gap or None)
    """
    if years is None:
        return 0.0, None, "No work experience information available"

    if not criteria.has_experience_range:
        return neutral_ratio, None, None

    low, high = criteria.experience_min, criteria.experience_max
    if low <= years <= high:
        return 1.0, f"{_fmt(years)} years of experience within required {_fmt(low)}-{_fmt(high)} years", None

    if years < low:
        ratio = years / low if low > 0 else 0.0
        return ratio, None, f"Has {_fmt(years)} years of experience, below the required minimum of {_fmt(low)}"

    return (
        over_max_ratio,
        f"{_fmt(years)} years of experience",
        f"May be overqualified: {_fmt(years)} years exceeds the maximum of {_fmt(high)}",
    )


class RuleBasedScorer:
    """Weighted factor scoring over the candidate profile and resume skills."""

    def __init__(self, config: Optional[ScorerConfig] = None, skill_extractor: Optional[SkillExtractor] = None):
        self.config = config or ScorerConfig()
        # Without a model the extractor scans the alias table
        self.skill_extractor = skill_extractor or SkillExtractor()

    def score(
        self,
        candidate: CandidateDTO,
        resume_text: Optional[str],
        criteria: MatchCriteria,
        requirement: Optional[RequirementDTO] = None,
    ) -> MatchResult:
        """Score one candidate against resolved criteria.

        Args:
            candidate: Candidate profile
            resume_text: Resume text (None when the candidate has no resume)
            criteria: Resolved requirement criteria
            requirement: The requirement, only used for its id

        Returns:
            MatchResult with tier ``rule_based``
        """
        weights = self.config.weights
        neutral = self.config.neutral_credit_ratio
        points: List[str] = []
        gaps: List[str] = []
        breakdown: Dict[str, float] = {}

        resume_skills = self.skill_extractor.extract_skills(resume_text) if resume_text else []
        candidate_skills = self._candidate_skills(candidate, resume_skills)

        # Skills
        required = list(criteria.scoring_skills)
        matched = [skill for skill in required if any_skill_matches(skill, candidate_skills)]
        skills_pct: Optional[float] = None
        if required:
            skills_pct = round(100.0 * len(matched) / len(required), 1)
            breakdown['skills'] = weights.skills * len(matched) / len(required)
            if matched:
                points.append(f"Matches {len(matched)}/{len(required)} required skills: {', '.join(matched)}")
            missing = [skill for skill in required if skill not in matched]
            if missing:
                gaps.append(f"Missing required skills: {', '.join(missing)}")
        else:
            breakdown['skills'] = weights.skills * neutral

        preferred_matched = [
            skill for skill in criteria.preferred_skills
            if skill not in matched and any_skill_matches(skill, candidate_skills)
        ]
        if preferred_matched:
            points.append(f"Has preferred skills: {', '.join(preferred_matched)}")

        # Experience
        exp_ratio, exp_point, exp_gap = experience_fit(
            candidate.experience_years, criteria, neutral, self.config.over_max_ratio
        )
        breakdown['experience'] = weights.experience * exp_ratio
        if exp_point:
            points.append(exp_point)
        if exp_gap:
            gaps.append(exp_gap)

        breakdown['salary'] = self._salary(candidate, criteria, points, gaps)
        breakdown['education'] = self._education(candidate, criteria, points, gaps)
        breakdown['location'] = self._location(candidate, criteria, points, gaps)
        breakdown['quality'] = self._quality(candidate, points)

        self._exclusions(candidate, candidate_skills, criteria, gaps)

        score = clamp_score(sum(breakdown.values()))
        logger.info(f"Rule-based score for candidate {candidate.id}: {score}")
        recommendation = recommendation_for(score)
        overall = f"Rule-based evaluation scored {score}/100"
        if required:
            overall += f", matching {len(matched)} of {len(required)} required skills"

        return MatchResult(
            score=score,
            recommendation=recommendation.value,
            experience_match_level=experience_level_for(exp_ratio).value,
            matching_skills=matched,
            matching_points=points,
            gaps=gaps,
            skills_match_percentage=skills_pct,
            analysis={
                'scoring_method': ScoringTier.RULE_BASED.value,
                'breakdown': {name: round(value, 2) for name, value in breakdown.items()},
                'weights': weights.model_dump(),
                'preferred_skills_matched': preferred_matched,
                'resume_skills': resume_skills,
                'overall_assessment': overall,
            },
            tier=ScoringTier.RULE_BASED.value,
            candidate_id=candidate.id,
            requirement_id=requirement.id if requirement else None,
        )

    @staticmethod
    def _candidate_skills(candidate: CandidateDTO, resume_skills: Iterable[str]) -> List[str]:
        merged: List[str] = []
        seen = set()
        for skill in list(candidate.skills or []) + list(candidate.key_skills or []) + list(resume_skills):
            key = normalize_skill(str(skill))
            if key and key not in seen:
                seen.add(key)
                merged.append(str(skill))
        return merged

    def _salary(self, candidate: CandidateDTO, criteria: MatchCriteria, points: List[str], gaps: List[str]) -> float:
        weight = self.config.weights.salary
        if not criteria.has_salary_range:
            return weight * self.config.neutral_credit_ratio

        salary = candidate.current_salary if candidate.current_salary is not None else candidate.expected_salary
        if salary is None:
            if criteria.include_not_mentioned:
                return weight
            gaps.append("Salary information not available")
            return 0.0

        low, high = criteria.salary_min, criteria.salary_max
        if low <= salary <= high:
            points.append(f"Salary {_fmt(salary)} {criteria.currency} within budget {_fmt(low)}-{_fmt(high)}")
            return weight
        gaps.append(f"Salary {_fmt(salary)} {criteria.currency} outside budget {_fmt(low)}-{_fmt(high)}")
        return 0.0

    def _education(self, candidate: CandidateDTO, criteria: MatchCriteria, points: List[str], gaps: List[str]) -> float:
        weight = self.config.weights.education
        if not criteria.education:
            return weight * self.config.neutral_credit_ratio

        degrees = [
            " ".join(p for p in (edu.degree, edu.field_of_study) if p)
            for edu in candidate.educations
        ]
        for wanted in criteria.education:
            for degree in degrees:
                if _either_contains(degree, wanted):
                    points.append(f"Education matches {wanted}")
                    return weight

        gaps.append(f"Education does not match: {', '.join(criteria.education)}")
        return 0.0

    def _location(self, candidate: CandidateDTO, criteria: MatchCriteria, points: List[str], gaps: List[str]) -> float:
        weight = self.config.weights.location
        if not criteria.include_locations:
            return weight * self.config.neutral_credit_ratio

        places = [candidate.current_location] + list(candidate.preferred_locations or [])
        for wanted in criteria.include_locations:
            if any(_either_contains(place, wanted) for place in places):
                points.append(f"Location matches {wanted}")
                return weight

        if criteria.include_willing_to_relocate and candidate.willing_to_relocate:
            points.append("Willing to relocate")
            return weight

        where = candidate.current_location or "unknown"
        gaps.append(f"Location {where} not in preferred locations: {', '.join(criteria.include_locations)}")
        return 0.0

    def _quality(self, candidate: CandidateDTO, points: List[str]) -> float:
        bonus = 0.0
        if (candidate.profile_completion or 0) >= self.config.completeness_threshold:
            bonus += self.config.completeness_bonus
            points.append(f"Profile {candidate.profile_completion}% complete")
        if candidate.is_email_verified:
            bonus += self.config.email_verified_bonus
        if candidate.is_phone_verified:
            bonus += self.config.phone_verified_bonus
        if candidate.is_email_verified and candidate.is_phone_verified:
            points.append("Verified email and phone")
        return bonus

    @staticmethod
    def _exclusions(candidate: CandidateDTO, candidate_skills: List[str], criteria: MatchCriteria, gaps: List[str]) -> None:
        texts = [t for t in (candidate.headline, candidate.summary) if t]
        for excluded in criteria.exclude_skills:
            if any_skill_matches(excluded, candidate_skills) or any(mentions_skill(t, excluded) for t in texts):
                gaps.append(f"Has excluded skill: {excluded}")

        places = [candidate.current_location] + list(candidate.preferred_locations or [])
        for excluded in criteria.exclude_locations:
            if any(_text_contains(place, excluded) for place in places):
                gaps.append(f"Located in excluded location: {excluded}")
