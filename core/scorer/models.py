#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ExperienceMatchLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


class Recommendation(str, Enum):
    STRONGLY_RECOMMENDED = "strongly_recommended"
    RECOMMENDED = "recommended"
    CONSIDER = "consider"
    NOT_RECOMMENDED = "not_recommended"


class ScoringTier(str, Enum):
    AI = "ai"
    RULE_BASED = "rule_based"


# (minimum score, recommendation), checked top down
RECOMMENDATION_LADDER = (
    (80, Recommendation.STRONGLY_RECOMMENDED),
    (60, Recommendation.RECOMMENDED),
    (40, Recommendation.CONSIDER),
)


def clamp_score(value: float) -> int:
    """Round to the nearest integer inside [0, 100]."""
    return int(max(0, min(100, round(value))))


def recommendation_for(score: float) -> Recommendation:
    for threshold, recommendation in RECOMMENDATION_LADDER:
        if score >= threshold:
            return recommendation
    return Recommendation.NOT_RECOMMENDED


def experience_level_for(ratio: float) -> ExperienceMatchLevel:
    """Map the earned share of the experience weight to a level."""
    if ratio >= 1.0:
        return ExperienceMatchLevel.EXCELLENT
    if ratio >= 0.75:
        return ExperienceMatchLevel.GOOD
    if ratio >= 0.5:
        return ExperienceMatchLevel.AVERAGE
    return ExperienceMatchLevel.POOR


@dataclass
class MatchResult:
    """Scored outcome of one candidate against one requirement.

    Both tiers produce this exact shape; ``tier`` and ``model`` only say
    where it came from.
    """
    score: int
    recommendation: str
    experience_match_level: str
    matching_skills: List[str] = field(default_factory=list)
    matching_points: List[str] = field(default_factory=list)
    gaps: List[str] = field(default_factory=list)
    skills_match_percentage: Optional[float] = None
    analysis: Dict[str, Any] = field(default_factory=dict)
    tier: str = ScoringTier.RULE_BASED.value
    model: Optional[str] = None
    candidate_id: Any = None
    requirement_id: Any = None
    calculated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def for_pair(self, candidate_id: Any, requirement_id: Any) -> "MatchResult":
        return replace(self, candidate_id=candidate_id, requirement_id=requirement_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'candidate_id': self.candidate_id,
            'requirement_id': self.requirement_id,
            'score': self.score,
            'recommendation': self.recommendation,
            'experience_match_level': self.experience_match_level,
            'matching_skills': list(self.matching_skills),
            'matching_points': list(self.matching_points),
            'gaps': list(self.gaps),
            'skills_match_percentage': self.skills_match_percentage,
            'analysis': dict(self.analysis),
            'tier': self.tier,
            'model': self.model,
            'calculated_at': self.calculated_at.isoformat() if self.calculated_at else None,
        }
