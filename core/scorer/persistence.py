#!/usr/bin/env python3
"""
Persistence Operations - Database operations for match scores.

A score row is keyed by (candidate_id, requirement_id). Saving is a single
upsert followed by a read-back in the same unit of work; a mismatch is
logged, never raised.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from database.models import CandidateMatchScore
from database.uow import talent_uow
from core.scorer.models import MatchResult

logger = logging.getLogger(__name__)


def _to_row_values(candidate_id: Any, requirement_id: Any, result: MatchResult) -> Dict[str, Any]:
    analysis = dict(result.analysis or {})
    if result.skills_match_percentage is not None:
        analysis['skills_match_percentage'] = result.skills_match_percentage
    return {
        'candidate_id': candidate_id,
        'requirement_id': requirement_id,
        'score': int(result.score),
        'matching_skills': list(result.matching_skills),
        'matching_points': list(result.matching_points),
        'gaps': list(result.gaps),
        'experience_match_level': result.experience_match_level,
        'recommendation': result.recommendation,
        'analysis': analysis,
        'tier': result.tier,
        'model_name': result.model,
        'calculated_at': result.calculated_at,
    }


def result_from_row(row: CandidateMatchScore) -> MatchResult:
    """Rebuild a MatchResult from a stored score row."""
    analysis = dict(row.analysis or {})
    return MatchResult(
        score=row.score,
        recommendation=row.recommendation,
        experience_match_level=row.experience_match_level,
        matching_skills=list(row.matching_skills or []),
        matching_points=list(row.matching_points or []),
        gaps=list(row.gaps or []),
        skills_match_percentage=analysis.get('skills_match_percentage'),
        analysis=analysis,
        tier=row.tier,
        model=row.model_name,
        candidate_id=row.candidate_id,
        requirement_id=row.requirement_id,
        calculated_at=row.calculated_at,
    )


class ScorePersistence:
    """Save and load match scores."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self.session_factory = session_factory

    def save(self, candidate_id: Any, requirement_id: Any, result: MatchResult) -> None:
        """Upsert the score row for this pair and verify it.

        Args:
            candidate_id: Candidate id
            requirement_id: Requirement id
            result: Score to store; overwrites any earlier score for the pair
        """
        values = _to_row_values(candidate_id, requirement_id, result)
        with talent_uow(self.session_factory) as repo:
            repo.scores.upsert_score(values)

            stored = repo.scores.get_score(candidate_id, requirement_id)
            if stored is None:
                logger.warning(f"Score for candidate {candidate_id} / requirement {requirement_id} not found after save")
            elif stored.score != values['score'] or stored.recommendation != values['recommendation']:
                logger.warning(
                    f"Score verification mismatch for candidate {candidate_id} / requirement {requirement_id}: "
                    f"wrote {values['score']}, read {stored.score}"
                )
            else:
                logger.info(f"Saved score {stored.score} for candidate {candidate_id} / requirement {requirement_id}")

    def load(self, candidate_id: Any, requirement_id: Any) -> Optional[MatchResult]:
        with talent_uow(self.session_factory) as repo:
            row = repo.scores.get_score(candidate_id, requirement_id)
            return result_from_row(row) if row is not None else None

    def list_for_requirement(
        self,
        requirement_id: Any,
        min_score: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[MatchResult]:
        """Stored scores for a requirement, best first."""
        with talent_uow(self.session_factory) as repo:
            rows = repo.scores.get_scores_for_requirement(requirement_id, min_score=min_score, limit=limit)
            return [result_from_row(row) for row in rows]
