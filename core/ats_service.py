#!/usr/bin/env python3
"""
ATS Service - Caller-facing operations of the matching engine.

Scoring never holds a database session across a model call: loading and
persisting each run in their own unit of work.

Usage:
    service = ATSService(engine, ScorePersistence(), DocumentExtractor(dirs), QueryCompiler())
    result = service.score_candidate(candidate_id=12, requirement_id=3)
"""

import time
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from sqlalchemy.orm import Session

from core.criteria import CriteriaOverrides, build_criteria
from core.dto import (
    CandidateDTO,
    RequirementDTO,
    ResumeDTO,
    candidate_from_orm,
    requirement_from_orm,
    resume_from_orm,
)
from core.exceptions import CandidateNotFoundError, RequirementNotFoundError
from core.scorer import MatchResult, ScorePersistence, ScoringEngine
from core.search import CandidateQuery, QueryCompiler, rank_candidates
from database.uow import talent_uow
from etl.resume import DocumentExtractor, resolve_resume_text
from pipeline.batch_scorer import BatchProgress, BatchReport, BatchScorer

logger = logging.getLogger(__name__)

Overrides = Union[None, CriteriaOverrides, Dict[str, Any]]


class ATSService:
    """Score, batch-score, look up and search candidates for requirements."""

    def __init__(
        self,
        engine: ScoringEngine,
        persistence: ScorePersistence,
        extractor: Optional[DocumentExtractor],
        compiler: QueryCompiler,
        session_factory: Optional[Callable[[], Session]] = None,
        batch_delay_seconds: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
        default_limit: int = 50,
    ):
        self.engine = engine
        self.persistence = persistence
        self.extractor = extractor
        self.compiler = compiler
        self.session_factory = session_factory
        self.batch_delay_seconds = batch_delay_seconds
        self.sleep = sleep
        self.default_limit = default_limit

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_requirement(self, requirement_id: Any) -> RequirementDTO:
        with talent_uow(self.session_factory) as repo:
            requirement = repo.requirements.get_by_id(requirement_id)
            if requirement is None:
                raise RequirementNotFoundError(requirement_id)
            return requirement_from_orm(requirement)

    def _load_pair(
        self, candidate_id: Any, requirement_id: Any
    ) -> Tuple[RequirementDTO, CandidateDTO, Optional[ResumeDTO]]:
        with talent_uow(self.session_factory) as repo:
            requirement = repo.requirements.get_by_id(requirement_id)
            if requirement is None:
                raise RequirementNotFoundError(requirement_id)

            candidate = repo.candidates.get_by_id(candidate_id)
            if candidate is None:
                raise CandidateNotFoundError(candidate_id)

            resume = repo.resumes.get_primary_for_candidate(candidate_id)
            return (
                requirement_from_orm(requirement),
                candidate_from_orm(candidate),
                resume_from_orm(resume) if resume is not None else None,
            )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_candidate(self, candidate_id: Any, requirement_id: Any, overrides: Overrides = None) -> MatchResult:
        """Score one candidate against one requirement and store the result.

        Args:
            candidate_id: Candidate to score
            requirement_id: Requirement to score against
            overrides: Optional criteria overrides

        Returns:
            The stored MatchResult

        Raises:
            RequirementNotFoundError: Unknown requirement
            CandidateNotFoundError: Unknown candidate
        """
        requirement, candidate, resume = self._load_pair(candidate_id, requirement_id)

        criteria = build_criteria(requirement, overrides)
        resume_text = resolve_resume_text(candidate, resume, self.extractor)
        logger.info(
            f"Scoring candidate {candidate_id} for requirement {requirement_id} "
            f"(resume text: {len(resume_text) if resume_text else 0} chars)"
        )

        result = self.engine.score(candidate, resume_text, criteria, requirement)
        self.persistence.save(candidate_id, requirement_id, result)
        return result

    def score_batch(
        self,
        candidate_ids: Sequence[Any],
        requirement_id: Any,
        on_progress: Optional[Callable[[BatchProgress], None]] = None,
    ) -> BatchReport:
        """Score many candidates sequentially; per-candidate failures are collected."""
        scorer = BatchScorer(
            self.score_candidate,
            delay_seconds=self.batch_delay_seconds,
            sleep=self.sleep,
            validate_requirement=self.load_requirement,
        )
        return scorer.score_many(candidate_ids, requirement_id, on_progress=on_progress)

    def get_score(self, candidate_id: Any, requirement_id: Any) -> Optional[MatchResult]:
        return self.persistence.load(candidate_id, requirement_id)

    def list_scores(
        self,
        requirement_id: Any,
        min_score: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[MatchResult]:
        return self.persistence.list_for_requirement(requirement_id, min_score=min_score, limit=limit)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_candidates(
        self,
        requirement: Union[Any, RequirementDTO],
        overrides: Overrides = None,
    ) -> CandidateQuery:
        """Compile the candidate query for a requirement (nothing is executed).

        Args:
            requirement: Requirement id or an already loaded RequirementDTO
            overrides: Optional search form filters

        Returns:
            CandidateQuery with base filters, hard filters and matching groups
        """
        if not isinstance(requirement, RequirementDTO):
            requirement = self.load_requirement(requirement)
        criteria = build_criteria(requirement, overrides)
        return self.compiler.compile(criteria, requirement.title)

    def find_candidates(
        self,
        requirement_id: Any,
        overrides: Overrides = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[CandidateDTO]:
        """Run the compiled query, most relevant candidates first.

        The store orders by matching groups satisfied before applying
        ``limit`` / ``offset``; the page is then re-checked against the same
        query in memory (a stable sort, so the order is kept).
        """
        query = self.search_candidates(requirement_id, overrides)
        with talent_uow(self.session_factory) as repo:
            rows = repo.candidates.search(query, limit=limit or self.default_limit, offset=offset)
            candidates = [candidate_from_orm(row) for row in rows]

        logger.info(
            f"Found {len(candidates)} candidates for requirement {requirement_id} "
            f"(groups: {', '.join(query.group_names()) or 'none'}, mode: {query.match_mode})"
        )
        return rank_candidates(query, candidates)
