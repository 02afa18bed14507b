"""Batch scoring driver.

Scores many candidates against one requirement, strictly one after the
other with a fixed pause in between so the model endpoint is never hit
in parallel. A failing candidate is recorded and the batch moves on.
"""

import time
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from core.scorer.models import MatchResult


logger = logging.getLogger(__name__)

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_ERROR = "error"


@dataclass
class BatchProgress:
    """Progress event sent before and after each candidate."""
    current: int
    total: int
    candidate_id: Any
    status: str
    score: Optional[int] = None
    error: Optional[str] = None


@dataclass
class BatchReport:
    """Result of a batch run."""
    total: int
    successful: List[MatchResult] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    execution_time: float = 0.0

    @property
    def success_count(self) -> int:
        return len(self.successful)

    @property
    def error_count(self) -> int:
        return len(self.errors)


class BatchScorer:
    """
    Sequential, throttled scoring over a list of candidates.

    Usage:
        scorer = BatchScorer(service.score_candidate, delay_seconds=1.5)
        report = scorer.score_many([1, 2, 3], requirement_id=7, on_progress=print)
    """

    def __init__(
        self,
        score_fn: Callable[[Any, Any], MatchResult],
        delay_seconds: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
        validate_requirement: Optional[Callable[[Any], Any]] = None,
    ):
        self.score_fn = score_fn
        self.delay_seconds = delay_seconds
        self.sleep = sleep
        self.validate_requirement = validate_requirement

    def score_many(
        self,
        candidate_ids: Sequence[Any],
        requirement_id: Any,
        on_progress: Optional[Callable[[BatchProgress], None]] = None,
    ) -> BatchReport:
        """Score every candidate against the requirement.

        Args:
            candidate_ids: Candidates, scored in the given order
            requirement_id: Requirement to score against
            on_progress: Called with a BatchProgress before and after each candidate

        Returns:
            BatchReport with successful results and per-candidate errors

        Raises:
            RequirementNotFoundError: The requirement does not exist (raised before any candidate)
        """
        if self.validate_requirement is not None:
            self.validate_requirement(requirement_id)

        candidate_ids = list(candidate_ids)
        total = len(candidate_ids)
        report = BatchReport(total=total)
        start = time.time()

        logger.info(f"Batch scoring {total} candidates for requirement {requirement_id}")

        for index, candidate_id in enumerate(candidate_ids, start=1):
            self._notify(on_progress, BatchProgress(index, total, candidate_id, STATUS_PROCESSING))

            try:
                result = self.score_fn(candidate_id, requirement_id)
            except Exception as e:
                logger.error(f"Failed to score candidate {candidate_id}: {e}")
                report.errors.append({'candidate_id': candidate_id, 'error': str(e)})
                self._notify(
                    on_progress,
                    BatchProgress(index, total, candidate_id, STATUS_ERROR, error=str(e)),
                )
            else:
                report.successful.append(result)
                self._notify(
                    on_progress,
                    BatchProgress(index, total, candidate_id, STATUS_COMPLETED, score=result.score),
                )

            if index < total and self.delay_seconds > 0:
                self.sleep(self.delay_seconds)

        report.execution_time = time.time() - start
        logger.info(
            f"Batch complete for requirement {requirement_id}: {report.success_count} scored, "
            f"{report.error_count} failed in {report.execution_time:.2f}s"
        )
        return report

    @staticmethod
    def _notify(on_progress: Optional[Callable[[BatchProgress], None]], event: BatchProgress) -> None:
        if on_progress is None:
            return
        try:
            on_progress(event)
        except Exception as e:
            logger.warning(f"Progress callback failed for candidate {event.candidate_id}: {e}")
