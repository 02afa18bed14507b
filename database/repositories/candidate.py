import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from core.search.compiler import CandidateQuery
from database.models import Candidate
from database.repositories.base import BaseRepository
from database.search import build_candidate_select

logger = logging.getLogger(__name__)


class CandidateRepository(BaseRepository):
    @staticmethod
    def _with_history(stmt):
        return stmt.options(
            selectinload(Candidate.work_experiences),
            selectinload(Candidate.educations),
        )

    def get_by_id(self, candidate_id: Any) -> Optional[Candidate]:
        stmt = self._with_history(select(Candidate).where(Candidate.id == candidate_id))
        return self._one(stmt)

    def get_many(self, candidate_ids: Sequence[Any]) -> List[Candidate]:
        if not candidate_ids:
            return []
        stmt = self._with_history(select(Candidate).where(Candidate.id.in_(list(candidate_ids))))
        return self._all(stmt)

    def search(
        self,
        query: CandidateQuery,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Candidate]:
        stmt = self._with_history(build_candidate_select(query))
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        candidates = self._all(stmt)
        logger.debug(f"Candidate search returned {len(candidates)} rows")
        return candidates
