import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite

from database.models import CandidateMatchScore
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_CONFLICT_KEYS = ('candidate_id', 'requirement_id')


class MatchScoreRepository(BaseRepository):
    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == 'postgresql':
            return postgresql.insert
        if dialect == 'sqlite':
            return sqlite.insert
        raise NotImplementedError(f"Score upsert is not supported on {dialect}")

    def upsert_score(self, values: Dict[str, Any]) -> None:
        """INSERT ... ON CONFLICT (candidate_id, requirement_id) DO UPDATE."""
        stmt = self._insert()(CandidateMatchScore).values(**values)
        set_ = {key: stmt.excluded[key] for key in values if key not in _CONFLICT_KEYS}
        set_['updated_at'] = func.now()
        stmt = stmt.on_conflict_do_update(index_elements=list(_CONFLICT_KEYS), set_=set_)
        self.db.execute(stmt)
        self.db.flush()

    def get_score(self, candidate_id: Any, requirement_id: Any) -> Optional[CandidateMatchScore]:
        stmt = select(CandidateMatchScore).where(
            CandidateMatchScore.candidate_id == candidate_id,
            CandidateMatchScore.requirement_id == requirement_id,
        ).execution_options(populate_existing=True)
        return self._one(stmt)

    def get_scores_for_requirement(
        self,
        requirement_id: Any,
        min_score: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[CandidateMatchScore]:
        stmt = select(CandidateMatchScore).where(CandidateMatchScore.requirement_id == requirement_id)

        if min_score is not None:
            stmt = stmt.where(CandidateMatchScore.score >= min_score)

        stmt = stmt.order_by(CandidateMatchScore.score.desc(), CandidateMatchScore.candidate_id)
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._all(stmt)

    def count_scores(self, candidate_id: Any, requirement_id: Any) -> int:
        stmt = select(func.count()).select_from(CandidateMatchScore).where(
            CandidateMatchScore.candidate_id == candidate_id,
            CandidateMatchScore.requirement_id == requirement_id,
        )
        return self.db.execute(stmt).scalar_one()
