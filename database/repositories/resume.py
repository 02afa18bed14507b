from typing import Any, List, Optional

from sqlalchemy import select

from database.models import Resume
from database.repositories.base import BaseRepository


class ResumeRepository(BaseRepository):
    def get_for_candidate(self, candidate_id: Any) -> List[Resume]:
        stmt = (
            select(Resume)
            .where(Resume.candidate_id == candidate_id)
            .order_by(Resume.is_default.desc(), Resume.created_at.desc(), Resume.id.desc())
        )
        return self._all(stmt)

    def get_primary_for_candidate(self, candidate_id: Any) -> Optional[Resume]:
        """The default resume, else the most recent one."""
        resumes = self.get_for_candidate(candidate_id)
        return resumes[0] if resumes else None
