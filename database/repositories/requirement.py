from typing import Any, Optional

from sqlalchemy import select

from database.models import Requirement
from database.repositories.base import BaseRepository


class RequirementRepository(BaseRepository):
    def get_by_id(self, requirement_id: Any) -> Optional[Requirement]:
        stmt = select(Requirement).where(Requirement.id == requirement_id)
        return self._one(stmt)
