from typing import Any, List, Optional

from sqlalchemy import Select
from sqlalchemy.orm import Session


class BaseRepository:
    """Query helpers over one Session. Transactions belong to ``talent_uow``."""

    def __init__(self, db: Session):
        self.db = db

    def _one(self, stmt: Select) -> Optional[Any]:
        return self.db.execute(stmt).scalar_one_or_none()

    def _all(self, stmt: Select) -> List[Any]:
        return list(self.db.execute(stmt).scalars().all())
