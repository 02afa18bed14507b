import contextlib
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repository import TalentRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def talent_uow(session_factory: Optional[Callable[[], Session]] = None):
    """Per-unit-of-work transaction scope.

    Yields a TalentRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with talent_uow() as repo:
            requirement = repo.requirements.get_by_id(requirement_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        repo = TalentRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
