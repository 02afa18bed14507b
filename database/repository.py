
from sqlalchemy.orm import Session

from database.repositories import (
    CandidateRepository,
    MatchScoreRepository,
    RequirementRepository,
    ResumeRepository,
)


class TalentRepository:
    """All repositories sharing one Session (one unit of work)."""

    def __init__(self, db: Session):
        self.db = db
        self.candidates = CandidateRepository(db)
        self.requirements = RequirementRepository(db)
        self.resumes = ResumeRepository(db)
        self.scores = MatchScoreRepository(db)
