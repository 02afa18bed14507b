from database.repositories.base import BaseRepository
from database.repositories.candidate import CandidateRepository
from database.repositories.requirement import RequirementRepository
from database.repositories.resume import ResumeRepository
from database.repositories.match import MatchScoreRepository

__all__ = [
    'BaseRepository',
    'CandidateRepository',
    'RequirementRepository',
    'ResumeRepository',
    'MatchScoreRepository',
]
