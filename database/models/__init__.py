from .base import Base, JSONType
from .candidate import Candidate, WorkExperience, Education
from .requirement import Requirement
from .resume import Resume
from .match import CandidateMatchScore

__all__ = [
    'Base',
    'JSONType',
    'Candidate',
    'WorkExperience',
    'Education',
    'Requirement',
    'Resume',
    'CandidateMatchScore',
]
