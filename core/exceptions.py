"""Errors surfaced to callers of the matching engine."""
from typing import Any


class MatchingError(Exception):
    """Base class for matching engine errors."""


class RequirementNotFoundError(MatchingError):
    def __init__(self, requirement_id: Any):
        super().__init__(f"Requirement {requirement_id} not found")
        self.requirement_id = requirement_id


class CandidateNotFoundError(MatchingError):
    def __init__(self, candidate_id: Any):
        super().__init__(f"Candidate {candidate_id} not found")
        self.candidate_id = candidate_id
