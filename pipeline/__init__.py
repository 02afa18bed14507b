"""Pipeline execution modules for TalentScout."""

from .batch_scorer import BatchScorer, BatchProgress, BatchReport

__all__ = ['BatchScorer', 'BatchProgress', 'BatchReport']
