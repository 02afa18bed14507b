"""
Criteria Package - Resolve a requirement into MatchCriteria.

Submodules:
- models: MatchCriteria plus the typed metadata and override records
- parsing: Prose parsers for ranges and day counts ("3-5 years", "1 month")
- extractor: build_criteria() and its precedence rules
"""

from core.criteria.models import MatchCriteria, RequirementMetadata, CriteriaOverrides
from core.criteria.extractor import build_criteria

__all__ = [
    'MatchCriteria',
    'RequirementMetadata',
    'CriteriaOverrides',
    'build_criteria',
]
