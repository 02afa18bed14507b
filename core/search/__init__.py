"""
Search Package - Requirement-driven candidate filtering.

Submodules:
- predicates: Storage-agnostic predicate AST (Condition / And / Or / Not)
- compiler: QueryCompiler (MatchCriteria -> CandidateQuery)
- evaluator: Applies the AST to plain records and ranks by relevance
"""

from core.search.predicates import Condition, And, Or, Not, Op, Field
from core.search.compiler import QueryCompiler, CandidateQuery, MatchingGroup
from core.search.evaluator import evaluate, matches_query, relevance, rank_candidates

__all__ = [
    'Condition',
    'And',
    'Or',
    'Not',
    'Op',
    'Field',
    'QueryCompiler',
    'CandidateQuery',
    'MatchingGroup',
    'evaluate',
    'matches_query',
    'relevance',
    'rank_candidates',
]
