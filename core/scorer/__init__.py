#!/usr/bin/env python3
"""
Scoring Module - Candidate vs requirement scoring.

Public API:
- ScoringEngine: model strategies first, rule-based scorer as fallback
- RuleBasedScorer: deterministic weighted scoring
- ScorePersistence: upsert / load of stored scores
- MatchResult: the scored outcome both tiers produce

Modules:
- models.py: MatchResult, enums and the recommendation ladder
- rule_based.py: weighted factor scoring
- strategies.py: one generative model per strategy
- prompt_builder.py: the evaluation prompt
- persistence.py: score rows
- service.py: ScoringEngine orchestrator
"""

from core.scorer.models import (
    ExperienceMatchLevel,
    MatchResult,
    Recommendation,
    ScoringTier,
    recommendation_for,
)
from core.scorer.persistence import ScorePersistence
from core.scorer.rule_based import RuleBasedScorer, experience_fit
from core.scorer.service import ScoringEngine, build_model_strategies
from core.scorer.strategies import ModelScorerStrategy, ScorerStrategy, StrategyFailure

__all__ = [
    'ScoringEngine',
    'RuleBasedScorer',
    'ScorePersistence',
    'MatchResult',
    'ExperienceMatchLevel',
    'Recommendation',
    'ScoringTier',
    'ModelScorerStrategy',
    'ScorerStrategy',
    'StrategyFailure',
    'build_model_strategies',
    'experience_fit',
    'recommendation_for',
]
