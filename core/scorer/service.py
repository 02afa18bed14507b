#!/usr/bin/env python3
"""
Scoring Engine - One (candidate, requirement) pair -> MatchResult.

Tier 1 tries the configured model strategies strictly in order; the
first usable answer wins. When every strategy fails (or none is
configured) tier 2, the rule-based scorer, produces the result. Both
tiers return the same MatchResult shape.
"""

from typing import List, Optional, Sequence
import logging

from core.config_loader import LlmConfig
from core.criteria import MatchCriteria
from core.dto import CandidateDTO, RequirementDTO
from core.llm.interfaces import LLMProvider
from core.scorer.models import MatchResult
from core.scorer.prompt_builder import build_scoring_prompt
from core.scorer.rule_based import RuleBasedScorer
from core.scorer.strategies import ModelScorerStrategy, ScorerStrategy, StrategyFailure

logger = logging.getLogger(__name__)


def build_model_strategies(llm: Optional[LLMProvider], config: LlmConfig) -> List[ScorerStrategy]:
    """One strategy per configured scoring model, in configured order."""
    if llm is None or not config.enabled:
        return []
    return [
        ModelScorerStrategy(
            llm,
            model,
            temperature=config.scoring_temperature,
            max_output_tokens=config.scoring_max_output_tokens,
        )
        for model in config.scoring_models
    ]


class ScoringEngine:
    """
    Two-tier scorer.

    Usage:
        engine = ScoringEngine(strategies, RuleBasedScorer(config.scoring))
        result = engine.score(candidate, resume_text, criteria, requirement)
    """

    def __init__(
        self,
        strategies: Sequence[ScorerStrategy],
        rule_based: RuleBasedScorer,
        max_resume_chars: int = 15_000,
    ):
        self.strategies = list(strategies)
        self.rule_based = rule_based
        self.max_resume_chars = max_resume_chars

    def score(
        self,
        candidate: CandidateDTO,
        resume_text: Optional[str],
        criteria: MatchCriteria,
        requirement: RequirementDTO,
    ) -> MatchResult:
        """Score one candidate.

        Args:
            candidate: Candidate profile
            resume_text: Resume text, or None when the candidate has none
            criteria: Criteria resolved from the requirement
            requirement: The requirement

        Returns:
            MatchResult for (candidate.id, requirement.id)
        """
        if self.strategies:
            prompt = build_scoring_prompt(
                candidate, resume_text, criteria, requirement, max_resume_chars=self.max_resume_chars
            )
            for strategy in self.strategies:
                try:
                    result = strategy.attempt(prompt, criteria, candidate.experience_years)
                except StrategyFailure as e:
                    logger.warning(f"Scoring strategy failed, trying next: {e}")
                    continue
                logger.info(f"Candidate {candidate.id} scored {result.score} by {strategy.name}")
                return result.for_pair(candidate.id, requirement.id)

            logger.warning(
                f"All {len(self.strategies)} model strategies failed for candidate {candidate.id}; "
                f"using rule-based scoring"
            )

        result = self.rule_based.score(candidate, resume_text, criteria, requirement)
        return result.for_pair(candidate.id, requirement.id)
