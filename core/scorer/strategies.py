#!/usr/bin/env python3
"""
Scorer Strategies - One generative model per strategy.

The engine tries strategies strictly in order. A strategy either returns
a MatchResult or raises StrategyFailure; nothing else escapes.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from core.criteria import MatchCriteria
from core.llm.interfaces import LLMProvider
from core.llm.json_parsing import LLMResponseFormatError, extract_json_object
from core.llm.schema_models import ATSAssessment
from core.llm.system_prompts import ATS_EVALUATOR_SYSTEM_PROMPT
from core.scorer.models import (
    ExperienceMatchLevel,
    MatchResult,
    ScoringTier,
    clamp_score,
    experience_level_for,
    recommendation_for,
)
from core.scorer.rule_based import experience_fit

logger = logging.getLogger(__name__)

_LEVELS = {level.value for level in ExperienceMatchLevel}


class StrategyFailure(Exception):
    """A strategy could not produce a result; the next one is tried."""

    def __init__(self, strategy: str, reason: str):
        super().__init__(f"{strategy}: {reason}")
        self.strategy = strategy
        self.reason = reason


class ScorerStrategy(ABC):
    """Turns the evaluation prompt into a MatchResult."""

    name: str = "strategy"

    @abstractmethod
    def attempt(self, prompt: str, criteria: MatchCriteria, experience_years: Optional[float] = None) -> MatchResult:
        """Score from the prompt or raise StrategyFailure."""
        raise NotImplementedError


class ModelScorerStrategy(ScorerStrategy):
    """Ask one model for an ATS assessment and validate the JSON answer."""

    def __init__(
        self,
        llm: LLMProvider,
        model: str,
        temperature: float = 0.2,
        max_output_tokens: int = 2048,
    ):
        self.llm = llm
        self.model = model
        self.name = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def attempt(self, prompt: str, criteria: MatchCriteria, experience_years: Optional[float] = None) -> MatchResult:
        try:
            response = self.llm.generate_text(
                prompt,
                model=self.model,
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
                system_prompt=ATS_EVALUATOR_SYSTEM_PROMPT,
            )
        except Exception as e:
            raise StrategyFailure(self.name, f"client error: {e}") from e

        try:
            payload = extract_json_object(response)
            assessment = ATSAssessment.model_validate(payload)
        except LLMResponseFormatError as e:
            raise StrategyFailure(self.name, f"unparseable response: {e}") from e
        except ValidationError as e:
            raise StrategyFailure(self.name, f"unexpected response shape: {e.error_count()} errors") from e

        return self._to_result(assessment, criteria, experience_years)

    def _to_result(
        self,
        assessment: ATSAssessment,
        criteria: MatchCriteria,
        experience_years: Optional[float],
    ) -> MatchResult:
        score = clamp_score(assessment.ats_score)

        level = (assessment.experience_match or "").strip().lower()
        if level not in _LEVELS:
            ratio, _, _ = experience_fit(experience_years, criteria)
            level = experience_level_for(ratio).value

        analysis = assessment.model_dump(
            exclude={'ats_score', 'matching_skills', 'matching_points', 'gaps', 'experience_match'},
        )
        analysis['scoring_method'] = ScoringTier.AI.value
        # The ladder is authoritative; keep what the model suggested for reference
        analysis['model_recommendation'] = analysis.pop('recommendation', None)

        return MatchResult(
            score=score,
            recommendation=recommendation_for(score).value,
            experience_match_level=level,
            matching_skills=assessment.matching_skills,
            matching_points=assessment.matching_points,
            gaps=assessment.gaps,
            skills_match_percentage=assessment.skills_match_percentage,
            analysis=analysis,
            tier=ScoringTier.AI.value,
            model=self.model,
        )
