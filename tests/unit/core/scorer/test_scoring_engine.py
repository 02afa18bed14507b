#!/usr/bin/env python3
"""
Test suite for the two-tier ScoringEngine and the model strategies.
"""

import unittest
from unittest.mock import MagicMock

from core.config_loader import LlmConfig, ScorerConfig
from core.criteria import build_criteria
from core.dto import CandidateDTO, RequirementDTO
from core.scorer import (
    ModelScorerStrategy,
    RuleBasedScorer,
    ScoringEngine,
    StrategyFailure,
    build_model_strategies,
)
from core.scorer.prompt_builder import build_scoring_prompt
from tests.mocks.llm_mocks import ScriptedLLMProvider, ats_payload


def make_requirement() -> RequirementDTO:
    return RequirementDTO(
        id=7,
        title="Machine Learning Engineer",
        skills=["Python", "Machine Learning"],
        experience_min=2,
        experience_max=5,
        salary_min=10,
        salary_max=20,
    )


def make_candidate() -> CandidateDTO:
    return CandidateDTO(
        id=42,
        first_name="Asha",
        experience_years=3,
        current_salary=15,
        skills=["python", "tensorflow"],
        is_email_verified=True,
        is_phone_verified=True,
        profile_completion=90,
    )


class TestModelScorerStrategy(unittest.TestCase):
    """A single model strategy turns a JSON answer into a MatchResult."""

    def setUp(self):
        self.criteria = build_criteria(make_requirement())

    def test_valid_answer(self):
        llm = ScriptedLLMProvider({"m1": ats_payload(78.4)})
        result = ModelScorerStrategy(llm, "m1").attempt("prompt", self.criteria, 3)

        self.assertEqual(result.score, 78)
        self.assertEqual(result.recommendation, "recommended")
        self.assertEqual(result.experience_match_level, "good")
        self.assertEqual(result.tier, "ai")
        self.assertEqual(result.model, "m1")
        self.assertEqual(result.matching_skills, ["Python"])
        self.assertEqual(result.skills_match_percentage, 50)
        self.assertEqual(result.analysis["model_recommendation"], "recommended")
        print("✅ Model answer converted to MatchResult")

    def test_fenced_answer_is_parsed(self):
        llm = ScriptedLLMProvider({"m1": '```json\n{"ats_score": 64}\n```'})
        result = ModelScorerStrategy(llm, "m1").attempt("prompt", self.criteria, 3)
        self.assertEqual(result.score, 64)
        self.assertEqual(result.matching_points, [])

    def test_recommendation_recomputed_from_score(self):
        llm = ScriptedLLMProvider({"m1": ats_payload(85, recommendation="consider")})
        result = ModelScorerStrategy(llm, "m1").attempt("prompt", self.criteria, 3)
        self.assertEqual(result.recommendation, "strongly_recommended")
        self.assertEqual(result.analysis["model_recommendation"], "consider")

    def test_invalid_experience_level_is_derived(self):
        llm = ScriptedLLMProvider({"m1": ats_payload(70, experience_match="superb")})
        result = ModelScorerStrategy(llm, "m1").attempt("prompt", self.criteria, 3)
        self.assertEqual(result.experience_match_level, "excellent")

    def test_failures_become_strategy_failure(self):
        answers = {
            "client": RuntimeError("503"),
            "prose": "I think this candidate is great!",
            "broken": '{"ats_score": 70,,}',
            "shape": {"score": 70},
            "range": {"ats_score": 140},
        }
        llm = ScriptedLLMProvider(answers)
        for model in answers:
            with self.subTest(model=model):
                with self.assertRaises(StrategyFailure):
                    ModelScorerStrategy(llm, model).attempt("prompt", self.criteria, 3)

    def test_system_prompt_and_settings_forwarded(self):
        llm = ScriptedLLMProvider({"m1": ats_payload()})
        ModelScorerStrategy(llm, "m1", temperature=0.1, max_output_tokens=512).attempt("prompt", self.criteria)
        call = llm.calls[0]
        self.assertEqual(call["temperature"], 0.1)
        self.assertEqual(call["max_output_tokens"], 512)
        self.assertIn("ATS", call["system_prompt"])


class TestScoringEngine(unittest.TestCase):
    """Strategies in order, rule-based fallback last."""

    def setUp(self):
        self.requirement = make_requirement()
        self.candidate = make_candidate()
        self.criteria = build_criteria(self.requirement)
        self.rule_based = RuleBasedScorer(ScorerConfig())

    def _engine(self, llm, models):
        strategies = build_model_strategies(llm, LlmConfig(scoring_models=models))
        return ScoringEngine(strategies, self.rule_based)

    def test_first_usable_model_wins(self):
        llm = ScriptedLLMProvider({"a": RuntimeError("down"), "b": "no json here", "c": ats_payload(66)})
        result = self._engine(llm, ["a", "b", "c", "d"]).score(
            self.candidate, "resume", self.criteria, self.requirement
        )

        self.assertEqual(result.score, 66)
        self.assertEqual(result.model, "c")
        self.assertEqual(llm.models_called, ["a", "b", "c"])
        self.assertEqual(result.candidate_id, 42)
        self.assertEqual(result.requirement_id, 7)
        print("✅ Fallback chain stops at first usable model")

    def test_all_models_failing_falls_back_to_rules(self):
        llm = ScriptedLLMProvider({})
        result = self._engine(llm, ["a", "b"]).score(self.candidate, None, self.criteria, self.requirement)

        self.assertEqual(llm.models_called, ["a", "b"])
        self.assertEqual(result.tier, "rule_based")
        self.assertEqual(result.score, 71)
        self.assertEqual(result.candidate_id, 42)
        self.assertEqual(result.requirement_id, 7)
        print("✅ Rule-based tier used when every model fails")

    def test_no_llm_uses_rules_only(self):
        engine = ScoringEngine(build_model_strategies(None, LlmConfig()), self.rule_based)
        self.assertEqual(engine.strategies, [])
        result = engine.score(self.candidate, None, self.criteria, self.requirement)
        self.assertEqual(result.tier, "rule_based")

    def test_disabled_llm_builds_no_strategies(self):
        llm = ScriptedLLMProvider({})
        self.assertEqual(build_model_strategies(llm, LlmConfig(enabled=False)), [])

    def test_both_tiers_share_result_shape(self):
        ai = self._engine(ScriptedLLMProvider({"a": ats_payload(55)}), ["a"]).score(
            self.candidate, None, self.criteria, self.requirement
        )
        rules = self._engine(ScriptedLLMProvider({}), ["a"]).score(
            self.candidate, None, self.criteria, self.requirement
        )
        self.assertEqual(set(ai.to_dict()), set(rules.to_dict()))

    def test_strategy_failure_only_is_caught(self):
        strategy = MagicMock()
        strategy.name = "boom"
        strategy.attempt.side_effect = KeyError("bug")
        engine = ScoringEngine([strategy], self.rule_based)
        with self.assertRaises(KeyError):
            engine.score(self.candidate, None, self.criteria, self.requirement)

    def test_prompt_truncates_resume(self):
        prompt = build_scoring_prompt(
            self.candidate, "x" * 500, self.criteria, self.requirement, max_resume_chars=100
        )
        self.assertIn("x" * 100, prompt)
        self.assertNotIn("x" * 101, prompt)
        self.assertIn("Required Skills: Python, Machine Learning", prompt)
        self.assertIn("Experience Required: 2-5 years", prompt)
        self.assertIn('"ats_score"', prompt)


if __name__ == "__main__":
    unittest.main()
