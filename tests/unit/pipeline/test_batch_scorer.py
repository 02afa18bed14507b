"""
Unit tests for the sequential batch scorer.

Tests verify:
- Per-candidate failures are collected and the batch continues
- Progress events fire before and after every candidate
- The pause happens between candidates only
- Requirement errors surface before any candidate is scored
"""
import pytest
from unittest.mock import Mock

from core.exceptions import RequirementNotFoundError
from core.scorer import MatchResult
from pipeline import BatchScorer


def result_for(candidate_id, score=70):
    return MatchResult(score=score, recommendation="recommended", experience_match_level="good",
                       candidate_id=candidate_id)


def failing_on(bad_id):
    def score(candidate_id, requirement_id):
        if candidate_id == bad_id:
            raise RuntimeError("profile load failed")
        return result_for(candidate_id, score=60 + candidate_id)
    return score


class TestBatchScorer:

    def test_failure_is_recorded_and_batch_continues(self):
        sleep = Mock()
        scorer = BatchScorer(failing_on(3), delay_seconds=1.5, sleep=sleep)

        report = scorer.score_many([1, 2, 3, 4, 5], requirement_id=7)

        assert report.total == 5
        assert report.success_count == 4
        assert report.error_count == 1
        assert [r.candidate_id for r in report.successful] == [1, 2, 4, 5]
        assert report.errors == [{'candidate_id': 3, 'error': "profile load failed"}]
        assert report.execution_time >= 0

    def test_progress_events(self):
        events = []
        scorer = BatchScorer(failing_on(3), sleep=Mock())

        scorer.score_many([1, 2, 3, 4, 5], requirement_id=7, on_progress=events.append)

        assert len(events) == 10
        assert [(e.current, e.status) for e in events[4:6]] == [(3, "processing"), (3, "error")]
        assert events[5].error == "profile load failed"
        assert events[1].status == "completed" and events[1].score == 61
        assert all(e.total == 5 for e in events)

    def test_sleeps_between_candidates_only(self):
        sleep = Mock()
        BatchScorer(failing_on(None), delay_seconds=1.5, sleep=sleep).score_many([1, 2, 3], requirement_id=7)

        assert sleep.call_count == 2
        sleep.assert_called_with(1.5)

    def test_single_candidate_never_sleeps(self):
        sleep = Mock()
        BatchScorer(failing_on(None), sleep=sleep).score_many([1], requirement_id=7)
        sleep.assert_not_called()

    def test_callback_failure_is_not_fatal(self):
        def broken_callback(event):
            raise ValueError("ui went away")

        report = BatchScorer(failing_on(None), sleep=Mock()).score_many(
            [1, 2], requirement_id=7, on_progress=broken_callback
        )
        assert report.success_count == 2

    def test_requirement_validated_before_scoring(self):
        score_fn = Mock()
        validate = Mock(side_effect=RequirementNotFoundError(99))
        scorer = BatchScorer(score_fn, sleep=Mock(), validate_requirement=validate)

        with pytest.raises(RequirementNotFoundError):
            scorer.score_many([1, 2], requirement_id=99)
        score_fn.assert_not_called()

    def test_empty_batch(self):
        report = BatchScorer(Mock(), sleep=Mock()).score_many([], requirement_id=7)
        assert report.total == 0
        assert report.successful == [] and report.errors == []
