"""
Unit tests for ScorePersistence against an in-memory SQLite database.

Tests verify:
- One row per (candidate, requirement), later saves overwrite
- Loaded results keep the stored fields
- Listing orders best first and honours min_score / limit
"""
import pytest

from core.scorer import MatchResult, ScorePersistence
from database.uow import talent_uow
from tests.fixtures.talent_fixtures import add_candidate, add_requirement

pytestmark = pytest.mark.db


@pytest.fixture
def pair_ids(session_factory):
    with talent_uow(session_factory) as repo:
        candidates = [add_candidate(repo.db, first_name=f"C{i}") for i in range(3)]
        requirement = add_requirement(repo.db, title="Backend Engineer")
        return [c.id for c in candidates], requirement.id


@pytest.fixture
def persistence(session_factory):
    return ScorePersistence(session_factory)


def make_result(score: int, recommendation: str = "recommended", **fields) -> MatchResult:
    values = dict(
        score=score,
        recommendation=recommendation,
        experience_match_level="good",
        matching_skills=["Python"],
        matching_points=["Knows Python"],
        gaps=["No Go"],
        skills_match_percentage=50.0,
        analysis={"scoring_method": "rule_based"},
    )
    values.update(fields)
    return MatchResult(**values)


class TestSave:

    def test_second_save_overwrites_single_row(self, persistence, session_factory, pair_ids):
        candidate_ids, requirement_id = pair_ids
        cid = candidate_ids[0]

        persistence.save(cid, requirement_id, make_result(65))
        persistence.save(cid, requirement_id, make_result(82, "strongly_recommended", gaps=[]))

        with talent_uow(session_factory) as repo:
            assert repo.scores.count_scores(cid, requirement_id) == 1

        stored = persistence.load(cid, requirement_id)
        assert stored.score == 82
        assert stored.recommendation == "strongly_recommended"
        assert stored.gaps == []

    def test_load_returns_stored_fields(self, persistence, pair_ids):
        candidate_ids, requirement_id = pair_ids
        cid = candidate_ids[1]
        persistence.save(cid, requirement_id, make_result(71, tier="ai", model="gemini-2.0-flash"))

        stored = persistence.load(cid, requirement_id)
        assert stored.candidate_id == cid
        assert stored.requirement_id == requirement_id
        assert stored.matching_skills == ["Python"]
        assert stored.matching_points == ["Knows Python"]
        assert stored.experience_match_level == "good"
        assert stored.skills_match_percentage == 50.0
        assert stored.analysis["scoring_method"] == "rule_based"
        assert stored.tier == "ai"
        assert stored.model == "gemini-2.0-flash"
        assert stored.calculated_at is not None

    def test_load_missing_pair(self, persistence, pair_ids):
        candidate_ids, requirement_id = pair_ids
        assert persistence.load(candidate_ids[2], requirement_id) is None

    def test_pairs_are_independent(self, persistence, pair_ids):
        candidate_ids, requirement_id = pair_ids
        persistence.save(candidate_ids[0], requirement_id, make_result(40, "consider"))
        persistence.save(candidate_ids[1], requirement_id, make_result(90, "strongly_recommended"))

        assert persistence.load(candidate_ids[0], requirement_id).score == 40
        assert persistence.load(candidate_ids[1], requirement_id).score == 90


class TestListForRequirement:

    @pytest.fixture
    def stored(self, persistence, pair_ids):
        candidate_ids, requirement_id = pair_ids
        for cid, score in zip(candidate_ids, (55, 91, 73)):
            persistence.save(cid, requirement_id, make_result(score))
        return candidate_ids, requirement_id

    def test_best_first(self, persistence, stored):
        candidate_ids, requirement_id = stored
        results = persistence.list_for_requirement(requirement_id)
        assert [r.score for r in results] == [91, 73, 55]
        assert [r.candidate_id for r in results] == [candidate_ids[1], candidate_ids[2], candidate_ids[0]]

    def test_min_score_and_limit(self, persistence, stored):
        _, requirement_id = stored
        assert [r.score for r in persistence.list_for_requirement(requirement_id, min_score=60)] == [91, 73]
        assert [r.score for r in persistence.list_for_requirement(requirement_id, limit=1)] == [91]

    def test_unknown_requirement_is_empty(self, persistence, stored):
        assert persistence.list_for_requirement(9999) == []
