"""
Unit tests for the SQLAlchemy candidate search adapter (in-memory SQLite).

Tests verify:
- Compiled queries select the same candidates the in-memory evaluator does
- Exclusions, base filters, limit / offset
- Skill terms are whole-word and alias aware; pages are filled by relevance
- User text is bound and LIKE wildcards are escaped
"""
import pytest
from sqlalchemy import select

from core.criteria import MatchCriteria
from core.dto import candidate_from_orm
from core.search import Condition, Op, QueryCompiler, matches_query
from core.search.predicates import Field
from database.models import Candidate
from database.search import compile_predicate
from database.uow import talent_uow
from tests.fixtures.talent_fixtures import add_candidate

pytestmark = pytest.mark.db


@pytest.fixture
def pool(session_factory):
    """Five candidates; only 'python-dev' is an active jobseeker without PHP."""
    with talent_uow(session_factory) as repo:
        rows = {
            'python-dev': add_candidate(repo.db, first_name="Asha", skills=["Python", "Django"],
                                        experience_years=3, headline="Backend Developer"),
            'php-dev': add_candidate(repo.db, first_name="Ravi", skills=["PHP", "Python"], experience_years=4),
            'inactive': add_candidate(repo.db, first_name="Meera", skills=["Python"], experience_years=3,
                                      is_active=False),
            'java-dev': add_candidate(repo.db, first_name="Karan", skills=["Java"], experience_years=10),
            'employer': add_candidate(repo.db, first_name="Acme", user_type="employer", skills=["Python"],
                                      experience_years=3),
        }
        return {name: row.id for name, row in rows.items()}


def search(session_factory, criteria, mode="any", **kwargs):
    query = QueryCompiler(match_mode=mode).compile(criteria)
    with talent_uow(session_factory) as repo:
        return [row.id for row in repo.candidates.search(query, **kwargs)]


CRITERIA = MatchCriteria(experience_min=2, experience_max=5, include_skills=("Python",), exclude_skills=("PHP",))


class TestCandidateSearch:

    def test_exclusion_and_base_filters(self, session_factory, pool):
        assert search(session_factory, CRITERIA) == [pool['python-dev']]
        assert search(session_factory, CRITERIA, mode="all") == [pool['python-dev']]

    def test_sql_agrees_with_evaluator(self, session_factory, pool):
        for mode in ("any", "all"):
            query = QueryCompiler(match_mode=mode).compile(CRITERIA)
            with talent_uow(session_factory) as repo:
                everyone = repo.candidates.get_many(list(pool.values()))
                expected = sorted(c.id for c in everyone if matches_query(query, candidate_from_orm(c)))
                found = sorted(c.id for c in repo.candidates.search(query))
            assert found == expected

    def test_any_mode_keeps_partial_matches(self, session_factory, pool):
        criteria = MatchCriteria(experience_min=8, experience_max=12, include_skills=("Python",))
        assert search(session_factory, criteria) == [pool['python-dev'], pool['php-dev'], pool['java-dev']]
        assert search(session_factory, criteria, mode="all") == []

    def test_limit_and_offset(self, session_factory, pool):
        criteria = MatchCriteria(include_skills=("Python", "Java"))
        assert search(session_factory, criteria) == [pool['python-dev'], pool['php-dev'], pool['java-dev']]
        assert search(session_factory, criteria, limit=1, offset=1) == [pool['php-dev']]


class TestCompilePredicate:

    def _ids(self, session_factory, predicate):
        with talent_uow(session_factory) as repo:
            stmt = select(Candidate.id).where(compile_predicate(predicate)).order_by(Candidate.id)
            return list(repo.db.execute(stmt).scalars().all())

    def test_has_term_matches_whole_words(self, session_factory):
        with talent_uow(session_factory) as repo:
            java = add_candidate(repo.db, skills=["java"]).id
            add_candidate(repo.db, skills=["JavaScript"])
            core_java = add_candidate(repo.db, skills=["Core Java"]).id
        assert self._ids(session_factory, Condition(Field.SKILLS, Op.HAS_TERM, ("java",))) == [java, core_java]

    def test_lacks_term_lets_null_through(self, session_factory):
        with talent_uow(session_factory) as repo:
            blank = add_candidate(repo.db, summary=None).id
            add_candidate(repo.db, summary="Ten years of PHP")
            other = add_candidate(repo.db, summary="PHPUnit maintainer").id
        assert self._ids(session_factory, Condition(Field.SUMMARY, Op.LACKS_TERM, ("php",))) == [blank, other]

    def test_like_wildcards_escaped(self, session_factory):
        with talent_uow(session_factory) as repo:
            literal = add_candidate(repo.db, summary="Kept 100% uptime").id
            add_candidate(repo.db, summary="Served 1000 users")
            underscore = add_candidate(repo.db, headline="snake_case fan").id
            add_candidate(repo.db, headline="snakescase")
        assert self._ids(session_factory, Condition(Field.SUMMARY, Op.ILIKE, "100%")) == [literal]
        assert self._ids(session_factory, Condition(Field.HEADLINE, Op.ILIKE, "snake_case")) == [underscore]

    def test_not_ilike_lets_null_through(self, session_factory):
        with talent_uow(session_factory) as repo:
            blank = add_candidate(repo.db, headline=None).id
            add_candidate(repo.db, headline="PHP developer")
            other = add_candidate(repo.db, headline="Go developer").id
        assert self._ids(session_factory, Condition(Field.HEADLINE, Op.NOT_ILIKE, "php")) == [blank, other]

    def test_hostile_text_is_bound(self, session_factory):
        with talent_uow(session_factory) as repo:
            add_candidate(repo.db, skills=["Python"])
        hostile = Condition(Field.SKILLS, Op.ILIKE, "x'); DROP TABLE candidate; --")
        assert self._ids(session_factory, hostile) == []
        with talent_uow(session_factory) as repo:
            assert repo.db.execute(select(Candidate.id)).first() is not None


@pytest.fixture
def skill_pool(session_factory):
    """Candidates whose skills trip naive substring matching."""
    with talent_uow(session_factory) as repo:
        rows = {
            'js': add_candidate(repo.db, skills=["JavaScript", "React"], headline="JavaScript engineer"),
            'java': add_candidate(repo.db, skills=["Java 8", "Spring Boot"]),
            'r-stats': add_candidate(repo.db, skills=["R"], summary="Statistics in R programming"),
            'rnd': add_candidate(repo.db, skills=["Docker"], summary="Led R&D, a real go-getter"),
            'ml': add_candidate(repo.db, key_skills=["ML"]),
            'ml-prose': add_candidate(repo.db, summary="Applied machine_learning to fraud"),
            'cpp': add_candidate(repo.db, skills=["Modern C++", "node.js"]),
            'blank': add_candidate(repo.db, skills=[], headline=None, summary=None),
        }
        return {name: row.id for name, row in rows.items()}


class TestSkillTermSearch:

    def _names(self, session_factory, skill_pool, criteria, mode="any"):
        by_id = {row_id: name for name, row_id in skill_pool.items()}
        return sorted(by_id[row_id] for row_id in search(session_factory, criteria, mode=mode))

    def test_exclusions_are_whole_word(self, session_factory, skill_pool):
        assert self._names(session_factory, skill_pool, MatchCriteria(exclude_skills=("Java",))) == \
            sorted(set(skill_pool) - {'java'})
        assert self._names(session_factory, skill_pool, MatchCriteria(exclude_skills=("R",))) == \
            sorted(set(skill_pool) - {'r-stats'})
        assert self._names(session_factory, skill_pool, MatchCriteria(exclude_skills=("Go",))) == sorted(skill_pool)

    def test_inclusions_use_aliases(self, session_factory, skill_pool):
        ml = MatchCriteria(include_skills=("Machine Learning",))
        assert self._names(session_factory, skill_pool, ml) == ['ml', 'ml-prose']
        assert self._names(session_factory, skill_pool, MatchCriteria(include_skills=("cpp",))) == ['cpp']
        assert self._names(session_factory, skill_pool, MatchCriteria(include_skills=("Node.js",))) == ['cpp']
        assert self._names(session_factory, skill_pool, MatchCriteria(include_skills=("SQL",))) == []

    @pytest.mark.parametrize("criteria", [
        MatchCriteria(exclude_skills=("Java",)),
        MatchCriteria(exclude_skills=("R", "Go")),
        MatchCriteria(include_skills=("Machine Learning", "React")),
        MatchCriteria(include_skills=("C++",), exclude_skills=("Spring Boot",)),
    ])
    def test_sql_agrees_with_evaluator(self, session_factory, skill_pool, criteria):
        query = QueryCompiler().compile(criteria)
        with talent_uow(session_factory) as repo:
            everyone = repo.candidates.get_many(list(skill_pool.values()))
            expected = sorted(c.id for c in everyone if matches_query(query, candidate_from_orm(c)))
            found = sorted(c.id for c in repo.candidates.search(query))
        assert found == expected

    def test_regex_metacharacters_are_literal(self, session_factory, skill_pool):
        with talent_uow(session_factory) as repo:
            add_candidate(repo.db, skills=["nodexjs"])
        assert self._names(session_factory, skill_pool, MatchCriteria(include_skills=("node.js",))) == ['cpp']
        hostile = MatchCriteria(include_skills=("(a+)+$",))
        assert search(session_factory, hostile) == []


class TestRelevanceOrder:

    @pytest.fixture
    def ranked_pool(self, session_factory):
        with talent_uow(session_factory) as repo:
            weak = add_candidate(repo.db, first_name="weak", experience_years=3).id
            strong = add_candidate(repo.db, first_name="strong", experience_years=4, skills=["Python"],
                                   current_location="Pune").id
            middle = add_candidate(repo.db, first_name="middle", experience_years=9, skills=["python"],
                                   current_location="Pune").id
        return weak, strong, middle

    CRITERIA = MatchCriteria(experience_min=2, experience_max=5, include_skills=("Python",),
                             include_locations=("Pune",))

    def test_most_relevant_rows_fill_the_page(self, session_factory, ranked_pool):
        weak, strong, middle = ranked_pool
        assert search(session_factory, self.CRITERIA) == [strong, middle, weak]
        assert search(session_factory, self.CRITERIA, limit=1) == [strong]
        assert search(session_factory, self.CRITERIA, limit=1, offset=2) == [weak]

    def test_ties_keep_id_order(self, session_factory, ranked_pool):
        weak, strong, middle = ranked_pool
        experience_only = MatchCriteria(experience_min=2, experience_max=5)
        assert search(session_factory, experience_only) == [weak, strong]


class TestExpectedSalary:

    def test_expected_salary_stands_in_for_missing_current(self, session_factory):
        with talent_uow(session_factory) as repo:
            expected_only = add_candidate(repo.db, current_salary=None, expected_salary=18).id
            add_candidate(repo.db, current_salary=30, expected_salary=18)
            add_candidate(repo.db, current_salary=None, expected_salary=None)
            current = add_candidate(repo.db, current_salary=12).id
        criteria = MatchCriteria(salary_min=10, salary_max=20)
        assert search(session_factory, criteria, mode="all") == [expected_only, current]
