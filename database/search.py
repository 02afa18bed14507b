"""
SQLAlchemy adapter for the candidate predicate AST.

Compiles ``core.search`` predicates into parameterized clauses on the
Candidate table. User-supplied text only ever travels as a bound
parameter (LIKE wildcards and regex metacharacters escaped); JSON list
columns are matched by casting them to text, which works on both
PostgreSQL and SQLite. Whole-word term matching uses ``regexp_match``
(``~`` on PostgreSQL, the Python REGEXP function SQLAlchemy registers
on SQLite) with a pattern both engines read the same way.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from sqlalchemy import Select, Text, and_, case, cast, false, func, literal, not_, or_, select, true

from core.search.compiler import CandidateQuery
from core.search.predicates import And, Condition, Field, Not, Op, Or, Predicate
from core.skills.aliases import WORD_CHARS
from database.models import Candidate

_LIKE_ESCAPE = "\\"
_REGEX_SPECIAL_RE = re.compile(r"[\\.^$|?*+()\[\]{}]")

_COLUMNS = {
    Field.USER_TYPE: Candidate.user_type,
    Field.IS_ACTIVE: Candidate.is_active,
    Field.ACCOUNT_STATUS: Candidate.account_status,
    Field.FIRST_NAME: Candidate.first_name,
    Field.LAST_NAME: Candidate.last_name,
    Field.HEADLINE: Candidate.headline,
    Field.SUMMARY: Candidate.summary,
    Field.DESIGNATION: Candidate.designation,
    Field.CURRENT_ROLE: Candidate.current_role,
    Field.CURRENT_LOCATION: Candidate.current_location,
    Field.PREFERRED_LOCATIONS: Candidate.preferred_locations,
    Field.WILLING_TO_RELOCATE: Candidate.willing_to_relocate,
    Field.EXPERIENCE_YEARS: Candidate.experience_years,
    Field.CURRENT_SALARY: Candidate.current_salary,
    Field.EXPECTED_SALARY: Candidate.expected_salary,
    Field.NOTICE_PERIOD: Candidate.notice_period,
    Field.SKILLS: Candidate.skills,
    Field.KEY_SKILLS: Candidate.key_skills,
    Field.GENDER: Candidate.gender,
    Field.LAST_LOGIN_AT: Candidate.last_login_at,
}


def _escape_like(value: str) -> str:
    return (
        str(value)
        .replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _text_expr(field: str):
    column = _COLUMNS[field]
    if field in Field.LIST_FIELDS:
        return cast(column, Text)
    return column


def _ilike(field: str, value: str):
    return _text_expr(field).ilike(f"%{_escape_like(value)}%", escape=_LIKE_ESCAPE)


def term_pattern(terms: Sequence[str]) -> str:
    """Regex matching any of ``terms`` as a whole word in lowercased text."""
    alternatives = "|".join(
        _REGEX_SPECIAL_RE.sub(lambda m: "\\" + m.group(0), term).replace(" ", r"\s+")
        for term in terms
    )
    return f"(^|[^{WORD_CHARS}])({alternatives})([^{WORD_CHARS}]|$)"


def _has_term(field: str, terms: Sequence[str]):
    if not terms:
        return false()
    text = func.replace(func.lower(_text_expr(field)), "_", " ", type_=Text)
    return text.regexp_match(term_pattern(terms))


def _is_null(field: str):
    column = _COLUMNS[field]
    return column.is_(None)


def _compile_condition(cond: Condition, now: datetime):
    if cond.field not in _COLUMNS:
        raise ValueError(f"Unknown candidate field: {cond.field}")
    column = _COLUMNS[cond.field]
    op = cond.op

    if op == Op.EQ:
        return column == cond.value
    if op == Op.IN:
        return func.lower(column).in_([str(v).lower() for v in cond.value])
    if op == Op.BETWEEN:
        low, high = cond.value
        return column.between(low, high)
    if op == Op.LTE:
        return column <= cond.value
    if op == Op.IS_NULL:
        return _is_null(cond.field)
    if op == Op.IS_TRUE:
        return column.is_(True)
    if op == Op.ILIKE:
        return _ilike(cond.field, cond.value)
    if op == Op.NOT_ILIKE:
        return or_(_is_null(cond.field), not_(_ilike(cond.field, cond.value)))
    if op == Op.HAS_TERM:
        return _has_term(cond.field, cond.value)
    if op == Op.LACKS_TERM:
        return or_(_is_null(cond.field), not_(_has_term(cond.field, cond.value)))
    if op == Op.WITHIN_DAYS:
        return column >= now - timedelta(days=cond.value)
    raise ValueError(f"Unsupported operator: {op}")


def compile_predicate(predicate: Predicate, now: Optional[datetime] = None):
    """Translate a predicate tree into a SQLAlchemy boolean clause."""
    now = now or datetime.now(timezone.utc)
    if isinstance(predicate, Condition):
        return _compile_condition(predicate, now)
    if isinstance(predicate, And):
        if not predicate.children:
            return true()
        return and_(*(compile_predicate(child, now) for child in predicate.children))
    if isinstance(predicate, Or):
        if not predicate.children:
            return false()
        return or_(*(compile_predicate(child, now) for child in predicate.children))
    if isinstance(predicate, Not):
        return not_(compile_predicate(predicate.child, now))
    raise TypeError(f"Not a predicate: {predicate!r}")


def relevance_expression(query: CandidateQuery, now: Optional[datetime] = None):
    """Number of matching groups a row satisfies, as a SQL expression."""
    total = None
    for group in query.matching_groups:
        hit = case((compile_predicate(group.predicate, now), 1), else_=0)
        total = hit if total is None else total + hit
    return literal(0) if total is None else total


def build_candidate_select(query: CandidateQuery, now: Optional[datetime] = None) -> Select:
    """SELECT of Candidate rows satisfying the whole query, most relevant first.

    Ties keep id order so pages stay stable.
    """
    now = now or datetime.now(timezone.utc)
    stmt = select(Candidate).where(compile_predicate(query.where(), now))
    if not query.matching_groups:
        return stmt.order_by(Candidate.id)
    return stmt.order_by(relevance_expression(query, now).desc(), Candidate.id)
