"""
In-memory evaluation of the predicate AST.

Used to re-check and order a page the storage query returned, and to
check queries in tests without a database.
Semantics mirror ``database.search``: ILIKE is a case-insensitive
substring check, HAS_TERM a whole-word check using the skill alias
rules, list fields match if any element does, and the negated operators
let missing values through.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Mapping, Optional

from core.search.compiler import MATCH_ALL, CandidateQuery
from core.search.predicates import And, Condition, Not, Op, Or, Predicate
from core.skills.aliases import contains_term, normalize_skill


def _texts(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(item).lower() for item in value if item is not None]
    return [str(value).lower()]


def _ilike(value: Any, needle: str) -> bool:
    needle = str(needle).lower()
    return any(needle in text for text in _texts(value))


def _has_term(value: Any, terms) -> bool:
    texts = [normalize_skill(text) for text in _texts(value)]
    return any(contains_term(text, term) for text in texts for term in terms)


def _within_days(value: Optional[datetime], days: int, now: datetime) -> bool:
    if value is None:
        return False
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value >= now - timedelta(days=days)


def _evaluate_condition(cond: Condition, record: Mapping[str, Any], now: datetime) -> bool:
    value = record.get(cond.field)
    op = cond.op

    if op == Op.EQ:
        return value == cond.value
    if op == Op.IN:
        return value is not None and str(value).lower() in {str(v).lower() for v in cond.value}
    if op == Op.BETWEEN:
        low, high = cond.value
        return value is not None and low <= value <= high
    if op == Op.LTE:
        return value is not None and value <= cond.value
    if op == Op.IS_NULL:
        return value is None
    if op == Op.IS_TRUE:
        return value is True
    if op == Op.ILIKE:
        return _ilike(value, cond.value)
    if op == Op.NOT_ILIKE:
        return not _ilike(value, cond.value)
    if op == Op.HAS_TERM:
        return _has_term(value, cond.value)
    if op == Op.LACKS_TERM:
        return not _has_term(value, cond.value)
    if op == Op.WITHIN_DAYS:
        return _within_days(value, cond.value, now)
    raise ValueError(f"Unsupported operator: {op}")


def evaluate(predicate: Predicate, record: Mapping[str, Any], now: Optional[datetime] = None) -> bool:
    """Evaluate ``predicate`` against a flat field mapping."""
    now = now or datetime.now(timezone.utc)
    if isinstance(predicate, Condition):
        return _evaluate_condition(predicate, record, now)
    if isinstance(predicate, And):
        return all(evaluate(child, record, now) for child in predicate.children)
    if isinstance(predicate, Or):
        return any(evaluate(child, record, now) for child in predicate.children)
    if isinstance(predicate, Not):
        return not evaluate(predicate.child, record, now)
    raise TypeError(f"Not a predicate: {predicate!r}")


def _as_record(candidate: Any) -> Mapping[str, Any]:
    if isinstance(candidate, Mapping):
        return candidate
    return candidate.as_record()


def relevance(query: CandidateQuery, candidate: Any, now: Optional[datetime] = None) -> int:
    """Number of matching groups the candidate satisfies."""
    record = _as_record(candidate)
    return sum(1 for group in query.matching_groups if evaluate(group.predicate, record, now))


def matches_query(query: CandidateQuery, candidate: Any, now: Optional[datetime] = None) -> bool:
    record = _as_record(candidate)
    if not evaluate(query.base_filters, record, now):
        return False
    if not all(evaluate(hard, record, now) for hard in query.hard_filters):
        return False
    if not query.matching_groups:
        return True
    satisfied = relevance(query, record, now)
    if query.match_mode == MATCH_ALL:
        return satisfied == len(query.matching_groups)
    return satisfied > 0


def rank_candidates(query: CandidateQuery, candidates: Iterable[Any], now: Optional[datetime] = None) -> List[Any]:
    """Keep matching candidates, most relevant first (stable for ties)."""
    scored = [
        (relevance(query, candidate, now), index, candidate)
        for index, candidate in enumerate(candidates)
        if matches_query(query, candidate, now)
    ]
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [candidate for _, _, candidate in scored]
