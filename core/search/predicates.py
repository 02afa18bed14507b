"""
Predicate AST for candidate filtering.

A tagged union of immutable nodes. Values travel as data and are bound as
parameters by whichever adapter executes the tree (SQLAlchemy in
``database.search``, plain Python in ``core.search.evaluator``); nothing
here knows about SQL.
"""
from dataclasses import dataclass
from typing import Any, Tuple, Union


class Field:
    """Candidate attributes a predicate may reference."""
    USER_TYPE = "user_type"
    IS_ACTIVE = "is_active"
    ACCOUNT_STATUS = "account_status"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    HEADLINE = "headline"
    SUMMARY = "summary"
    DESIGNATION = "designation"
    CURRENT_ROLE = "current_role"
    CURRENT_LOCATION = "current_location"
    PREFERRED_LOCATIONS = "preferred_locations"
    WILLING_TO_RELOCATE = "willing_to_relocate"
    EXPERIENCE_YEARS = "experience_years"
    CURRENT_SALARY = "current_salary"
    EXPECTED_SALARY = "expected_salary"
    NOTICE_PERIOD = "notice_period"
    SKILLS = "skills"
    KEY_SKILLS = "key_skills"
    GENDER = "gender"
    LAST_LOGIN_AT = "last_login_at"

    # fields holding JSON lists; text operators match against any element
    LIST_FIELDS = frozenset({PREFERRED_LOCATIONS, SKILLS, KEY_SKILLS})


class Op:
    EQ = "eq"
    IN = "in"  # case-insensitive membership
    BETWEEN = "between"  # inclusive, value = (low, high)
    LTE = "lte"
    IS_NULL = "is_null"
    IS_TRUE = "is_true"
    ILIKE = "ilike"  # case-insensitive substring
    NOT_ILIKE = "not_ilike"  # null-safe: a missing value passes
    HAS_TERM = "has_term"  # any of value (normalized terms) occurs as a whole word
    LACKS_TERM = "lacks_term"  # null-safe negation of HAS_TERM
    WITHIN_DAYS = "within_days"  # timestamp no older than value days

    ALL = frozenset({EQ, IN, BETWEEN, LTE, IS_NULL, IS_TRUE, ILIKE, NOT_ILIKE, HAS_TERM, LACKS_TERM, WITHIN_DAYS})


@dataclass(frozen=True)
class Condition:
    field: str
    op: str
    value: Any = None

    def __post_init__(self):
        if self.op not in Op.ALL:
            raise ValueError(f"Unknown predicate operator: {self.op}")


@dataclass(frozen=True)
class And:
    children: Tuple["Predicate", ...]


@dataclass(frozen=True)
class Or:
    children: Tuple["Predicate", ...]


@dataclass(frozen=True)
class Not:
    child: "Predicate"


Predicate = Union[Condition, And, Or, Not]


def and_(*children: Predicate) -> And:
    return And(tuple(children))


def or_(*children: Predicate) -> Or:
    return Or(tuple(children))


def iter_conditions(predicate: Predicate):
    """Yield every Condition leaf in the tree."""
    if isinstance(predicate, Condition):
        yield predicate
    elif isinstance(predicate, (And, Or)):
        for child in predicate.children:
            yield from iter_conditions(child)
    elif isinstance(predicate, Not):
        yield from iter_conditions(predicate.child)
