"""
Query Compiler - MatchCriteria -> declarative candidate query.

The query has three layers:
- base filters: only active jobseeker accounts
- hard filters: disqualifying predicates, always AND-ed
- matching groups: one OR-group per criterion, each adding relevance

``match_mode`` decides how matching groups combine: "any" keeps a
candidate that satisfies at least one group, "all" requires every group.
Nothing is executed here; see ``database.search`` and
``core.search.evaluator`` for the two adapters.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.criteria.models import MatchCriteria
from core.search.predicates import And, Condition, Field, Op, Or, Predicate, and_, or_
from core.skills.aliases import prose_terms, skill_terms

logger = logging.getLogger(__name__)

MATCH_ANY = "any"
MATCH_ALL = "all"
MIN_TITLE_WORD_LENGTH = 3


@dataclass(frozen=True)
class MatchingGroup:
    name: str
    predicate: Predicate


@dataclass(frozen=True)
class CandidateQuery:
    base_filters: And
    hard_filters: Tuple[Predicate, ...]
    matching_groups: Tuple[MatchingGroup, ...]
    match_mode: str = MATCH_ANY

    def group_names(self) -> List[str]:
        return [group.name for group in self.matching_groups]

    def matching_predicate(self) -> Optional[Predicate]:
        if not self.matching_groups:
            return None
        predicates = tuple(group.predicate for group in self.matching_groups)
        return And(predicates) if self.match_mode == MATCH_ALL else Or(predicates)

    def where(self) -> Predicate:
        """The whole query as one predicate tree."""
        parts: List[Predicate] = [self.base_filters, *self.hard_filters]
        matching = self.matching_predicate()
        if matching is not None:
            parts.append(matching)
        return And(tuple(parts))


def skill_conditions(skill: str, op: str) -> List[Condition]:
    """Whole-word term conditions for one skill over the skill lists and prose fields.

    Lists are checked with every spelling of the skill, headline and summary
    only with the unambiguous ones, the same rule the rule-based scorer applies.
    """
    terms = skill_terms(skill)
    if not terms:
        return []
    conditions = [Condition(Field.SKILLS, op, terms), Condition(Field.KEY_SKILLS, op, terms)]
    prose = prose_terms(skill)
    if prose:
        conditions.append(Condition(Field.HEADLINE, op, prose))
        conditions.append(Condition(Field.SUMMARY, op, prose))
    return conditions


def title_keywords(title: Optional[str]) -> Tuple[str, ...]:
    """Lowercased words of a requirement title longer than two characters."""
    words = []
    for word in re.split(r"\s+", (title or "").strip()):
        word = word.strip(".,;:()[]").lower()
        if len(word) >= MIN_TITLE_WORD_LENGTH and word not in words:
            words.append(word)
    return tuple(words)


class QueryCompiler:
    """Compile MatchCriteria into a CandidateQuery."""

    def __init__(self, match_mode: str = MATCH_ANY):
        if match_mode not in (MATCH_ANY, MATCH_ALL):
            raise ValueError(f"match_mode must be '{MATCH_ANY}' or '{MATCH_ALL}', got {match_mode!r}")
        self.match_mode = match_mode

    def compile(self, criteria: MatchCriteria, requirement_title: Optional[str] = None) -> CandidateQuery:
        query = CandidateQuery(
            base_filters=self._base_filters(),
            hard_filters=tuple(self._hard_filters(criteria)),
            matching_groups=tuple(self._matching_groups(criteria, requirement_title)),
            match_mode=self.match_mode,
        )
        logger.debug(
            f"Compiled query: {len(query.hard_filters)} hard filters, "
            f"groups={query.group_names()} mode={query.match_mode}"
        )
        return query

    @staticmethod
    def _base_filters() -> And:
        return and_(
            Condition(Field.USER_TYPE, Op.EQ, "jobseeker"),
            Condition(Field.IS_ACTIVE, Op.IS_TRUE),
            Condition(Field.ACCOUNT_STATUS, Op.EQ, "active"),
        )

    def _hard_filters(self, criteria: MatchCriteria) -> List[Predicate]:
        filters: List[Predicate] = []

        for skill in criteria.exclude_skills:
            conditions = skill_conditions(skill, Op.LACKS_TERM)
            if conditions:
                filters.append(And(tuple(conditions)))

        for location in criteria.exclude_locations:
            filters.append(and_(
                Condition(Field.CURRENT_LOCATION, Op.NOT_ILIKE, location),
                Condition(Field.PREFERRED_LOCATIONS, Op.NOT_ILIKE, location),
            ))

        if criteria.diversity:
            filters.append(Condition(Field.GENDER, Op.IN, tuple(criteria.diversity)))

        if criteria.last_active_days is not None:
            filters.append(Condition(Field.LAST_LOGIN_AT, Op.WITHIN_DAYS, criteria.last_active_days))

        return filters

    def _matching_groups(self, criteria: MatchCriteria, requirement_title: Optional[str]) -> List[MatchingGroup]:
        groups: List[MatchingGroup] = []

        if criteria.has_experience_range:
            groups.append(MatchingGroup("experience", Condition(
                Field.EXPERIENCE_YEARS, Op.BETWEEN, (criteria.experience_min, criteria.experience_max))))

        if criteria.has_salary_range:
            budget = (criteria.salary_min, criteria.salary_max)
            # expected salary only stands in when no current salary is on file
            salary: Predicate = or_(
                Condition(Field.CURRENT_SALARY, Op.BETWEEN, budget),
                and_(Condition(Field.CURRENT_SALARY, Op.IS_NULL), Condition(Field.EXPECTED_SALARY, Op.BETWEEN, budget)),
            )
            if criteria.include_not_mentioned:
                salary = or_(salary, and_(
                    Condition(Field.CURRENT_SALARY, Op.IS_NULL),
                    Condition(Field.EXPECTED_SALARY, Op.IS_NULL),
                ))
            groups.append(MatchingGroup("salary", salary))

        if criteria.include_locations:
            locations: List[Predicate] = []
            for location in criteria.include_locations:
                locations.append(Condition(Field.CURRENT_LOCATION, Op.ILIKE, location))
                locations.append(Condition(Field.PREFERRED_LOCATIONS, Op.ILIKE, location))
            if criteria.include_willing_to_relocate:
                locations.append(Condition(Field.WILLING_TO_RELOCATE, Op.IS_TRUE))
            groups.append(MatchingGroup("locations", Or(tuple(locations))))

        title_conditions: List[Predicate] = []
        for word in title_keywords(requirement_title):
            title_conditions.extend([
                Condition(Field.HEADLINE, Op.ILIKE, word),
                Condition(Field.DESIGNATION, Op.ILIKE, word),
                Condition(Field.CURRENT_ROLE, Op.ILIKE, word),
            ])

        if criteria.include_skills:
            skill_predicates: List[Predicate] = []
            for skill in criteria.include_skills:
                skill_predicates.extend(skill_conditions(skill, Op.HAS_TERM))
            if title_conditions:
                groups.append(MatchingGroup("skills", or_(Or(tuple(skill_predicates)), Or(tuple(title_conditions)))))
            else:
                groups.append(MatchingGroup("skills", Or(tuple(skill_predicates))))
        elif title_conditions:
            groups.append(MatchingGroup("title", Or(tuple(title_conditions))))

        if criteria.designations:
            designations: List[Predicate] = []
            for designation in criteria.designations:
                designations.extend([
                    Condition(Field.DESIGNATION, Op.ILIKE, designation),
                    Condition(Field.HEADLINE, Op.ILIKE, designation),
                    Condition(Field.CURRENT_ROLE, Op.ILIKE, designation),
                ])
            groups.append(MatchingGroup("designations", Or(tuple(designations))))

        if criteria.search:
            term = criteria.search
            groups.append(MatchingGroup("search", or_(
                Condition(Field.FIRST_NAME, Op.ILIKE, term),
                Condition(Field.LAST_NAME, Op.ILIKE, term),
                Condition(Field.HEADLINE, Op.ILIKE, term),
                Condition(Field.DESIGNATION, Op.ILIKE, term),
                Condition(Field.SUMMARY, Op.ILIKE, term),
                Condition(Field.SKILLS, Op.ILIKE, term),
                Condition(Field.KEY_SKILLS, Op.ILIKE, term),
            )))

        if criteria.notice_period_max is not None:
            notice: Predicate = Condition(Field.NOTICE_PERIOD, Op.LTE, criteria.notice_period_max)
            if criteria.include_not_mentioned:
                notice = or_(notice, Condition(Field.NOTICE_PERIOD, Op.IS_NULL))
            groups.append(MatchingGroup("notice_period", notice))

        return groups
