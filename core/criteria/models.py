"""
Criteria models.

MatchCriteria is the one resolved view of a requirement that both the
scorer and the candidate search consume. RequirementMetadata and
CriteriaOverrides are the typed records it is resolved from.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from core.criteria.parsing import parse_days, parse_number, split_list


@dataclass(frozen=True)
class MatchCriteria:
    """Fully resolved filter and scoring inputs for one requirement.

    Ranges are either fully open (both bounds None) or fully closed.
    Lists are tuples so two builds of the same input compare equal.
    """
    experience_min: Optional[float] = None
    experience_max: Optional[float] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    currency: str = "INR"

    required_skills: Tuple[str, ...] = ()
    preferred_skills: Tuple[str, ...] = ()
    include_skills: Tuple[str, ...] = ()
    exclude_skills: Tuple[str, ...] = ()

    include_locations: Tuple[str, ...] = ()
    exclude_locations: Tuple[str, ...] = ()
    designations: Tuple[str, ...] = ()
    education: Tuple[str, ...] = ()
    institute: Optional[str] = None
    notice_period_max: Optional[int] = None
    diversity: Tuple[str, ...] = ()
    current_designation: Optional[str] = None
    current_company: Optional[str] = None
    last_active_days: Optional[int] = None
    search: Optional[str] = None

    include_willing_to_relocate: bool = False
    include_not_mentioned: bool = False

    @property
    def has_experience_range(self) -> bool:
        return self.experience_min is not None

    @property
    def has_salary_range(self) -> bool:
        return self.salary_min is not None

    @property
    def scoring_skills(self) -> Tuple[str, ...]:
        """Skills the scorer counts: the required list, else everything included."""
        return self.required_skills or self.include_skills


def _number_field(*aliases: str):
    return Field(default=None, validation_alias=AliasChoices(*aliases))


class _LenientRecord(BaseModel):
    """Base for records filled from loosely typed JSON."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @field_validator(
        "experience_min", "experience_max", "salary_min", "salary_max",
        mode="before", check_fields=False,
    )
    @classmethod
    def _lenient_number(cls, value):
        return parse_number(value)

    @field_validator("notice_period", "last_active", mode="before", check_fields=False)
    @classmethod
    def _lenient_days(cls, value):
        return parse_days(value)


class RequirementMetadata(_LenientRecord):
    """Typed view of the free-form ``metadata`` JSON on a requirement.

    Both the camelCase keys written by the portal and snake_case spellings
    are accepted. Unknown keys are ignored.
    """
    experience_min: Optional[float] = _number_field("workExperienceMin", "experienceMin", "experience_min")
    experience_max: Optional[float] = _number_field("workExperienceMax", "experienceMax", "experience_max")
    experience_text: Optional[str] = Field(default=None, validation_alias=AliasChoices("experience", "experience_text"))
    salary_min: Optional[float] = _number_field("currentSalaryMin", "salaryMin", "salary_min")
    salary_max: Optional[float] = _number_field("currentSalaryMax", "salaryMax", "salary_max")
    salary_text: Optional[str] = Field(default=None, validation_alias=AliasChoices("salary", "salary_text"))

    include_skills: List[str] = Field(default_factory=list, validation_alias=AliasChoices("includeSkills", "include_skills"))
    key_skills: List[str] = Field(default_factory=list, validation_alias=AliasChoices("keySkills", "key_skills"))
    exclude_skills: List[str] = Field(default_factory=list, validation_alias=AliasChoices("excludeSkills", "exclude_skills"))
    candidate_locations: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("candidateLocations", "candidate_locations"))
    exclude_locations: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("excludeLocations", "exclude_locations"))
    candidate_designations: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("candidateDesignations", "candidate_designations"))
    education: List[str] = Field(default_factory=list)
    institute: Optional[str] = None
    notice_period: Optional[int] = Field(default=None, validation_alias=AliasChoices("noticePeriod", "notice_period"))
    diversity_preference: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("diversityPreference", "diversity_preference"))
    current_designation: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("currentDesignation", "current_designation"))
    current_company: Optional[str] = Field(default=None, validation_alias=AliasChoices("currentCompany", "current_company"))
    include_willing_to_relocate: bool = Field(
        default=False, validation_alias=AliasChoices("includeWillingToRelocate", "include_willing_to_relocate"))
    include_not_mentioned: bool = Field(
        default=False, validation_alias=AliasChoices("includeNotMentioned", "include_not_mentioned"))
    last_active: Optional[int] = Field(default=None, validation_alias=AliasChoices("lastActive", "last_active"))

    job_type: Optional[str] = Field(default=None, validation_alias=AliasChoices("jobType", "job_type"))
    department: Optional[str] = None
    industry: Optional[str] = None
    benefits: List[str] = Field(default_factory=list)

    @field_validator(
        "include_skills", "key_skills", "exclude_skills", "candidate_locations", "exclude_locations",
        "candidate_designations", "education", "diversity_preference", "benefits",
        mode="before",
    )
    @classmethod
    def _lenient_list(cls, value):
        return split_list(value)

    @field_validator("experience_text", "salary_text", "institute", "current_designation", "current_company",
                     "job_type", "department", "industry", mode="before")
    @classmethod
    def _lenient_text(cls, value):
        if value is None or isinstance(value, (dict, list)):
            return None
        text = str(value).strip()
        return text or None

    @field_validator("include_willing_to_relocate", "include_not_mentioned", mode="before")
    @classmethod
    def _lenient_bool(cls, value):
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)


class CriteriaOverrides(_LenientRecord):
    """Caller-supplied overrides (search form filters).

    Accepts the portal's ``filter*`` query parameter names as aliases and
    comma-separated strings for every list.
    """
    experience_min: Optional[float] = _number_field("filterExperienceMin", "experience_min")
    experience_max: Optional[float] = _number_field("filterExperienceMax", "experience_max")
    salary_min: Optional[float] = _number_field("filterSalaryMin", "salary_min")
    salary_max: Optional[float] = _number_field("filterSalaryMax", "salary_max")
    include_skills: List[str] = Field(default_factory=list, validation_alias=AliasChoices("filterSkillsInclude", "include_skills"))
    exclude_skills: List[str] = Field(default_factory=list, validation_alias=AliasChoices("filterSkillsExclude", "exclude_skills"))
    include_locations: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("filterLocationInclude", "include_locations"))
    exclude_locations: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("filterLocationExclude", "exclude_locations"))
    designations: List[str] = Field(default_factory=list, validation_alias=AliasChoices("filterDesignations", "designations"))
    notice_period: Optional[int] = Field(default=None, validation_alias=AliasChoices("filterNoticePeriod", "notice_period"))
    last_active: Optional[int] = Field(default=None, validation_alias=AliasChoices("filterLastActive", "last_active"))
    search: Optional[str] = Field(default=None, validation_alias=AliasChoices("search", "filterKeyword"))
    include_willing_to_relocate: Optional[bool] = None
    include_not_mentioned: Optional[bool] = None

    @field_validator("include_skills", "exclude_skills", "include_locations", "exclude_locations", "designations",
                     mode="before")
    @classmethod
    def _lenient_list(cls, value):
        return split_list(value)

    @field_validator("search", mode="before")
    @classmethod
    def _blank_search(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None
