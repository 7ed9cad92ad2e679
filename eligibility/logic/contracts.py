"""
Data Contracts for the Eligibility Engine

Defines Pydantic models for the engine inputs (UserAcademicProfile,
ProgramRequirementSpec) and outputs (CheckResult, EligibilityResult).
These contracts are the typed boundary between the ORM rows and the checks:
loose JSON-ish fields are validated into enum lists here so the checks can
assume well-typed input.
"""

import json
import logging
import math
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DocumentType,
    EducationLevel,
    GradingSystem,
    TestType,
)

logger = logging.getLogger(__name__)


# =============================================================================
# BOUNDARY COERCION
# =============================================================================

def _coerce_enum(value: Any, enum_cls: Type[Enum]) -> Optional[Enum]:
    """Return the enum member for `value`, or None when blank/unknown."""
    if value is None or isinstance(value, enum_cls):
        return value
    text = str(value).strip().upper()
    if not text:
        return None
    try:
        return enum_cls(text)
    except ValueError:
        logger.warning(f"Ignoring unknown {enum_cls.__name__} value: {value!r}")
        return None


def _coerce_enum_list(value: Any, enum_cls: Type[Enum]) -> List[Enum]:
    """
    Validate a loosely-shaped list field into an ordered, de-duplicated
    list of enum members.

    Accepts None, a list/tuple/set, a JSON-encoded list or a comma-separated
    string. Unknown values are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = text.split(",")
        value = decoded if isinstance(decoded, list) else [decoded]
    elif not isinstance(value, (list, tuple, set)):
        value = [value]

    result: List[Enum] = []
    for item in value:
        member = _coerce_enum(item, enum_cls)
        if member is not None and member not in result:
            result.append(member)
    return result


def _coerce_threshold(value: Any) -> Optional[float]:
    """Numeric minimums: Decimal/str/int to float; zero, blank or garbage means unset."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        value = float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric minimum: {value!r}")
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number if number > 0 else None


_TRUE_STRINGS = {"true", "t", "yes", "y", "1", "on"}
_FALSE_STRINGS = {"false", "f", "no", "n", "0", "off", ""}


def _coerce_flag(value: Any) -> bool:
    """Boolean flags; strings are parsed ("false" is False), unknown strings are False."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text not in _FALSE_STRINGS:
            logger.warning(f"Ignoring unrecognised flag value: {value!r}")
        return False
    return bool(value)


def _age_bound(bound: Any) -> Optional[int]:
    if bound is None or bound == "":
        return None
    if isinstance(bound, bool):
        raise ValueError(bound)
    number = float(bound)
    if not number.is_integer():
        raise ValueError(bound)
    return int(number)


def _coerce_age_requirement(value: Any) -> Optional[Dict[str, Any]]:
    """
    Free-form JSON age bounds to {"min": int|None, "max": int|None}.

    Anything that is not an object of whole-number bounds is dropped with a
    warning.
    """
    if value is None or isinstance(value, AgeRequirement):
        return value
    try:
        if isinstance(value, str):
            if not value.strip():
                return None
            value = json.loads(value)
        if not isinstance(value, dict):
            raise ValueError(value)
        return {key: _age_bound(value.get(key)) for key in ("min", "max")}
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed age requirement: {value!r}")
        return None


def _coerce_str_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [str(value).strip()]


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class EducationHistoryItem(BaseModel):
    """One schooling/degree entry from the user's education history."""
    institution_name: Optional[str] = None
    country: Optional[str] = None
    education_level: Optional[EducationLevel] = None
    field_of_study: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    graduated: bool = False
    grade: Optional[str] = None
    grading_system: Optional[GradingSystem] = None

    @field_validator("education_level", mode="before")
    @classmethod
    def _education_level(cls, value):
        return _coerce_enum(value, EducationLevel)

    @field_validator("grading_system", mode="before")
    @classmethod
    def _grading_system(cls, value):
        return _coerce_enum(value, GradingSystem)

    class Config:
        from_attributes = True


class DocumentItem(BaseModel):
    """An uploaded credential. Only the type matters to the engine."""
    document_type: DocumentType
    is_verified: bool = False
    institution_name: Optional[str] = None
    course_name: Optional[str] = None
    start_date: Optional[date] = None
    completion_date: Optional[date] = None
    funding_type: Optional[str] = None

    class Config:
        from_attributes = True


class TestScoreItem(BaseModel):
    __test__ = False

    test_type: TestType
    overall_score: Optional[str] = None
    test_date: Optional[date] = None

    @field_validator("overall_score", mode="before")
    @classmethod
    def _overall_score(cls, value):
        if value is None:
            return None
        return str(value)

    class Config:
        from_attributes = True


class UserAcademicProfile(BaseModel):
    """
    Input contract for the engine: the user's academic profile with
    education history, documents and test scores already loaded.
    """
    user_id: str
    current_education_level: Optional[EducationLevel] = None
    highest_education_level: Optional[EducationLevel] = None
    gpa: Optional[str] = None
    grading_system: Optional[GradingSystem] = None
    field_of_study: Optional[str] = None

    education_history: List[EducationHistoryItem] = Field(default_factory=list)
    documents: List[DocumentItem] = Field(default_factory=list)
    test_scores: List[TestScoreItem] = Field(default_factory=list)

    @field_validator("current_education_level", "highest_education_level", mode="before")
    @classmethod
    def _education_levels(cls, value):
        return _coerce_enum(value, EducationLevel)

    @field_validator("grading_system", mode="before")
    @classmethod
    def _grading_system(cls, value):
        return _coerce_enum(value, GradingSystem)

    @field_validator("gpa", mode="before")
    @classmethod
    def _gpa(cls, value):
        if value is None:
            return None
        return str(value)

    class Config:
        from_attributes = True


class AgeRequirement(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None


class ProgramRequirementSpec(BaseModel):
    """
    Input contract for the engine: one program's admission requirements.
    """
    program_id: str
    accepted_education_levels: List[EducationLevel] = Field(default_factory=list)
    minimum_gpa: Optional[float] = None
    grading_system: Optional[GradingSystem] = None
    required_documents: List[DocumentType] = Field(default_factory=list)

    toefl_minimum: Optional[float] = None
    ielts_minimum: Optional[float] = None
    duolingo_minimum: Optional[float] = None
    pte_minimum: Optional[float] = None
    sat_minimum: Optional[float] = None
    act_minimum: Optional[float] = None
    gre_minimum: Optional[float] = None
    gmat_minimum: Optional[float] = None

    work_experience_required: bool = False
    minimum_work_experience_years: Optional[int] = None
    age_requirement: Optional[AgeRequirement] = None
    additional_requirements: Optional[str] = None

    # Institutional requirements (stored, not scored)
    accepted_institutions: List[str] = Field(default_factory=list)
    accepted_courses: List[str] = Field(default_factory=list)
    accepted_funding_types: List[str] = Field(default_factory=list)
    require_completion_date: bool = False
    minimum_study_duration_months: Optional[int] = None

    @field_validator("accepted_education_levels", mode="before")
    @classmethod
    def _accepted_levels(cls, value):
        return _coerce_enum_list(value, EducationLevel)

    @field_validator("required_documents", mode="before")
    @classmethod
    def _required_documents(cls, value):
        return _coerce_enum_list(value, DocumentType)

    @field_validator("grading_system", mode="before")
    @classmethod
    def _grading_system(cls, value):
        return _coerce_enum(value, GradingSystem)

    @field_validator(
        "minimum_gpa",
        "toefl_minimum",
        "ielts_minimum",
        "duolingo_minimum",
        "pte_minimum",
        "sat_minimum",
        "act_minimum",
        "gre_minimum",
        "gmat_minimum",
        mode="before",
    )
    @classmethod
    def _thresholds(cls, value):
        return _coerce_threshold(value)

    @field_validator("accepted_institutions", "accepted_courses", "accepted_funding_types", mode="before")
    @classmethod
    def _string_lists(cls, value):
        return _coerce_str_list(value)

    @field_validator("work_experience_required", "require_completion_date", mode="before")
    @classmethod
    def _flags(cls, value):
        return _coerce_flag(value)

    @field_validator("age_requirement", mode="before")
    @classmethod
    def _age_requirement(cls, value):
        return _coerce_age_requirement(value)

    class Config:
        from_attributes = True


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class CheckResult(BaseModel):
    """Outcome of one weighted requirement check."""
    check: str
    points: int = Field(ge=0)
    max_points: int = Field(ge=0)
    meets: bool
    met: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)


class EligibilityResult(BaseModel):
    """
    Output contract for the engine.
    """
    is_eligible: bool
    eligibility_score: int = Field(ge=0, le=100)
    met_requirements: List[str] = Field(default_factory=list)
    missing_requirements: List[str] = Field(default_factory=list)
    recommendation_notes: str = ""

    # Breakdown (not persisted)
    total_points: int = 0
    max_points: int = 0
    checks: List[CheckResult] = Field(default_factory=list)


class EligibilityRecord(BaseModel):
    """One entry of a bulk recalculation."""
    program: Dict[str, Any]
    eligibility: EligibilityResult


class CachedEligibility(BaseModel):
    """A stored eligibility row as read back from the cache table."""
    user_id: str
    program_id: str
    eligibility_score: int
    is_eligible: bool
    met_requirements: List[str] = Field(default_factory=list)
    missing_requirements: List[str] = Field(default_factory=list)
    recommendation_notes: Optional[str] = None
    last_calculated_at: datetime
    program: Optional[Dict[str, Any]] = None

    @field_validator("met_requirements", "missing_requirements", mode="before")
    @classmethod
    def _lists(cls, value):
        return value or []

    class Config:
        from_attributes = True


class EligibilitySummary(BaseModel):
    total: int = 0
    eligible: int = 0
    high_match: int = 0
    medium_match: int = 0
    low_match: int = 0
