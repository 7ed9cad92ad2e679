"""
Requirement Checks

Individual weighted checks run by the eligibility engine.
Each check compares an already-loaded UserAcademicProfile against a
ProgramRequirementSpec and returns a CheckResult carrying the points earned,
the points available and the explanation lines for the met/missing lists.
No check touches the database.
"""

import math
import re
from datetime import date
from typing import Iterable, List, Optional

from .contracts import (
    CheckResult,
    EducationHistoryItem,
    ProgramRequirementSpec,
    TestScoreItem,
    UserAcademicProfile,
)
from .constants import (
    CHECK_WEIGHTS,
    EDUCATION_LEVEL_RANK,
    MARK_MET,
    MARK_MISSING,
    MARK_PARTIAL,
    TEST_CHECK_ORDER,
    TEST_PARTIAL_CREDIT,
    DocumentType,
    EducationLevel,
)


_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def check_education_level(
    profile: UserAcademicProfile,
    requirement: ProgramRequirementSpec
) -> CheckResult:
    """
    Education level check (30 points, all or nothing).

    A level satisfies the requirement when its rank is >= the rank of ANY
    accepted level. Profile levels are tried first, then graduated
    history entries.
    """
    weight = CHECK_WEIGHTS["education_level"]
    accepted = requirement.accepted_education_levels

    meets = _meets_education_level(profile, accepted)

    if meets:
        levels_str = ", ".join(level.value for level in accepted) if accepted else "Any"
        return CheckResult(
            check="education_level",
            points=weight,
            max_points=weight,
            meets=True,
            met=[f"{MARK_MET} Education level: {levels_str}"],
        )

    levels_str = " OR ".join(level.value for level in accepted) if accepted else "Not specified"
    return CheckResult(
        check="education_level",
        points=0,
        max_points=weight,
        meets=False,
        missing=[f"{MARK_MISSING} Required education: {levels_str}"],
    )


def check_gpa(
    profile: UserAcademicProfile,
    requirement: ProgramRequirementSpec
) -> Optional[CheckResult]:
    """
    Minimum GPA check (20 points). Returns None when no minimum is set.

    The comparison is purely numeric; grading systems are not converted.
    """
    if requirement.minimum_gpa is None:
        return None

    weight = CHECK_WEIGHTS["gpa"]
    minimum = requirement.minimum_gpa
    required_str = format_number(minimum)

    user_gpa = parse_number(profile.gpa)
    shown = profile.gpa

    if user_gpa is None:
        latest = _latest_graded_education(profile.education_history)
        if latest is not None:
            user_gpa = parse_number(latest.grade)
            if user_gpa is not None or not shown:
                shown = latest.grade

    if user_gpa is not None and user_gpa >= minimum:
        return CheckResult(
            check="gpa",
            points=weight,
            max_points=weight,
            meets=True,
            met=[f"{MARK_MET} GPA: {shown} (Required: {required_str})"],
        )

    return CheckResult(
        check="gpa",
        points=0,
        max_points=weight,
        meets=False,
        missing=[f"{MARK_MISSING} GPA: {shown or 'Not provided'} (Required: {required_str})"],
    )


def check_required_documents(
    profile: UserAcademicProfile,
    requirement: ProgramRequirementSpec
) -> CheckResult:
    """
    Document completeness check (25 points, proportional partial credit).
    """
    weight = CHECK_WEIGHTS["documents"]
    required = requirement.required_documents
    uploaded = {doc.document_type for doc in profile.documents}

    missing_docs = [doc for doc in required if doc not in uploaded]
    total_required = len(required)
    present_count = total_required - len(missing_docs)

    if not missing_docs:
        return CheckResult(
            check="documents",
            points=weight,
            max_points=weight,
            meets=True,
            met=[f"{MARK_MET} All required documents uploaded ({present_count}/{total_required})"],
        )

    points = (weight * present_count) // total_required
    missing = [f"{MARK_PARTIAL} Documents: {present_count}/{total_required} uploaded"]
    missing.extend(f"   - Missing: {format_document_type(doc)}" for doc in missing_docs)

    return CheckResult(
        check="documents",
        points=points,
        max_points=weight,
        meets=False,
        missing=missing,
    )


def check_test_scores(
    profile: UserAcademicProfile,
    requirement: ProgramRequirementSpec
) -> CheckResult:
    """
    Test score check (15 points).

    All required tests passed (or none required) earns full weight, some
    passed earns a flat TEST_PARTIAL_CREDIT, none passed earns nothing.
    """
    weight = CHECK_WEIGHTS["test_scores"]
    passed: List[str] = []
    failed: List[str] = []
    has_thresholds = False

    for test_type, field_name, label in TEST_CHECK_ORDER:
        minimum = getattr(requirement, field_name)
        if minimum is None:
            continue
        has_thresholds = True
        required_str = format_number(minimum)

        record = _first_score(profile.test_scores, test_type)
        if record is None or not record.overall_score:
            failed.append(f"{label}: Not provided (Required: {required_str})")
            continue

        score = parse_number(record.overall_score)
        if score is not None and score >= minimum:
            passed.append(f"{label}: {record.overall_score} (Required: {required_str})")
        else:
            failed.append(f"{label}: {record.overall_score} (Required: {required_str})")

    if not has_thresholds or not failed:
        return CheckResult(
            check="test_scores",
            points=weight,
            max_points=weight,
            meets=True,
            met=[f"{MARK_MET} {line}" for line in passed],
        )

    if passed:
        return CheckResult(
            check="test_scores",
            points=TEST_PARTIAL_CREDIT,
            max_points=weight,
            meets=False,
            met=[f"{MARK_MET} {line}" for line in passed],
            missing=[f"{MARK_PARTIAL} {line}" for line in failed],
        )

    if not profile.test_scores:
        missing = [f"{MARK_MISSING} No test scores uploaded"]
    else:
        missing = [f"{MARK_MISSING} {line}" for line in failed]

    return CheckResult(
        check="test_scores",
        points=0,
        max_points=weight,
        meets=False,
        missing=missing,
    )


def check_work_experience(
    profile: UserAcademicProfile,
    requirement: ProgramRequirementSpec
) -> Optional[CheckResult]:
    """
    Work experience check (10 points). Returns None when not required.

    Presence of a work experience letter is the whole signal; the years
    stated in it are not read.
    """
    if not requirement.work_experience_required:
        return None

    weight = CHECK_WEIGHTS["work_experience"]
    has_letter = any(
        doc.document_type == DocumentType.WORK_EXPERIENCE_LETTER
        for doc in profile.documents
    )

    if has_letter:
        return CheckResult(
            check="work_experience",
            points=weight,
            max_points=weight,
            meets=True,
            met=[f"{MARK_MET} Work experience provided"],
        )

    years = requirement.minimum_work_experience_years or 0
    return CheckResult(
        check="work_experience",
        points=0,
        max_points=weight,
        meets=False,
        missing=[f"{MARK_MISSING} Work experience letter required ({years} years)"],
    )


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def education_rank(level: Optional[EducationLevel]) -> int:
    """Rank of an education level; 0 for unknown/missing."""
    if level is None:
        return 0
    return EDUCATION_LEVEL_RANK.get(level, 0)


def _satisfies_any(level: Optional[EducationLevel], accepted: Iterable[EducationLevel]) -> bool:
    rank = education_rank(level)
    if rank == 0:
        return False
    return any(rank >= education_rank(accepted_level) for accepted_level in accepted)


def _meets_education_level(profile: UserAcademicProfile, accepted: List[EducationLevel]) -> bool:
    if not accepted:
        if profile.current_education_level or profile.highest_education_level:
            return True
        return any(entry.graduated for entry in profile.education_history)

    for level in (profile.current_education_level, profile.highest_education_level):
        if _satisfies_any(level, accepted):
            return True

    return any(
        entry.graduated and _satisfies_any(entry.education_level, accepted)
        for entry in profile.education_history
    )


def most_recent_first(history: Iterable[EducationHistoryItem]) -> List[EducationHistoryItem]:
    """Order history by end date descending; entries without an end date go last."""
    return sorted(
        history,
        key=lambda entry: entry.end_date or date.min,
        reverse=True,
    )


def _latest_graded_education(history: List[EducationHistoryItem]) -> Optional[EducationHistoryItem]:
    for entry in most_recent_first(history):
        if entry.graduated and entry.grade:
            return entry
    return None


def _first_score(scores: List[TestScoreItem], test_type) -> Optional[TestScoreItem]:
    for score in scores:
        if score.test_type == test_type:
            return score
    return None


def parse_number(text: Optional[str]) -> Optional[float]:
    """
    Parse the leading decimal number of a free-text value.

    "3.6" -> 3.6, "75%" -> 75.0, "3.6/4.0" -> 3.6, "A" -> None.
    """
    if text is None:
        return None
    match = _LEADING_NUMBER.match(str(text))
    if not match:
        return None
    value = float(match.group(0))
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def format_number(value: float) -> str:
    """80.0 -> '80', 6.5 -> '6.5'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_document_type(doc_type: DocumentType) -> str:
    """PASSPORT_COPY -> 'Passport Copy'."""
    return doc_type.value.replace("_", " ").lower().title()
