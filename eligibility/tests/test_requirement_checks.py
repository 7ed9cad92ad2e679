"""
Unit tests for the individual requirement checks.
"""

from datetime import date

import pytest

from eligibility.logic.contracts import ProgramRequirementSpec, UserAcademicProfile
from eligibility.logic.requirement_checks import (
    check_education_level,
    check_gpa,
    check_required_documents,
    check_test_scores,
    check_work_experience,
    education_rank,
    format_document_type,
    format_number,
    parse_number,
)
from eligibility.logic.constants import EducationLevel, DocumentType
from eligibility.tests.builders import docs, profile_data, requirement_data


def _profile(**kw) -> UserAcademicProfile:
    return UserAcademicProfile(**profile_data(**kw))


def _requirement(**kw) -> ProgramRequirementSpec:
    return ProgramRequirementSpec(**requirement_data(**kw))


# =============================================================================
# EDUCATION LEVEL
# =============================================================================

def test_education_rank_ties_and_order():
    assert education_rank(EducationLevel.CERTIFICATE) == education_rank(EducationLevel.FOUNDATION) == 2
    assert education_rank(EducationLevel.DIPLOMA) == education_rank(EducationLevel.PROFESSIONAL) == 3
    assert education_rank(EducationLevel.HIGH_SCHOOL) < education_rank(EducationLevel.UNDERGRADUATE)
    assert education_rank(EducationLevel.MASTERS) < education_rank(EducationLevel.DOCTORATE)
    assert education_rank(None) == 0


def test_higher_level_satisfies_lower_requirement():
    result = check_education_level(
        _profile(highest_education_level="DOCTORATE"),
        _requirement(accepted_education_levels=["UNDERGRADUATE"]),
    )
    assert result.meets is True
    assert result.points == 30
    assert result.met == ["✅ Education level: UNDERGRADUATE"]


def test_lower_level_fails_with_or_list():
    result = check_education_level(
        _profile(current_education_level="HIGH_SCHOOL"),
        _requirement(accepted_education_levels=["MASTERS", "POSTGRADUATE_DIPLOMA"]),
    )
    assert result.meets is False
    assert result.points == 0
    assert result.max_points == 30
    assert result.missing == ["❌ Required education: MASTERS OR POSTGRADUATE_DIPLOMA"]


def test_any_accepted_level_is_enough():
    # Rank 3 meets the DIPLOMA option even though MASTERS is also listed
    result = check_education_level(
        _profile(highest_education_level="PROFESSIONAL"),
        _requirement(accepted_education_levels=["MASTERS", "DIPLOMA"]),
    )
    assert result.meets is True


def test_falls_back_to_graduated_history():
    profile = _profile(
        current_education_level="HIGH_SCHOOL",
        education_history=[
            {"education_level": "MASTERS", "graduated": False},
            {"education_level": "UNDERGRADUATE", "graduated": True},
        ],
    )
    result = check_education_level(profile, _requirement(accepted_education_levels=["UNDERGRADUATE"]))
    assert result.meets is True


def test_ungraduated_history_does_not_count():
    profile = _profile(education_history=[{"education_level": "MASTERS", "graduated": False}])
    result = check_education_level(profile, _requirement(accepted_education_levels=["UNDERGRADUATE"]))
    assert result.meets is False


def test_no_accepted_levels_needs_any_education():
    requirement = _requirement(accepted_education_levels=[])

    assert check_education_level(_profile(), requirement).meets is False
    assert check_education_level(_profile(current_education_level="DIPLOMA"), requirement).meets is True

    with_history = _profile(education_history=[{"education_level": "HIGH_SCHOOL", "graduated": True}])
    result = check_education_level(with_history, requirement)
    assert result.meets is True
    assert result.met == ["✅ Education level: Any"]

    assert check_education_level(_profile(), requirement).missing == [
        "❌ Required education: Not specified"
    ]


# =============================================================================
# GPA
# =============================================================================

def test_gpa_not_applicable_without_minimum():
    assert check_gpa(_profile(gpa="3.9"), _requirement()) is None


def test_gpa_from_profile():
    result = check_gpa(_profile(gpa="3.6"), _requirement(minimum_gpa=3.0))
    assert result.meets is True
    assert result.points == 20
    assert result.met == ["✅ GPA: 3.6 (Required: 3)"]


def test_gpa_below_minimum():
    result = check_gpa(_profile(gpa="2.5"), _requirement(minimum_gpa=3.0))
    assert result.meets is False
    assert result.points == 0
    assert result.missing == ["❌ GPA: 2.5 (Required: 3)"]


def test_gpa_falls_back_to_most_recent_graduated_grade():
    profile = _profile(
        gpa="excellent",
        education_history=[
            {"education_level": "HIGH_SCHOOL", "graduated": True, "grade": "2.1", "end_date": date(2015, 6, 1)},
            {"education_level": "UNDERGRADUATE", "graduated": True, "grade": "3.4", "end_date": date(2020, 6, 1)},
            {"education_level": "MASTERS", "graduated": False, "grade": "3.9", "end_date": date(2023, 6, 1)},
        ],
    )
    result = check_gpa(profile, _requirement(minimum_gpa=3.0))
    assert result.meets is True
    assert result.met == ["✅ GPA: 3.4 (Required: 3)"]


def test_gpa_not_provided():
    result = check_gpa(_profile(), _requirement(minimum_gpa=2.5))
    assert result.meets is False
    assert result.missing == ["❌ GPA: Not provided (Required: 2.5)"]


def test_gpa_unparseable_everywhere_reports_profile_value():
    profile = _profile(gpa="first class", education_history=[{"graduated": True, "grade": "A"}])
    result = check_gpa(profile, _requirement(minimum_gpa=3.0))
    assert result.meets is False
    assert result.missing == ["❌ GPA: first class (Required: 3)"]


def test_gpa_compares_numerically_across_grading_systems():
    # No conversion: a percentage compared against a 4.0-scale minimum passes
    profile = _profile(gpa="75", grading_system="PERCENTAGE")
    result = check_gpa(profile, _requirement(minimum_gpa=3.0, grading_system="GPA_4"))
    assert result.meets is True


# =============================================================================
# DOCUMENTS
# =============================================================================

def test_all_documents_present():
    profile = _profile(documents=docs("PASSPORT_COPY", "CV_RESUME", "OTHER"))
    result = check_required_documents(profile, _requirement(required_documents=["PASSPORT_COPY", "CV_RESUME"]))
    assert result.meets is True
    assert result.points == 25
    assert result.met == ["✅ All required documents uploaded (2/2)"]


def test_documents_partial_credit_is_floored():
    profile = _profile(documents=docs("PASSPORT_COPY", "CV_RESUME"))
    requirement = _requirement(
        required_documents=["PASSPORT_COPY", "CV_RESUME", "BANK_STATEMENT", "SPONSOR_LETTER"]
    )
    result = check_required_documents(profile, requirement)
    assert result.meets is False
    assert result.points == 12
    assert result.missing == [
        "⚠️ Documents: 2/4 uploaded",
        "   - Missing: Bank Statement",
        "   - Missing: Sponsor Letter",
    ]


def test_documents_one_of_three():
    profile = _profile(documents=docs("PASSPORT_COPY"))
    requirement = _requirement(required_documents=["PASSPORT_COPY", "CV_RESUME", "BANK_STATEMENT"])
    assert check_required_documents(profile, requirement).points == 8


def test_no_required_documents_is_fully_satisfied():
    result = check_required_documents(_profile(), _requirement(required_documents=[]))
    assert result.meets is True
    assert result.points == 25
    assert result.met == ["✅ All required documents uploaded (0/0)"]


# =============================================================================
# TEST SCORES
# =============================================================================

def test_no_thresholds_is_vacuously_met():
    result = check_test_scores(_profile(), _requirement())
    assert result.meets is True
    assert result.points == 15
    assert result.met == []
    assert result.missing == []


def test_all_thresholds_passed():
    profile = _profile(test_scores=[
        {"test_type": "TOEFL", "overall_score": "100"},
        {"test_type": "IELTS", "overall_score": "7.0"},
    ])
    result = check_test_scores(profile, _requirement(toefl_minimum=80, ielts_minimum=6.5))
    assert result.meets is True
    assert result.points == 15
    assert result.met == ["✅ TOEFL: 100 (Required: 80)", "✅ IELTS: 7.0 (Required: 6.5)"]


def test_some_thresholds_passed_earns_flat_partial_credit():
    profile = _profile(test_scores=[{"test_type": "TOEFL", "overall_score": "85"}])
    result = check_test_scores(profile, _requirement(toefl_minimum=80, ielts_minimum=6.5))
    assert result.meets is False
    assert result.points == 8
    assert result.met == ["✅ TOEFL: 85 (Required: 80)"]
    assert result.missing == ["⚠️ IELTS: Not provided (Required: 6.5)"]


def test_none_passed_without_any_records():
    result = check_test_scores(_profile(), _requirement(gre_minimum=310))
    assert result.meets is False
    assert result.points == 0
    assert result.missing == ["❌ No test scores uploaded"]


def test_none_passed_with_records_lists_failures():
    profile = _profile(test_scores=[
        {"test_type": "IELTS", "overall_score": "5.5"},
        {"test_type": "SAT", "overall_score": "1400"},
    ])
    result = check_test_scores(profile, _requirement(ielts_minimum=6.5, gmat_minimum=600))
    assert result.points == 0
    assert result.missing == [
        "❌ IELTS: 5.5 (Required: 6.5)",
        "❌ GMAT: Not provided (Required: 600)",
    ]


def test_unparseable_score_fails():
    profile = _profile(test_scores=[{"test_type": "DUOLINGO", "overall_score": "pending"}])
    result = check_test_scores(profile, _requirement(duolingo_minimum=110))
    assert result.points == 0
    assert result.missing == ["❌ Duolingo: pending (Required: 110)"]


def test_first_record_of_a_type_is_used():
    profile = _profile(test_scores=[
        {"test_type": "PTE", "overall_score": "50"},
        {"test_type": "PTE", "overall_score": "70"},
    ])
    result = check_test_scores(profile, _requirement(pte_minimum=58))
    assert result.meets is False


def test_zero_threshold_means_not_required():
    requirement = _requirement(toefl_minimum=0)
    assert requirement.toefl_minimum is None
    assert check_test_scores(_profile(), requirement).points == 15


# =============================================================================
# WORK EXPERIENCE
# =============================================================================

def test_work_experience_not_applicable():
    assert check_work_experience(_profile(), _requirement()) is None


def test_work_experience_letter_present():
    profile = _profile(documents=docs("WORK_EXPERIENCE_LETTER"))
    result = check_work_experience(
        profile, _requirement(work_experience_required=True, minimum_work_experience_years=5)
    )
    assert result.meets is True
    assert result.points == 10
    assert result.met == ["✅ Work experience provided"]


def test_work_experience_letter_missing():
    result = check_work_experience(
        _profile(documents=docs("CV_RESUME")),
        _requirement(work_experience_required=True, minimum_work_experience_years=2),
    )
    assert result.meets is False
    assert result.points == 0
    assert result.missing == ["❌ Work experience letter required (2 years)"]


# =============================================================================
# HELPERS
# =============================================================================

@pytest.mark.parametrize("text, expected", [
    ("3.6", 3.6),
    (" 75% ", 75.0),
    ("3.6/4.0", 3.6),
    (".5", 0.5),
    ("A", None),
    ("", None),
    (None, None),
])
def test_parse_number(text, expected):
    assert parse_number(text) == expected


def test_format_helpers():
    assert format_number(80.0) == "80"
    assert format_number(6.5) == "6.5"
    assert format_document_type(DocumentType.WORK_EXPERIENCE_LETTER) == "Work Experience Letter"
