"""
Eligibility Engine Constants

Defines the education level ranking, check weights, thresholds and the
status markers / messages the engine writes into its explanation lists.
All values are deterministic.
"""

from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class EducationLevel(str, Enum):
    HIGH_SCHOOL = "HIGH_SCHOOL"
    CERTIFICATE = "CERTIFICATE"
    FOUNDATION = "FOUNDATION"
    DIPLOMA = "DIPLOMA"
    PROFESSIONAL = "PROFESSIONAL"
    UNDERGRADUATE = "UNDERGRADUATE"
    POSTGRADUATE_DIPLOMA = "POSTGRADUATE_DIPLOMA"
    MASTERS = "MASTERS"
    DOCTORATE = "DOCTORATE"


class DocumentType(str, Enum):
    # Educational
    WASSCE_RESULT = "WASSCE_RESULT"
    BECE_RESULT = "BECE_RESULT"
    JHS_TRANSCRIPT = "JHS_TRANSCRIPT"
    SHS_TRANSCRIPT = "SHS_TRANSCRIPT"
    UNIVERSITY_TRANSCRIPT = "UNIVERSITY_TRANSCRIPT"
    HIGH_SCHOOL_TRANSCRIPT = "HIGH_SCHOOL_TRANSCRIPT"
    BACHELORS_TRANSCRIPT = "BACHELORS_TRANSCRIPT"
    MASTERS_TRANSCRIPT = "MASTERS_TRANSCRIPT"
    DEGREE_CERTIFICATE = "DEGREE_CERTIFICATE"
    DIPLOMA_CERTIFICATE = "DIPLOMA_CERTIFICATE"
    FOUNDATION_CERTIFICATE = "FOUNDATION_CERTIFICATE"
    ACADEMIC_REFERENCE_LETTER = "ACADEMIC_REFERENCE_LETTER"
    # Identity
    PASSPORT_COPY = "PASSPORT_COPY"
    BIRTH_CERTIFICATE = "BIRTH_CERTIFICATE"
    NATIONAL_ID = "NATIONAL_ID"
    PASSPORT_PHOTO = "PASSPORT_PHOTO"
    # Test score reports
    TOEFL_SCORE = "TOEFL_SCORE"
    IELTS_SCORE = "IELTS_SCORE"
    DUOLINGO_SCORE = "DUOLINGO_SCORE"
    PTE_SCORE = "PTE_SCORE"
    SAT_SCORE = "SAT_SCORE"
    ACT_SCORE = "ACT_SCORE"
    GRE_SCORE = "GRE_SCORE"
    GMAT_SCORE = "GMAT_SCORE"
    # Application
    STATEMENT_OF_PURPOSE = "STATEMENT_OF_PURPOSE"
    PERSONAL_STATEMENT = "PERSONAL_STATEMENT"
    MOTIVATION_LETTER = "MOTIVATION_LETTER"
    CV_RESUME = "CV_RESUME"
    PORTFOLIO = "PORTFOLIO"
    RESEARCH_PROPOSAL = "RESEARCH_PROPOSAL"
    # Financial
    BANK_STATEMENT = "BANK_STATEMENT"
    SPONSOR_LETTER = "SPONSOR_LETTER"
    SCHOLARSHIP_LETTER = "SCHOLARSHIP_LETTER"
    FINANCIAL_GUARANTEE = "FINANCIAL_GUARANTEE"
    # Other
    MEDICAL_CERTIFICATE = "MEDICAL_CERTIFICATE"
    VACCINATION_RECORD = "VACCINATION_RECORD"
    POLICE_CLEARANCE = "POLICE_CLEARANCE"
    CHARACTER_REFERENCE = "CHARACTER_REFERENCE"
    WORK_EXPERIENCE_LETTER = "WORK_EXPERIENCE_LETTER"
    INTERNSHIP_CERTIFICATE = "INTERNSHIP_CERTIFICATE"
    EXTRACURRICULAR_CERTIFICATE = "EXTRACURRICULAR_CERTIFICATE"
    OTHER = "OTHER"


class TestType(str, Enum):
    __test__ = False  # not a pytest test class

    TOEFL = "TOEFL"
    IELTS = "IELTS"
    DUOLINGO = "DUOLINGO"
    PTE = "PTE"
    SAT = "SAT"
    ACT = "ACT"
    GRE = "GRE"
    GMAT = "GMAT"


class GradingSystem(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    GPA_4 = "GPA_4"
    GPA_5 = "GPA_5"
    CGPA_10 = "CGPA_10"
    WASSCE = "WASSCE"
    FIRST_CLASS = "FIRST_CLASS"


class EligibilityBand(str, Enum):
    """Recommendation bands for a final score."""
    ELIGIBLE = "eligible"
    PARTIAL = "partial"
    NOT_ELIGIBLE = "not_eligible"


# =============================================================================
# EDUCATION LEVEL RANKING
# =============================================================================

# Higher rank always satisfies a lower requirement. Ties are intentional.
EDUCATION_LEVEL_RANK: Dict[EducationLevel, int] = {
    EducationLevel.HIGH_SCHOOL: 1,
    EducationLevel.CERTIFICATE: 2,
    EducationLevel.FOUNDATION: 2,
    EducationLevel.DIPLOMA: 3,
    EducationLevel.PROFESSIONAL: 3,
    EducationLevel.UNDERGRADUATE: 4,
    EducationLevel.POSTGRADUATE_DIPLOMA: 5,
    EducationLevel.MASTERS: 6,
    EducationLevel.DOCTORATE: 7,
}

# =============================================================================
# CHECK WEIGHTS (points)
# =============================================================================

CHECK_WEIGHTS: Dict[str, int] = {
    "education_level": 30,
    "gpa": 20,
    "documents": 25,
    "test_scores": 15,
    "work_experience": 10,
}

# Flat credit when some, but not all, required tests are passed
TEST_PARTIAL_CREDIT = 8

# Fixed evaluation order and display labels for test thresholds
TEST_CHECK_ORDER: List[Tuple[TestType, str, str]] = [
    (TestType.TOEFL, "toefl_minimum", "TOEFL"),
    (TestType.IELTS, "ielts_minimum", "IELTS"),
    (TestType.DUOLINGO, "duolingo_minimum", "Duolingo"),
    (TestType.PTE, "pte_minimum", "PTE"),
    (TestType.SAT, "sat_minimum", "SAT"),
    (TestType.ACT, "act_minimum", "ACT"),
    (TestType.GRE, "gre_minimum", "GRE"),
    (TestType.GMAT, "gmat_minimum", "GMAT"),
]

# =============================================================================
# CLASSIFICATION THRESHOLDS
# =============================================================================

ELIGIBILITY_THRESHOLD = 70
PARTIAL_MATCH_THRESHOLD = 50

# Summary buckets for cached results
HIGH_MATCH_THRESHOLD = 80
MEDIUM_MATCH_THRESHOLD = 60

# =============================================================================
# STATUS MARKERS & MESSAGES
# =============================================================================

MARK_MET = "✅"
MARK_MISSING = "❌"
MARK_PARTIAL = "⚠️"

UNABLE_TO_FETCH_DATA = "Unable to fetch data"
INCOMPLETE_PROFILE_NOTE = "Please complete your profile and try again."

RECOMMENDATION_NOTES: Dict[EligibilityBand, str] = {
    EligibilityBand.ELIGIBLE: (
        "🎉 Congratulations! You meet the requirements for this program. "
        "You can proceed with your application."
    ),
    EligibilityBand.PARTIAL: (
        "⚠️ You partially meet the requirements. "
        "Please upload missing documents to improve your eligibility."
    ),
    EligibilityBand.NOT_ELIGIBLE: (
        "❌ You do not currently meet the minimum requirements. "
        "Please complete your profile and upload required documents."
    ),
}
