"""
Eligibility Logic Module

Provides the deterministic program eligibility engine and its database runner.
"""

from .contracts import (
    UserAcademicProfile,
    ProgramRequirementSpec,
    EducationHistoryItem,
    DocumentItem,
    TestScoreItem,
    CheckResult,
    EligibilityResult,
    EligibilityRecord,
    CachedEligibility,
    EligibilitySummary,
)
from .constants import (
    EducationLevel,
    DocumentType,
    TestType,
    GradingSystem,
    EligibilityBand,
)
from .engine import EligibilityEngine, evaluate_eligibility
from .runner import (
    calculate_program_eligibility,
    recalculate_program_eligibility,
    calculate_all_programs_eligibility,
    list_cached_eligibility,
)

__all__ = [
    # Main engine
    "EligibilityEngine",
    "evaluate_eligibility",

    # Runner
    "calculate_program_eligibility",
    "recalculate_program_eligibility",
    "calculate_all_programs_eligibility",
    "list_cached_eligibility",

    # Contracts
    "UserAcademicProfile",
    "ProgramRequirementSpec",
    "EducationHistoryItem",
    "DocumentItem",
    "TestScoreItem",
    "CheckResult",
    "EligibilityResult",
    "EligibilityRecord",
    "CachedEligibility",
    "EligibilitySummary",

    # Enums
    "EducationLevel",
    "DocumentType",
    "TestType",
    "GradingSystem",
    "EligibilityBand",
]
