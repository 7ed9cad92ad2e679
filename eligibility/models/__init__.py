# Export all eligibility models for easy imports
from .base import Base
from .academic_profile import AcademicProfile
from .education_history import EducationHistoryEntry
from .document import UploadedDocument
from .test_score import TestScoreRecord
from .program_requirement import ProgramRequirement
from .program_eligibility import ProgramEligibility

__all__ = [
    "Base",
    "AcademicProfile",
    "EducationHistoryEntry",
    "UploadedDocument",
    "TestScoreRecord",
    "ProgramRequirement",
    "ProgramEligibility",
]
