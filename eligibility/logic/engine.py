"""
Eligibility Engine

Main orchestrator that combines the requirement checks into a single
EligibilityResult. The engine is pure: it works on already-fetched
contracts and never reads or writes the database.
"""

from typing import List, Optional

from .contracts import (
    EligibilityResult,
    ProgramRequirementSpec,
    UserAcademicProfile,
)
from .aggregator import aggregate_checks, run_checks
from .classifier import is_eligible, recommendation_for
from .constants import INCOMPLETE_PROFILE_NOTE, UNABLE_TO_FETCH_DATA


class EligibilityEngine:
    """
    Scores a user's qualification against a program's requirements.

    Pipeline flow:
    1. Short-circuit when the profile or requirement is missing
    2. Requirement Checks - education, GPA, documents, tests, work experience
    3. Aggregation - points to a 0-100 score
    4. Classification - eligibility flag and recommendation band
    """

    def __init__(self):
        self.version = "1.0.0"

    def evaluate(
        self,
        profile: Optional[UserAcademicProfile],
        requirement: Optional[ProgramRequirementSpec]
    ) -> EligibilityResult:
        """
        Evaluate one (user, program) pair.

        Args:
            profile: User's academic profile, or None if the user has none
            requirement: Program requirement, or None if the program has none

        Returns:
            EligibilityResult
        """
        if profile is None or requirement is None:
            return unable_to_fetch_result()

        checks = run_checks(profile, requirement)
        score, total_points, max_points = aggregate_checks(checks)

        met: List[str] = []
        missing: List[str] = []
        for check in checks:
            met.extend(check.met)
            missing.extend(check.missing)

        return EligibilityResult(
            is_eligible=is_eligible(score),
            eligibility_score=score,
            met_requirements=met,
            missing_requirements=missing,
            recommendation_notes=recommendation_for(score),
            total_points=total_points,
            max_points=max_points,
            checks=checks,
        )

    def evaluate_from_dict(self, profile_data: dict, requirement_data: dict) -> EligibilityResult:
        """
        Evaluate from plain dictionaries.

        Convenience method for API integration and fixtures.
        """
        profile = UserAcademicProfile(**profile_data)
        requirement = ProgramRequirementSpec(**requirement_data)
        return self.evaluate(profile, requirement)


def unable_to_fetch_result() -> EligibilityResult:
    return EligibilityResult(
        is_eligible=False,
        eligibility_score=0,
        met_requirements=[],
        missing_requirements=[UNABLE_TO_FETCH_DATA],
        recommendation_notes=INCOMPLETE_PROFILE_NOTE,
    )


# Convenience function for simple usage
def evaluate_eligibility(
    profile: Optional[UserAcademicProfile],
    requirement: Optional[ProgramRequirementSpec]
) -> EligibilityResult:
    return EligibilityEngine().evaluate(profile, requirement)
