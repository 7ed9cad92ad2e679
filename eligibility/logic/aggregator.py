"""
Score Aggregator

Runs the requirement checks and combines their points into a 0-100 score.
Only checks that apply to the requirement contribute to max points.
"""

from typing import List, Tuple

from .contracts import CheckResult, ProgramRequirementSpec, UserAcademicProfile
from .requirement_checks import (
    check_education_level,
    check_gpa,
    check_required_documents,
    check_test_scores,
    check_work_experience,
)


# Evaluation order is also the order of the met/missing lines
CHECKS = [
    check_education_level,
    check_gpa,
    check_required_documents,
    check_test_scores,
    check_work_experience,
]


def run_checks(
    profile: UserAcademicProfile,
    requirement: ProgramRequirementSpec
) -> List[CheckResult]:
    """
    Run every check in order, skipping the ones that do not apply.

    Args:
        profile: User's academic profile
        requirement: Program requirement record

    Returns:
        List of CheckResult for the applicable checks
    """
    results: List[CheckResult] = []
    for check in CHECKS:
        result = check(profile, requirement)
        if result is not None:
            results.append(result)
    return results


def compute_score(total_points: int, max_points: int) -> int:
    """round(100 * total / max), rounding halves up; 0 when nothing applies."""
    if max_points <= 0:
        return 0
    score = (200 * total_points + max_points) // (2 * max_points)
    return max(0, min(100, score))


def aggregate_checks(results: List[CheckResult]) -> Tuple[int, int, int]:
    """
    Sum check points.

    Returns:
        (score, total_points, max_points)
    """
    total_points = sum(result.points for result in results)
    max_points = sum(result.max_points for result in results)
    return compute_score(total_points, max_points), total_points, max_points
