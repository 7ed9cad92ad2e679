"""
Classifier

Maps a final score onto the eligibility flag and one of three
recommendation bands:
- Eligible (>= 70)
- Partial match (50-69)
- Not eligible (< 50)
"""

from .constants import (
    ELIGIBILITY_THRESHOLD,
    PARTIAL_MATCH_THRESHOLD,
    RECOMMENDATION_NOTES,
    EligibilityBand,
)


def is_eligible(score: int) -> bool:
    return score >= ELIGIBILITY_THRESHOLD


def classify_score(score: int) -> EligibilityBand:
    """
    Classify a 0-100 score into a recommendation band.
    """
    if score >= ELIGIBILITY_THRESHOLD:
        return EligibilityBand.ELIGIBLE
    if score >= PARTIAL_MATCH_THRESHOLD:
        return EligibilityBand.PARTIAL
    return EligibilityBand.NOT_ELIGIBLE


def recommendation_for(score: int) -> str:
    return RECOMMENDATION_NOTES[classify_score(score)]
