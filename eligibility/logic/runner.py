"""
Engine Runner

Orchestrates the eligibility pipeline against the database:
1. Fetches profile + requirement via the repository
2. Runs the eligibility engine
3. Upserts the cache row (recalculation paths)

This is a pure orchestration layer - NO scoring, NO SQL.
"""

import logging
import time
from typing import List

from sqlalchemy.orm import Session

from .adapter import EligibilityRepository, cache_row_to_contract
from .constants import HIGH_MATCH_THRESHOLD, MEDIUM_MATCH_THRESHOLD
from .contracts import (
    CachedEligibility,
    EligibilityRecord,
    EligibilityResult,
    EligibilitySummary,
)
from .engine import EligibilityEngine

logger = logging.getLogger(__name__)


def calculate_program_eligibility(
    db: Session,
    user_id: str,
    program_id: str
) -> EligibilityResult:
    """
    Score one user against one program. Does not write to the cache.

    Args:
        db: Database session
        user_id: Identity-provider user id
        program_id: Program id

    Returns:
        EligibilityResult (the zero "Unable to fetch data" result when the
        profile or requirement record is missing)
    """
    repo = EligibilityRepository(db)
    profile = repo.get_academic_profile(user_id)
    requirement = repo.get_program_requirement(program_id)

    if profile is None:
        logger.info(f"ℹ️ No academic profile for user {user_id}")
    if requirement is None:
        logger.info(f"ℹ️ No requirement record for program {program_id}")

    return EligibilityEngine().evaluate(profile, requirement)


def recalculate_program_eligibility(
    db: Session,
    user_id: str,
    program_id: str
) -> CachedEligibility:
    """
    Score one user against one program and upsert the cache row.

    Returns:
        The stored cache row
    """
    repo = EligibilityRepository(db)
    result = calculate_program_eligibility(db, user_id, program_id)
    row = repo.upsert_eligibility_cache(user_id, program_id, result)
    logger.info(
        f"📊 Eligibility for user {user_id} / program {program_id}: "
        f"{result.eligibility_score} (eligible={result.is_eligible})"
    )
    return cache_row_to_contract(row)


def calculate_all_programs_eligibility(
    db: Session,
    user_id: str
) -> List[EligibilityRecord]:
    """
    Recalculate and cache eligibility for every active program that has at
    least one requirement record.

    Programs are processed sequentially in repository order; a database error
    aborts the whole batch.

    Args:
        db: Database session
        user_id: Identity-provider user id

    Returns:
        List of EligibilityRecord in program order (not sorted by score)
    """
    repo = EligibilityRepository(db)

    logger.info(f"🚀 Starting eligibility recalculation for user: {user_id}")
    start_time = time.perf_counter()

    programs = repo.get_active_programs()

    results: List[EligibilityRecord] = []
    for program in programs:
        if not program.program_requirements:
            continue

        eligibility = calculate_program_eligibility(db, user_id, program.id)
        repo.upsert_eligibility_cache(user_id, program.id, eligibility)

        logger.debug(f"Program {program.id}: score {eligibility.eligibility_score}")
        results.append(EligibilityRecord(program=program.to_summary(), eligibility=eligibility))

    processing_time = (time.perf_counter() - start_time) * 1000
    eligible_count = sum(1 for r in results if r.eligibility.is_eligible)
    logger.info(
        f"✅ Recalculated {len(results)} programs for user {user_id} "
        f"({eligible_count} eligible, {processing_time:.2f}ms)"
    )

    return results


def list_cached_eligibility(
    db: Session,
    user_id: str,
    min_score: int = 0,
    only_eligible: bool = False
) -> List[CachedEligibility]:
    """Cached results for a user, highest score first."""
    return EligibilityRepository(db).list_eligibility_cache(
        user_id, min_score=min_score, only_eligible=only_eligible
    )


def summarize(results: List[CachedEligibility]) -> EligibilitySummary:
    """
    Count cached results by match bucket.
    """
    return EligibilitySummary(
        total=len(results),
        eligible=sum(1 for r in results if r.is_eligible),
        high_match=sum(1 for r in results if r.eligibility_score >= HIGH_MATCH_THRESHOLD),
        medium_match=sum(
            1 for r in results
            if MEDIUM_MATCH_THRESHOLD <= r.eligibility_score < HIGH_MATCH_THRESHOLD
        ),
        low_match=sum(1 for r in results if r.eligibility_score < MEDIUM_MATCH_THRESHOLD),
    )

