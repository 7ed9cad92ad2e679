"""
Eligibility API Routes

Exposes the eligibility engine via REST API:
- GET  /api/eligibility/programs/{program_id}  (calculate + cache one program)
- GET  /api/eligibility/programs               (cached results with summary)
- POST /api/eligibility/recalculate            (one program or all programs)
"""

import logging
from typing import Optional

import jwt
from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_session
from utils.auth_utils import user_id_from_token
from utils.crud_user import get_user_by_id
from .logic.adapter import EligibilityRepository, requirement_to_dict
from .logic.runner import (
    calculate_all_programs_eligibility,
    calculate_program_eligibility,
    list_cached_eligibility,
    recalculate_program_eligibility,
    summarize,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/eligibility", tags=["eligibility"])


# =============================================================================
# REQUEST SCHEMAS / DEPENDENCIES
# =============================================================================

class RecalculateRequest(BaseModel):
    """Request body for the recalculation endpoint."""
    program_id: Optional[str] = Field(
        default=None,
        description="Recalculate a single program; omit to recalculate every active program",
    )


def get_current_user_id(authorization: Optional[str] = Header(default=None)) -> str:
    """Resolve the caller from the identity provider's bearer token."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")
    token = authorization.split(" ", 1)[1].strip()
    try:
        return user_id_from_token(token)
    except jwt.PyJWTError as e:
        logger.error(f"Token decode failed: {e}")
        raise HTTPException(status_code=401, detail="Unauthorized")


def _ensure_active(db: Session, user_id: str) -> None:
    user = get_user_by_id(db, user_id)
    if user is not None and not user.is_active:
        raise HTTPException(status_code=403, detail="Account disabled")


def _server_error(db: Session, message: str, e: Exception) -> JSONResponse:
    logger.error(f"{message}: {e}")
    db.rollback()
    return JSONResponse(status_code=500, content={"error": message})


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/programs/{program_id}", summary="Check eligibility for a program")
def check_program_eligibility(
    program_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_session),
):
    """
    Calculate the current user's eligibility for one program and store it.
    """
    try:
        _ensure_active(db, user_id)
        repo = EligibilityRepository(db)
        program = repo.get_program(program_id)
        if program is None:
            raise HTTPException(status_code=404, detail="Program not found")

        eligibility = calculate_program_eligibility(db, user_id, program_id)
        repo.upsert_eligibility_cache(user_id, program_id, eligibility)

        requirement = program.program_requirements[0] if program.program_requirements else None
        return {
            "program": program.to_summary(),
            "requirement": requirement_to_dict(requirement) if requirement else None,
            "eligibility": {
                "score": eligibility.eligibility_score,
                "is_eligible": eligibility.is_eligible,
                "met_requirements": eligibility.met_requirements,
                "missing_requirements": eligibility.missing_requirements,
                "recommendation_notes": eligibility.recommendation_notes,
            },
        }
    except HTTPException:
        raise
    except SQLAlchemyError as e:
        return _server_error(db, "Failed to check program eligibility", e)


@router.get("/programs", summary="List cached eligibility results")
def list_eligible_programs(
    min_score: int = Query(default=0, ge=0, le=100),
    only_eligible: bool = Query(default=False),
    recalculate: bool = Query(default=False),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_session),
):
    """
    Cached eligibility results for the current user, highest score first.

    **Query:**
    - `min_score`: only results scoring at least this much
    - `only_eligible`: only eligible results
    - `recalculate`: recalculate every active program first
    """
    try:
        _ensure_active(db, user_id)
        if recalculate:
            calculate_all_programs_eligibility(db, user_id)
            db.flush()

        results = list_cached_eligibility(
            db, user_id, min_score=min_score, only_eligible=only_eligible
        )
        return {
            "eligibility": [r.model_dump(mode="json") for r in results],
            "summary": summarize(results).model_dump(),
        }
    except HTTPException:
        raise
    except SQLAlchemyError as e:
        return _server_error(db, "Failed to fetch eligible programs", e)


@router.post("/recalculate", summary="Recalculate eligibility")
def recalculate_eligibility(
    request: RecalculateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_session),
):
    """
    Recalculate eligibility for one program (`program_id`) or for all
    active programs.
    """
    try:
        _ensure_active(db, user_id)
        if request.program_id:
            if EligibilityRepository(db).get_program(request.program_id) is None:
                raise HTTPException(status_code=404, detail="Program not found")
            cached = recalculate_program_eligibility(db, user_id, request.program_id)
            return cached.model_dump(mode="json")

        results = calculate_all_programs_eligibility(db, user_id)
        return {
            "message": "Eligibility recalculated for all programs",
            "count": len(results),
            "eligible": sum(1 for r in results if r.eligibility.is_eligible),
        }
    except HTTPException:
        raise
    except SQLAlchemyError as e:
        return _server_error(db, "Failed to recalculate eligibility", e)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Eligibility engine health check")
def health_check():
    """Check if eligibility engine is operational."""
    return {"status": "ok", "engine": "eligibility", "version": "1.0.0"}
