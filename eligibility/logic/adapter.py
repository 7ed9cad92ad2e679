"""
Data Adapter for the Eligibility Engine

Reads the academic profile, requirement and program tables and transforms
the rows into the typed engine contracts. Also owns the single write the
engine's callers need: the eligibility cache upsert.

- NO scoring logic
- Loose JSON list fields are validated into enums here, at the boundary
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from models.models import Program
from eligibility.models import (
    AcademicProfile,
    ProgramEligibility,
    ProgramRequirement,
)
from .constants import DocumentType, TestType
from .contracts import (
    CachedEligibility,
    DocumentItem,
    EducationHistoryItem,
    EligibilityResult,
    ProgramRequirementSpec,
    TestScoreItem,
    UserAcademicProfile,
)
from .requirement_checks import most_recent_first

logger = logging.getLogger(__name__)

_DOCUMENT_TYPES = {member.value for member in DocumentType}
_TEST_TYPES = {member.value for member in TestType}

_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class EligibilityRepository:
    """
    Data-access interface used by the eligibility runner.

    Every method runs against the caller's Session; errors from the
    database propagate unchanged.
    """

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_academic_profile(self, user_id: str) -> Optional[UserAcademicProfile]:
        """
        Fetch the user's academic profile with education history (most recent
        first), documents and test scores.
        """
        row = (
            self.db.query(AcademicProfile)
            .options(
                selectinload(AcademicProfile.education_history),
                selectinload(AcademicProfile.documents),
                selectinload(AcademicProfile.test_scores),
            )
            .filter(AcademicProfile.user_id == user_id)
            .populate_existing()
            .first()
        )
        if row is None:
            return None
        return profile_to_contract(row)

    def get_program(self, program_id: str) -> Optional[Program]:
        return self.db.query(Program).filter(Program.id == program_id).first()

    def get_program_requirement(self, program_id: str) -> Optional[ProgramRequirementSpec]:
        """First requirement record of the program, or None."""
        row = (
            self.db.query(ProgramRequirement)
            .filter(ProgramRequirement.program_id == program_id)
            .order_by(ProgramRequirement.id)
            .first()
        )
        if row is None:
            return None
        return requirement_to_contract(row)

    def get_active_programs(self) -> List[Program]:
        """Active programs with their requirement records loaded."""
        return (
            self.db.query(Program)
            .options(selectinload(Program.program_requirements))
            .filter(Program.is_active.is_(True))
            .order_by(Program.created_at, Program.id)
            .all()
        )

    def get_cached_eligibility(self, user_id: str, program_id: str) -> Optional[ProgramEligibility]:
        return (
            self.db.query(ProgramEligibility)
            .filter_by(user_id=user_id, program_id=program_id)
            .first()
        )

    def list_eligibility_cache(
        self,
        user_id: str,
        min_score: int = 0,
        only_eligible: bool = False
    ) -> List[CachedEligibility]:
        """
        Cached results for a user, highest score first.
        """
        query = (
            self.db.query(ProgramEligibility)
            .options(selectinload(ProgramEligibility.program))
            .filter(ProgramEligibility.user_id == user_id)
        )
        if min_score > 0:
            query = query.filter(ProgramEligibility.eligibility_score >= min_score)
        if only_eligible:
            query = query.filter(ProgramEligibility.is_eligible.is_(True))

        rows = query.order_by(
            ProgramEligibility.eligibility_score.desc(),
            ProgramEligibility.program_id,
        ).all()
        return [cache_row_to_contract(row) for row in rows]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def upsert_eligibility_cache(
        self,
        user_id: str,
        program_id: str,
        result: EligibilityResult
    ) -> ProgramEligibility:
        """
        Insert or overwrite the cache row for (user, program). Last write wins.

        Postgres and SQLite use a single INSERT ... ON CONFLICT DO UPDATE on
        the (user_id, program_id) unique key; other dialects insert inside a
        savepoint and fall back to an update when a concurrent writer got
        there first.
        """
        values = {
            "eligibility_score": result.eligibility_score,
            "is_eligible": result.is_eligible,
            "met_requirements": list(result.met_requirements),
            "missing_requirements": list(result.missing_requirements),
            "recommendation_notes": result.recommendation_notes,
            "last_calculated_at": datetime.utcnow(),
        }

        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(ProgramEligibility).values(user_id=user_id, program_id=program_id, **values)
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "program_id"],
                set_={key: stmt.excluded[key] for key in values},
            )
            self.db.execute(stmt)
        else:
            self._upsert_with_savepoint(user_id, program_id, values)

        return (
            self.db.query(ProgramEligibility)
            .filter_by(user_id=user_id, program_id=program_id)
            .populate_existing()
            .one()
        )

    def _upsert_with_savepoint(self, user_id: str, program_id: str, values: Dict[str, Any]) -> None:
        row = self.get_cached_eligibility(user_id, program_id)
        if row is None:
            try:
                with self.db.begin_nested():
                    self.db.add(ProgramEligibility(user_id=user_id, program_id=program_id, **values))
                return
            except IntegrityError:
                logger.info(f"Cache row for {user_id}/{program_id} created concurrently, updating")
                row = self.get_cached_eligibility(user_id, program_id)

        for key, value in values.items():
            setattr(row, key, value)
        self.db.flush()


# =============================================================================
# ROW -> CONTRACT TRANSFORMS
# =============================================================================

def profile_to_contract(row: AcademicProfile) -> UserAcademicProfile:
    history = [EducationHistoryItem.model_validate(entry) for entry in row.education_history]

    documents = []
    for doc in row.documents:
        if doc.document_type not in _DOCUMENT_TYPES:
            logger.warning(f"Skipping document {doc.id} with unknown type {doc.document_type!r}")
            continue
        documents.append(DocumentItem.model_validate(doc))

    test_scores = []
    for score in sorted(row.test_scores, key=lambda s: s.id or 0):
        if score.test_type not in _TEST_TYPES:
            logger.warning(f"Skipping test score {score.id} with unknown type {score.test_type!r}")
            continue
        test_scores.append(TestScoreItem.model_validate(score))

    return UserAcademicProfile(
        user_id=row.user_id,
        current_education_level=row.current_education_level,
        highest_education_level=row.highest_education_level,
        gpa=row.gpa,
        grading_system=row.grading_system,
        field_of_study=row.field_of_study,
        education_history=most_recent_first(history),
        documents=documents,
        test_scores=test_scores,
    )


def requirement_to_contract(row: ProgramRequirement) -> ProgramRequirementSpec:
    return ProgramRequirementSpec.model_validate(row)


def cache_row_to_contract(row: ProgramEligibility) -> CachedEligibility:
    return CachedEligibility(
        user_id=row.user_id,
        program_id=row.program_id,
        eligibility_score=row.eligibility_score,
        is_eligible=row.is_eligible,
        met_requirements=row.met_requirements,
        missing_requirements=row.missing_requirements,
        recommendation_notes=row.recommendation_notes,
        last_calculated_at=row.last_calculated_at,
        program=row.program.to_summary() if row.program else None,
    )


def requirement_to_dict(row: ProgramRequirement) -> Dict[str, Any]:
    """JSON-serializable view of a requirement record for API responses."""
    requirement = requirement_to_contract(row)
    data = requirement.model_dump(mode="json")
    data["id"] = row.id
    return data
