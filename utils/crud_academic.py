from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import select
from eligibility.models import (
    AcademicProfile,
    EducationHistoryEntry,
    UploadedDocument,
    TestScoreRecord,
)

def get_academic_profile(db: Session, user_id: str) -> AcademicProfile | None:
    return db.execute(select(AcademicProfile).where(AcademicProfile.user_id == user_id)).scalar_one_or_none()

def get_or_create_academic_profile(db: Session, user_id: str) -> AcademicProfile:
    """Profiles are created lazily on the first relevant write."""
    profile = get_academic_profile(db, user_id)
    if profile is None:
        profile = AcademicProfile(user_id=user_id)
        db.add(profile)
        db.flush()
    return profile

def update_academic_profile(db: Session, user_id: str, **fields) -> AcademicProfile:
    profile = get_or_create_academic_profile(db, user_id)
    for field in [
        "current_education_level", "highest_education_level", "gpa",
        "grading_system", "field_of_study",
    ]:
        if field in fields:
            setattr(profile, field, fields[field])
    db.flush()
    return profile

def add_document(db: Session, user_id: str, *, document_type: str, **metadata) -> UploadedDocument:
    profile = get_or_create_academic_profile(db, user_id)
    doc = UploadedDocument(
        user_id=user_id,
        academic_profile=profile,
        document_type=document_type,
        **metadata,
    )
    db.add(doc)
    db.flush()
    return doc

def add_education_entry(
    db: Session,
    user_id: str,
    *,
    education_level: str,
    graduated: bool = False,
    grade: str | None = None,
    end_date: date | None = None,
    **details,
) -> EducationHistoryEntry:
    profile = get_or_create_academic_profile(db, user_id)
    entry = EducationHistoryEntry(
        user_id=user_id,
        academic_profile=profile,
        education_level=education_level,
        graduated=graduated,
        grade=grade,
        end_date=end_date,
        **details,
    )
    db.add(entry)
    db.flush()
    return entry

def set_test_score(
    db: Session,
    user_id: str,
    *,
    test_type: str,
    overall_score: str,
    test_date: date | None = None,
) -> TestScoreRecord:
    """One current record per (user, test type); a new submission replaces the old one."""
    profile = get_or_create_academic_profile(db, user_id)
    record = db.execute(
        select(TestScoreRecord).where(
            TestScoreRecord.user_id == user_id,
            TestScoreRecord.test_type == test_type,
        )
    ).scalar_one_or_none()
    if record is None:
        record = TestScoreRecord(user_id=user_id, academic_profile=profile, test_type=test_type)
        db.add(record)
    record.overall_score = str(overall_score)
    record.test_date = test_date
    db.flush()
    return record
