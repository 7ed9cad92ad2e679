from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from .base import Base


class AcademicProfile(Base):
    __tablename__ = "user_academic_profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), unique=True, index=True, nullable=False)

    current_education_level = Column(String(32))
    highest_education_level = Column(String(32))
    gpa = Column(String(32))  # free text as typed by the user
    grading_system = Column(String(32))
    field_of_study = Column(String(255))

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    education_history = relationship(
        "EducationHistoryEntry",
        back_populates="academic_profile",
        cascade="all, delete-orphan",
    )
    documents = relationship(
        "UploadedDocument",
        back_populates="academic_profile",
        cascade="all, delete-orphan",
    )
    test_scores = relationship(
        "TestScoreRecord",
        back_populates="academic_profile",
        cascade="all, delete-orphan",
    )
