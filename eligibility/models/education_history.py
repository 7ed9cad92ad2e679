from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base


class EducationHistoryEntry(Base):
    __tablename__ = "user_education_history"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), index=True, nullable=False)
    academic_profile_id = Column(Integer, ForeignKey("user_academic_profiles.id"), nullable=False)

    institution_name = Column(String(255))
    country = Column(String(100))
    education_level = Column(String(32))
    field_of_study = Column(String(255))
    start_date = Column(Date)
    end_date = Column(Date)
    graduated = Column(Boolean, default=False, nullable=False)
    grade = Column(String(32))
    grading_system = Column(String(32))

    academic_profile = relationship("AcademicProfile", back_populates="education_history")
