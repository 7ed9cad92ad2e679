from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class TestScoreRecord(Base):
    __tablename__ = "user_test_scores"
    __table_args__ = (
        UniqueConstraint("user_id", "test_type", name="uq_user_test_type"),
    )
    __test__ = False  # keep pytest from collecting this class

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), index=True, nullable=False)
    academic_profile_id = Column(Integer, ForeignKey("user_academic_profiles.id"), nullable=False)

    test_type = Column(String(16), nullable=False)
    overall_score = Column(String(16))  # stored as text, parsed by the engine
    test_date = Column(Date)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    academic_profile = relationship("AcademicProfile", back_populates="test_scores")
