from datetime import datetime

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base


class ProgramEligibility(Base):
    """Cached eligibility result, one row per (user, program)."""
    __tablename__ = "program_eligibility"
    __table_args__ = (
        UniqueConstraint("user_id", "program_id", name="uq_program_eligibility_user_program"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), index=True, nullable=False)
    program_id = Column(String(64), ForeignKey("programs.id", ondelete="CASCADE"), nullable=False)

    eligibility_score = Column(Integer, nullable=False, default=0)
    is_eligible = Column(Boolean, nullable=False, default=False)
    met_requirements = Column(JSON)
    missing_requirements = Column(JSON)
    recommendation_notes = Column(Text)
    last_calculated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    program = relationship("Program")
