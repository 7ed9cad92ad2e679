from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base


class UploadedDocument(Base):
    __tablename__ = "user_documents"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), index=True, nullable=False)
    academic_profile_id = Column(Integer, ForeignKey("user_academic_profiles.id"), nullable=False)

    document_type = Column(String(64), nullable=False)
    file_name = Column(String(255))
    is_verified = Column(Boolean, default=False, nullable=False)

    # Institutional metadata (transcripts, certificates)
    institution_name = Column(String(255))
    course_name = Column(String(255))
    start_date = Column(Date)
    completion_date = Column(Date)
    funding_type = Column(String(64))

    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    academic_profile = relationship("AcademicProfile", back_populates="documents")
