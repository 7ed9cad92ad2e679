from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.orm import relationship
from db import Base


class Program(Base):
    __tablename__ = "programs"

    id = Column(String(64), primary_key=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True)
    tagline = Column(String(255))
    description = Column(Text)
    country = Column(String(100))
    tuition_fee = Column(String(100))
    duration = Column(String(100))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    program_requirements = relationship(
        "ProgramRequirement",
        back_populates="program",
        order_by="ProgramRequirement.id",
        cascade="all, delete-orphan",
    )

    def to_summary(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "tagline": self.tagline,
            "description": self.description,
            "country": self.country,
            "tuition_fee": self.tuition_fee,
            "duration": self.duration,
        }
