from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String, Text, JSON
from sqlalchemy.orm import relationship

from .base import Base


class ProgramRequirement(Base):
    __tablename__ = "program_requirements"

    id = Column(Integer, primary_key=True)
    program_id = Column(String(64), ForeignKey("programs.id"), index=True, nullable=False)

    # Academic
    accepted_education_levels = Column(JSON)  # list of EducationLevel values
    minimum_gpa = Column(Numeric(5, 2))
    grading_system = Column(String(32))

    # Documents
    required_documents = Column(JSON)  # list of DocumentType values

    # Test minimums
    toefl_minimum = Column(Integer)
    ielts_minimum = Column(Numeric(3, 1))
    duolingo_minimum = Column(Integer)
    pte_minimum = Column(Integer)
    sat_minimum = Column(Integer)
    act_minimum = Column(Integer)
    gre_minimum = Column(Integer)
    gmat_minimum = Column(Integer)

    # Experience / age
    work_experience_required = Column(Boolean, default=False, nullable=False)
    minimum_work_experience_years = Column(Integer)
    age_requirement = Column(JSON)  # {"min": int, "max": int}
    additional_requirements = Column(Text)

    # Institutional requirements
    accepted_institutions = Column(JSON)
    accepted_courses = Column(JSON)
    accepted_funding_types = Column(JSON)
    require_completion_date = Column(Boolean, default=False, nullable=False)
    minimum_study_duration_months = Column(Integer)

    program = relationship("Program", back_populates="program_requirements")
