from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime
from db import Base

class User(Base):
    """Local mirror of an identity-provider account; `id` is the provider's subject id."""
    __tablename__ = "users"
    id = Column(String(64), primary_key=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    full_name = Column(String(255))
    role = Column(String(32), nullable=False, default="student")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)
