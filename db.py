import os
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv
from contextlib import contextmanager

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./eligibility.db"

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    logger.warning("DATABASE_URL env var not set, falling back to local sqlite")
    DATABASE_URL = DEFAULT_DATABASE_URL

# Heroku/Neon style URLs
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

class Base(DeclarativeBase):
    pass

engine = create_engine(DATABASE_URL, future=True, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

def init_db():
    # import models so every table is registered on Base.metadata
    import models  # noqa: F401
    import eligibility.models  # noqa: F401
    Base.metadata.create_all(bind=engine)

@contextmanager
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()  # commit changes for Neon visibility
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_session():
    """Request-scoped session for FastAPI's Depends (plain generator dependency)."""
    with get_db() as db:
        yield db
