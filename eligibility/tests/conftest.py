"""
Shared fixtures: an in-memory SQLite database and builders for engine inputs.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base
import models  # noqa: F401  (registers users/programs tables)
import eligibility.models  # noqa: F401
from models.models import Program
from eligibility.models import ProgramRequirement


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def make_program(db):
    """Create a program, optionally with a requirement record."""
    def _make(program_id: str, requirement: dict | None = None, is_active: bool = True) -> Program:
        program = Program(
            id=program_id,
            title=program_id.replace("-", " ").title(),
            slug=program_id,
            is_active=is_active,
        )
        db.add(program)
        if requirement is not None:
            db.add(ProgramRequirement(program_id=program_id, **requirement))
        db.flush()
        return program
    return _make


@pytest.fixture
def override_db(session_factory):
    """A get_session replacement bound to the test database."""
    def _get_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
    return _get_session

