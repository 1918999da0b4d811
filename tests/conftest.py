"""Shared test fixtures."""

import uuid

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from internship_tracker.applications.models import Application
from internship_tracker.audit.models import AuditLog
from internship_tracker.auth.models import User
from internship_tracker.contacts.models import Contact, ContactVote
from internship_tracker.database.base import Base
from internship_tracker.posts.models import InternshipPost
from internship_tracker.profiles.models import UserProfile
from internship_tracker.resumes.models import Resume

# Models must be imported so Base.metadata.create_all() sees all tables.
_ALL_MODELS = [Application, AuditLog, Contact, ContactVote, InternshipPost, UserProfile, Resume]


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for testing.

    Note: SQLite doesn't support all PostgreSQL features (JSONB, row locks),
    but works for service logic and the flush listeners.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(bind=engine)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _make_user(db_session, email: str) -> User:
    user = User(id=uuid.uuid4(), email=email, password_hash="$2b$12$fakehash")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def test_user(db_session):
    """Create a test user."""
    return _make_user(db_session, "test@example.com")


@pytest.fixture
def other_user(db_session):
    """A second user, for ownership and voting tests."""
    return _make_user(db_session, "other@example.com")


@pytest.fixture
def make_user(db_session):
    """Factory for additional users."""
    return lambda email: _make_user(db_session, email)
