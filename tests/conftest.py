"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read at import time; a signing secret is mandatory
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="daylog-uploads-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.models.category import Category  # noqa: E402, F401
from app.models.record import Record  # noqa: E402, F401
from app.models.user import User, UserAvatar  # noqa: E402, F401
from app.services.auth import AuthService  # noqa: E402


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


def _make_user(db_session: Session, email: str, password: str, user_name: str) -> dict:
    from app.services.jwt import get_jwt_service

    result = AuthService().register(db_session, email, password, user_name)
    token = get_jwt_service().create_token(user_id=result.user.id)
    return {
        "user_id": result.user.id,
        "email": email,
        "password": password,
        "user_name": user_name,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session):
    """Create a test user and return its data, token and auth headers."""
    return _make_user(db_session, "test@example.com", "password123", "Test User")


@pytest.fixture(name="other_user")
def other_user_fixture(db_session: Session):
    """A second user for ownership isolation checks."""
    return _make_user(db_session, "other@example.com", "password456", "Other User")
