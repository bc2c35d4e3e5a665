"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so the environment has to be ready first.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.enums import Role  # noqa: E402
from src.services.user_store import UserStore  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

REGISTER_PAYLOAD = {
    "name": "Test",
    "email": "Test@Example.com",
    "password": "pass",
    "phone": "1234567890",
    "address": "123 Street",
    "DOB": "2000-01-01",
    "answer": "Football",
}


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client):
    """Register the default user and return the response body."""
    response = client.post("/api/v1/auth/register", json=REGISTER_PAYLOAD)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(client, registered_user):
    """Log in the default user and return headers carrying the raw token."""
    response = client.post(
        "/api/v1/auth/login", json={"email": "test@example.com", "password": "pass"}
    )
    assert response.status_code == 200
    data = response.json()
    return AuthHeaders({"Authorization": data["token"]}, user_id=data["user"]["id"])


@pytest.fixture
def admin_headers(client, db, auth_headers):
    """Auth headers for the default user after promotion to admin."""
    user = UserStore(db).find_by_id(auth_headers.user_id)
    user.role = int(Role.ADMIN)
    db.commit()
    return auth_headers
