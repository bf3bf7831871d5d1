"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src.database import Base, build_engine, get_db
from src.main import app
from src.models.user import User
from src.services.auth import get_password_hash

DEFAULT_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores the logged-in user's id and username."""

    def __init__(self, *args, user_id: int | None = None, username: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/task_monitor", "/task_monitor_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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


def register_and_login(client, username: str, password: str = DEFAULT_PASSWORD) -> AuthHeaders:
    """Register a user through the API, log in, and return bearer headers."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201

    response = client.post(
        "/api/v1/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    return AuthHeaders(
        {"Authorization": f"Bearer {token}"}, user_id=me.json()["id"], username=username
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "testuser")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register_and_login(client, "otheruser")


@pytest.fixture
def user(db):
    """A user created directly in the database, for service-level tests."""
    user = User(
        username="serviceuser",
        email="serviceuser@example.com",
        password_hash=get_password_hash(DEFAULT_PASSWORD),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
