"""API endpoint tests for health and authentication."""

import pytest
from jose import jwt
from sqlalchemy.exc import IntegrityError, OperationalError

from src.api import auth as auth_api
from src.config import get_settings
from src.models.user import User
from src.services.auth import create_access_token, decode_access_token, verify_password

PASSWORD = "testpass123"


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client, db):
    """Registration creates exactly one user and issues no token."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": "newuser", "email": "newuser@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    assert response.json() == {"message": "User created successfully"}
    assert "token" not in response.json()
    assert db.query(User).count() == 1


def test_register_stores_only_password_hash(client, db):
    """The plaintext password is never stored."""
    client.post(
        "/api/v1/auth/register",
        json={"username": "hashme", "email": "hashme@example.com", "password": "s3cret-pass"},
    )
    user = db.query(User).filter(User.username == "hashme").one()
    assert user.password_hash != "s3cret-pass"
    assert "s3cret-pass" not in user.password_hash
    assert verify_password("s3cret-pass", user.password_hash)


def test_register_duplicate_username(client, auth_headers, db):
    """Same username with a different email is rejected."""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "username": auth_headers.username,
            "email": "fresh@example.com",
            "password": "password123",
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"
    assert db.query(User).count() == 1


def test_register_duplicate_email(client, auth_headers):
    """Same email with a different username is rejected."""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "username": "someoneelse",
            "email": f"{auth_headers.username}@example.com",
            "password": "password123",
        },
    )
    assert response.status_code == 400


def test_register_invalid_payload(client):
    """Missing or malformed fields fail validation."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": "", "email": "not-an-email", "password": "short"},
    )
    assert response.status_code == 422


def test_login(client, auth_headers):
    """Login returns a token and the username."""
    response = client.post(
        "/api/v1/auth/login",
        json={"username": auth_headers.username, "password": PASSWORD},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == auth_headers.username
    assert data["token_type"] == "bearer"

    payload = decode_access_token(data["token"])
    assert payload["sub"] == str(auth_headers.user_id)
    assert payload["username"] == auth_headers.username


def test_login_failures_are_indistinguishable(client, auth_headers):
    """Wrong password and unknown username produce the same response."""
    wrong_password = client.post(
        "/api/v1/auth/login", json={"username": auth_headers.username, "password": "wrongpass"}
    )
    unknown_user = client.post(
        "/api/v1/auth/login", json={"username": "nobody", "password": "wrongpass"}
    )
    assert wrong_password.status_code == 400
    assert unknown_user.status_code == 400
    assert wrong_password.json() == unknown_user.json()


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == auth_headers.user_id
    assert data["username"] == auth_headers.username
    assert "password_hash" not in data


def test_missing_token_is_unauthorized(client):
    """Protected endpoints require a bearer token."""
    for path in ("/api/v1/tasks", "/api/v1/stats", "/api/v1/auth/me"):
        response = client.get(path)
        assert response.status_code == 401


def test_garbage_token_is_forbidden(client):
    """An unverifiable token is rejected with 403."""
    response = client.get("/api/v1/tasks", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403


def test_token_signed_with_other_secret_is_forbidden(client, auth_headers):
    """A token with a bad signature is rejected even if the claims look right."""
    forged = jwt.encode(
        {"sub": str(auth_headers.user_id), "username": auth_headers.username},
        "some-other-secret",
        algorithm=get_settings().jwt_algorithm,
    )
    response = client.get("/api/v1/tasks", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 403


def test_token_for_unknown_user_is_forbidden(client):
    """A validly signed token for a user that does not exist is rejected."""
    token = create_access_token(999999, "ghost")
    response = client.get("/api/v1/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


@pytest.mark.parametrize("username", ["   ", "\t"])
def test_register_blank_username(client, db, username):
    """Whitespace-only usernames are rejected."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": "blank@example.com", "password": "password123"},
    )
    assert response.status_code == 422
    assert db.query(User).count() == 0


def test_register_strips_username(client, db):
    """Surrounding whitespace is trimmed, so a padded name collides with the plain one."""
    first = client.post(
        "/api/v1/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "password123"},
    )
    assert first.status_code == 201

    second = client.post(
        "/api/v1/auth/register",
        json={"username": " alice ", "email": "alice2@example.com", "password": "password123"},
    )
    assert second.status_code == 400
    assert db.query(User).one().username == "alice"


def test_login_strips_username(client, auth_headers):
    """Login trims the username the same way registration does."""
    response = client.post(
        "/api/v1/auth/login",
        json={"username": f"  {auth_headers.username} ", "password": PASSWORD},
    )
    assert response.status_code == 200
    assert response.json()["username"] == auth_headers.username


def test_register_race_on_unique_constraint(client, monkeypatch):
    """A concurrent registration caught at commit time is reported as a conflict."""

    def racing_create_user(*args, **kwargs):
        raise IntegrityError("INSERT INTO users", {}, Exception("duplicate key"))

    monkeypatch.setattr(auth_api, "create_user", racing_create_user)

    response = client.post(
        "/api/v1/auth/register",
        json={"username": "racer", "email": "racer@example.com", "password": "password123"},
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "User already exists"}


def test_register_store_failure(client, monkeypatch):
    """Unexpected database errors become a generic 500."""

    def broken_create_user(*args, **kwargs):
        raise OperationalError("INSERT INTO users", {}, Exception("connection refused"))

    monkeypatch.setattr(auth_api, "create_user", broken_create_user)

    response = client.post(
        "/api/v1/auth/register",
        json={"username": "unlucky", "email": "unlucky@example.com", "password": "password123"},
    )
    assert response.status_code == 500
    assert response.json() == {"detail": "Error creating user"}
