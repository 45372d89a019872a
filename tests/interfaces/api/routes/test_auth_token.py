"""Tests for the authentication token endpoint."""

from __future__ import annotations

from sjfulfillment.domain.entities import UserRole
from sjfulfillment.infrastructure.repositories import UserRepository
from sjfulfillment.infrastructure.security import get_password_hash

DEFAULT_PASSWORD = "StrongPass123"

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def test_login_returns_bearer_token(client, make_user) -> None:
    user = make_user(UserRole.SJFS_ADMIN, email="admin@example.com")

    response = client.post(
        "/auth/token",
        data={"username": "Admin@Example.com", "password": DEFAULT_PASSWORD},
        headers=_FORM_HEADERS,
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "SJFS_ADMIN"
    assert payload["access_token"]

    inbox = client.get(
        "/notifications",
        headers={"Authorization": f"Bearer {payload['access_token']}"},
    )
    assert inbox.status_code == 200
    assert user.id is not None


def test_login_with_wrong_password(client, make_user) -> None:
    make_user(email="user@example.com")

    response = client.post(
        "/auth/token",
        data={"username": "user@example.com", "password": "nope"},
        headers=_FORM_HEADERS,
    )

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "message": "Incorrect email or password",
    }


def test_login_inactive_user(client, make_user) -> None:
    make_user(email="user@example.com", is_active=False)

    response = client.post(
        "/auth/token",
        data={"username": "user@example.com", "password": DEFAULT_PASSWORD},
        headers=_FORM_HEADERS,
    )

    assert response.status_code == 403


def test_password_change_revokes_token(client, auth_headers, db_session, make_user) -> None:
    user = make_user()
    headers = auth_headers(user)
    assert client.get("/notifications", headers=headers).status_code == 200

    user.password = get_password_hash("AnotherPass456")
    UserRepository(db_session).update(user)

    response = client.get("/notifications", headers=headers)
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_missing_and_invalid_tokens(client) -> None:
    assert client.get("/notifications").status_code == 401

    response = client.get(
        "/notifications", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
