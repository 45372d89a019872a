"""Tests for the user use cases."""

import pytest

from sjfulfillment.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    create_user,
    record_login,
)
from sjfulfillment.domain.entities import UserRole
from sjfulfillment.domain.errors import NotFoundError, ValidationError
from sjfulfillment.infrastructure.repositories import UserRepository


def test_create_and_authenticate_user(db_session, make_merchant) -> None:
    merchant = make_merchant()

    user = create_user(
        db_session,
        name=" Ada Obi ",
        role="merchant_admin",
        email="Ada@Example.com",
        password="Secret123",
        merchant_id=merchant.id,
    )

    assert user.email == "ada@example.com"
    assert user.name == "Ada Obi"
    assert user.has_role(UserRole.MERCHANT_ADMIN)

    authenticated, status = authenticate_user(db_session, "ada@example.com", "Secret123")
    assert status is AuthenticationStatus.SUCCESS
    assert authenticated.id == user.id

    _, status = authenticate_user(db_session, "ada@example.com", "wrong")
    assert status is AuthenticationStatus.INVALID_CREDENTIALS

    logged_in = record_login(db_session, user)
    assert logged_in.last_login is not None
    assert UserRepository(db_session).get_by_email(user.email).last_login is not None


def test_create_user_rejects_duplicates_and_bad_roles(db_session) -> None:
    create_user(
        db_session,
        name="Admin",
        role=UserRole.SJFS_ADMIN,
        email="admin@example.com",
        password="Secret123",
    )

    with pytest.raises(ValidationError):
        create_user(
            db_session,
            name="Again",
            role=UserRole.SJFS_ADMIN,
            email="ADMIN@example.com",
            password="Secret123",
        )
    with pytest.raises(ValidationError):
        create_user(
            db_session, name="X", role="CUSTOMER", email="x@example.com", password="p"
        )


def test_merchant_roles_need_a_merchant(db_session) -> None:
    with pytest.raises(ValidationError):
        create_user(
            db_session,
            name="Staff",
            role=UserRole.MERCHANT_STAFF,
            email="staff@example.com",
            password="Secret123",
        )
    with pytest.raises(NotFoundError):
        create_user(
            db_session,
            name="Staff",
            role=UserRole.MERCHANT_STAFF,
            email="staff@example.com",
            password="Secret123",
            merchant_id=404,
        )
