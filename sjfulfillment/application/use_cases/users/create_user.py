"""Use case for creating users."""

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import User, UserRole
from sjfulfillment.domain.errors import NotFoundError, ValidationError
from sjfulfillment.infrastructure.repositories import (
    MerchantRepository,
    RoleRepository,
    UserRepository,
)
from sjfulfillment.infrastructure.security import get_password_hash
from sjfulfillment.utils import now_in_app_timezone

MERCHANT_ROLES = frozenset({UserRole.MERCHANT_ADMIN, UserRole.MERCHANT_STAFF})


def create_user(
    session: Session,
    *,
    name: str,
    role: str | UserRole,
    email: str,
    password: str,
    merchant_id: int | None = None,
) -> User:
    """Create a new user ensuring unique email addresses.

    Merchant roles must belong to an existing merchant.
    """

    repository = UserRepository(session)
    normalized_email = email.strip().lower()
    if not normalized_email or "@" not in normalized_email:
        raise ValidationError("A valid email address is required")
    if repository.get_by_email(normalized_email):
        raise ValidationError("Email address is already registered")

    try:
        alias = role if isinstance(role, UserRole) else UserRole.parse(role)
    except ValueError as exc:
        raise ValidationError(str(exc)) from None

    if alias in MERCHANT_ROLES:
        if merchant_id is None:
            raise ValidationError(f"{alias.value} users must belong to a merchant")
        if MerchantRepository(session).get(merchant_id) is None:
            raise NotFoundError("Merchant not found")

    stored_role = RoleRepository(session).get_or_create(
        alias=alias.value, name=alias.value.replace("_", " ").title()
    )

    user = User(
        id=None,
        role=stored_role,
        merchant_id=merchant_id,
        name=name.strip(),
        email=normalized_email,
        password=get_password_hash(password),
        is_active=True,
        last_login=None,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
