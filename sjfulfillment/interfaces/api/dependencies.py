"""FastAPI dependency utilities."""

from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import User, UserRole
from sjfulfillment.infrastructure.database import get_db
from sjfulfillment.infrastructure.repositories import UserRepository
from sjfulfillment.infrastructure.security import decode_access_token, password_signature
from sjfulfillment.infrastructure.webhooks import WebhookDeliveryQueue

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_exception()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_exception("User not found")

    # Changing the password or the active flag invalidates issued tokens.
    if signature_claim != password_signature(user.password, user.is_active):
        raise _credentials_exception()

    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )
    return current_user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Build a dependency that only lets users holding one of ``roles`` through."""

    def dependency(current_user: User = Depends(get_current_active_user)) -> User:
        if not current_user.has_any_role(roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return dependency


require_admin = require_roles(UserRole.SJFS_ADMIN)
require_merchant_admin = require_roles(UserRole.MERCHANT_ADMIN)


def get_webhook_queue(request: Request) -> WebhookDeliveryQueue:
    """Return the delivery queue created by the application lifespan."""

    return request.app.state.webhook_queue
