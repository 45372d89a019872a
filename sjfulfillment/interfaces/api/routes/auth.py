"""Authentication endpoints."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from sjfulfillment.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
)
from sjfulfillment.config import get_settings
from sjfulfillment.infrastructure.database import get_db
from sjfulfillment.infrastructure.security import create_access_token, password_signature
from sjfulfillment.interfaces.api.schemas import Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a bearer token."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        logger.warning("Login attempt for inactive user %s", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    settings = get_settings()
    access_token = create_access_token(
        data={
            "sub": user.email,
            "role": user.role.alias,
            "pwd_sig": password_signature(user.password, user.is_active),
        },
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    record_login(db, user)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "role": user.role.alias,
    }
