"""Use case for stamping the last successful login of a user."""

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import User
from sjfulfillment.infrastructure.repositories import UserRepository
from sjfulfillment.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def record_login(session: Session, user: User) -> User:
    """Store the login time on ``user`` and return the updated user."""

    updated = UserRepository(session).update(
        replace(user, last_login=now_in_app_timezone())
    )
    logger.info("User %s logged in", updated.id)
    return updated
