"""Error taxonomy shared by use cases and the HTTP layer."""

from __future__ import annotations


class ValidationError(ValueError):
    """Input is missing, malformed or contradictory."""


class NotFoundError(LookupError):
    """A referenced entity does not exist or is not visible to the caller."""


class AuthorizationError(PermissionError):
    """The caller is not authenticated or lacks the required role."""

    def __init__(self, message: str, *, authenticated: bool = True) -> None:
        super().__init__(message)
        # 401 when the caller could not be identified, 403 otherwise.
        self.authenticated = authenticated


class UnexpectedError(RuntimeError):
    """Persistence or network failure that the caller cannot fix."""


__all__ = [
    "AuthorizationError",
    "NotFoundError",
    "UnexpectedError",
    "ValidationError",
]
