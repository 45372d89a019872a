"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role, UserRole


@dataclass
class User:
    """Core attributes describing a platform user."""

    id: int | None
    role: Role
    merchant_id: int | None
    name: str
    email: str
    password: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        value = alias.value if isinstance(alias, UserRole) else alias
        return self.role.alias.upper() == value.upper()

    def has_any_role(self, aliases) -> bool:
        return any(self.has_role(alias) for alias in aliases)


__all__ = ["User"]
