"""Domain entity representing a user role."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """Role aliases known to the platform."""

    SJFS_ADMIN = "SJFS_ADMIN"
    MERCHANT_ADMIN = "MERCHANT_ADMIN"
    MERCHANT_STAFF = "MERCHANT_STAFF"
    WAREHOUSE_STAFF = "WAREHOUSE_STAFF"

    @classmethod
    def parse(cls, value: str) -> "UserRole":
        """Return the role matching ``value`` ignoring case, or raise ``ValueError``."""

        normalized = value.strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown role: {value}") from None


ALL_ROLES: tuple[UserRole, ...] = tuple(UserRole)


@dataclass
class Role:
    """Core attributes describing a role that can be assigned to a user."""

    id: int
    name: str
    alias: str


__all__ = ["ALL_ROLES", "Role", "UserRole"]
