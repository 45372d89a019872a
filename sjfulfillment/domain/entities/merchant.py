"""Domain entity representing a merchant (tenant)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Merchant:
    id: int | None
    business_name: str
    is_active: bool = True
    created_at: datetime | None = None


__all__ = ["Merchant"]
