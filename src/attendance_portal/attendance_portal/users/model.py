from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: staff or admin account.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    phone: str
    institute_code: str
    role: Role
    created_at: Optional[datetime] = None

    def to_public(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "instituteCode": self.institute_code or None,
        }


@dataclass(frozen=True)
class TokenClaims:
    """What a verified session token says about its bearer."""

    user_id: int
    email: str
    role: Role
    institute_code: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def scope(self) -> Optional[str]:
        """Institute filter for queries; None means unrestricted."""
        return None if self.is_admin else self.institute_code
