"""
Domain model for the authenticated caller, built from verified token claims.
There is no user table: identity and roles come from the token alone.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    EMPLOYEE = "employee"
    MANAGER = "manager"


@dataclass(frozen=True)
class Principal:
    subject: Optional[str]
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_any_role(self, *roles: UserRole) -> bool:
        """Return True when the caller holds at least one of *roles*."""
        return any(role.value in self.roles for role in roles)
