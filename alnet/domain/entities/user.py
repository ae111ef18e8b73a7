"""Domain entity representing a platform user."""

from dataclasses import dataclass
from datetime import datetime

USER_ROLE_ADMIN = "admin"
USER_ROLE_STUDENT = "student"
USER_ROLE_ALUMNI = "alumni"
USER_ROLES = (USER_ROLE_ADMIN, USER_ROLE_STUDENT, USER_ROLE_ALUMNI)

USER_STATUS_ACTIVE = "active"
USER_STATUS_INACTIVE = "inactive"
USER_STATUS_SUSPENDED = "suspended"


@dataclass
class User:
    """Identity referenced by connections, messages and notifications."""

    id: int | None
    name: str
    email: str
    role: str = USER_ROLE_STUDENT
    status: str = USER_STATUS_ACTIVE
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == USER_STATUS_ACTIVE

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role.lower() == USER_ROLE_ADMIN


__all__ = [
    "User",
    "USER_ROLES",
    "USER_ROLE_ADMIN",
    "USER_ROLE_STUDENT",
    "USER_ROLE_ALUMNI",
    "USER_STATUS_ACTIVE",
    "USER_STATUS_INACTIVE",
    "USER_STATUS_SUSPENDED",
]
