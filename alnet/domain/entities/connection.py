"""Domain entity describing a relationship request between two users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ConnectionStatus(str, Enum):
    """Lifecycle states of a :class:`Connection`."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    BLOCKED = "blocked"


CONNECTION_STATUS_NONE = "none"


@dataclass
class Connection:
    """Directed request from ``requester_id`` to ``receiver_id``."""

    id: int | None
    requester_id: int
    receiver_id: int
    status: ConnectionStatus
    message: str | None = None
    created_at: datetime | None = None
    responded_at: datetime | None = None
    updated_at: datetime | None = None

    def involves(self, user_id: int) -> bool:
        return user_id in (self.requester_id, self.receiver_id)

    def partner_of(self, user_id: int) -> int:
        """Return the id of the other party from ``user_id``'s point of view."""

        return self.receiver_id if self.requester_id == user_id else self.requester_id


__all__ = ["Connection", "ConnectionStatus", "CONNECTION_STATUS_NONE"]
