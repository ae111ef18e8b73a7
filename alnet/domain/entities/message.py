"""Domain entity representing a direct message."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MessageStatus(str, Enum):
    """Delivery states of a message; they only move forward."""

    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"


@dataclass
class Message:
    """Message sent from one user to another."""

    id: int | None
    sender_id: int
    receiver_id: int
    content: str
    status: MessageStatus = MessageStatus.SENT
    read_at: datetime | None = None
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def partner_of(self, user_id: int) -> int:
        return self.receiver_id if self.sender_id == user_id else self.sender_id


__all__ = ["Message", "MessageStatus"]
