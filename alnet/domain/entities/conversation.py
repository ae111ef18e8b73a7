"""Derived view summarising the latest exchange with each partner."""

from __future__ import annotations

from dataclasses import dataclass

from .message import Message
from .user import User


@dataclass
class Conversation:
    """Most recent message exchanged with ``partner`` and its unread flag."""

    partner_id: int
    last_message: Message
    unread: bool
    partner: User | None = None


__all__ = ["Conversation"]
