"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Domain events that produce notifications."""

    CONNECTION_REQUEST = "CONNECTION_REQUEST"
    CONNECTION_ACCEPTED = "CONNECTION_ACCEPTED"
    CONNECTION_REJECTED = "CONNECTION_REJECTED"
    NEW_MESSAGE = "NEW_MESSAGE"
    MESSAGE_REPLY = "MESSAGE_REPLY"
    NEW_JOB_POSTING = "NEW_JOB_POSTING"
    JOB_APPLICATION_RECEIVED = "JOB_APPLICATION_RECEIVED"
    JOB_APPLICATION_STATUS = "JOB_APPLICATION_STATUS"
    EVENT_INVITATION = "EVENT_INVITATION"
    EVENT_REMINDER = "EVENT_REMINDER"
    EVENT_UPDATE = "EVENT_UPDATE"
    EVENT_CANCELLED = "EVENT_CANCELLED"
    SYSTEM_ANNOUNCEMENT = "SYSTEM_ANNOUNCEMENT"
    PROFILE_VIEWED = "PROFILE_VIEWED"
    PROFILE_INCOMPLETE = "PROFILE_INCOMPLETE"
    DONATION_RECEIVED = "DONATION_RECEIVED"
    DONATION_THANKYOU = "DONATION_THANKYOU"
    GENERAL = "GENERAL"


class NotificationChannel(str, Enum):
    IN_APP = "in_app"
    EMAIL = "email"
    PUSH = "push"


class NotificationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    type: NotificationType
    title: str
    message: str
    channel: NotificationChannel = NotificationChannel.IN_APP
    priority: NotificationPriority = NotificationPriority.NORMAL
    is_read: bool = False
    read_at: datetime | None = None
    action_url: str | None = None
    action_label: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    related_entity_id: str | None = None
    related_entity_type: str | None = None
    sender_id: int | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NotificationChannel",
    "NotificationPriority",
    "NotificationType",
]
