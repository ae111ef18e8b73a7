"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from alnet.domain.entities import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    channel: NotificationChannel
    priority: NotificationPriority
    is_read: bool
    read_at: datetime | None = None
    action_url: str | None = None
    action_label: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    related_entity_id: str | None = None
    related_entity_type: str | None = None
    sender_id: int | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationListRead(BaseModel):
    data: list[NotificationRead]
    total: int
    page: int
    total_pages: int
    unread_count: int


class UnreadCountRead(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    updated: int


class NotificationPreferenceRead(BaseModel):
    user_id: int
    email_enabled: bool
    push_enabled: bool
    in_app_enabled: bool
    type_preferences: dict[str, bool]
    quiet_hours_enabled: bool
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None
    digest_enabled: bool
    digest_frequency: str
    push_platform: str | None = None
    has_push_token: bool = False


class NotificationPreferenceUpdate(BaseModel):
    email_enabled: bool | None = None
    push_enabled: bool | None = None
    in_app_enabled: bool | None = None
    type_preferences: dict[NotificationType, bool] | None = None
    quiet_hours_enabled: bool | None = None
    quiet_hours_start: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    quiet_hours_end: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    digest_enabled: bool | None = None
    digest_frequency: Literal["daily", "weekly", "monthly"] | None = None

    model_config = ConfigDict(extra="forbid")


class PushTokenRegister(BaseModel):
    token: str = Field(..., min_length=1, max_length=4096)
    platform: Literal["ios", "android", "web"]


__all__ = [
    "MarkAllReadResponse",
    "NotificationListRead",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "PushTokenRegister",
    "UnreadCountRead",
]
