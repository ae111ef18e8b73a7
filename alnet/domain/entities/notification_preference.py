"""Per-user notification settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from alnet.utils import parse_clock_time

from .notification import NotificationType

DIGEST_FREQUENCIES = ("daily", "weekly", "monthly")
PUSH_PLATFORMS = ("ios", "android", "web")

#: Every notification type a user can toggle, with its initial setting.
DEFAULT_TYPE_PREFERENCES: Mapping[NotificationType, bool] = MappingProxyType(
    {
        NotificationType.CONNECTION_REQUEST: True,
        NotificationType.CONNECTION_ACCEPTED: True,
        NotificationType.CONNECTION_REJECTED: True,
        NotificationType.NEW_MESSAGE: True,
        NotificationType.MESSAGE_REPLY: True,
        NotificationType.NEW_JOB_POSTING: True,
        NotificationType.JOB_APPLICATION_RECEIVED: True,
        NotificationType.JOB_APPLICATION_STATUS: True,
        NotificationType.EVENT_INVITATION: True,
        NotificationType.EVENT_REMINDER: True,
        NotificationType.EVENT_UPDATE: True,
        NotificationType.EVENT_CANCELLED: True,
        NotificationType.SYSTEM_ANNOUNCEMENT: True,
        NotificationType.PROFILE_VIEWED: True,
        NotificationType.PROFILE_INCOMPLETE: True,
        NotificationType.DONATION_RECEIVED: True,
        NotificationType.DONATION_THANKYOU: True,
        NotificationType.GENERAL: True,
    }
)


def default_type_preferences() -> dict[str, bool]:
    """Return a fresh, JSON friendly copy of :data:`DEFAULT_TYPE_PREFERENCES`."""

    return {notification_type.value: enabled for notification_type, enabled in DEFAULT_TYPE_PREFERENCES.items()}


@dataclass
class NotificationPreference:
    """Channel toggles, type filters and quiet hours for one user."""

    id: int | None
    user_id: int
    email_enabled: bool = True
    push_enabled: bool = True
    in_app_enabled: bool = True
    type_preferences: dict[str, bool] = field(default_factory=default_type_preferences)
    quiet_hours_enabled: bool = False
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None
    digest_enabled: bool = False
    digest_frequency: str = "daily"
    push_token: str | None = None
    push_platform: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def allows(self, notification_type: NotificationType | str) -> bool:
        """Return ``False`` only when the type was explicitly switched off."""

        key = getattr(notification_type, "value", notification_type)
        return self.type_preferences.get(key) is not False

    def in_quiet_hours(self, moment: datetime) -> bool:
        """Return ``True`` when ``moment``'s wall-clock time is inside the window.

        Windows where ``start > end`` wrap around midnight. The start bound is
        inclusive and the end bound exclusive.
        """

        if not self.quiet_hours_enabled:
            return False
        if not self.quiet_hours_start or not self.quiet_hours_end:
            return False
        start = parse_clock_time(self.quiet_hours_start)
        end = parse_clock_time(self.quiet_hours_end)
        current = moment.time().replace(second=0, microsecond=0)
        if start == end:
            return False
        if start < end:
            return start <= current < end
        return current >= start or current < end


__all__ = [
    "DEFAULT_TYPE_PREFERENCES",
    "DIGEST_FREQUENCIES",
    "PUSH_PLATFORMS",
    "NotificationPreference",
    "default_type_preferences",
]
