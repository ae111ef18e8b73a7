"""Notification fan-out, inbox and preference use cases."""

from .cleanup import cleanup_old_notifications
from .create_bulk import create_bulk_notifications
from .create_notification import create_notification, delivery_deferred_until
from .inbox import (
    NotificationInbox,
    delete_notification,
    get_unread_count,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .preferences import (
    get_or_create_preferences,
    register_push_token,
    update_preferences,
)
from .triggers import (
    notify_connection_accepted,
    notify_connection_request,
    notify_event_reminder,
    notify_new_job_posting,
    notify_new_message,
    notify_safely,
    notify_system_announcement,
)

__all__ = [
    "NotificationInbox",
    "cleanup_old_notifications",
    "create_bulk_notifications",
    "create_notification",
    "delete_notification",
    "delivery_deferred_until",
    "get_or_create_preferences",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_connection_accepted",
    "notify_connection_request",
    "notify_event_reminder",
    "notify_new_job_posting",
    "notify_new_message",
    "notify_safely",
    "notify_system_announcement",
    "register_push_token",
    "update_preferences",
]
