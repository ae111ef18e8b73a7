"""Realtime presence, socket registries and publishers."""

from .manager import (
    RealtimeConnectionManager,
    message_connections,
    notification_connections,
)
from .presence import PresenceListener, PresenceTracker
from .publisher import (
    MessagePublisher,
    NotificationPublisher,
    RealtimeEventPublisher,
    message_events,
    message_publisher,
    notification_events,
    notification_publisher,
)
from .relay import LocalRelay, RealtimeRelay
from .serializers import serialize_message, serialize_notification

__all__ = [
    "LocalRelay",
    "MessagePublisher",
    "NotificationPublisher",
    "PresenceListener",
    "PresenceTracker",
    "RealtimeConnectionManager",
    "RealtimeEventPublisher",
    "RealtimeRelay",
    "message_connections",
    "message_events",
    "message_publisher",
    "notification_connections",
    "notification_events",
    "notification_publisher",
    "serialize_message",
    "serialize_notification",
]
