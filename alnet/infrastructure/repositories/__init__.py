"""Repository implementations for infrastructure layer."""

from .connection_repository import ConnectionRepository
from .delivery_job_repository import DeliveryJobRepository
from .message_repository import MessageRepository
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "ConnectionRepository",
    "DeliveryJobRepository",
    "MessageRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "UserRepository",
]
