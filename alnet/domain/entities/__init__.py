"""Domain entities exposed by the application."""

from .connection import CONNECTION_STATUS_NONE, Connection, ConnectionStatus
from .conversation import Conversation
from .delivery_job import (
    DELIVERY_QUEUES,
    EMAIL_DELIVERY_QUEUE,
    JOB_STATUS_ACTIVE,
    JOB_STATUS_COMPLETED,
    JOB_STATUS_FAILED,
    JOB_STATUS_WAITING,
    NOTIFICATION_DELIVERY_QUEUE,
    DeliveryJob,
)
from .message import Message, MessageStatus
from .notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from .notification_preference import (
    DEFAULT_TYPE_PREFERENCES,
    DIGEST_FREQUENCIES,
    PUSH_PLATFORMS,
    NotificationPreference,
    default_type_preferences,
)
from .pagination import Page, normalize_pagination
from .user import (
    USER_ROLE_ADMIN,
    USER_ROLE_ALUMNI,
    USER_ROLE_STUDENT,
    USER_ROLES,
    USER_STATUS_ACTIVE,
    USER_STATUS_INACTIVE,
    USER_STATUS_SUSPENDED,
    User,
)

__all__ = [
    "CONNECTION_STATUS_NONE",
    "Connection",
    "ConnectionStatus",
    "Conversation",
    "DELIVERY_QUEUES",
    "EMAIL_DELIVERY_QUEUE",
    "NOTIFICATION_DELIVERY_QUEUE",
    "JOB_STATUS_ACTIVE",
    "JOB_STATUS_COMPLETED",
    "JOB_STATUS_FAILED",
    "JOB_STATUS_WAITING",
    "DeliveryJob",
    "Message",
    "MessageStatus",
    "Notification",
    "NotificationChannel",
    "NotificationPriority",
    "NotificationType",
    "DEFAULT_TYPE_PREFERENCES",
    "DIGEST_FREQUENCIES",
    "PUSH_PLATFORMS",
    "NotificationPreference",
    "default_type_preferences",
    "Page",
    "normalize_pagination",
    "User",
    "USER_ROLES",
    "USER_ROLE_ADMIN",
    "USER_ROLE_ALUMNI",
    "USER_ROLE_STUDENT",
    "USER_STATUS_ACTIVE",
    "USER_STATUS_INACTIVE",
    "USER_STATUS_SUSPENDED",
]
