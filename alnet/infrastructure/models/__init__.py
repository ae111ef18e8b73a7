"""ORM models used by the application infrastructure."""

from .connection import ConnectionModel
from .delivery_job import DeliveryJobModel
from .message import MessageModel
from .notification import NotificationModel
from .notification_preference import NotificationPreferenceModel
from .user import UserModel

__all__ = [
    "ConnectionModel",
    "DeliveryJobModel",
    "MessageModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "UserModel",
]
