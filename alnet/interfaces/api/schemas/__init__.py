from .common import PaginationRead, UserSummaryRead
from .connection import (
    ConnectionCreate,
    ConnectionListRead,
    ConnectionRead,
    ConnectionRespond,
    ConnectionStatusRead,
    ConnectionWithPartnerRead,
)
from .health import HealthRead
from .message import (
    ConversationListRead,
    ConversationPageRead,
    ConversationRead,
    MessageCreate,
    MessageRead,
)
from .notification import (
    MarkAllReadResponse,
    NotificationListRead,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    PushTokenRegister,
    UnreadCountRead,
)

__all__ = [
    "ConnectionCreate",
    "ConnectionListRead",
    "ConnectionRead",
    "ConnectionRespond",
    "ConnectionStatusRead",
    "ConnectionWithPartnerRead",
    "ConversationListRead",
    "ConversationPageRead",
    "ConversationRead",
    "HealthRead",
    "MarkAllReadResponse",
    "MessageCreate",
    "MessageRead",
    "NotificationListRead",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "PaginationRead",
    "PushTokenRegister",
    "UnreadCountRead",
    "UserSummaryRead",
]
