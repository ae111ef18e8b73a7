"""Use cases for direct messages and conversations."""

from .delete_message import delete_message
from .get_conversation import get_conversation
from .list_conversations import list_conversations
from .mark_read import (
    list_undelivered_messages,
    mark_message_delivered,
    mark_message_read,
)
from .send_message import send_message

__all__ = [
    "delete_message",
    "get_conversation",
    "list_conversations",
    "list_undelivered_messages",
    "mark_message_delivered",
    "mark_message_read",
    "send_message",
]
