"""Aggregate application use cases."""

from .connections import (
    block_user,
    get_connection_status,
    list_connections,
    list_pending_requests,
    remove_connection,
    respond_to_connection,
    send_connection_request,
)
from .messages import (
    delete_message,
    get_conversation,
    list_conversations,
    mark_message_delivered,
    mark_message_read,
    send_message,
)
from .notifications import create_bulk_notifications, create_notification
from .users import create_user

__all__ = [
    "block_user",
    "create_bulk_notifications",
    "create_notification",
    "create_user",
    "delete_message",
    "get_connection_status",
    "get_conversation",
    "list_connections",
    "list_conversations",
    "list_pending_requests",
    "mark_message_delivered",
    "mark_message_read",
    "remove_connection",
    "respond_to_connection",
    "send_connection_request",
    "send_message",
]
