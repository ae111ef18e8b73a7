"""Use cases driving the connection state machine."""

from .block_user import block_user
from .get_status import ConnectionStatusView, get_connection_status
from .list_connections import (
    ConnectionWithPartner,
    list_connections,
    list_pending_requests,
)
from .remove_connection import remove_connection
from .respond import respond_to_connection
from .send_request import send_connection_request

__all__ = [
    "ConnectionStatusView",
    "ConnectionWithPartner",
    "block_user",
    "get_connection_status",
    "list_connections",
    "list_pending_requests",
    "remove_connection",
    "respond_to_connection",
    "send_connection_request",
]
