"""Websocket gateways for the realtime channels."""

from .base import POLICY_VIOLATION, RealtimeGateway
from .messages import MessagesGateway, messages_gateway
from .notifications import NotificationsGateway, notifications_gateway

__all__ = [
    "MessagesGateway",
    "NotificationsGateway",
    "POLICY_VIOLATION",
    "RealtimeGateway",
    "messages_gateway",
    "notifications_gateway",
]
