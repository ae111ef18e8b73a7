"""JSON payloads pushed over the realtime channels."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from alnet.domain.entities import Message, Notification


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def serialize_message(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "senderId": message.sender_id,
        "receiverId": message.receiver_id,
        "content": message.content,
        "status": message.status.value,
        "readAt": _isoformat(message.read_at),
        "createdAt": _isoformat(message.created_at),
    }


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "userId": notification.user_id,
        "type": notification.type.value,
        "title": notification.title,
        "message": notification.message,
        "channel": notification.channel.value,
        "priority": notification.priority.value,
        "isRead": notification.is_read,
        "readAt": _isoformat(notification.read_at),
        "actionUrl": notification.action_url,
        "actionLabel": notification.action_label,
        "metadata": dict(notification.metadata or {}),
        "relatedEntityId": notification.related_entity_id,
        "relatedEntityType": notification.related_entity_type,
        "senderId": notification.sender_id,
        "expiresAt": _isoformat(notification.expires_at),
        "createdAt": _isoformat(notification.created_at),
    }


__all__ = ["serialize_message", "serialize_notification"]
