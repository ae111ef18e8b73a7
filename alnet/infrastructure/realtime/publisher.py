"""Schedule realtime pushes from synchronous code paths.

Use cases run either inside the event loop (websocket handlers) or in the
threadpool FastAPI uses for sync endpoints. The publisher picks the right way
to reach the loop in both cases and drops the push when neither applies, for
example in the queue worker process.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any

from anyio import from_thread

from alnet.domain.entities import Message, Notification

from .manager import message_connections, notification_connections
from .relay import LocalRelay, RealtimeRelay
from .serializers import serialize_message, serialize_notification

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Dispatch ``{"type", "data"}`` events through a :class:`RealtimeRelay`."""

    def __init__(self, relay: RealtimeRelay) -> None:
        self._relay = relay

    def dispatch(self, user_id: int, *, event_type: str, payload: Any) -> None:
        """Schedule an ``event_type`` event for every session of ``user_id``."""

        if not user_id:
            return
        message = {"type": event_type, "data": copy.deepcopy(payload)}
        self._schedule(self._relay.send_to_user, user_id, message)

    def broadcast(self, *, event_type: str, payload: Any) -> None:
        message = {"type": event_type, "data": copy.deepcopy(payload)}
        self._schedule(self._relay.broadcast, message)

    def _schedule(self, func, *args: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(func, *args)
            except RuntimeError:
                logger.debug("No event loop reachable; dropping realtime event")
        else:
            loop.create_task(func(*args))


class NotificationPublisher:
    """Push notification rows and unread counters to joined sessions."""

    def __init__(self, events: RealtimeEventPublisher) -> None:
        self._events = events

    def dispatch(self, notification: Notification) -> None:
        self._events.dispatch(
            notification.user_id,
            event_type="notification",
            payload=serialize_notification(notification),
        )

    def dispatch_unread_count(self, user_id: int, count: int) -> None:
        self._events.dispatch(user_id, event_type="unreadCount", payload={"count": count})


class MessagePublisher:
    """Push message events to the sessions of the messages channel."""

    def __init__(self, events: RealtimeEventPublisher) -> None:
        self._events = events

    def dispatch_new(self, message: Message) -> None:
        self._events.dispatch(
            message.receiver_id,
            event_type="message:new",
            payload={"message": serialize_message(message), "from": message.sender_id},
        )

    def dispatch_read(self, message: Message, *, reader_id: int) -> None:
        self._events.dispatch(
            message.sender_id,
            event_type="message:read",
            payload={"messageId": message.id, "readBy": reader_id},
        )


message_events = RealtimeEventPublisher(LocalRelay(message_connections))
notification_events = RealtimeEventPublisher(LocalRelay(notification_connections))

message_publisher = MessagePublisher(message_events)
notification_publisher = NotificationPublisher(notification_events)


__all__ = [
    "MessagePublisher",
    "NotificationPublisher",
    "RealtimeEventPublisher",
    "message_events",
    "message_publisher",
    "notification_events",
    "notification_publisher",
]
