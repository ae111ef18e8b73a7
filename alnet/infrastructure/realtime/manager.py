"""Websocket registry keyed by session id, backed by a presence tracker."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from fastapi import WebSocket

from .presence import PresenceTracker

logger = logging.getLogger(__name__)


class RealtimeConnectionManager:
    """Keep the live sockets of one realtime channel."""

    def __init__(self, name: str, presence: PresenceTracker | None = None) -> None:
        self.name = name
        self.presence = presence or PresenceTracker()
        self._sockets: dict[str, WebSocket] = {}

    def attach(self, websocket: WebSocket) -> str:
        """Remember an accepted ``websocket`` and return its new session id."""

        session_id = uuid4().hex
        self._sockets[session_id] = websocket
        return session_id

    def register(self, session_id: str, user_id: int) -> bool:
        return self.presence.register(session_id, user_id)

    def unregister(self, session_id: str) -> tuple[int | None, bool]:
        return self.presence.unregister(session_id)

    def detach(self, session_id: str) -> tuple[int | None, bool]:
        """Forget the socket and its presence entry."""

        self._sockets.pop(session_id, None)
        return self.presence.unregister(session_id)

    def is_online(self, user_id: int) -> bool:
        return self.presence.is_online(user_id)

    async def send_to_session(self, session_id: str, message: dict[str, Any]) -> bool:
        websocket = self._sockets.get(session_id)
        if websocket is None:
            return False
        try:
            await websocket.send_json(message)
        except Exception:  # pragma: no cover - socket closed underneath us
            logger.debug("Dropping dead %s session %s", self.name, session_id)
            self.detach(session_id)
            return False
        return True

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every session of ``user_id``; return how many got it."""

        delivered = 0
        for session_id in self.presence.sessions_for(user_id):
            if await self.send_to_session(session_id, message):
                delivered += 1
        return delivered

    async def broadcast(
        self, message: dict[str, Any], *, exclude_session: str | None = None
    ) -> int:
        delivered = 0
        for session_id in list(self._sockets):
            if session_id == exclude_session:
                continue
            if self.presence.user_for(session_id) is None:
                continue
            if await self.send_to_session(session_id, message):
                delivered += 1
        return delivered

    def reset(self) -> None:
        self._sockets.clear()
        self.presence.clear()


message_connections = RealtimeConnectionManager("messages")
notification_connections = RealtimeConnectionManager("notifications")


__all__ = [
    "RealtimeConnectionManager",
    "message_connections",
    "notification_connections",
]
