"""Realtime gateway streaming notifications to joined sessions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from alnet.application.use_cases.notifications import get_unread_count
from alnet.domain.entities import User
from alnet.domain.errors import InvalidOperation
from alnet.infrastructure.realtime import RealtimeConnectionManager, notification_connections

from .base import RealtimeGateway


class RoomFrame(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: int = Field(alias="userId", ge=1)


class NotificationsGateway(RealtimeGateway):
    """Sessions receive ``notification`` and ``unreadCount`` once they join."""

    channel = "notifications"

    def __init__(self, manager: RealtimeConnectionManager, **kwargs: Any) -> None:
        super().__init__(manager, **kwargs)
        self.on("join", self.handle_join)
        self.on("leave", self.handle_leave)

    async def handle_join(
        self, session_id: str, user: User, data: dict[str, Any]
    ) -> dict[str, Any]:
        frame = self._own_room(user, data)
        self.manager.register(session_id, frame.user_id)
        with self.session() as db:
            count = get_unread_count(db, user_id=user.id)
        await self.manager.send_to_session(
            session_id, {"type": "unreadCount", "data": {"count": count}}
        )
        return {"success": True, "message": "Joined notification room"}

    async def handle_leave(
        self, session_id: str, user: User, data: dict[str, Any]
    ) -> dict[str, Any]:
        self._own_room(user, data)
        self.manager.unregister(session_id)
        return {"success": True, "message": "Left notification room"}

    @staticmethod
    def _own_room(user: User, data: dict[str, Any]) -> RoomFrame:
        frame = RoomFrame.model_validate(data)
        if frame.user_id != user.id:
            raise InvalidOperation("Cannot join another user's notifications")
        return frame


notifications_gateway = NotificationsGateway(notification_connections)


__all__ = ["NotificationsGateway", "RoomFrame", "notifications_gateway"]
