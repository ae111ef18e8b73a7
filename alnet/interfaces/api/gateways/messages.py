"""Realtime gateway for direct messages and presence."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from alnet.application.use_cases.messages import (
    list_undelivered_messages,
    mark_message_delivered,
    mark_message_read,
    send_message,
)
from alnet.domain.entities import User
from alnet.infrastructure.realtime import (
    RealtimeConnectionManager,
    message_connections,
    serialize_message,
)

from .base import RealtimeGateway

logger = logging.getLogger(__name__)


class _Frame(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SendMessageFrame(_Frame):
    receiver_id: int = Field(alias="receiverId", ge=1)
    content: str


class TypingFrame(_Frame):
    receiver_id: int = Field(alias="receiverId", ge=1)
    is_typing: bool = Field(default=True, alias="isTyping")


class ReadFrame(_Frame):
    message_id: int = Field(alias="messageId", ge=1)


class MessagesGateway(RealtimeGateway):
    """Handle ``message:*`` events and broadcast online/offline transitions."""

    channel = "messages"

    def __init__(self, manager: RealtimeConnectionManager, **kwargs: Any) -> None:
        super().__init__(manager, **kwargs)
        self.on("message:send", self.handle_send)
        self.on("message:typing", self.handle_typing)
        self.on("message:read", self.handle_read)

    async def on_connect(self, session_id: str, user: User) -> None:
        came_online = self.manager.register(session_id, user.id)
        await super().on_connect(session_id, user)
        if came_online:
            await self.manager.broadcast(
                {"type": "user:online", "data": {"userId": user.id}},
                exclude_session=session_id,
            )
        await self._flush_undelivered(session_id, user)

    async def on_disconnect(self, session_id: str, user: User) -> None:
        user_id, went_offline = self.manager.detach(session_id)
        if went_offline and user_id is not None:
            await self.manager.broadcast({"type": "user:offline", "data": {"userId": user_id}})

    async def handle_send(
        self, session_id: str, user: User, data: dict[str, Any]
    ) -> dict[str, Any]:
        frame = SendMessageFrame.model_validate(data)
        with self.session() as db:
            message = send_message(
                db,
                sender_id=user.id,
                receiver_id=frame.receiver_id,
                content=frame.content,
            )
        delivered = await self.relay.send_to_user(
            message.receiver_id,
            {
                "type": "message:new",
                "data": {"message": serialize_message(message), "from": user.id},
            },
        )
        if delivered:
            with self.session() as db:
                message = mark_message_delivered(
                    db, message_id=message.id, receiver_id=message.receiver_id
                )
        return {"success": True, "message": serialize_message(message)}

    async def handle_typing(
        self, session_id: str, user: User, data: dict[str, Any]
    ) -> None:
        frame = TypingFrame.model_validate(data)
        await self.relay.send_to_user(
            frame.receiver_id,
            {
                "type": "message:typing",
                "data": {"userId": user.id, "isTyping": frame.is_typing},
            },
        )
        return None

    async def handle_read(
        self, session_id: str, user: User, data: dict[str, Any]
    ) -> dict[str, Any]:
        frame = ReadFrame.model_validate(data)
        with self.session() as db:
            message = mark_message_read(db, message_id=frame.message_id, reader_id=user.id)
        await self.relay.send_to_user(
            message.sender_id,
            {"type": "message:read", "data": {"messageId": message.id, "readBy": user.id}},
        )
        return {"success": True}

    async def _flush_undelivered(self, session_id: str, user: User) -> None:
        with self.session() as db:
            pending = list_undelivered_messages(db, receiver_id=user.id)
            for message in pending:
                sent = await self.manager.send_to_session(
                    session_id,
                    {
                        "type": "message:new",
                        "data": {
                            "message": serialize_message(message),
                            "from": message.sender_id,
                        },
                    },
                )
                if not sent:
                    break
                mark_message_delivered(db, message_id=message.id, receiver_id=user.id)
        if pending:
            logger.debug("Flushed %s pending messages to user %s", len(pending), user.id)


messages_gateway = MessagesGateway(message_connections)


__all__ = [
    "MessagesGateway",
    "ReadFrame",
    "SendMessageFrame",
    "TypingFrame",
    "messages_gateway",
]
