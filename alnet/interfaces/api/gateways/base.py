"""Shared plumbing for the JSON websocket gateways."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from sqlalchemy.orm import Session, sessionmaker

from alnet.domain.entities import User
from alnet.domain.errors import DomainError, Unauthorized
from alnet.infrastructure.database import SessionLocal
from alnet.infrastructure.realtime import LocalRelay, RealtimeConnectionManager, RealtimeRelay
from alnet.interfaces.api.dependencies import resolve_user_from_token, websocket_token

logger = logging.getLogger(__name__)

POLICY_VIOLATION = 1008

Handler = Callable[[str, User, dict[str, Any]], Awaitable[dict[str, Any] | None]]


class RealtimeGateway:
    """Authenticate a socket, then route its ``{"type", "data", "ack"}`` frames.

    Handlers return the ack payload (or ``None`` for fire-and-forget events).
    Any exception raised by a handler is turned into ``{"error": ...}`` and
    the socket stays open.
    """

    channel = "realtime"

    def __init__(
        self,
        manager: RealtimeConnectionManager,
        *,
        relay: RealtimeRelay | None = None,
        session_factory: sessionmaker | Callable[[], Session] | None = None,
    ) -> None:
        self.manager = manager
        self.relay = relay or LocalRelay(manager)
        self._session_factory = session_factory
        self._handlers: dict[str, Handler] = {}

    def on(self, event: str, handler: Handler) -> None:
        self._handlers[event] = handler

    def session(self) -> Session:
        factory = self._session_factory or SessionLocal
        return factory()

    async def serve(self, websocket: WebSocket) -> None:
        user = self._authenticate(websocket)
        if user is None:
            await websocket.close(code=POLICY_VIOLATION)
            return

        await websocket.accept()
        session_id = self.manager.attach(websocket)
        logger.info("User %s connected to %s as %s", user.id, self.channel, session_id)
        try:
            await self.on_connect(session_id, user)
            while True:
                try:
                    frame = _decode_frame(await websocket.receive())
                except ValueError:
                    await self._send_ack(session_id, None, None, {"error": "Malformed frame"})
                    continue
                await self.dispatch(session_id, user, frame)
        except WebSocketDisconnect:
            pass
        finally:
            await self.on_disconnect(session_id, user)
            logger.info("User %s disconnected from %s (%s)", user.id, self.channel, session_id)

    async def dispatch(self, session_id: str, user: User, frame: Any) -> None:
        if not isinstance(frame, dict) or not isinstance(frame.get("type"), str):
            await self._send_ack(session_id, None, None, {"error": "Malformed frame"})
            return

        event = frame["type"]
        ack_id = frame.get("ack")
        if event == "ping":
            await self.manager.send_to_session(session_id, {"type": "pong", "ack": ack_id})
            return

        handler = self._handlers.get(event)
        if handler is None:
            await self._send_ack(session_id, event, ack_id, {"error": f"Unknown event '{event}'"})
            return

        data = frame.get("data")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            await self._send_ack(session_id, event, ack_id, {"error": "Event data must be an object"})
            return

        try:
            result = await handler(session_id, user, data)
        except ValidationError as exc:
            result = {"error": _validation_message(exc)}
        except DomainError as exc:
            result = {"error": str(exc)}
        except Exception as exc:
            logger.exception("Unhandled error in %s handler for %s", self.channel, event)
            result = {"error": str(exc) or "Internal error"}

        if result is not None:
            await self._send_ack(session_id, event, ack_id, result)

    async def on_connect(self, session_id: str, user: User) -> None:
        await self.manager.send_to_session(
            session_id,
            {"type": "connected", "data": {"userId": user.id, "sessionId": session_id}},
        )

    async def on_disconnect(self, session_id: str, user: User) -> None:
        self.manager.detach(session_id)

    def _authenticate(self, websocket: WebSocket) -> User | None:
        session = self.session()
        try:
            return resolve_user_from_token(websocket_token(websocket), session)
        except Unauthorized as exc:
            logger.warning("Rejected %s websocket handshake: %s", self.channel, exc)
            return None
        finally:
            session.close()

    async def _send_ack(
        self,
        session_id: str,
        event: str | None,
        ack_id: Any,
        data: dict[str, Any],
    ) -> None:
        await self.manager.send_to_session(
            session_id, {"type": "ack", "event": event, "ack": ack_id, "data": data}
        )


def _decode_frame(message: dict[str, Any]) -> Any:
    """Parse a raw ASGI websocket message; text and binary frames both carry JSON."""

    if message.get("type") == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    text = message.get("text")
    if text is None:
        payload = message.get("bytes")
        if payload is None:
            raise ValueError("Empty websocket frame")
        text = payload.decode("utf-8")
    return json.loads(text)


def _validation_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid payload"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


__all__ = ["Handler", "POLICY_VIOLATION", "RealtimeGateway"]
