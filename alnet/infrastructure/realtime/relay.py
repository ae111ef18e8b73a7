"""Fan-out seam between publishers and the sockets that hold users.

Only :class:`LocalRelay` ships: it reaches sockets held by this process. A
deployment running several API instances needs a relay backed by a shared
pub/sub bus that forwards each call to every instance's local manager.
"""

from __future__ import annotations

from typing import Any, Protocol

from .manager import RealtimeConnectionManager


class RealtimeRelay(Protocol):
    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int: ...

    async def broadcast(self, message: dict[str, Any]) -> int: ...


class LocalRelay:
    """Deliver straight to the sockets registered in ``manager``."""

    def __init__(self, manager: RealtimeConnectionManager) -> None:
        self._manager = manager

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        return await self._manager.send_to_user(user_id, message)

    async def broadcast(self, message: dict[str, Any]) -> int:
        return await self._manager.broadcast(message)


__all__ = ["LocalRelay", "RealtimeRelay"]
