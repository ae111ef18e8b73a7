"""Use case describing the relationship between two users."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from alnet.domain.entities import CONNECTION_STATUS_NONE
from alnet.infrastructure.repositories import ConnectionRepository


@dataclass(frozen=True)
class ConnectionStatusView:
    """Status of the pair as seen by the user who asked."""

    status: str
    initiator: str | None = None
    connection_id: int | None = None

    def as_dict(self) -> dict[str, Any]:
        if self.initiator is None:
            return {"status": self.status}
        return {
            "status": self.status,
            "initiator": self.initiator,
            "connection_id": self.connection_id,
        }


def get_connection_status(
    session: Session, *, user_id: int, other_user_id: int
) -> ConnectionStatusView:
    connection = ConnectionRepository(session).find_between(user_id, other_user_id)
    if connection is None:
        return ConnectionStatusView(status=CONNECTION_STATUS_NONE)
    return ConnectionStatusView(
        status=connection.status.value,
        initiator="self" if connection.requester_id == user_id else "other",
        connection_id=connection.id,
    )
