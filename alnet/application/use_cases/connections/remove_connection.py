"""Use case for removing a connection."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import ConnectionStatus
from alnet.domain.errors import InvalidOperation, NotFound
from alnet.infrastructure.repositories import ConnectionRepository


def remove_connection(session: Session, *, user_id: int, connection_id: int) -> None:
    """Delete the row so either party may send a fresh request later.

    Blocked rows stay in place; blocking is terminal.
    """

    repository = ConnectionRepository(session)
    connection = repository.get(connection_id)
    if connection is None:
        raise NotFound("Connection not found")
    if not connection.involves(user_id):
        raise InvalidOperation("Unauthorized")
    if connection.status is ConnectionStatus.BLOCKED:
        raise InvalidOperation("Blocked connections cannot be removed")
    repository.delete(connection_id)
