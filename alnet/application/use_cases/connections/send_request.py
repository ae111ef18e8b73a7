"""Use case for requesting a connection with another user."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import Connection, ConnectionStatus
from alnet.domain.errors import Conflict, InvalidOperation
from alnet.domain.state_machines import CONNECTION_TRANSITIONS
from alnet.infrastructure.repositories import ConnectionRepository

from ..notifications import notify_connection_request, notify_safely
from ..participants import display_name, require_users


def send_connection_request(
    session: Session,
    *,
    requester_id: int,
    receiver_id: int,
    message: str | None = None,
) -> Connection:
    """Create a pending request; any existing row for the pair is a conflict."""

    if requester_id == receiver_id:
        raise InvalidOperation("Cannot send connection request to yourself")
    users = require_users(session, requester_id, receiver_id)

    repository = ConnectionRepository(session)
    if repository.find_between(requester_id, receiver_id) is not None:
        raise Conflict("Connection request already exists")

    status = CONNECTION_TRANSITIONS.ensure(None, ConnectionStatus.PENDING)
    saved = repository.create(
        Connection(
            id=None,
            requester_id=requester_id,
            receiver_id=receiver_id,
            status=status,
            message=(message or "").strip() or None,
        )
    )
    notify_safely(
        session,
        notify_connection_request,
        receiver_id=receiver_id,
        requester_id=requester_id,
        requester_name=display_name(users[requester_id]),
        connection_id=saved.id,
    )
    return saved
