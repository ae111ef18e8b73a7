"""Use case for accepting or rejecting a connection request."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import Connection, ConnectionStatus
from alnet.domain.errors import NotFound
from alnet.domain.state_machines import CONNECTION_TRANSITIONS
from alnet.infrastructure.repositories import ConnectionRepository, UserRepository
from alnet.utils import now_in_app_timezone

from ..notifications import notify_connection_accepted, notify_safely
from ..participants import display_name


def respond_to_connection(
    session: Session,
    *,
    connection_id: int,
    responder_id: int,
    accepted: bool,
) -> Connection:
    """Record the receiver's answer.

    Requests that are already accepted or rejected may be answered again;
    blocked connections may not.
    """

    repository = ConnectionRepository(session)
    connection = repository.get(connection_id)
    if connection is None or connection.receiver_id != responder_id:
        raise NotFound("Connection not found")

    target = ConnectionStatus.ACCEPTED if accepted else ConnectionStatus.REJECTED
    connection.status = CONNECTION_TRANSITIONS.ensure(connection.status, target)
    connection.responded_at = now_in_app_timezone()
    saved = repository.update(connection)

    if accepted:
        notify_safely(
            session,
            notify_connection_accepted,
            requester_id=saved.requester_id,
            accepter_id=responder_id,
            accepter_name=display_name(UserRepository(session).get(responder_id)),
            connection_id=saved.id,
        )
    return saved
