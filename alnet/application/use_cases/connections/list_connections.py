"""Use cases listing a user's accepted and pending connections."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from alnet.domain.entities import (
    Connection,
    ConnectionStatus,
    Page,
    User,
    normalize_pagination,
)
from alnet.infrastructure.repositories import ConnectionRepository, UserRepository


@dataclass
class ConnectionWithPartner:
    connection: Connection
    partner: User | None


def list_connections(
    session: Session, *, user_id: int, page: int | None = 1, limit: int | None = 20
) -> Page[ConnectionWithPartner]:
    """Return accepted connections, newest first, with the other party resolved."""

    return _list(
        session,
        user_id=user_id,
        status=ConnectionStatus.ACCEPTED,
        as_receiver_only=False,
        page=page,
        limit=limit,
    )


def list_pending_requests(
    session: Session, *, user_id: int, page: int | None = 1, limit: int | None = 20
) -> Page[ConnectionWithPartner]:
    """Return pending requests waiting for ``user_id`` to answer."""

    return _list(
        session,
        user_id=user_id,
        status=ConnectionStatus.PENDING,
        as_receiver_only=True,
        page=page,
        limit=limit,
    )


def _list(
    session: Session,
    *,
    user_id: int,
    status: ConnectionStatus,
    as_receiver_only: bool,
    page: int | None,
    limit: int | None,
) -> Page[ConnectionWithPartner]:
    page, limit = normalize_pagination(page, limit)
    connections, total = ConnectionRepository(session).list_for_user(
        user_id,
        status=status,
        as_receiver_only=as_receiver_only,
        offset=(page - 1) * limit,
        limit=limit,
    )
    partners = UserRepository(session).get_map_by_ids(
        connection.partner_of(user_id) for connection in connections
    )
    items = [
        ConnectionWithPartner(
            connection=connection, partner=partners.get(connection.partner_of(user_id))
        )
        for connection in connections
    ]
    return Page(items=items, total=total, page=page, limit=limit)
