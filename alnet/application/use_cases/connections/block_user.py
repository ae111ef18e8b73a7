"""Use case for blocking another user."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from alnet.domain.entities import Connection, ConnectionStatus
from alnet.domain.errors import InvalidOperation
from alnet.domain.state_machines import CONNECTION_TRANSITIONS
from alnet.infrastructure.repositories import ConnectionRepository

from ..participants import require_users

logger = logging.getLogger(__name__)


def block_user(session: Session, *, blocker_id: int, blocked_id: int) -> Connection:
    """Move the pair's connection to ``blocked``, creating the row if needed."""

    if blocker_id == blocked_id:
        raise InvalidOperation("Cannot block yourself")

    repository = ConnectionRepository(session)
    existing = repository.find_between(blocker_id, blocked_id)
    if existing is not None:
        if existing.status is ConnectionStatus.BLOCKED:
            return existing
        existing.status = CONNECTION_TRANSITIONS.ensure(
            existing.status, ConnectionStatus.BLOCKED
        )
        saved = repository.update(existing)
    else:
        require_users(session, blocker_id, blocked_id)
        saved = repository.create(
            Connection(
                id=None,
                requester_id=blocker_id,
                receiver_id=blocked_id,
                status=CONNECTION_TRANSITIONS.ensure(None, ConnectionStatus.BLOCKED),
            )
        )
    logger.info("User %s blocked user %s", blocker_id, blocked_id)
    return saved
