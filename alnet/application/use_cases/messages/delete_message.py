"""Use case for soft-deleting a message."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import Message
from alnet.domain.errors import InvalidOperation
from alnet.infrastructure.repositories import MessageRepository


def delete_message(session: Session, *, message_id: int, requester_id: int) -> Message:
    """Hide a message from every read path; only its sender may do this."""

    repository = MessageRepository(session)
    message = repository.get(message_id)
    if message is None or message.sender_id != requester_id:
        raise InvalidOperation("Cannot delete message")
    if message.is_deleted:
        return message
    message.is_deleted = True
    return repository.update(message)
