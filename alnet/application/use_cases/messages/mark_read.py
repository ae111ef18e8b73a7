"""Use cases advancing the delivery status of a message."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from alnet.domain.entities import Message, MessageStatus
from alnet.domain.errors import NotFound
from alnet.domain.state_machines import MESSAGE_TRANSITIONS
from alnet.infrastructure.repositories import MessageRepository
from alnet.utils import now_in_app_timezone


def _get_received(repository: MessageRepository, message_id: int, receiver_id: int) -> Message:
    message = repository.get(message_id)
    if message is None or message.is_deleted or message.receiver_id != receiver_id:
        raise NotFound("Message not found")
    return message


def mark_message_read(session: Session, *, message_id: int, reader_id: int) -> Message:
    """Mark a received message as read; reading it again changes nothing."""

    repository = MessageRepository(session)
    message = _get_received(repository, message_id, reader_id)
    if message.status is MessageStatus.READ:
        return message
    message.status = MESSAGE_TRANSITIONS.ensure(message.status, MessageStatus.READ)
    message.read_at = now_in_app_timezone()
    return repository.update(message)


def mark_message_delivered(
    session: Session, *, message_id: int, receiver_id: int
) -> Message:
    """Advance ``sent`` to ``delivered``; later states are left untouched."""

    repository = MessageRepository(session)
    message = _get_received(repository, message_id, receiver_id)
    if message.status is not MessageStatus.SENT:
        return message
    message.status = MESSAGE_TRANSITIONS.ensure(message.status, MessageStatus.DELIVERED)
    return repository.update(message)


def list_undelivered_messages(session: Session, *, receiver_id: int) -> Sequence[Message]:
    """Messages still waiting in ``sent`` state for ``receiver_id``, oldest first."""

    return MessageRepository(session).list_undelivered_for(receiver_id)
