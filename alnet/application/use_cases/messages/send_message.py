"""Use case for sending a direct message."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from alnet.domain.entities import ConnectionStatus, Message, MessageStatus
from alnet.domain.errors import InvalidOperation
from alnet.domain.state_machines import MESSAGE_TRANSITIONS
from alnet.infrastructure.repositories import ConnectionRepository, MessageRepository

from ..notifications import notify_new_message, notify_safely
from ..participants import display_name, require_users

logger = logging.getLogger(__name__)


def send_message(
    session: Session, *, sender_id: int, receiver_id: int, content: str
) -> Message:
    """Persist a message in ``sent`` state and notify the receiver.

    No accepted connection is needed, but a blocked pair may not message.
    A failing notification never aborts the send.
    """

    if sender_id == receiver_id:
        raise InvalidOperation("Cannot send message to yourself")
    if not content or not content.strip():
        raise InvalidOperation("Message content must not be empty")
    users = require_users(session, sender_id, receiver_id)

    connection = ConnectionRepository(session).find_between(sender_id, receiver_id)
    if connection is not None and connection.status is ConnectionStatus.BLOCKED:
        raise InvalidOperation("Messaging is not allowed between these users")

    saved = MessageRepository(session).create(
        Message(
            id=None,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            status=MESSAGE_TRANSITIONS.ensure(None, MessageStatus.SENT),
        )
    )
    logger.debug("Message %s sent from %s to %s", saved.id, sender_id, receiver_id)

    notify_safely(
        session,
        notify_new_message,
        receiver_id=receiver_id,
        sender_id=sender_id,
        sender_name=display_name(users[sender_id]),
        message_id=saved.id,
        preview=content,
    )
    return saved
