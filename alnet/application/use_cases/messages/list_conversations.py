"""Use case summarising every conversation of a user."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import Conversation, MessageStatus, Page, normalize_pagination
from alnet.infrastructure.repositories import MessageRepository, UserRepository


def list_conversations(
    session: Session,
    *,
    user_id: int,
    page: int | None = 1,
    limit: int | None = 20,
) -> Page[Conversation]:
    """Return one entry per partner built from the latest visible message."""

    page, limit = normalize_pagination(page, limit)
    latest, total = MessageRepository(session).list_latest_per_partner(
        user_id, offset=(page - 1) * limit, limit=limit
    )
    partners = UserRepository(session).get_map_by_ids(
        message.partner_of(user_id) for message in latest
    )
    conversations = [
        Conversation(
            partner_id=message.partner_of(user_id),
            last_message=message,
            unread=message.receiver_id == user_id
            and message.status is not MessageStatus.READ,
            partner=partners.get(message.partner_of(user_id)),
        )
        for message in latest
    ]
    return Page(items=conversations, total=total, page=page, limit=limit)
