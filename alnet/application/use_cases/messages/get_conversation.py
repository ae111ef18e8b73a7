"""Use case returning one page of the thread between two users."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import Message, Page, normalize_pagination
from alnet.infrastructure.repositories import MessageRepository


def get_conversation(
    session: Session,
    *,
    user_id: int,
    partner_id: int,
    page: int | None = 1,
    limit: int | None = 20,
) -> Page[Message]:
    """Return a page of the thread in chronological order.

    Page 1 holds the most recent messages; each page is reversed so it reads
    oldest to newest.
    """

    page, limit = normalize_pagination(page, limit)
    messages, total = MessageRepository(session).list_between(
        user_id, partner_id, offset=(page - 1) * limit, limit=limit
    )
    return Page(items=list(reversed(messages)), total=total, page=page, limit=limit)
