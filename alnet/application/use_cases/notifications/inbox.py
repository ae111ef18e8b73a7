"""Use cases behind the notification inbox."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from alnet.domain.entities import Notification, normalize_pagination
from alnet.domain.errors import NotFound
from alnet.infrastructure.realtime import notification_publisher
from alnet.infrastructure.repositories import NotificationRepository


@dataclass
class NotificationInbox:
    data: list[Notification] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0
    unread_count: int = 0


def list_notifications(
    session: Session,
    *,
    user_id: int,
    page: int | None = 1,
    limit: int | None = 20,
    unread_only: bool = False,
) -> NotificationInbox:
    page, limit = normalize_pagination(page, limit)
    repository = NotificationRepository(session)
    items, total = repository.list_for_user(
        user_id,
        unread_only=unread_only,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return NotificationInbox(
        data=list(items),
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
        unread_count=repository.count_unread(user_id),
    )


def get_unread_count(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    repository = NotificationRepository(session)
    notification = repository.mark_as_read(notification_id, user_id=user_id)
    if notification is None:
        raise NotFound("Notification not found")
    notification_publisher.dispatch_unread_count(user_id, repository.count_unread(user_id))
    return notification


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    updated = NotificationRepository(session).mark_all_as_read(user_id)
    notification_publisher.dispatch_unread_count(user_id, 0)
    return updated


def delete_notification(session: Session, *, notification_id: int, user_id: int) -> bool:
    return NotificationRepository(session).delete(notification_id, user_id=user_id)


__all__ = [
    "NotificationInbox",
    "delete_notification",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
