"""Broadcast one notification to many users."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.orm import Session

from alnet.domain.entities import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from alnet.infrastructure.realtime import notification_publisher
from alnet.infrastructure.repositories import NotificationRepository
from alnet.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def create_bulk_notifications(
    session: Session,
    *,
    user_ids: Iterable[int],
    type: NotificationType | str,
    title: str,
    message: str,
    channel: NotificationChannel | str | None = None,
    priority: NotificationPriority | str | None = None,
    action_url: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> int:
    """Persist one row per recipient and return how many were created.

    Broadcasts skip type preferences and do not queue email or push jobs.
    """

    recipients = list(dict.fromkeys(user_id for user_id in user_ids if user_id))
    if not recipients:
        return 0

    created_at = now_in_app_timezone()
    notification_type = NotificationType(type)
    repository = NotificationRepository(session)
    saved = repository.create_many(
        [
            Notification(
                id=None,
                user_id=user_id,
                type=notification_type,
                title=title,
                message=message,
                channel=NotificationChannel(channel or NotificationChannel.IN_APP),
                priority=NotificationPriority(priority or NotificationPriority.NORMAL),
                action_url=action_url,
                metadata=dict(metadata or {}),
                created_at=created_at,
            )
            for user_id in recipients
        ]
    )

    for notification in saved:
        notification_publisher.dispatch(notification)
        notification_publisher.dispatch_unread_count(
            notification.user_id, repository.count_unread(notification.user_id)
        )

    logger.info("Created %s bulk %s notifications", len(saved), notification_type.value)
    return len(saved)


__all__ = ["create_bulk_notifications"]
