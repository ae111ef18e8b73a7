"""Fan a single domain event out to one user's notification channels."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from alnet.domain.entities import (
    Notification,
    NotificationChannel,
    NotificationPreference,
    NotificationPriority,
    NotificationType,
)
from alnet.infrastructure.queue import EmailDeliveryJob, PushDeliveryJob, enqueue_delivery
from alnet.infrastructure.realtime import notification_publisher
from alnet.infrastructure.repositories import NotificationRepository
from alnet.utils import (
    ensure_app_timezone,
    next_occurrence,
    now_in_app_timezone,
    parse_clock_time,
)

from .preferences import get_or_create_preferences

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    user_id: int,
    type: NotificationType | str,
    title: str,
    message: str,
    channel: NotificationChannel | str | None = None,
    priority: NotificationPriority | str | None = None,
    action_url: str | None = None,
    action_label: str | None = None,
    metadata: dict[str, Any] | None = None,
    related_entity_id: str | None = None,
    related_entity_type: str | None = None,
    sender_id: int | None = None,
    expires_at: datetime | None = None,
    now: datetime | None = None,
) -> Notification | None:
    """Persist a notification for ``user_id`` and queue its channel deliveries.

    Returns ``None`` without writing anything when the user switched the
    notification type off. Channel jobs are deferred to the end of the user's
    quiet hours unless the priority is urgent.
    """

    notification_type = NotificationType(type)
    preferences = get_or_create_preferences(session, user_id=user_id)
    if not preferences.allows(notification_type):
        logger.info(
            "User %s has disabled %s notifications", user_id, notification_type.value
        )
        return None

    current = ensure_app_timezone(now) or now_in_app_timezone()
    saved = NotificationRepository(session).create(
        Notification(
            id=None,
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            channel=NotificationChannel(channel or NotificationChannel.IN_APP),
            priority=NotificationPriority(priority or NotificationPriority.NORMAL),
            action_url=action_url,
            action_label=action_label,
            metadata=metadata or {},
            related_entity_id=related_entity_id,
            related_entity_type=related_entity_type,
            sender_id=sender_id,
            expires_at=expires_at,
            created_at=current,
        )
    )
    logger.info("Notification %s created for user %s", saved.id, user_id)

    if preferences.in_app_enabled:
        notification_publisher.dispatch(saved)
        notification_publisher.dispatch_unread_count(
            user_id, NotificationRepository(session).count_unread(user_id)
        )

    _queue_channel_deliveries(session, saved, preferences, now=current)
    return saved


def delivery_deferred_until(
    preferences: NotificationPreference,
    priority: NotificationPriority,
    *,
    now: datetime,
) -> datetime | None:
    """Return when channel delivery may start, or ``None`` to send right away."""

    if priority is NotificationPriority.URGENT:
        return None
    local_now = ensure_app_timezone(now)
    if not preferences.in_quiet_hours(local_now):
        return None
    end = parse_clock_time(preferences.quiet_hours_end)
    return next_occurrence(end, after=local_now)


def _queue_channel_deliveries(
    session: Session,
    notification: Notification,
    preferences: NotificationPreference,
    *,
    now: datetime,
) -> None:
    jobs: list[EmailDeliveryJob | PushDeliveryJob] = []
    if preferences.email_enabled and notification.priority is not NotificationPriority.LOW:
        jobs.append(
            EmailDeliveryJob(notification_id=notification.id, user_id=notification.user_id)
        )
    if preferences.push_enabled and preferences.push_token:
        jobs.append(
            PushDeliveryJob(
                notification_id=notification.id,
                user_id=notification.user_id,
                token=preferences.push_token,
                platform=preferences.push_platform,
            )
        )
    if not jobs:
        return

    available_at = delivery_deferred_until(preferences, notification.priority, now=now)
    if available_at is not None:
        logger.info(
            "Delivery of notification %s deferred to %s due to quiet hours",
            notification.id,
            available_at.isoformat(),
        )

    for job in jobs:
        try:
            enqueue_delivery(session, job, available_at=available_at or now)
        except Exception:
            session.rollback()
            logger.exception(
                "Failed to queue %s delivery for notification %s",
                job.kind,
                notification.id,
            )


__all__ = ["create_notification", "delivery_deferred_until"]
