"""Notifications emitted by the messaging and networking flows."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from alnet.domain.entities import Notification, NotificationPriority, NotificationType
from alnet.infrastructure.repositories import UserRepository
from alnet.utils import ensure_app_timezone

from .create_bulk import create_bulk_notifications
from .create_notification import create_notification

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PREVIEW_LENGTH = 120


def notify_safely(
    session: Session, trigger: Callable[..., T], **kwargs: Any
) -> T | None:
    """Run ``trigger`` and swallow its failure so the calling action survives."""

    try:
        return trigger(session, **kwargs)
    except Exception:
        session.rollback()
        logger.exception("Failed to emit notification via %s", trigger.__name__)
        return None


def notify_connection_request(
    session: Session,
    *,
    receiver_id: int,
    requester_id: int,
    requester_name: str,
    connection_id: int | None = None,
) -> Notification | None:
    return create_notification(
        session,
        user_id=receiver_id,
        type=NotificationType.CONNECTION_REQUEST,
        title="New Connection Request",
        message=f"{requester_name} wants to connect with you",
        sender_id=requester_id,
        action_url="/connections/pending",
        action_label="View Request",
        related_entity_id=str(connection_id) if connection_id else None,
        related_entity_type="Connection" if connection_id else None,
        priority=NotificationPriority.NORMAL,
    )


def notify_connection_accepted(
    session: Session,
    *,
    requester_id: int,
    accepter_id: int,
    accepter_name: str,
    connection_id: int | None = None,
) -> Notification | None:
    return create_notification(
        session,
        user_id=requester_id,
        type=NotificationType.CONNECTION_ACCEPTED,
        title="Connection Accepted",
        message=f"{accepter_name} accepted your connection request",
        sender_id=accepter_id,
        action_url=f"/profile/{accepter_id}",
        action_label="View Profile",
        related_entity_id=str(connection_id) if connection_id else None,
        related_entity_type="Connection" if connection_id else None,
    )


def notify_new_message(
    session: Session,
    *,
    receiver_id: int,
    sender_id: int,
    sender_name: str,
    message_id: int | None = None,
    preview: str | None = None,
) -> Notification | None:
    metadata: dict[str, Any] = {}
    if preview:
        metadata["preview"] = preview[:_PREVIEW_LENGTH]
    return create_notification(
        session,
        user_id=receiver_id,
        type=NotificationType.NEW_MESSAGE,
        title="New Message",
        message=f"You have a new message from {sender_name}",
        sender_id=sender_id,
        action_url=f"/messages/{sender_id}",
        action_label="Reply",
        priority=NotificationPriority.HIGH,
        metadata=metadata,
        related_entity_id=str(message_id) if message_id else None,
        related_entity_type="Message" if message_id else None,
    )


def notify_new_job_posting(
    session: Session, *, user_ids: Iterable[int], job_title: str, job_id: str
) -> int:
    return create_bulk_notifications(
        session,
        user_ids=user_ids,
        type=NotificationType.NEW_JOB_POSTING,
        title="New Job Opportunity",
        message=f"A new job has been posted: {job_title}",
        action_url=f"/jobs/{job_id}",
        priority=NotificationPriority.NORMAL,
        metadata={"jobId": job_id},
    )


def notify_event_reminder(
    session: Session,
    *,
    user_id: int,
    event_title: str,
    event_id: str,
    start_time: datetime,
) -> Notification | None:
    starts = ensure_app_timezone(start_time)
    return create_notification(
        session,
        user_id=user_id,
        type=NotificationType.EVENT_REMINDER,
        title="Event Reminder",
        message=f'Reminder: "{event_title}" starts at {starts:%Y-%m-%d %H:%M}',
        related_entity_id=event_id,
        related_entity_type="Event",
        action_url=f"/events/{event_id}",
        action_label="View Event",
        priority=NotificationPriority.HIGH,
    )


def notify_system_announcement(
    session: Session,
    *,
    title: str,
    message: str,
    user_ids: Iterable[int] | None = None,
) -> int:
    """Announce to ``user_ids``, or to every active user when omitted."""

    recipients = (
        list(user_ids) if user_ids is not None else UserRepository(session).list_active_ids()
    )
    return create_bulk_notifications(
        session,
        user_ids=recipients,
        type=NotificationType.SYSTEM_ANNOUNCEMENT,
        title=title,
        message=message,
        priority=NotificationPriority.HIGH,
    )


__all__ = [
    "notify_connection_accepted",
    "notify_connection_request",
    "notify_event_reminder",
    "notify_new_job_posting",
    "notify_new_message",
    "notify_safely",
    "notify_system_announcement",
]
