"""Retention job for the notification table."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from alnet.config import get_settings
from alnet.infrastructure.repositories import NotificationRepository
from alnet.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def cleanup_old_notifications(
    session: Session,
    *,
    days_to_keep: int | None = None,
    now: datetime | None = None,
) -> int:
    """Delete read notifications older than ``days_to_keep`` and expired ones."""

    days = days_to_keep if days_to_keep is not None else get_settings().notification_retention_days
    current = now or now_in_app_timezone()
    removed = NotificationRepository(session).delete_stale(
        read_before=current - timedelta(days=days), now=current
    )
    logger.info("Cleaned up %s old notifications", removed)
    return removed


__all__ = ["cleanup_old_notifications"]
