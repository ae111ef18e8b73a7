"""Helpers that place delivery work on the durable queue."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from alnet.config import get_settings
from alnet.domain.entities import DeliveryJob
from alnet.infrastructure.repositories import DeliveryJobRepository

from .jobs import QUEUE_FOR_KIND, EmailDeliveryJob, PushDeliveryJob

logger = logging.getLogger(__name__)


def enqueue_delivery(
    session: Session,
    job: EmailDeliveryJob | PushDeliveryJob,
    *,
    available_at: datetime | None = None,
) -> DeliveryJob:
    """Store ``job`` on its queue; repeated calls for the same notification are no-ops."""

    settings = get_settings()
    queue = QUEUE_FOR_KIND[job.kind]
    stored, created = DeliveryJobRepository(session).enqueue(
        DeliveryJob(
            id=None,
            queue=queue,
            kind=job.kind,
            payload=job.model_dump(mode="json"),
            dedupe_key=job.dedupe_key,
            max_attempts=settings.queue_max_attempts,
            available_at=available_at,
        )
    )
    if created:
        logger.info(
            "Queued %s job %s for notification %s on %s",
            job.kind,
            stored.id,
            job.notification_id,
            queue,
        )
    else:
        logger.debug("Skipped duplicate %s job %s", job.kind, job.dedupe_key)
    return stored


__all__ = ["enqueue_delivery"]
