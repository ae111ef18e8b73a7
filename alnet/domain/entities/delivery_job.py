"""Domain entity for rows of the durable delivery queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

EMAIL_DELIVERY_QUEUE = "email-delivery"
NOTIFICATION_DELIVERY_QUEUE = "notification-delivery"
DELIVERY_QUEUES = (EMAIL_DELIVERY_QUEUE, NOTIFICATION_DELIVERY_QUEUE)

JOB_STATUS_WAITING = "waiting"
JOB_STATUS_ACTIVE = "active"
JOB_STATUS_COMPLETED = "completed"
JOB_STATUS_FAILED = "failed"


@dataclass
class DeliveryJob:
    """Unit of channel delivery work consumed by the queue workers."""

    id: int | None
    queue: str
    kind: str
    payload: dict[str, Any] = field(default_factory=dict)
    dedupe_key: str | None = None
    status: str = JOB_STATUS_WAITING
    attempts: int = 0
    max_attempts: int = 3
    available_at: datetime | None = None
    last_error: str | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.max_attempts


__all__ = [
    "DeliveryJob",
    "DELIVERY_QUEUES",
    "EMAIL_DELIVERY_QUEUE",
    "NOTIFICATION_DELIVERY_QUEUE",
    "JOB_STATUS_WAITING",
    "JOB_STATUS_ACTIVE",
    "JOB_STATUS_COMPLETED",
    "JOB_STATUS_FAILED",
]
