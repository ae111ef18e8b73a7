"""Durable delivery queue: job schemas, producer and workers."""

from .jobs import (
    DeliveryPayload,
    EmailDeliveryJob,
    InvalidJobPayload,
    PushDeliveryJob,
    QUEUE_FOR_KIND,
    parse_job_payload,
)
from .producer import enqueue_delivery
from .worker import (
    DEFAULT_HANDLERS,
    DeliveryFailed,
    QueueWorker,
    compute_backoff,
    handle_email_job,
    handle_push_job,
)

__all__ = [
    "DEFAULT_HANDLERS",
    "DeliveryFailed",
    "DeliveryPayload",
    "EmailDeliveryJob",
    "InvalidJobPayload",
    "PushDeliveryJob",
    "QUEUE_FOR_KIND",
    "QueueWorker",
    "compute_backoff",
    "enqueue_delivery",
    "handle_email_job",
    "handle_push_job",
    "parse_job_payload",
]
