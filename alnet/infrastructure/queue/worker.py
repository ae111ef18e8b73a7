"""Queue consumers for the email and push delivery queues."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta

from sqlalchemy.orm import Session, sessionmaker

from alnet.config import Settings, get_settings
from alnet.domain.entities import DeliveryJob
from alnet.infrastructure.database import SessionLocal
from alnet.infrastructure.email import (
    build_notification_email,
    email_configured,
    send_email,
)
from alnet.infrastructure.push import build_push_message, push_configured, send_push
from alnet.infrastructure.repositories import (
    DeliveryJobRepository,
    NotificationRepository,
    UserRepository,
)
from alnet.utils import now_in_app_timezone

from .jobs import EmailDeliveryJob, InvalidJobPayload, PushDeliveryJob, parse_job_payload

logger = logging.getLogger(__name__)

JobHandler = Callable[[Session, EmailDeliveryJob | PushDeliveryJob], None]

_PUSH_PRIORITY = {"high": "high", "urgent": "high"}


class DeliveryFailed(RuntimeError):
    """Raised by handlers when a delivery attempt should be retried."""


def handle_email_job(session: Session, job: EmailDeliveryJob) -> None:
    notification = NotificationRepository(session).get(job.notification_id)
    if notification is None:
        logger.info("Notification %s no longer exists; skipping email", job.notification_id)
        return
    user = UserRepository(session).get(job.user_id)
    if user is None or not user.email:
        logger.info("User %s has no email address; skipping email", job.user_id)
        return
    if not email_configured():
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return
    subject, html_content = build_notification_email(
        notification, recipient_name=user.name
    )
    if not send_email(subject, html_content, user.email):
        raise DeliveryFailed(f"SendGrid did not accept email for notification {notification.id}")


def handle_push_job(session: Session, job: PushDeliveryJob) -> None:
    notification = NotificationRepository(session).get(job.notification_id)
    if notification is None:
        logger.info("Notification %s no longer exists; skipping push", job.notification_id)
        return
    if not push_configured():
        logger.info("Push gateway not configured; skipping push delivery")
        return
    send_push(
        build_push_message(
            token=job.token,
            title=notification.title,
            body=notification.message,
            data={
                "notificationId": notification.id,
                "type": notification.type.value,
                "actionUrl": notification.action_url,
            },
            priority=_PUSH_PRIORITY.get(notification.priority.value, "default"),
        )
    )


DEFAULT_HANDLERS: Mapping[str, JobHandler] = {
    "email": handle_email_job,
    "push": handle_push_job,
}


def compute_backoff(attempt: int, base_seconds: float) -> timedelta:
    """Delay before retry number ``attempt`` (1-based): ``base * 2**(attempt-1)``."""

    return timedelta(seconds=base_seconds * (2 ** max(attempt - 1, 0)))


class QueueWorker:
    """Claim jobs from one queue and run the matching handler."""

    def __init__(
        self,
        queue: str,
        *,
        session_factory: sessionmaker | Callable[[], Session] = SessionLocal,
        handlers: Mapping[str, JobHandler] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.queue = queue
        self._session_factory = session_factory
        self._handlers = dict(handlers or DEFAULT_HANDLERS)
        self._settings = settings or get_settings()

    def process_next(self, *, now: datetime | None = None) -> DeliveryJob | None:
        """Process a single due job and return it in its settled state."""

        current = now or now_in_app_timezone()
        session = self._session_factory()
        try:
            repository = DeliveryJobRepository(session)
            job = repository.claim_next(
                self.queue, now=current, stale_before=self._stale_before(current)
            )
            if job is None:
                return None
            self._execute(session, repository, job, current)
            return repository.get(job.id)
        finally:
            session.close()

    def _execute(
        self,
        session: Session,
        repository: DeliveryJobRepository,
        job: DeliveryJob,
        now: datetime,
    ) -> None:
        try:
            payload = parse_job_payload(job.payload)
        except InvalidJobPayload as exc:
            logger.error("Job %s on %s has an invalid payload: %s", job.id, self.queue, exc)
            repository.mark_failed(job.id, error=f"Invalid payload: {exc}", now=now)
            return

        handler = self._handlers.get(payload.kind)
        if handler is None:
            logger.error("No handler registered for %s jobs", payload.kind)
            repository.mark_failed(job.id, error=f"No handler for kind {payload.kind}", now=now)
            return

        try:
            handler(session, payload)
        except Exception as exc:
            session.rollback()
            error = f"{type(exc).__name__}: {exc}"
            if job.exhausted:
                logger.error(
                    "Job %s on %s failed after %s attempts: %s",
                    job.id,
                    self.queue,
                    job.attempts,
                    error,
                )
                repository.mark_failed(job.id, error=error, now=now)
            else:
                delay = compute_backoff(job.attempts, self._settings.queue_backoff_seconds)
                logger.warning(
                    "Job %s on %s failed (attempt %s/%s), retrying in %.1fs: %s",
                    job.id,
                    self.queue,
                    job.attempts,
                    job.max_attempts,
                    delay.total_seconds(),
                    error,
                )
                repository.schedule_retry(job.id, error=error, available_at=now + delay)
            return

        repository.mark_completed(job.id, now=now)
        logger.info("Job %s on %s completed", job.id, self.queue)

    def purge(self, *, now: datetime | None = None) -> int:
        """Apply the retention policy for completed and failed jobs."""

        current = now or now_in_app_timezone()
        settings = self._settings
        session = self._session_factory()
        try:
            repository = DeliveryJobRepository(session)
            abandoned = repository.fail_abandoned(
                self.queue, started_before=self._stale_before(current), now=current
            )
            if abandoned:
                logger.warning(
                    "Marked %s abandoned jobs on %s as failed", abandoned, self.queue
                )
            removed = repository.purge(
                self.queue,
                completed_before=current
                - timedelta(hours=settings.queue_completed_retention_hours),
                completed_keep=settings.queue_completed_retention_count,
                failed_before=current - timedelta(days=settings.queue_failed_retention_days),
            )
        finally:
            session.close()
        if removed:
            logger.info("Purged %s settled jobs from %s", removed, self.queue)
        return removed

    def _stale_before(self, now: datetime) -> datetime:
        return now - timedelta(seconds=self._settings.queue_active_timeout_seconds)

    def run_once(self, *, now: datetime | None = None, limit: int = 100) -> int:
        """Drain due jobs (up to ``limit``) then purge; return how many ran."""

        processed = 0
        while processed < limit:
            if self.process_next(now=now) is None:
                break
            processed += 1
        self.purge(now=now)
        return processed

    def run_forever(
        self,
        *,
        poll_interval: float | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        interval = poll_interval or self._settings.queue_poll_interval_seconds
        stop = stop_event or threading.Event()
        logger.info("Worker for %s started (poll interval %.1fs)", self.queue, interval)
        while not stop.is_set():
            try:
                processed = self.run_once()
            except Exception:
                logger.exception("Unexpected error while processing %s", self.queue)
                processed = 0
            if not processed:
                stop.wait(interval)
        logger.info("Worker for %s stopped", self.queue)


__all__ = [
    "DEFAULT_HANDLERS",
    "DeliveryFailed",
    "QueueWorker",
    "compute_backoff",
    "handle_email_job",
    "handle_push_job",
]
