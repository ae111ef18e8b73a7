"""Persistence layer for the durable delivery queue."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from alnet.domain.entities import (
    JOB_STATUS_ACTIVE,
    JOB_STATUS_COMPLETED,
    JOB_STATUS_FAILED,
    JOB_STATUS_WAITING,
    DeliveryJob,
)
from alnet.infrastructure.models import DeliveryJobModel
from alnet.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)

_CLAIM_CANDIDATES = 5


class DeliveryJobRepository:
    """Enqueue, claim and settle :class:`DeliveryJob` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, job_id: int) -> DeliveryJob | None:
        model = self.session.get(DeliveryJobModel, job_id)
        return self._to_entity(model) if model else None

    def get_by_dedupe_key(self, queue: str, dedupe_key: str) -> DeliveryJob | None:
        model = self._get_by_dedupe_key(queue, dedupe_key)
        return self._to_entity(model) if model else None

    def list(
        self, *, queue: str | None = None, status: str | None = None
    ) -> Sequence[DeliveryJob]:
        query = self.session.query(DeliveryJobModel)
        if queue is not None:
            query = query.filter(DeliveryJobModel.queue == queue)
        if status is not None:
            query = query.filter(DeliveryJobModel.status == status)
        query = query.order_by(DeliveryJobModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    def enqueue(self, job: DeliveryJob) -> tuple[DeliveryJob, bool]:
        """Insert ``job`` unless one with the same dedupe key already exists.

        Returns the stored job and whether a new row was created.
        """

        if job.dedupe_key:
            existing = self._get_by_dedupe_key(job.queue, job.dedupe_key)
            if existing is not None:
                return self._to_entity(existing), False

        now = now_in_app_timezone()
        model = DeliveryJobModel(
            queue=job.queue,
            kind=job.kind,
            payload=dict(job.payload),
            dedupe_key=job.dedupe_key,
            status=JOB_STATUS_WAITING,
            attempts=0,
            max_attempts=job.max_attempts,
            available_at=ensure_app_naive_datetime(job.available_at or now),
            created_at=ensure_app_naive_datetime(now),
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent producer inserted the same dedupe key first.
            self.session.rollback()
            existing = self._get_by_dedupe_key(job.queue, job.dedupe_key)
            if existing is None:
                raise
            return self._to_entity(existing), False
        self.session.refresh(model)
        return self._to_entity(model), True

    def claim_next(
        self,
        queue: str,
        *,
        now: datetime | None = None,
        stale_before: datetime | None = None,
    ) -> DeliveryJob | None:
        """Atomically move the oldest due job of ``queue`` to ``active``.

        The conditional ``UPDATE`` only succeeds for one worker per row, so
        several processes may poll the same queue. When ``stale_before`` is
        given, ``active`` jobs started before it with attempts left are
        reclaimed as well; their worker is assumed to have died.
        """

        current = ensure_app_naive_datetime(now or now_in_app_timezone())
        claimable = and_(
            DeliveryJobModel.status == JOB_STATUS_WAITING,
            DeliveryJobModel.available_at <= current,
        )
        if stale_before is not None:
            claimable = or_(
                claimable,
                and_(
                    DeliveryJobModel.status == JOB_STATUS_ACTIVE,
                    DeliveryJobModel.started_at < ensure_app_naive_datetime(stale_before),
                    DeliveryJobModel.attempts < DeliveryJobModel.max_attempts,
                ),
            )
        candidates = (
            self.session.query(
                DeliveryJobModel.id, DeliveryJobModel.status, DeliveryJobModel.started_at
            )
            .filter(DeliveryJobModel.queue == queue)
            .filter(claimable)
            .order_by(DeliveryJobModel.available_at.asc(), DeliveryJobModel.id.asc())
            .limit(_CLAIM_CANDIDATES)
            .all()
        )
        for job_id, seen_status, seen_started_at in candidates:
            statement = (
                update(DeliveryJobModel)
                .where(DeliveryJobModel.id == job_id)
                .where(DeliveryJobModel.status == seen_status)
            )
            if seen_status == JOB_STATUS_ACTIVE:
                statement = statement.where(DeliveryJobModel.started_at == seen_started_at)
            result = self.session.execute(
                statement.values(
                    status=JOB_STATUS_ACTIVE,
                    attempts=DeliveryJobModel.attempts + 1,
                    started_at=current,
                ).execution_options(synchronize_session=False)
            )
            self.session.commit()
            if result.rowcount == 1:
                if seen_status == JOB_STATUS_ACTIVE:
                    logger.warning(
                        "Reclaimed job %s on %s; it was left active since %s",
                        job_id,
                        queue,
                        seen_started_at,
                    )
                model = self.session.get(DeliveryJobModel, job_id, populate_existing=True)
                return self._to_entity(model)
            logger.debug("Job %s on %s was claimed by another worker", job_id, queue)
        return None

    def fail_abandoned(
        self,
        queue: str,
        *,
        started_before: datetime,
        now: datetime | None = None,
    ) -> int:
        """Park ``active`` jobs with no attempts left whose worker never settled them."""

        result = self.session.execute(
            update(DeliveryJobModel)
            .where(DeliveryJobModel.queue == queue)
            .where(DeliveryJobModel.status == JOB_STATUS_ACTIVE)
            .where(DeliveryJobModel.started_at < ensure_app_naive_datetime(started_before))
            .where(DeliveryJobModel.attempts >= DeliveryJobModel.max_attempts)
            .values(
                status=JOB_STATUS_FAILED,
                finished_at=ensure_app_naive_datetime(now or now_in_app_timezone()),
                last_error="Worker stopped before settling the final attempt",
            )
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return int(result.rowcount or 0)

    def mark_completed(self, job_id: int, *, now: datetime | None = None) -> None:
        self._settle(
            job_id,
            status=JOB_STATUS_COMPLETED,
            finished_at=ensure_app_naive_datetime(now or now_in_app_timezone()),
            last_error=None,
        )

    def mark_failed(
        self, job_id: int, *, error: str, now: datetime | None = None
    ) -> None:
        self._settle(
            job_id,
            status=JOB_STATUS_FAILED,
            finished_at=ensure_app_naive_datetime(now or now_in_app_timezone()),
            last_error=error,
        )

    def schedule_retry(
        self, job_id: int, *, error: str, available_at: datetime
    ) -> None:
        self._settle(
            job_id,
            status=JOB_STATUS_WAITING,
            available_at=ensure_app_naive_datetime(available_at),
            last_error=error,
        )

    def purge(
        self,
        queue: str,
        *,
        completed_before: datetime,
        completed_keep: int,
        failed_before: datetime,
    ) -> int:
        """Delete settled jobs that fell out of the retention window."""

        completed_cutoff = ensure_app_naive_datetime(completed_before)
        failed_cutoff = ensure_app_naive_datetime(failed_before)
        removed = (
            self.session.query(DeliveryJobModel)
            .filter(DeliveryJobModel.queue == queue)
            .filter(DeliveryJobModel.status == JOB_STATUS_COMPLETED)
            .filter(DeliveryJobModel.finished_at < completed_cutoff)
            .delete(synchronize_session=False)
        )
        removed += (
            self.session.query(DeliveryJobModel)
            .filter(DeliveryJobModel.queue == queue)
            .filter(DeliveryJobModel.status == JOB_STATUS_FAILED)
            .filter(DeliveryJobModel.finished_at < failed_cutoff)
            .delete(synchronize_session=False)
        )
        overflow_ids = [
            job_id
            for (job_id,) in self.session.query(DeliveryJobModel.id)
            .filter(DeliveryJobModel.queue == queue)
            .filter(DeliveryJobModel.status == JOB_STATUS_COMPLETED)
            .order_by(DeliveryJobModel.finished_at.desc(), DeliveryJobModel.id.desc())
            .offset(completed_keep)
            .all()
        ]
        if overflow_ids:
            removed += (
                self.session.query(DeliveryJobModel)
                .filter(DeliveryJobModel.id.in_(overflow_ids))
                .delete(synchronize_session=False)
            )
        self.session.commit()
        return int(removed)

    def _settle(self, job_id: int, **values) -> None:
        self.session.execute(
            update(DeliveryJobModel)
            .where(DeliveryJobModel.id == job_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()

    def _get_by_dedupe_key(
        self, queue: str, dedupe_key: str | None
    ) -> DeliveryJobModel | None:
        if not dedupe_key:
            return None
        return (
            self.session.query(DeliveryJobModel)
            .filter(DeliveryJobModel.queue == queue)
            .filter(DeliveryJobModel.dedupe_key == dedupe_key)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: DeliveryJobModel) -> DeliveryJob:
        return DeliveryJob(
            id=model.id,
            queue=model.queue,
            kind=model.kind,
            payload=dict(model.payload or {}),
            dedupe_key=model.dedupe_key,
            status=model.status,
            attempts=model.attempts,
            max_attempts=model.max_attempts,
            available_at=ensure_app_timezone(model.available_at),
            last_error=model.last_error,
            created_at=ensure_app_timezone(model.created_at),
            started_at=ensure_app_timezone(model.started_at),
            finished_at=ensure_app_timezone(model.finished_at),
        )


__all__ = ["DeliveryJobRepository"]
