"""SQLAlchemy model backing the durable delivery queue."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from alnet.domain.entities import JOB_STATUS_WAITING
from alnet.infrastructure.database import Base
from alnet.utils import now_in_app_naive_datetime


class DeliveryJobModel(Base):
    """Queued channel delivery waiting for, or processed by, a worker."""

    __tablename__ = "delivery_job"
    __table_args__ = (
        UniqueConstraint("queue", "dedupe_key", name="uq_delivery_job_dedupe"),
        Index("ix_delivery_job_claim", "queue", "status", "available_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    queue = Column(String(50), nullable=False)
    kind = Column(String(20), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    dedupe_key = Column(String(120), nullable=True)
    status = Column(String(20), nullable=False, default=JOB_STATUS_WAITING)
    attempts = Column(Integer, nullable=False, default=0)
    max_attempts = Column(Integer, nullable=False, default=3)
    available_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    last_error = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    started_at = Column(DateTime, nullable=True)
    finished_at = Column(DateTime, nullable=True)


__all__ = ["DeliveryJobModel"]
