"""SQLAlchemy model for connection requests between users."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String

from alnet.domain.entities import ConnectionStatus
from alnet.infrastructure.database import Base
from alnet.utils import now_in_app_naive_datetime


class ConnectionModel(Base):
    """Database representation of a connection between two users."""

    __tablename__ = "connection"
    __table_args__ = (
        Index("ix_connection_pair", "requester_id", "receiver_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    requester_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    receiver_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(
        Enum(
            ConnectionStatus,
            name="connection_status",
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
        ),
        nullable=False,
        default=ConnectionStatus.PENDING,
        index=True,
    )
    message = Column(String(500), nullable=True)
    responded_at = Column(DateTime, nullable=True)
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["ConnectionModel"]
