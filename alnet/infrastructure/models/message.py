"""SQLAlchemy model for direct messages."""

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.sql import expression

from alnet.domain.entities import MessageStatus
from alnet.infrastructure.database import Base
from alnet.utils import now_in_app_naive_datetime


class MessageModel(Base):
    """Database representation of a message between two users."""

    __tablename__ = "message"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    receiver_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)
    status = Column(
        Enum(
            MessageStatus,
            name="message_status",
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
        ),
        nullable=False,
        default=MessageStatus.SENT,
        index=True,
    )
    read_at = Column(DateTime, nullable=True)
    is_deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["MessageModel"]
