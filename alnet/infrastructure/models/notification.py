"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import expression

from alnet.domain.entities import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from alnet.infrastructure.database import Base
from alnet.utils import now_in_app_naive_datetime


def _string_enum(enum_cls, name: str) -> Enum:
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda enum: [member.value for member in enum],
        native_enum=False,
        length=40,
    )


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_read_created", "user_id", "is_read", "created_at"),
        Index("ix_notification_type_created", "type", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(_string_enum(NotificationType, "notification_type"), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    channel = Column(
        _string_enum(NotificationChannel, "notification_channel"),
        nullable=False,
        default=NotificationChannel.IN_APP,
    )
    priority = Column(
        _string_enum(NotificationPriority, "notification_priority"),
        nullable=False,
        default=NotificationPriority.NORMAL,
    )
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    read_at = Column(DateTime(), nullable=True)
    action_url = Column(String(255), nullable=True)
    action_label = Column(String(50), nullable=True)
    metadata_ = Column("metadata", JSON, nullable=True)
    related_entity_id = Column(String(64), nullable=True)
    related_entity_type = Column(String(100), nullable=True)
    sender_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    expires_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
