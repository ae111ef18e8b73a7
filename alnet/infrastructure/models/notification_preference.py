"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from alnet.infrastructure.database import Base
from alnet.utils import now_in_app_naive_datetime


class NotificationPreferenceModel(Base):
    """One row per user holding channel toggles and quiet hours."""

    __tablename__ = "notification_preference"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    email_enabled = Column(Boolean, nullable=False, default=True)
    push_enabled = Column(Boolean, nullable=False, default=True)
    in_app_enabled = Column(Boolean, nullable=False, default=True)
    type_preferences = Column(JSON, nullable=False, default=dict)
    quiet_hours_enabled = Column(Boolean, nullable=False, default=False)
    quiet_hours_start = Column(String(8), nullable=True)
    quiet_hours_end = Column(String(8), nullable=True)
    digest_enabled = Column(Boolean, nullable=False, default=False)
    digest_frequency = Column(String(20), nullable=False, default="daily")
    push_token = Column(Text, nullable=True)
    push_platform = Column(String(20), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["NotificationPreferenceModel"]
