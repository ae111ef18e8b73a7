"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String

from alnet.domain.entities import USER_ROLE_STUDENT, USER_STATUS_ACTIVE
from alnet.infrastructure.database import Base
from alnet.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Minimal projection of the platform user referenced by the core tables."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False, default=USER_ROLE_STUDENT)
    status = Column(String(20), nullable=False, default=USER_STATUS_ACTIVE)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserModel"]
