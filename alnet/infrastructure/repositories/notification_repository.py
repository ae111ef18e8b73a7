"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from alnet.domain.entities import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from alnet.infrastructure.models import NotificationModel
from alnet.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        offset: int = 0,
        limit: int | None = 20,
        now: datetime | None = None,
    ) -> tuple[Sequence[Notification], int]:
        query = self._active_for_user(user_id, now=now)
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        total = query.count()
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def count_unread(self, user_id: int, *, now: datetime | None = None) -> int:
        return (
            self._active_for_user(user_id, now=now)
            .filter(NotificationModel.is_read.is_(False))
            .count()
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_many(self, notifications: Sequence[Notification]) -> list[Notification]:
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            models.append(model)
        if not models:
            return []
        self.session.add_all(models)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def mark_as_read(self, notification_id: int, *, user_id: int) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .one_or_none()
        )
        if model is None:
            return None
        if not model.is_read:
            model.is_read = True
            model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated or 0)

    def delete(self, notification_id: int, *, user_id: int) -> bool:
        deleted = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def delete_stale(self, *, read_before: datetime, now: datetime) -> int:
        """Delete read rows created before ``read_before`` and every expired row."""

        cutoff = ensure_app_naive_datetime(read_before)
        current = ensure_app_naive_datetime(now)
        deleted = (
            self.session.query(NotificationModel)
            .filter(
                or_(
                    (NotificationModel.is_read.is_(True))
                    & (NotificationModel.created_at < cutoff),
                    (NotificationModel.expires_at.is_not(None))
                    & (NotificationModel.expires_at < current),
                )
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return int(deleted or 0)

    def _active_for_user(self, user_id: int, *, now: datetime | None):
        current = ensure_app_naive_datetime(now or now_in_app_timezone())
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(
                or_(
                    NotificationModel.expires_at.is_(None),
                    NotificationModel.expires_at > current,
                )
            )
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.user_id = notification.user_id
        model.type = NotificationType(notification.type)
        model.title = notification.title
        model.message = notification.message
        model.channel = NotificationChannel(notification.channel)
        model.priority = NotificationPriority(notification.priority)
        model.is_read = notification.is_read
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.action_url = notification.action_url
        model.action_label = notification.action_label
        model.metadata_ = dict(notification.metadata or {})
        model.related_entity_id = notification.related_entity_id
        model.related_entity_type = notification.related_entity_type
        model.sender_id = notification.sender_id
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            channel=NotificationChannel(model.channel),
            priority=NotificationPriority(model.priority),
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            action_url=model.action_url,
            action_label=model.action_label,
            metadata=dict(model.metadata_ or {}),
            related_entity_id=model.related_entity_id,
            related_entity_type=model.related_entity_type,
            sender_id=model.sender_id,
            expires_at=ensure_app_timezone(model.expires_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
