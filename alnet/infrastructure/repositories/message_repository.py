"""Persistence helpers for direct messages and derived conversations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, case, func, or_
from sqlalchemy.orm import Session

from alnet.domain.entities import Message, MessageStatus
from alnet.infrastructure.models import MessageModel
from alnet.utils import ensure_app_naive_datetime, ensure_app_timezone


class MessageRepository:
    """Provide storage and query helpers for :class:`Message` rows.

    Soft-deleted rows are only returned by :meth:`get`; every listing and
    aggregate filters them out.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, message_id: int) -> Message | None:
        model = self.session.get(MessageModel, message_id)
        return self._to_entity(model) if model else None

    def create(self, message: Message) -> Message:
        model = MessageModel(
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            content=message.content,
            status=MessageStatus(message.status),
            read_at=ensure_app_naive_datetime(message.read_at),
            is_deleted=message.is_deleted,
        )
        if message.created_at is not None:
            model.created_at = ensure_app_naive_datetime(message.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, message: Message) -> Message:
        if message.id is None:
            raise ValueError("Message id is required for updates")
        model = self.session.get(MessageModel, message.id)
        if model is None:
            msg = f"Message with id {message.id} not found"
            raise ValueError(msg)
        model.status = MessageStatus(message.status)
        model.read_at = ensure_app_naive_datetime(message.read_at)
        model.is_deleted = message.is_deleted
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_between(
        self,
        user_id: int,
        partner_id: int,
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[Sequence[Message], int]:
        """Return one page of the thread, newest first, and the thread size."""

        query = self._visible().filter(
            or_(
                and_(
                    MessageModel.sender_id == user_id,
                    MessageModel.receiver_id == partner_id,
                ),
                and_(
                    MessageModel.sender_id == partner_id,
                    MessageModel.receiver_id == user_id,
                ),
            )
        )
        total = query.count()
        query = query.order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def list_latest_per_partner(
        self,
        user_id: int,
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[Sequence[Message], int]:
        """Return the most recent message exchanged with each partner.

        Partners are ordered by their latest message, newest first. The total
        counts partners, not messages.
        """

        partner = case(
            (MessageModel.sender_id == user_id, MessageModel.receiver_id),
            else_=MessageModel.sender_id,
        ).label("partner_id")
        latest = (
            self.session.query(partner, func.max(MessageModel.id).label("last_id"))
            .filter(MessageModel.is_deleted.is_(False))
            .filter(
                or_(
                    MessageModel.sender_id == user_id,
                    MessageModel.receiver_id == user_id,
                )
            )
            .group_by(partner)
            .subquery()
        )
        total = self.session.query(func.count()).select_from(latest).scalar() or 0
        query = (
            self.session.query(MessageModel)
            .join(latest, MessageModel.id == latest.c.last_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], int(total)

    def list_undelivered_for(self, receiver_id: int) -> Sequence[Message]:
        query = (
            self._visible()
            .filter(MessageModel.receiver_id == receiver_id)
            .filter(MessageModel.status == MessageStatus.SENT)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def _visible(self):
        return self.session.query(MessageModel).filter(
            MessageModel.is_deleted.is_(False)
        )

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            content=model.content,
            status=MessageStatus(model.status),
            read_at=ensure_app_timezone(model.read_at),
            is_deleted=bool(model.is_deleted),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["MessageRepository"]
