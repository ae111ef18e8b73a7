"""Persistence helpers for connection entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from alnet.domain.entities import Connection, ConnectionStatus
from alnet.infrastructure.models import ConnectionModel
from alnet.utils import ensure_app_naive_datetime, ensure_app_timezone


class ConnectionRepository:
    """Provide CRUD operations for :class:`Connection` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, connection_id: int) -> Connection | None:
        model = self.session.get(ConnectionModel, connection_id)
        return self._to_entity(model) if model else None

    def find_between(self, user_a: int, user_b: int) -> Connection | None:
        """Return the row linking both users regardless of who requested it."""

        model = (
            self.session.query(ConnectionModel)
            .filter(
                or_(
                    and_(
                        ConnectionModel.requester_id == user_a,
                        ConnectionModel.receiver_id == user_b,
                    ),
                    and_(
                        ConnectionModel.requester_id == user_b,
                        ConnectionModel.receiver_id == user_a,
                    ),
                )
            )
            .order_by(ConnectionModel.id.asc())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        status: ConnectionStatus,
        as_receiver_only: bool = False,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[Sequence[Connection], int]:
        query = self.session.query(ConnectionModel).filter(
            ConnectionModel.status == status
        )
        if as_receiver_only:
            query = query.filter(ConnectionModel.receiver_id == user_id)
        else:
            query = query.filter(
                or_(
                    ConnectionModel.requester_id == user_id,
                    ConnectionModel.receiver_id == user_id,
                )
            )
        total = query.count()
        query = query.order_by(
            ConnectionModel.created_at.desc(), ConnectionModel.id.desc()
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def create(self, connection: Connection) -> Connection:
        model = ConnectionModel()
        self._apply_entity_to_model(model, connection)
        if connection.created_at is not None:
            model.created_at = ensure_app_naive_datetime(connection.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, connection: Connection) -> Connection:
        if connection.id is None:
            raise ValueError("Connection id is required for updates")
        model = self.session.get(ConnectionModel, connection.id)
        if model is None:
            msg = f"Connection with id {connection.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, connection)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, connection_id: int) -> bool:
        deleted = (
            self.session.query(ConnectionModel)
            .filter(ConnectionModel.id == connection_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    @staticmethod
    def _apply_entity_to_model(
        model: ConnectionModel, connection: Connection
    ) -> None:
        model.requester_id = connection.requester_id
        model.receiver_id = connection.receiver_id
        model.status = ConnectionStatus(connection.status)
        model.message = connection.message
        model.responded_at = ensure_app_naive_datetime(connection.responded_at)

    @staticmethod
    def _to_entity(model: ConnectionModel) -> Connection:
        return Connection(
            id=model.id,
            requester_id=model.requester_id,
            receiver_id=model.receiver_id,
            status=ConnectionStatus(model.status),
            message=model.message,
            created_at=ensure_app_timezone(model.created_at),
            responded_at=ensure_app_timezone(model.responded_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ConnectionRepository"]
