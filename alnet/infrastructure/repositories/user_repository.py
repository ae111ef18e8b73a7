"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from alnet.domain.entities import User
from alnet.infrastructure.models import UserModel
from alnet.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Resolve the user identities referenced by the messaging tables."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def exists(self, user_id: int) -> bool:
        return (
            self.session.query(UserModel.id).filter(UserModel.id == user_id).first()
            is not None
        )

    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        unique_ids = {int(user_id) for user_id in user_ids if user_id is not None}
        if not unique_ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def list_active_ids(self) -> list[int]:
        query = self.session.query(UserModel.id).filter(UserModel.status == "active")
        return [user_id for (user_id,) in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name.strip(),
            email=user.email.strip().lower(),
            role=user.role,
            status=user.status,
        )
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
