"""Lookups shared by the messaging and networking use cases."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import User
from alnet.domain.errors import NotFound
from alnet.infrastructure.repositories import UserRepository


def require_users(session: Session, *user_ids: int) -> dict[int, User]:
    """Return the requested users keyed by id or raise :class:`NotFound`."""

    users = UserRepository(session).get_map_by_ids(user_ids)
    if any(user_id not in users for user_id in user_ids):
        raise NotFound("User not found")
    return users


def display_name(user: User | None) -> str:
    if user is None:
        return "Someone"
    return user.name or user.email


__all__ = ["display_name", "require_users"]
