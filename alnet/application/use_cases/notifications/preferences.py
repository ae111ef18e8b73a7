"""Use cases for reading and changing notification preferences."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from alnet.domain.entities import (
    DIGEST_FREQUENCIES,
    PUSH_PLATFORMS,
    NotificationPreference,
    NotificationType,
)
from alnet.domain.errors import InvalidOperation
from alnet.infrastructure.repositories import NotificationPreferenceRepository
from alnet.utils import format_clock_time, parse_clock_time

_TOGGLE_FIELDS = (
    "email_enabled",
    "push_enabled",
    "in_app_enabled",
    "quiet_hours_enabled",
    "digest_enabled",
)


def get_or_create_preferences(session: Session, *, user_id: int) -> NotificationPreference:
    """Return the user's preferences, creating the all-enabled default row."""

    repository = NotificationPreferenceRepository(session)
    preference = repository.get_by_user(user_id)
    if preference is None:
        preference = repository.create(NotificationPreference(id=None, user_id=user_id))
    return preference


def update_preferences(
    session: Session, *, user_id: int, updates: Mapping[str, Any]
) -> NotificationPreference:
    """Apply a partial update; ``type_preferences`` is merged key by key."""

    preference = get_or_create_preferences(session, user_id=user_id)

    for field in _TOGGLE_FIELDS:
        if updates.get(field) is not None:
            setattr(preference, field, bool(updates[field]))

    type_updates = updates.get("type_preferences")
    if type_updates:
        merged = dict(preference.type_preferences)
        for key, enabled in type_updates.items():
            name = getattr(key, "value", key)
            try:
                NotificationType(name)
            except ValueError as exc:
                raise InvalidOperation(f"Unknown notification type '{name}'") from exc
            merged[name] = bool(enabled)
        preference.type_preferences = merged

    for field in ("quiet_hours_start", "quiet_hours_end"):
        if field in updates:
            setattr(preference, field, _normalize_clock(updates[field]))

    frequency = updates.get("digest_frequency")
    if frequency is not None:
        if frequency not in DIGEST_FREQUENCIES:
            raise InvalidOperation(f"Unsupported digest frequency '{frequency}'")
        preference.digest_frequency = frequency

    return NotificationPreferenceRepository(session).update(preference)


def register_push_token(
    session: Session, *, user_id: int, token: str, platform: str
) -> NotificationPreference:
    token = (token or "").strip()
    if not token:
        raise InvalidOperation("Push token must not be empty")
    if platform not in PUSH_PLATFORMS:
        raise InvalidOperation(f"Unsupported push platform '{platform}'")
    preference = get_or_create_preferences(session, user_id=user_id)
    preference.push_token = token
    preference.push_platform = platform
    return NotificationPreferenceRepository(session).update(preference)


def _normalize_clock(value: str | None) -> str | None:
    if value is None or not str(value).strip():
        return None
    try:
        parsed = parse_clock_time(str(value))
    except ValueError as exc:
        raise InvalidOperation(str(exc)) from exc
    return format_clock_time(parsed)


__all__ = ["get_or_create_preferences", "register_push_token", "update_preferences"]
