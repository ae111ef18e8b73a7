"""Persistence helpers for notification preferences."""

from __future__ import annotations

from sqlalchemy.orm import Session

from alnet.domain.entities import NotificationPreference, default_type_preferences
from alnet.infrastructure.models import NotificationPreferenceModel
from alnet.utils import ensure_app_timezone


class NotificationPreferenceRepository:
    """Store the single preference row each user owns."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user(self, user_id: int) -> NotificationPreference | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def create(self, preference: NotificationPreference) -> NotificationPreference:
        model = NotificationPreferenceModel(user_id=preference.user_id)
        self._apply_entity_to_model(model, preference)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, preference: NotificationPreference) -> NotificationPreference:
        model = self._get_model(preference.user_id)
        if model is None:
            msg = f"Preferences for user {preference.user_id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, preference)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: int) -> NotificationPreferenceModel | None:
        return (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .one_or_none()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationPreferenceModel, preference: NotificationPreference
    ) -> None:
        model.email_enabled = preference.email_enabled
        model.push_enabled = preference.push_enabled
        model.in_app_enabled = preference.in_app_enabled
        # Reassign a new dict so the JSON column is flagged as modified.
        model.type_preferences = dict(preference.type_preferences)
        model.quiet_hours_enabled = preference.quiet_hours_enabled
        model.quiet_hours_start = preference.quiet_hours_start
        model.quiet_hours_end = preference.quiet_hours_end
        model.digest_enabled = preference.digest_enabled
        model.digest_frequency = preference.digest_frequency
        model.push_token = preference.push_token
        model.push_platform = preference.push_platform

    @staticmethod
    def _to_entity(model: NotificationPreferenceModel) -> NotificationPreference:
        type_preferences = default_type_preferences()
        type_preferences.update(model.type_preferences or {})
        return NotificationPreference(
            id=model.id,
            user_id=model.user_id,
            email_enabled=bool(model.email_enabled),
            push_enabled=bool(model.push_enabled),
            in_app_enabled=bool(model.in_app_enabled),
            type_preferences=type_preferences,
            quiet_hours_enabled=bool(model.quiet_hours_enabled),
            quiet_hours_start=model.quiet_hours_start,
            quiet_hours_end=model.quiet_hours_end,
            digest_enabled=bool(model.digest_enabled),
            digest_frequency=model.digest_frequency,
            push_token=model.push_token,
            push_platform=model.push_platform,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationPreferenceRepository"]
