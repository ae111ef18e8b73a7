"""Tests for notification preference management."""

from datetime import datetime, timezone

import pytest

from alnet.application.use_cases.notifications import (
    get_or_create_preferences,
    register_push_token,
    update_preferences,
)
from alnet.domain.entities import NotificationPreference, NotificationType
from alnet.domain.errors import InvalidOperation


def test_defaults_are_created_on_first_access(db, alice):
    preference = get_or_create_preferences(db, user_id=alice.id)

    assert preference.id is not None
    assert preference.email_enabled and preference.push_enabled and preference.in_app_enabled
    assert preference.quiet_hours_enabled is False
    assert preference.allows(NotificationType.NEW_MESSAGE)
    assert get_or_create_preferences(db, user_id=alice.id).id == preference.id


def test_partial_update_merges_type_preferences(db, alice):
    update_preferences(
        db, user_id=alice.id, updates={"type_preferences": {"NEW_MESSAGE": False}}
    )
    preference = update_preferences(
        db,
        user_id=alice.id,
        updates={
            "push_enabled": False,
            "type_preferences": {NotificationType.EVENT_REMINDER: False},
        },
    )

    assert preference.push_enabled is False
    assert preference.email_enabled is True
    assert not preference.allows(NotificationType.NEW_MESSAGE)
    assert not preference.allows(NotificationType.EVENT_REMINDER)
    assert preference.allows(NotificationType.CONNECTION_REQUEST)


def test_unknown_type_is_rejected(db, alice):
    with pytest.raises(InvalidOperation, match="Unknown notification type"):
        update_preferences(
            db, user_id=alice.id, updates={"type_preferences": {"NOT_A_TYPE": False}}
        )


@pytest.mark.parametrize("value", ["25:00", "7pm", "12:75"])
def test_invalid_quiet_hours_are_rejected(db, alice, value):
    with pytest.raises(InvalidOperation):
        update_preferences(db, user_id=alice.id, updates={"quiet_hours_start": value})


def test_quiet_hours_are_normalized(db, alice):
    preference = update_preferences(
        db,
        user_id=alice.id,
        updates={"quiet_hours_start": "07:05:00", "quiet_hours_end": "09:30"},
    )

    assert preference.quiet_hours_start == "07:05"
    assert preference.quiet_hours_end == "09:30"


def test_unsupported_digest_frequency(db, alice):
    with pytest.raises(InvalidOperation, match="digest frequency"):
        update_preferences(db, user_id=alice.id, updates={"digest_frequency": "hourly"})


def test_register_push_token_validates_platform(db, alice):
    with pytest.raises(InvalidOperation):
        register_push_token(db, user_id=alice.id, token="tok", platform="blackberry")
    with pytest.raises(InvalidOperation):
        register_push_token(db, user_id=alice.id, token="   ", platform="ios")

    preference = register_push_token(db, user_id=alice.id, token=" tok ", platform="android")
    assert preference.push_token == "tok"
    assert preference.push_platform == "android"


@pytest.mark.parametrize(
    ("start", "end", "moment", "expected"),
    [
        ("22:00", "07:00", datetime(2026, 1, 1, 23, 0, tzinfo=timezone.utc), True),
        ("22:00", "07:00", datetime(2026, 1, 1, 6, 59, tzinfo=timezone.utc), True),
        ("22:00", "07:00", datetime(2026, 1, 1, 7, 0, tzinfo=timezone.utc), False),
        ("22:00", "07:00", datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc), False),
        ("09:00", "17:00", datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc), True),
        ("09:00", "17:00", datetime(2026, 1, 1, 17, 0, tzinfo=timezone.utc), False),
        ("09:00", "09:00", datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc), False),
    ],
)
def test_quiet_hours_window(start, end, moment, expected):
    preference = NotificationPreference(
        id=None,
        user_id=1,
        quiet_hours_enabled=True,
        quiet_hours_start=start,
        quiet_hours_end=end,
    )

    assert preference.in_quiet_hours(moment) is expected
