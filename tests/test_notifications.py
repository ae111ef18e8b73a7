"""Tests for notification fan-out, the inbox and retention."""

from datetime import datetime, timedelta, timezone

import pytest

from alnet.application.use_cases.notifications import (
    cleanup_old_notifications,
    create_bulk_notifications,
    create_notification,
    delete_notification,
    get_unread_count,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    notify_event_reminder,
    notify_new_job_posting,
    notify_system_announcement,
    register_push_token,
    update_preferences,
)
from alnet.domain.entities import (
    EMAIL_DELIVERY_QUEUE,
    NOTIFICATION_DELIVERY_QUEUE,
    NotificationPriority,
    NotificationType,
)
from alnet.domain.errors import NotFound
from alnet.infrastructure.repositories import DeliveryJobRepository, NotificationRepository

NOON = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
LATE_NIGHT = datetime(2026, 3, 2, 23, 30, tzinfo=timezone.utc)


def _create(db, user_id, **overrides):
    values = {
        "user_id": user_id,
        "type": NotificationType.GENERAL,
        "title": "Heads up",
        "message": "Something happened",
        "now": NOON,
    }
    values.update(overrides)
    return create_notification(db, **values)


def test_create_notification_persists_and_queues_email(db, alice):
    notification = _create(db, alice.id, action_url="/somewhere")

    assert notification is not None
    assert notification.is_read is False
    assert notification.priority is NotificationPriority.NORMAL

    jobs = DeliveryJobRepository(db).list(queue=EMAIL_DELIVERY_QUEUE)
    assert len(jobs) == 1
    assert jobs[0].dedupe_key == f"email:{notification.id}"
    assert jobs[0].payload == {
        "notification_id": notification.id,
        "user_id": alice.id,
        "kind": "email",
    }
    assert jobs[0].available_at == NOON
    assert DeliveryJobRepository(db).list(queue=NOTIFICATION_DELIVERY_QUEUE) == []


def test_disabled_type_creates_nothing(db, alice):
    update_preferences(
        db, user_id=alice.id, updates={"type_preferences": {"GENERAL": False}}
    )

    assert _create(db, alice.id) is None
    assert get_unread_count(db, user_id=alice.id) == 0
    assert DeliveryJobRepository(db).list() == []


def test_low_priority_skips_email(db, alice):
    notification = _create(db, alice.id, priority=NotificationPriority.LOW)

    assert notification is not None
    assert DeliveryJobRepository(db).list() == []


def test_email_disabled_skips_email_job(db, alice):
    update_preferences(db, user_id=alice.id, updates={"email_enabled": False})

    assert _create(db, alice.id) is not None
    assert DeliveryJobRepository(db).list() == []


def test_push_job_requires_registered_token(db, alice):
    register_push_token(db, user_id=alice.id, token="ExponentPushToken[abc]", platform="ios")

    notification = _create(db, alice.id)

    push_jobs = DeliveryJobRepository(db).list(queue=NOTIFICATION_DELIVERY_QUEUE)
    assert len(push_jobs) == 1
    assert push_jobs[0].kind == "push"
    assert push_jobs[0].payload["token"] == "ExponentPushToken[abc]"
    assert push_jobs[0].payload["platform"] == "ios"
    assert push_jobs[0].dedupe_key == f"push:{notification.id}"


def test_quiet_hours_defer_channel_delivery(db, alice):
    update_preferences(
        db,
        user_id=alice.id,
        updates={
            "quiet_hours_enabled": True,
            "quiet_hours_start": "22:00",
            "quiet_hours_end": "07:00",
        },
    )

    notification = _create(db, alice.id, now=LATE_NIGHT)

    assert notification is not None
    (job,) = DeliveryJobRepository(db).list(queue=EMAIL_DELIVERY_QUEUE)
    assert job.available_at == datetime(2026, 3, 3, 7, 0, tzinfo=timezone.utc)
    # The in-app row is stored immediately regardless of quiet hours.
    assert get_unread_count(db, user_id=alice.id) == 1


def test_urgent_priority_bypasses_quiet_hours(db, alice):
    update_preferences(
        db,
        user_id=alice.id,
        updates={
            "quiet_hours_enabled": True,
            "quiet_hours_start": "22:00",
            "quiet_hours_end": "07:00",
        },
    )

    _create(db, alice.id, now=LATE_NIGHT, priority=NotificationPriority.URGENT)

    (job,) = DeliveryJobRepository(db).list(queue=EMAIL_DELIVERY_QUEUE)
    assert job.available_at == LATE_NIGHT


def test_event_reminder_uses_high_priority(db, alice):
    notification = notify_event_reminder(
        db,
        user_id=alice.id,
        event_title="Alumni Meetup",
        event_id="evt-1",
        start_time=datetime(2026, 4, 1, 18, 30, tzinfo=timezone.utc),
    )

    assert notification.priority is NotificationPriority.HIGH
    assert notification.message == 'Reminder: "Alumni Meetup" starts at 2026-04-01 18:30'
    assert notification.related_entity_type == "Event"


def test_bulk_notifications_dedupe_recipients_and_skip_jobs(db, alice, bob):
    update_preferences(
        db, user_id=bob.id, updates={"type_preferences": {"NEW_JOB_POSTING": False}}
    )

    created = notify_new_job_posting(
        db, user_ids=[alice.id, bob.id, alice.id], job_title="Data Engineer", job_id="42"
    )

    assert created == 2
    assert get_unread_count(db, user_id=alice.id) == 1
    assert get_unread_count(db, user_id=bob.id) == 1
    assert DeliveryJobRepository(db).list() == []


def test_bulk_with_no_recipients_creates_nothing(db):
    assert (
        create_bulk_notifications(
            db,
            user_ids=[],
            type=NotificationType.GENERAL,
            title="Nobody",
            message="Nothing",
        )
        == 0
    )


def test_system_announcement_defaults_to_active_users(db, make_user, alice, bob):
    make_user("Dormant", status="inactive")

    created = notify_system_announcement(db, title="Maintenance", message="Back soon")

    assert created == 2
    inbox = list_notifications(db, user_id=bob.id)
    assert inbox.data[0].type is NotificationType.SYSTEM_ANNOUNCEMENT
    assert inbox.data[0].priority is NotificationPriority.HIGH


def test_inbox_pagination_and_unread_filter(db, alice):
    created = [_create(db, alice.id, title=f"n{index}") for index in range(5)]
    mark_notification_read(db, notification_id=created[0].id, user_id=alice.id)

    inbox = list_notifications(db, user_id=alice.id, page=1, limit=2)
    assert inbox.total == 5
    assert inbox.total_pages == 3
    assert inbox.unread_count == 4
    assert [n.title for n in inbox.data] == ["n4", "n3"]

    unread = list_notifications(db, user_id=alice.id, limit=10, unread_only=True)
    assert unread.total == 4
    assert all(not n.is_read for n in unread.data)


def test_expired_notifications_are_hidden(db, alice):
    _create(db, alice.id, expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))
    _create(db, alice.id)

    assert list_notifications(db, user_id=alice.id).total == 1
    assert get_unread_count(db, user_id=alice.id) == 1


def test_mark_read_is_scoped_to_owner(db, alice, bob):
    notification = _create(db, alice.id)

    with pytest.raises(NotFound, match="Notification not found"):
        mark_notification_read(db, notification_id=notification.id, user_id=bob.id)

    read = mark_notification_read(db, notification_id=notification.id, user_id=alice.id)
    assert read.is_read is True
    assert read.read_at is not None


def test_mark_all_and_delete(db, alice, bob):
    first = _create(db, alice.id)
    _create(db, alice.id)

    assert mark_all_notifications_read(db, user_id=alice.id) == 2
    assert mark_all_notifications_read(db, user_id=alice.id) == 0
    assert get_unread_count(db, user_id=alice.id) == 0

    assert delete_notification(db, notification_id=first.id, user_id=bob.id) is False
    assert delete_notification(db, notification_id=first.id, user_id=alice.id) is True
    assert NotificationRepository(db).get(first.id) is None


def test_cleanup_removes_old_read_and_expired_rows(db, alice):
    now = datetime.now(timezone.utc)
    old_read = _create(db, alice.id, now=now - timedelta(days=40))
    mark_notification_read(db, notification_id=old_read.id, user_id=alice.id)
    old_unread = _create(db, alice.id, now=now - timedelta(days=40))
    recent_read = _create(db, alice.id, now=now)
    mark_notification_read(db, notification_id=recent_read.id, user_id=alice.id)
    expired = _create(db, alice.id, now=now, expires_at=now - timedelta(hours=1))

    removed = cleanup_old_notifications(db, days_to_keep=30, now=now)

    assert removed == 2
    repository = NotificationRepository(db)
    assert repository.get(old_read.id) is None
    assert repository.get(expired.id) is None
    assert repository.get(old_unread.id) is not None
    assert repository.get(recent_read.id) is not None
