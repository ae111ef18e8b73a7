"""HTTP tests for the notification inbox and preferences."""

from __future__ import annotations

from alnet.application.use_cases.notifications import create_notification
from alnet.domain.entities import NotificationType


def _notify(db, user, title="Hello"):
    return create_notification(
        db, user_id=user.id, type=NotificationType.GENERAL, title=title, message="Body"
    )


def test_inbox_endpoints(client, db, alice, bob, auth_headers):
    first = _notify(db, alice, "first")
    _notify(db, alice, "second")
    _notify(db, bob, "other")

    inbox = client.get("/notifications", params={"limit": 1}, headers=auth_headers(alice))
    assert inbox.status_code == 200
    body = inbox.json()
    assert body["total"] == 2
    assert body["total_pages"] == 2
    assert body["unread_count"] == 2
    assert body["data"][0]["title"] == "second"
    assert body["data"][0]["type"] == "GENERAL"

    read = client.post(f"/notifications/{first.id}/read", headers=auth_headers(alice))
    assert read.status_code == 200
    assert read.json()["is_read"] is True

    foreign = client.post(f"/notifications/{first.id}/read", headers=auth_headers(bob))
    assert foreign.status_code == 404

    unread_only = client.get(
        "/notifications", params={"unread_only": True}, headers=auth_headers(alice)
    ).json()
    assert [item["title"] for item in unread_only["data"]] == ["second"]

    read_all = client.post("/notifications/read-all", headers=auth_headers(alice))
    assert read_all.json() == {"updated": 1}
    assert client.get(
        "/notifications/unread-count", headers=auth_headers(alice)
    ).json() == {"count": 0}

    assert client.delete(f"/notifications/{first.id}", headers=auth_headers(bob)).status_code == 404
    assert client.delete(f"/notifications/{first.id}", headers=auth_headers(alice)).status_code == 204


def test_preferences_round_trip(client, alice, auth_headers):
    defaults = client.get("/notifications/preferences", headers=auth_headers(alice))
    assert defaults.status_code == 200
    assert defaults.json()["email_enabled"] is True
    assert defaults.json()["has_push_token"] is False

    updated = client.post(
        "/notifications/preferences",
        json={
            "email_enabled": False,
            "type_preferences": {"NEW_MESSAGE": False},
            "quiet_hours_enabled": True,
            "quiet_hours_start": "22:00",
            "quiet_hours_end": "06:30",
        },
        headers=auth_headers(alice),
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["email_enabled"] is False
    assert body["push_enabled"] is True
    assert body["type_preferences"]["NEW_MESSAGE"] is False
    assert body["type_preferences"]["CONNECTION_REQUEST"] is True
    assert body["quiet_hours_end"] == "06:30"


def test_preference_validation(client, alice, auth_headers):
    unknown_type = client.post(
        "/notifications/preferences",
        json={"type_preferences": {"NOPE": True}},
        headers=auth_headers(alice),
    )
    assert unknown_type.status_code == 422

    bad_clock = client.post(
        "/notifications/preferences",
        json={"quiet_hours_start": "29:99"},
        headers=auth_headers(alice),
    )
    assert bad_clock.status_code == 400

    unknown_field = client.post(
        "/notifications/preferences", json={"sms_enabled": True}, headers=auth_headers(alice)
    )
    assert unknown_field.status_code == 422


def test_register_push_token(client, alice, auth_headers):
    response = client.post(
        "/notifications/push-token",
        json={"token": "ExponentPushToken[1]", "platform": "android"},
        headers=auth_headers(alice),
    )

    assert response.status_code == 200
    assert response.json()["has_push_token"] is True
    assert response.json()["push_platform"] == "android"

    invalid = client.post(
        "/notifications/push-token",
        json={"token": "t", "platform": "pager"},
        headers=auth_headers(alice),
    )
    assert invalid.status_code == 422


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok", "online_users": 0}
