"""Websocket tests for the messages gateway."""

from __future__ import annotations

import pytest
from starlette.websockets import WebSocketDisconnect

from alnet.domain.entities import EMAIL_DELIVERY_QUEUE, MessageStatus, NotificationType
from alnet.infrastructure.realtime import message_connections
from alnet.infrastructure.repositories import (
    DeliveryJobRepository,
    MessageRepository,
    NotificationRepository,
)


def _connect(client, token):
    return client.websocket_connect(f"/messages/ws?token={token}")


@pytest.mark.parametrize("query", ["", "?token=invalid"])
def test_handshake_without_valid_token_is_refused(client, query):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect(f"/messages/ws{query}"):
            pass

    assert exc_info.value.code == 1008


def test_token_can_be_sent_as_bearer_header(client, alice, ws_token):
    headers = {"Authorization": f"Bearer {ws_token(alice)}"}
    with client.websocket_connect("/messages/ws", headers=headers) as websocket:
        frame = websocket.receive_json()

    assert frame["type"] == "connected"
    assert frame["data"]["userId"] == alice.id
    assert frame["data"]["sessionId"]


def test_offline_receiver_gets_row_notification_and_email_job(client, db, alice, bob, ws_token):
    with _connect(client, ws_token(alice)) as alice_ws:
        assert alice_ws.receive_json()["type"] == "connected"

        alice_ws.send_json(
            {"type": "message:send", "data": {"receiverId": bob.id, "content": "Hi Bob"}, "ack": 1}
        )
        ack = alice_ws.receive_json()

    assert ack["type"] == "ack"
    assert ack["event"] == "message:send"
    assert ack["ack"] == 1
    assert ack["data"]["success"] is True
    assert ack["data"]["message"]["status"] == "sent"
    assert ack["data"]["message"]["receiverId"] == bob.id

    stored = MessageRepository(db).get(ack["data"]["message"]["id"])
    assert stored.status is MessageStatus.SENT

    notifications, _ = NotificationRepository(db).list_for_user(bob.id)
    assert [n.type for n in notifications] == [NotificationType.NEW_MESSAGE]

    (job,) = DeliveryJobRepository(db).list(queue=EMAIL_DELIVERY_QUEUE)
    assert job.payload["notification_id"] == notifications[0].id
    assert job.payload["user_id"] == bob.id


def test_pending_messages_are_flushed_on_connect(client, db, alice, bob, ws_token):
    with _connect(client, ws_token(alice)) as alice_ws:
        alice_ws.receive_json()
        alice_ws.send_json(
            {"type": "message:send", "data": {"receiverId": bob.id, "content": "later"}}
        )
        message_id = alice_ws.receive_json()["data"]["message"]["id"]

    with _connect(client, ws_token(bob)) as bob_ws:
        assert bob_ws.receive_json()["type"] == "connected"
        flushed = bob_ws.receive_json()

    assert flushed["type"] == "message:new"
    assert flushed["data"]["message"]["id"] == message_id
    assert flushed["data"]["from"] == alice.id
    db.expire_all()
    assert MessageRepository(db).get(message_id).status is MessageStatus.DELIVERED


def test_online_exchange_typing_and_read_receipts(client, db, alice, bob, ws_token):
    with _connect(client, ws_token(bob)) as bob_ws:
        bob_ws.receive_json()
        with _connect(client, ws_token(alice)) as alice_ws:
            alice_ws.receive_json()
            assert bob_ws.receive_json() == {"type": "user:online", "data": {"userId": alice.id}}
            assert message_connections.is_online(alice.id)

            alice_ws.send_json(
                {"type": "message:typing", "data": {"receiverId": bob.id, "isTyping": True}}
            )
            assert bob_ws.receive_json() == {
                "type": "message:typing",
                "data": {"userId": alice.id, "isTyping": True},
            }

            alice_ws.send_json(
                {
                    "type": "message:send",
                    "data": {"receiverId": bob.id, "content": "Live!"},
                    "ack": "a1",
                }
            )
            incoming = bob_ws.receive_json()
            assert incoming["type"] == "message:new"
            assert incoming["data"]["message"]["content"] == "Live!"
            ack = alice_ws.receive_json()
            assert ack["data"]["message"]["status"] == "delivered"

            message_id = incoming["data"]["message"]["id"]
            bob_ws.send_json({"type": "message:read", "data": {"messageId": message_id}, "ack": 2})
            assert alice_ws.receive_json() == {
                "type": "message:read",
                "data": {"messageId": message_id, "readBy": bob.id},
            }
            assert bob_ws.receive_json() == {
                "type": "ack",
                "event": "message:read",
                "ack": 2,
                "data": {"success": True},
            }

        assert bob_ws.receive_json() == {"type": "user:offline", "data": {"userId": alice.id}}

    db.expire_all()
    assert MessageRepository(db).get(message_id).status is MessageStatus.READ
    assert not message_connections.is_online(alice.id)


def test_second_session_does_not_repeat_online_event(client, alice, bob, ws_token):
    with _connect(client, ws_token(bob)) as bob_ws:
        bob_ws.receive_json()
        with _connect(client, ws_token(alice)) as first:
            first.receive_json()
            assert bob_ws.receive_json()["type"] == "user:online"
            with _connect(client, ws_token(alice)) as second:
                second.receive_json()
            # Closing one of two sessions keeps the user online.
            assert message_connections.is_online(alice.id)
            bob_ws.send_json({"type": "ping", "ack": 9})
            assert bob_ws.receive_json() == {"type": "pong", "ack": 9}


def test_errors_are_acknowledged_and_socket_stays_open(client, alice, bob, ws_token):
    with _connect(client, ws_token(alice)) as alice_ws:
        alice_ws.receive_json()

        alice_ws.send_json(
            {"type": "message:send", "data": {"receiverId": bob.id, "content": "  "}, "ack": 1}
        )
        assert alice_ws.receive_json()["data"] == {"error": "Message content must not be empty"}

        alice_ws.send_json({"type": "message:send", "data": {"content": "x"}, "ack": 2})
        invalid = alice_ws.receive_json()
        assert invalid["ack"] == 2
        assert "receiverId" in invalid["data"]["error"]

        alice_ws.send_json({"type": "message:delete", "ack": 3})
        assert alice_ws.receive_json()["data"] == {"error": "Unknown event 'message:delete'"}

        alice_ws.send_json({"type": "message:read", "data": [1, 2], "ack": 4})
        assert alice_ws.receive_json()["data"] == {"error": "Event data must be an object"}

        alice_ws.send_text("not json")
        assert alice_ws.receive_json()["data"] == {"error": "Malformed frame"}

        alice_ws.send_json({"type": "ping", "ack": 5})
        assert alice_ws.receive_json() == {"type": "pong", "ack": 5}


def test_binary_frames_are_decoded_and_bad_bytes_keep_socket_open(client, alice, ws_token):
    with _connect(client, ws_token(alice)) as alice_ws:
        alice_ws.receive_json()

        alice_ws.send_bytes(b'{"type": "ping", "ack": 1}')
        assert alice_ws.receive_json() == {"type": "pong", "ack": 1}

        alice_ws.send_bytes(b"\xff\xfe")
        assert alice_ws.receive_json()["data"] == {"error": "Malformed frame"}

        alice_ws.send_json({"type": "ping", "ack": 2})
        assert alice_ws.receive_json() == {"type": "pong", "ack": 2}
