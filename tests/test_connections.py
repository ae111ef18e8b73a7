"""Tests for the connection request lifecycle."""

import pytest

from alnet.application.use_cases.connections import (
    block_user,
    get_connection_status,
    list_connections,
    list_pending_requests,
    remove_connection,
    respond_to_connection,
    send_connection_request,
)
from alnet.domain.entities import ConnectionStatus, NotificationType
from alnet.domain.errors import Conflict, InvalidOperation, NotFound
from alnet.infrastructure.repositories import NotificationRepository


def test_send_request_creates_pending_row_and_notifies_receiver(db, alice, bob):
    connection = send_connection_request(
        db, requester_id=alice.id, receiver_id=bob.id, message="  Hi Bob  "
    )

    assert connection.status is ConnectionStatus.PENDING
    assert connection.message == "Hi Bob"

    notifications, total = NotificationRepository(db).list_for_user(bob.id)
    assert total == 1
    assert notifications[0].type is NotificationType.CONNECTION_REQUEST
    assert notifications[0].message == "Alice wants to connect with you"
    assert notifications[0].related_entity_id == str(connection.id)


def test_request_to_self_is_rejected(db, alice):
    with pytest.raises(InvalidOperation, match="yourself"):
        send_connection_request(db, requester_id=alice.id, receiver_id=alice.id)


def test_request_to_unknown_user(db, alice):
    with pytest.raises(NotFound, match="User not found"):
        send_connection_request(db, requester_id=alice.id, receiver_id=9999)


def test_duplicate_request_conflicts_in_both_directions(db, alice, bob):
    send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)

    with pytest.raises(Conflict, match="already exists"):
        send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)
    with pytest.raises(Conflict, match="already exists"):
        send_connection_request(db, requester_id=bob.id, receiver_id=alice.id)


def test_status_is_symmetric_with_initiator(db, alice, bob, carol):
    connection = send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)

    from_alice = get_connection_status(db, user_id=alice.id, other_user_id=bob.id)
    from_bob = get_connection_status(db, user_id=bob.id, other_user_id=alice.id)

    assert from_alice.status == from_bob.status == "pending"
    assert from_alice.initiator == "self"
    assert from_bob.initiator == "other"
    assert from_alice.connection_id == from_bob.connection_id == connection.id

    none = get_connection_status(db, user_id=alice.id, other_user_id=carol.id)
    assert none.as_dict() == {"status": "none"}


def test_accepting_notifies_requester(db, alice, bob):
    connection = send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)

    accepted = respond_to_connection(
        db, connection_id=connection.id, responder_id=bob.id, accepted=True
    )

    assert accepted.status is ConnectionStatus.ACCEPTED
    assert accepted.responded_at is not None
    notifications, _ = NotificationRepository(db).list_for_user(alice.id)
    assert [n.type for n in notifications] == [NotificationType.CONNECTION_ACCEPTED]
    assert notifications[0].action_url == f"/profile/{bob.id}"


def test_rejecting_sends_no_notification(db, alice, bob):
    connection = send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)

    rejected = respond_to_connection(
        db, connection_id=connection.id, responder_id=bob.id, accepted=False
    )

    assert rejected.status is ConnectionStatus.REJECTED
    assert NotificationRepository(db).count_unread(alice.id) == 0


def test_only_receiver_may_respond(db, alice, bob):
    connection = send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)

    with pytest.raises(NotFound, match="Connection not found"):
        respond_to_connection(
            db, connection_id=connection.id, responder_id=alice.id, accepted=True
        )
    with pytest.raises(NotFound):
        respond_to_connection(db, connection_id=12345, responder_id=bob.id, accepted=True)


def test_block_overrides_existing_row_and_is_terminal(db, alice, bob):
    connection = send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)

    blocked = block_user(db, blocker_id=bob.id, blocked_id=alice.id)

    assert blocked.id == connection.id
    assert blocked.status is ConnectionStatus.BLOCKED
    assert block_user(db, blocker_id=bob.id, blocked_id=alice.id).id == connection.id

    with pytest.raises(InvalidOperation, match="Cannot move connection from blocked"):
        respond_to_connection(
            db, connection_id=connection.id, responder_id=bob.id, accepted=True
        )
    with pytest.raises(InvalidOperation, match="cannot be removed"):
        remove_connection(db, user_id=alice.id, connection_id=connection.id)
    with pytest.raises(Conflict):
        send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)


def test_block_without_prior_connection_creates_row(db, alice, carol):
    blocked = block_user(db, blocker_id=alice.id, blocked_id=carol.id)

    assert blocked.requester_id == alice.id
    assert blocked.receiver_id == carol.id
    assert blocked.status is ConnectionStatus.BLOCKED


def test_remove_connection_allows_new_request(db, alice, bob, carol):
    connection = send_connection_request(db, requester_id=alice.id, receiver_id=bob.id)
    respond_to_connection(db, connection_id=connection.id, responder_id=bob.id, accepted=True)

    with pytest.raises(InvalidOperation, match="Unauthorized"):
        remove_connection(db, user_id=carol.id, connection_id=connection.id)

    remove_connection(db, user_id=bob.id, connection_id=connection.id)

    assert get_connection_status(db, user_id=alice.id, other_user_id=bob.id).status == "none"
    again = send_connection_request(db, requester_id=bob.id, receiver_id=alice.id)
    assert again.status is ConnectionStatus.PENDING

    with pytest.raises(NotFound):
        remove_connection(db, user_id=bob.id, connection_id=connection.id)


def test_listing_connections_and_pending_requests(db, make_user, alice):
    others = [make_user() for _ in range(3)]
    for other in others:
        send_connection_request(db, requester_id=other.id, receiver_id=alice.id)
    respond_to_connection(
        db,
        connection_id=get_connection_status(
            db, user_id=alice.id, other_user_id=others[0].id
        ).connection_id,
        responder_id=alice.id,
        accepted=True,
    )

    pending = list_pending_requests(db, user_id=alice.id, page=1, limit=1)
    assert pending.total == 2
    assert pending.pages == 2
    assert len(pending.items) == 1
    assert pending.items[0].partner.id in {others[1].id, others[2].id}

    accepted = list_connections(db, user_id=others[0].id)
    assert accepted.total == 1
    assert accepted.items[0].partner.id == alice.id

    # Requests sent by the user are not "pending" for them.
    assert list_pending_requests(db, user_id=others[1].id).total == 0
