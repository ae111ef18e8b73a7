"""Tests for direct messages and derived conversations."""

import pytest

from alnet.application.use_cases.connections import block_user
from alnet.application.use_cases.messages import (
    delete_message,
    get_conversation,
    list_conversations,
    list_undelivered_messages,
    mark_message_delivered,
    mark_message_read,
    send_message,
)
from alnet.domain.entities import MessageStatus, NotificationPriority, NotificationType
from alnet.domain.errors import InvalidOperation, NotFound
from alnet.infrastructure.repositories import NotificationRepository


def test_send_message_persists_sent_row_and_notifies(db, alice, bob):
    message = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="Hello Bob")

    assert message.status is MessageStatus.SENT
    assert message.read_at is None

    notifications, _ = NotificationRepository(db).list_for_user(bob.id)
    assert len(notifications) == 1
    assert notifications[0].type is NotificationType.NEW_MESSAGE
    assert notifications[0].priority is NotificationPriority.HIGH
    assert notifications[0].metadata == {"preview": "Hello Bob"}
    assert notifications[0].sender_id == alice.id


@pytest.mark.parametrize("content", ["", "   "])
def test_blank_content_is_rejected(db, alice, bob, content):
    with pytest.raises(InvalidOperation, match="must not be empty"):
        send_message(db, sender_id=alice.id, receiver_id=bob.id, content=content)


def test_cannot_message_self_or_unknown_users(db, alice):
    with pytest.raises(InvalidOperation):
        send_message(db, sender_id=alice.id, receiver_id=alice.id, content="me")
    with pytest.raises(NotFound):
        send_message(db, sender_id=alice.id, receiver_id=4242, content="ghost")


def test_blocked_pair_cannot_exchange_messages(db, alice, bob):
    block_user(db, blocker_id=bob.id, blocked_id=alice.id)

    with pytest.raises(InvalidOperation, match="not allowed"):
        send_message(db, sender_id=alice.id, receiver_id=bob.id, content="hi")
    with pytest.raises(InvalidOperation, match="not allowed"):
        send_message(db, sender_id=bob.id, receiver_id=alice.id, content="hi")


def test_status_only_moves_forward(db, alice, bob):
    message = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="ping")

    delivered = mark_message_delivered(db, message_id=message.id, receiver_id=bob.id)
    assert delivered.status is MessageStatus.DELIVERED

    read = mark_message_read(db, message_id=message.id, reader_id=bob.id)
    assert read.status is MessageStatus.READ
    assert read.read_at is not None

    again = mark_message_read(db, message_id=message.id, reader_id=bob.id)
    assert again.read_at == read.read_at

    still_read = mark_message_delivered(db, message_id=message.id, receiver_id=bob.id)
    assert still_read.status is MessageStatus.READ


def test_only_receiver_can_mark_read(db, alice, bob):
    message = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="ping")

    with pytest.raises(NotFound, match="Message not found"):
        mark_message_read(db, message_id=message.id, reader_id=alice.id)


def test_conversation_pagination_returns_chronological_pages(db, alice, bob):
    for index in range(5):
        sender, receiver = (alice, bob) if index % 2 == 0 else (bob, alice)
        send_message(db, sender_id=sender.id, receiver_id=receiver.id, content=f"m{index}")

    first = get_conversation(db, user_id=alice.id, partner_id=bob.id, page=1, limit=2)
    last = get_conversation(db, user_id=bob.id, partner_id=alice.id, page=3, limit=2)

    assert first.total == 5
    assert first.pages == 3
    assert [message.content for message in first.items] == ["m3", "m4"]
    assert [message.content for message in last.items] == ["m0"]


def test_conversations_have_one_entry_per_partner(db, alice, bob, carol):
    send_message(db, sender_id=alice.id, receiver_id=bob.id, content="to bob")
    send_message(db, sender_id=bob.id, receiver_id=alice.id, content="from bob")
    send_message(db, sender_id=carol.id, receiver_id=alice.id, content="from carol")
    latest_to_carol = send_message(
        db, sender_id=alice.id, receiver_id=carol.id, content="to carol"
    )

    result = list_conversations(db, user_id=alice.id)

    assert result.total == 2
    assert [c.partner_id for c in result.items] == [carol.id, bob.id]
    carol_entry, bob_entry = result.items
    assert carol_entry.last_message.id == latest_to_carol.id
    assert carol_entry.unread is False
    assert carol_entry.partner.name == "Carol"
    assert bob_entry.last_message.content == "from bob"
    assert bob_entry.unread is True

    mark_message_read(db, message_id=bob_entry.last_message.id, reader_id=alice.id)
    refreshed = list_conversations(db, user_id=alice.id)
    assert all(not conversation.unread for conversation in refreshed.items)


def test_soft_deleted_messages_disappear_from_every_listing(db, alice, bob):
    kept = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="keep")
    removed = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="oops")

    with pytest.raises(InvalidOperation, match="Cannot delete message"):
        delete_message(db, message_id=removed.id, requester_id=bob.id)

    deleted = delete_message(db, message_id=removed.id, requester_id=alice.id)
    assert deleted.is_deleted is True

    thread = get_conversation(db, user_id=bob.id, partner_id=alice.id)
    assert [message.id for message in thread.items] == [kept.id]
    assert list_conversations(db, user_id=bob.id).items[0].last_message.id == kept.id
    assert [m.id for m in list_undelivered_messages(db, receiver_id=bob.id)] == [kept.id]

    with pytest.raises(NotFound):
        mark_message_read(db, message_id=removed.id, reader_id=bob.id)


def test_undelivered_messages_are_listed_oldest_first(db, alice, bob):
    first = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="one")
    second = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="two")
    mark_message_read(db, message_id=first.id, reader_id=bob.id)
    third = send_message(db, sender_id=alice.id, receiver_id=bob.id, content="three")

    pending = list_undelivered_messages(db, receiver_id=bob.id)

    assert [message.id for message in pending] == [second.id, third.id]
