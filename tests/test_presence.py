"""Tests for the in-memory presence tracker."""

from alnet.infrastructure.realtime import PresenceTracker


def test_user_with_three_sessions_goes_online_and_offline_once():
    tracker = PresenceTracker()
    events: list[tuple[int, bool]] = []
    tracker.add_listener(lambda user_id, online: events.append((user_id, online)))

    assert tracker.register("s1", 7) is True
    assert tracker.register("s2", 7) is False
    assert tracker.register("s3", 7) is False
    assert tracker.sessions_for(7) == frozenset({"s1", "s2", "s3"})

    assert tracker.unregister("s1") == (7, False)
    assert tracker.unregister("s2") == (7, False)
    assert tracker.is_online(7)
    assert tracker.unregister("s3") == (7, True)
    assert not tracker.is_online(7)

    assert events == [(7, True), (7, False)]


def test_unknown_session_is_ignored():
    tracker = PresenceTracker()

    assert tracker.unregister("missing") == (None, False)
    assert tracker.user_for("missing") is None


def test_registering_same_pair_twice_is_a_no_op():
    tracker = PresenceTracker()

    assert tracker.register("s1", 1) is True
    assert tracker.register("s1", 1) is False
    assert tracker.online_users() == [1]


def test_moving_a_session_to_another_user():
    tracker = PresenceTracker()
    events: list[tuple[int, bool]] = []
    tracker.add_listener(lambda user_id, online: events.append((user_id, online)))

    tracker.register("s1", 1)
    tracker.register("s1", 2)

    assert tracker.user_for("s1") == 2
    assert tracker.online_users() == [2]
    assert events == [(1, True), (1, False), (2, True)]


def test_failing_listener_does_not_break_registration():
    tracker = PresenceTracker()

    def broken(user_id, online):
        raise RuntimeError("boom")

    tracker.add_listener(broken)

    assert tracker.register("s1", 3) is True
    assert tracker.is_online(3)

    tracker.remove_listener(broken)
    tracker.clear()
    assert tracker.online_users() == []
