"""Process-local registry of which users hold live realtime sessions."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Callable

logger = logging.getLogger(__name__)

PresenceListener = Callable[[int, bool], None]


class PresenceTracker:
    """Map session ids to user ids, many sessions per user.

    Listeners are told ``(user_id, True)`` when a user's first session is
    registered and ``(user_id, False)`` when the last one goes away. They are
    called outside the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users_by_session: dict[str, int] = {}
        self._sessions_by_user: defaultdict[int, set[str]] = defaultdict(set)
        self._listeners: list[PresenceListener] = []

    def add_listener(self, listener: PresenceListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: PresenceListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def register(self, session_id: str, user_id: int) -> bool:
        """Attach ``session_id`` to ``user_id``; return ``True`` if the user came online."""

        went_offline: int | None = None
        with self._lock:
            current = self._users_by_session.get(session_id)
            if current == user_id:
                return False
            if current is not None:
                went_offline = self._detach(session_id, current)
            came_online = not self._sessions_by_user.get(user_id)
            self._users_by_session[session_id] = user_id
            self._sessions_by_user[user_id].add(session_id)
            listeners = list(self._listeners)

        if went_offline is not None:
            self._notify(listeners, went_offline, False)
        if came_online:
            self._notify(listeners, user_id, True)
        return came_online

    def unregister(self, session_id: str) -> tuple[int | None, bool]:
        """Drop ``session_id``.

        Returns the user it belonged to (``None`` if unknown) and whether that
        was the user's last session.
        """

        with self._lock:
            user_id = self._users_by_session.get(session_id)
            if user_id is None:
                return None, False
            went_offline = self._detach(session_id, user_id) is not None
            listeners = list(self._listeners)

        if went_offline:
            self._notify(listeners, user_id, False)
        return user_id, went_offline

    def user_for(self, session_id: str) -> int | None:
        with self._lock:
            return self._users_by_session.get(session_id)

    def is_online(self, user_id: int) -> bool:
        with self._lock:
            return bool(self._sessions_by_user.get(user_id))

    def sessions_for(self, user_id: int) -> frozenset[str]:
        with self._lock:
            return frozenset(self._sessions_by_user.get(user_id, ()))

    def online_users(self) -> list[int]:
        with self._lock:
            return sorted(user_id for user_id, sessions in self._sessions_by_user.items() if sessions)

    def clear(self) -> None:
        with self._lock:
            self._users_by_session.clear()
            self._sessions_by_user.clear()

    def _detach(self, session_id: str, user_id: int) -> int | None:
        # Caller holds the lock.
        self._users_by_session.pop(session_id, None)
        sessions = self._sessions_by_user.get(user_id)
        if sessions is None:
            return None
        sessions.discard(session_id)
        if sessions:
            return None
        self._sessions_by_user.pop(user_id, None)
        return user_id

    @staticmethod
    def _notify(listeners: list[PresenceListener], user_id: int, online: bool) -> None:
        for listener in listeners:
            try:
                listener(user_id, online)
            except Exception:
                logger.exception("Presence listener failed for user %s", user_id)


__all__ = ["PresenceListener", "PresenceTracker"]
