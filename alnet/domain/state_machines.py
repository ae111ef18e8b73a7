"""Legal status transitions for connections and messages.

Every status change in the use cases goes through :meth:`TransitionTable.ensure`
so illegal moves are rejected the same way everywhere.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Generic, TypeVar

from .entities import ConnectionStatus, MessageStatus
from .errors import InvalidOperation

S = TypeVar("S")


class TransitionTable(Generic[S]):
    """Map each state to the set of states it may move to."""

    def __init__(self, name: str, transitions: Mapping[S | None, Iterable[S]]) -> None:
        self.name = name
        self._transitions: dict[S | None, frozenset[S]] = {
            state: frozenset(targets) for state, targets in transitions.items()
        }

    def can(self, current: S | None, target: S) -> bool:
        return target in self._transitions.get(current, frozenset())

    def ensure(self, current: S | None, target: S) -> S:
        """Return ``target`` or raise :class:`InvalidOperation` if not allowed."""

        if not self.can(current, target):
            current_label = getattr(current, "value", current) or "none"
            target_label = getattr(target, "value", target)
            raise InvalidOperation(
                f"Cannot move {self.name} from {current_label} to {target_label}"
            )
        return target

    def targets(self, current: S | None) -> frozenset[S]:
        return self._transitions.get(current, frozenset())


# ``None`` stands for "no connection row yet". Accepted and rejected rows may
# be answered again; blocked is terminal.
CONNECTION_TRANSITIONS: TransitionTable[ConnectionStatus] = TransitionTable(
    "connection",
    {
        None: {ConnectionStatus.PENDING, ConnectionStatus.BLOCKED},
        ConnectionStatus.PENDING: {
            ConnectionStatus.ACCEPTED,
            ConnectionStatus.REJECTED,
            ConnectionStatus.BLOCKED,
        },
        ConnectionStatus.ACCEPTED: {
            ConnectionStatus.ACCEPTED,
            ConnectionStatus.REJECTED,
            ConnectionStatus.BLOCKED,
        },
        ConnectionStatus.REJECTED: {
            ConnectionStatus.ACCEPTED,
            ConnectionStatus.REJECTED,
            ConnectionStatus.BLOCKED,
        },
        ConnectionStatus.BLOCKED: {ConnectionStatus.BLOCKED},
    },
)

MESSAGE_TRANSITIONS: TransitionTable[MessageStatus] = TransitionTable(
    "message",
    {
        None: {MessageStatus.SENT},
        MessageStatus.SENT: {MessageStatus.DELIVERED, MessageStatus.READ},
        MessageStatus.DELIVERED: {MessageStatus.DELIVERED, MessageStatus.READ},
        MessageStatus.READ: {MessageStatus.READ},
    },
)


__all__ = ["TransitionTable", "CONNECTION_TRANSITIONS", "MESSAGE_TRANSITIONS"]
