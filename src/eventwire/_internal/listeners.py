from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class MethodListener:
    """Listener that names a method of a class that is instantiated on each call.

    Register one with ``bus.on("event", (Receiver, "method"))``. Two entries
    with the same receiver and method compare equal, so the same pair can be
    used to remove the listener later.
    """

    receiver: type[Any]
    method_name: str

    def __repr__(self) -> str:
        return f"MethodListener({self.receiver.__qualname__}.{self.method_name})"


Listener: TypeAlias = Callable[..., Any] | MethodListener
"""A plain callable or a ``MethodListener``."""


@dataclass(frozen=True, slots=True)
class OnceGroup:
    """Snapshot of a priority's once-listeners, placed at the once-slot position."""

    listeners: tuple[Listener, ...]


@dataclass(slots=True, eq=False)
class PersistentSlot:
    listener: Listener


@dataclass(slots=True, eq=False)
class OnceSlot:
    listeners: list[Listener] = field(default_factory=list)


Slot: TypeAlias = PersistentSlot | OnceSlot


@dataclass(slots=True)
class PriorityBucket:
    """Ordered slots registered at one priority of one event.

    Persistent listeners each get their own slot in registration order. All
    once-listeners share a single ``OnceSlot`` whose position is fixed by the
    first once-listener registered at this priority.
    """

    slots: list[Slot] = field(default_factory=list)

    def add(self, listener: Listener) -> None:
        self.slots.append(PersistentSlot(listener))

    def add_once(self, listener: Listener) -> None:
        once_slot = self.once_slot()
        if once_slot is None:
            once_slot = OnceSlot()
            self.slots.append(once_slot)
        once_slot.listeners.append(listener)

    def once_slot(self) -> OnceSlot | None:
        for slot in self.slots:
            if isinstance(slot, OnceSlot):
                return slot
        return None

    def detach(self, slot: Slot) -> bool:
        """Remove ``slot`` by identity; return false if it is no longer here."""
        for index, candidate in enumerate(self.slots):
            if candidate is slot:
                del self.slots[index]
                return True
        return False

    def remove_first(self, listener: Listener) -> bool:
        """Remove the first slot entry equal to ``listener`` in positional order."""
        for index, slot in enumerate(self.slots):
            if isinstance(slot, PersistentSlot):
                if slot.listener == listener:
                    del self.slots[index]
                    return True
                continue
            for position, candidate in enumerate(slot.listeners):
                if candidate == listener:
                    del slot.listeners[position]
                    if not slot.listeners:
                        del self.slots[index]
                    return True
        return False

    def is_empty(self) -> bool:
        return not self.slots

    def snapshot(self) -> list[Listener | OnceGroup]:
        return [
            slot.listener if isinstance(slot, PersistentSlot) else OnceGroup(tuple(slot.listeners))
            for slot in self.slots
        ]


@dataclass(frozen=True, slots=True)
class DeferredEvent:
    """An event and the arguments captured by ``EventBus.defer``."""

    event: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "DeferredEvent",
    "Listener",
    "MethodListener",
    "OnceGroup",
    "OnceSlot",
    "PersistentSlot",
    "PriorityBucket",
    "Slot",
]
