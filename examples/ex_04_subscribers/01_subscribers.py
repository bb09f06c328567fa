"""Subscribers.

A subscriber declares which of its methods listen to which events. Each method
runs on a freshly built instance, and unsubscribing clears every listener of
the declared events.
"""

from __future__ import annotations

from eventwire import EventBus


class Ledger:
    def __init__(self) -> None:
        self.name = "main"


class AuditSubscriber:
    def __init__(self, ledger: Ledger) -> None:
        self.ledger = ledger

    def declared_events(self) -> dict[str, str | list[str]]:
        return {
            "user.created": "on_created",
            "user.deleted": ["on_deleted", "flush"],
        }

    def on_created(self, name: str) -> None:
        print(f"created={name} ledger={self.ledger.name}")  # => created=ada ledger=main

    def on_deleted(self, name: str) -> None:
        print(f"deleted={name}")  # => deleted=ada

    def flush(self, name: str) -> None:
        print(f"flushed={name}")  # => flushed=ada


def main() -> None:
    bus = EventBus()
    bus.subscribe(AuditSubscriber)

    bus.emit("user.created", "ada")
    bus.emit("user.deleted", "ada")

    subscribers = [subscriber.__name__ for subscriber in bus.get_subscribers()]
    print(f"subscribers={subscribers}")  # => subscribers=['AuditSubscriber']

    bus.unsubscribe(AuditSubscriber)
    bus.emit("user.created", "bob")
    print(f"events={sorted(bus.get_listeners())}")  # => events=[]


if __name__ == "__main__":
    main()
