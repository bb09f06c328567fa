"""Priorities and once-listeners.

Lower priorities run first. A once-listener fires on the next emit only and
is then removed from the registry.
"""

from __future__ import annotations

from eventwire import EventBus


def main() -> None:
    bus = EventBus()
    order: list[str] = []

    bus.on("order.placed", lambda *_: order.append("audit"), 10)
    bus.on("order.placed", lambda *_: order.append("charge"), 1)
    bus.once("order.placed", lambda *_: order.append("first-order-bonus"), 1)

    bus.emit("order.placed", 42)
    print(f"first={order}")  # => first=['charge', 'first-order-bonus', 'audit']

    order.clear()
    bus.emit("order.placed", 43)
    print(f"second={order}")  # => second=['charge', 'audit']

    print(f"priorities={list(bus.get_listeners('order.placed'))}")  # => priorities=[1, 10]


if __name__ == "__main__":
    main()
