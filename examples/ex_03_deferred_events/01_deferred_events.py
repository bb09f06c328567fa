"""Deferred events.

``defer`` queues an event with its arguments and ``dispatch`` emits the queue
in order. The queue is replayed by every ``dispatch`` unless the bus is created
with ``clear_after_dispatch=True``.
"""

from __future__ import annotations

from eventwire import EventBus


def main() -> None:
    sent: list[str] = []
    bus = EventBus()
    bus.on("mail.queued", sent.append)
    bus.defer("mail.queued", "a").defer("mail.queued", "b")

    print(f"before_dispatch={sent}")  # => before_dispatch=[]

    bus.dispatch()
    print(f"after_dispatch={sent}")  # => after_dispatch=['a', 'b']

    bus.dispatch()
    print(f"replayed={sent}")  # => replayed=['a', 'b', 'a', 'b']

    cleared: list[str] = []
    clearing_bus = EventBus(clear_after_dispatch=True)
    clearing_bus.on("mail.queued", cleared.append)
    clearing_bus.defer("mail.queued", "c")
    clearing_bus.dispatch()
    clearing_bus.dispatch()
    print(f"cleared={cleared}")  # => cleared=['c']


if __name__ == "__main__":
    main()
