from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from eventwire.exceptions import EventWireInvalidListenerTypeError

DECLARED_EVENTS_METHOD = "declared_events"


@runtime_checkable
class EventSubscriber(Protocol):
    """Contract for classes that wire several of their methods to events at once.

    ``declared_events`` maps an event name to a method name, or to a sequence
    of method names that are registered in order.

    Examples:
        .. code-block:: python

            class AuditSubscriber:
                def declared_events(self) -> dict[str, str | list[str]]:
                    return {
                        "user.created": "on_created",
                        "user.deleted": ["on_deleted", "flush"],
                    }

    """

    def declared_events(self) -> Mapping[str, str | Sequence[str]]: ...


def parse_event_map(declared: Any, *, owner_name: str) -> dict[str, tuple[str, ...]]:
    """Validate a subscriber's declared event map and normalize its values to tuples.

    Args:
        declared: Value returned by ``declared_events``.
        owner_name: Subscriber name used in error messages.

    Raises:
        EventWireInvalidListenerTypeError: The map is not a mapping, has an
            empty or non-string event name, or a value that is not a method
            name or a sequence of method names.

    """
    if not isinstance(declared, Mapping):
        msg = (
            f"{owner_name}.{DECLARED_EVENTS_METHOD}() must return a mapping, "
            f"got {type(declared).__name__}."
        )
        raise EventWireInvalidListenerTypeError(msg)

    parsed: dict[str, tuple[str, ...]] = {}
    for event, methods in declared.items():
        if not isinstance(event, str) or not event:
            msg = f"{owner_name} declares an invalid event name {event!r}."
            raise EventWireInvalidListenerTypeError(msg)
        method_names = (methods,) if isinstance(methods, str) else methods
        if not isinstance(method_names, Sequence) or not all(
            isinstance(name, str) and name for name in method_names
        ):
            msg = f"{owner_name} declares invalid listener methods {methods!r} for event '{event}'."
            raise EventWireInvalidListenerTypeError(msg)
        parsed[event] = tuple(method_names)
    return parsed


__all__ = ["DECLARED_EVENTS_METHOD", "EventSubscriber", "parse_event_map"]
