from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from eventwire._internal.event_bus import EventBus
from eventwire._internal.resolver import DependencyResolver


@dataclass(frozen=True, slots=True)
class RecordedCall:
    """One listener invocation captured by ``EventRecorder``."""

    name: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]


@dataclass(slots=True)
class EventRecorder:
    """Build listeners that record their invocations in call order.

    Examples:
        .. code-block:: python

            def test_signup_notifies(eventwire_bus, eventwire_recorder):
                eventwire_bus.on("signup", eventwire_recorder.listener("mail"))
                eventwire_bus.emit("signup", "ada@example.com")

                assert eventwire_recorder.names == ["mail"]

    """

    calls: list[RecordedCall] = field(default_factory=list)

    def listener(self, name: str) -> Callable[..., None]:
        """Return a listener that records calls under ``name``.

        The listener accepts any arguments, so it can be emitted with or
        without them.

        Args:
            name: Label stored with every recorded call.

        """

        def _record(*args: Any, **kwargs: Any) -> None:
            self.calls.append(RecordedCall(name=name, args=args, kwargs=kwargs))

        _record.__qualname__ = f"recorded[{name}]"
        return _record

    @property
    def names(self) -> list[str]:
        return [call.name for call in self.calls]

    def clear(self) -> None:
        self.calls.clear()


@pytest.fixture()
def eventwire_resolver() -> DependencyResolver:
    """Create a per-test dependency resolver.

    Returns:
        A new ``DependencyResolver`` with the default depth ceiling.

    """
    return DependencyResolver()


@pytest.fixture()
def eventwire_bus(eventwire_resolver: DependencyResolver) -> EventBus:
    """Create a per-test event bus backed by ``eventwire_resolver``.

    Override ``eventwire_resolver`` to change how zero-argument listeners are
    auto-wired.

    Returns:
        A new, empty ``EventBus``.

    """
    return EventBus(eventwire_resolver)


@pytest.fixture()
def eventwire_recorder() -> EventRecorder:
    """Create a per-test ``EventRecorder``."""
    return EventRecorder()


__all__ = [
    "EventRecorder",
    "RecordedCall",
    "eventwire_bus",
    "eventwire_recorder",
    "eventwire_resolver",
]
