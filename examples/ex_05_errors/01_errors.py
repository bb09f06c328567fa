"""Errors.

Every failure raised by eventwire derives from ``EventWireError``. Listener
errors are not wrapped: they propagate out of ``emit`` unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eventwire import (
    DependencyResolver,
    EventBus,
    EventWireError,
    EventWireInvalidEventNameError,
    EventWireNotInstantiableError,
    EventWireUnresolvableParameterError,
)


class Storage(ABC):
    @abstractmethod
    def save(self) -> None: ...


class Report:
    def __init__(self, title: str) -> None:
        self.title = title


def main() -> None:
    resolver = DependencyResolver()

    try:
        resolver.resolve_constructor(Storage)
    except EventWireNotInstantiableError as error:
        print(f"not_instantiable={error}")  # => not_instantiable=Storage is not instantiable.

    try:
        resolver.resolve_constructor(Report)
    except EventWireUnresolvableParameterError as error:
        print(f"parameter={error.parameter_name}")  # => parameter=title

    bus = EventBus(resolver)
    try:
        bus.emit("")
    except EventWireInvalidEventNameError as error:
        print(f"base={isinstance(error, EventWireError)}")  # => base=True


if __name__ == "__main__":
    main()
