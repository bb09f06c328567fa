from __future__ import annotations

from typing import Any


class EventWireError(Exception):
    """Represent a base class for all eventwire-specific failures.

    Catch this type when you want to handle any eventwire error path without
    matching each concrete exception class individually.
    """


class EventWireInvalidEventNameError(EventWireError):
    """Signal an empty event name.

    Raised by every ``EventBus`` operation that takes an event name
    (``on``, ``once``, ``emit``, ``defer``, ``get_listeners``,
    ``remove_listeners`` and ``remove_listener``).
    """

    def __init__(self, event: str) -> None:
        self.event = event
        super().__init__("Event name cannot be empty.")


class EventWireUnresolvableParameterError(EventWireError):
    """Signal a parameter that has neither a constructible type nor a default.

    Raised by ``DependencyResolver`` when a constructor, method or callable
    parameter is untyped or typed with a primitive (``int``, ``str``, ...)
    and declares no default value.

    Typical fixes include giving the parameter a default, annotating it with a
    class the resolver can build, or emitting the event with explicit
    arguments so the resolver is bypassed.

    When the parameter's annotation could not be evaluated, the original
    error is available as ``annotation_error`` and as ``__cause__``.
    """

    def __init__(
        self,
        parameter_name: str,
        target_name: str,
        *,
        annotation_error: Exception | None = None,
    ) -> None:
        self.parameter_name = parameter_name
        self.target_name = target_name
        self.annotation_error = annotation_error
        msg = f"Unable to resolve dependency parameter '{parameter_name}' of '{target_name}'."
        if annotation_error is not None:
            msg = f"{msg} Original annotation error: {annotation_error}"
        super().__init__(msg)


class EventWireNotInstantiableError(EventWireError):
    """Signal a resolution target that cannot be constructed.

    Raised for abstract classes, ``typing.Protocol`` classes, metaclasses and
    values that are not classes at all.
    """

    def __init__(self, target: Any) -> None:
        self.target = target
        name = getattr(target, "__qualname__", repr(target))
        super().__init__(f"{name} is not instantiable.")


class EventWireMethodNotFoundError(EventWireError):
    """Signal a method name that does not exist on the resolved type.

    Raised by ``DependencyResolver.resolve_method`` and when a
    ``MethodListener`` fires.
    """

    def __init__(self, receiver: type[Any], method_name: str) -> None:
        self.receiver = receiver
        self.method_name = method_name
        super().__init__(f"Method '{method_name}' does not exist on '{receiver.__qualname__}'.")


class EventWireInvalidListenerTypeError(EventWireError):
    """Signal a structurally malformed listener or subscriber event map.

    Raised by ``EventBus.on``/``once`` for listeners that are neither callable
    nor a ``(receiver, "method")`` pair, and by ``EventBus.subscribe`` when a
    subscriber's ``declared_events`` mapping is malformed.
    """

    def __init__(self, detail: str | None = None) -> None:
        msg = "Incorrect listener format. Listener must be a callable or a (Receiver, 'method') pair."
        if detail:
            msg = f"{msg} {detail}"
        super().__init__(msg)


class EventWireClassNotFoundError(EventWireError):
    """Signal a receiver import path that does not resolve to a class.

    Raised when a listener or subscriber is given as a
    ``"package.module:QualName"`` string that cannot be imported.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Class '{identifier}' is not found.")


class EventWireDependencyCycleSuspectedError(EventWireError):
    """Signal a dependency chain deeper than the resolver's depth ceiling.

    Auto-wiring has no cycle detection of its own: a type that depends on
    itself, directly or transitively, recurses until this ceiling is hit.

    Typical fixes include breaking the cycle with a default value or raising
    ``max_depth`` for legitimately deep graphs.
    """

    def __init__(self, chain: tuple[type[Any], ...], max_depth: int) -> None:
        self.chain = chain
        self.max_depth = max_depth
        rendered = " -> ".join(item.__qualname__ for item in chain[-8:])
        super().__init__(
            f"Dependency chain exceeded max depth {max_depth}; cycle suspected near: {rendered}.",
        )


class EventWireResolutionTargetMissingError(EventWireError):
    """Signal a resolver call with no target to resolve.

    Raised by ``resolve_constructor``, ``resolve_method`` and
    ``resolve_callable`` when the target is ``None`` or an empty import path.
    """

    def __init__(self) -> None:
        super().__init__("Need to define a target first to resolve.")
