from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from eventwire._internal.construction_policy import ParameterTypePolicy
from eventwire._internal.imports import import_class
from eventwire._internal.integrations.pydantic_settings import is_pydantic_settings_subclass
from eventwire._internal.parameters import ParameterDescriptor, ParameterReader
from eventwire._internal.type_checks import is_instantiable_class, is_runtime_class
from eventwire.exceptions import (
    EventWireDependencyCycleSuspectedError,
    EventWireMethodNotFoundError,
    EventWireNotInstantiableError,
    EventWireResolutionTargetMissingError,
    EventWireUnresolvableParameterError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESOLUTION_DEPTH = 64


@dataclass(frozen=True, slots=True)
class _ResolutionContext:
    """Chain of classes under construction for one resolve call.

    A new context is derived for every nested dependency; contexts are never
    shared between calls.
    """

    chain: tuple[type[Any], ...] = ()

    def enter(self, cls: type[Any]) -> _ResolutionContext:
        return _ResolutionContext(chain=(*self.chain, cls))


def find_method(receiver: type[Any], method_name: str) -> Callable[..., Any]:
    """Return the unbound attribute ``method_name`` of ``receiver``.

    Args:
        receiver: Class the method is looked up on.
        method_name: Name of the method.

    Raises:
        EventWireMethodNotFoundError: The attribute is missing or not callable.

    """
    method = getattr(receiver, method_name, None)
    if method is None or not callable(method):
        raise EventWireMethodNotFoundError(receiver, method_name)
    return method


class DependencyResolver:
    """Construct objects and invoke callables by auto-wiring their parameters.

    Every class-typed parameter is constructed from scratch by recursively
    resolving its own constructor. Primitive or untyped parameters take their
    default value, or fail with ``EventWireUnresolvableParameterError``.

    Nothing is cached and nothing can be bound: two parameters of the same
    type anywhere in the graph receive two distinct instances.

    Examples:
        .. code-block:: python

            class Mailer: ...


            class Signup:
                def __init__(self, mailer: Mailer, retries: int = 3) -> None:
                    self.mailer = mailer
                    self.retries = retries


            signup = DependencyResolver().resolve_constructor(Signup)

    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_RESOLUTION_DEPTH) -> None:
        """Initialize a resolver.

        Args:
            max_depth: Longest dependency chain the resolver will follow before
                reporting a suspected dependency cycle.

        """
        if max_depth < 1:
            msg = f"max_depth must be a positive integer, got {max_depth!r}."
            raise ValueError(msg)
        self._max_depth = max_depth
        self._parameter_reader = ParameterReader()
        self._type_policy = ParameterTypePolicy()

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @overload
    def resolve_constructor(self, target: type[T]) -> T: ...

    @overload
    def resolve_constructor(self, target: Any) -> Any: ...

    def resolve_constructor(self, target: Any) -> Any:
        """Build a fresh instance of ``target`` with auto-wired constructor arguments.

        Args:
            target: A class, an existing instance (only its type is used) or a
                ``"package.module:QualName"`` import path.

        Raises:
            EventWireNotInstantiableError: The class is abstract, a protocol or
                otherwise cannot be constructed.
            EventWireUnresolvableParameterError: A constructor parameter has no
                class type and no default.
            EventWireDependencyCycleSuspectedError: The dependency chain
                exceeded ``max_depth``.

        """
        cls = self._target_class(target)
        return self._construct(cls, _ResolutionContext())

    def resolve_method(self, target: Any, method_name: str) -> Any:
        """Invoke ``method_name`` on a freshly constructed instance of ``target``.

        The instance is always built anew; when ``target`` is an instance only
        its type is used. Method parameters follow the same rule as
        constructor parameters.

        Args:
            target: A class, an instance or an import path.
            method_name: Name of the method to invoke.

        Raises:
            EventWireMethodNotFoundError: The method does not exist.

        """
        cls = self._target_class(target)
        self._ensure_instantiable(cls)
        find_method(cls, method_name)

        context = _ResolutionContext()
        instance = self._construct(cls, context)
        bound = getattr(instance, method_name)
        return self._invoke(
            bound,
            context.enter(cls),
            owner_name=f"{cls.__qualname__}.{method_name}",
        )

    def resolve_callable(self, target: Callable[..., Any]) -> Any:
        """Invoke a function, bound method or callable object with auto-wired arguments.

        Args:
            target: Callable to invoke.

        """
        if target is None:
            raise EventWireResolutionTargetMissingError
        return self._invoke(
            target,
            _ResolutionContext(),
            owner_name=self._callable_name(target),
        )

    def _target_class(self, target: Any) -> type[Any]:
        if target is None:
            raise EventWireResolutionTargetMissingError
        if isinstance(target, str):
            if not target:
                raise EventWireResolutionTargetMissingError
            return import_class(target)
        if is_runtime_class(target):
            return target
        return type(target)

    def _ensure_instantiable(self, cls: type[Any]) -> None:
        if not is_instantiable_class(cls):
            raise EventWireNotInstantiableError(cls)

    def _construct(self, cls: type[Any], context: _ResolutionContext) -> Any:
        self._ensure_instantiable(cls)
        context = context.enter(cls)
        if len(context.chain) > self._max_depth:
            logger.debug(
                "Resolution depth ceiling hit: max_depth=%d target=%s",
                self._max_depth,
                cls.__qualname__,
            )
            raise EventWireDependencyCycleSuspectedError(context.chain, self._max_depth)

        if is_pydantic_settings_subclass(cls):
            return cls()
        if not self._parameter_reader.declares_constructor(cls):
            return cls()

        parameters = self._parameter_reader.read_constructor(cls)
        args, kwargs = self._resolve_arguments(
            parameters,
            context,
            owner_name=cls.__qualname__,
        )
        return cls(*args, **kwargs)

    def _invoke(
        self,
        target: Callable[..., Any],
        context: _ResolutionContext,
        *,
        owner_name: str,
    ) -> Any:
        parameters = self._parameter_reader.read_callable(target)
        args, kwargs = self._resolve_arguments(parameters, context, owner_name=owner_name)
        return target(*args, **kwargs)

    def _resolve_arguments(
        self,
        parameters: list[ParameterDescriptor],
        context: _ResolutionContext,
        *,
        owner_name: str,
    ) -> tuple[list[Any], dict[str, Any]]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in parameters:
            value = self._resolve_parameter(parameter, context, owner_name=owner_name)
            if parameter.is_keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs

    def _resolve_parameter(
        self,
        parameter: ParameterDescriptor,
        context: _ResolutionContext,
        *,
        owner_name: str,
    ) -> Any:
        dependency_type = self._type_policy.dependency_type(parameter.annotation)
        if dependency_type is None:
            if parameter.has_default:
                return parameter.default
            raise EventWireUnresolvableParameterError(
                parameter.name,
                owner_name,
                annotation_error=parameter.annotation_error,
            ) from parameter.annotation_error

        return self._construct(dependency_type, context)

    def _callable_name(self, target: Callable[..., Any]) -> str:
        return getattr(target, "__qualname__", repr(target))


__all__ = [
    "DEFAULT_MAX_RESOLUTION_DEPTH",
    "DependencyResolver",
    "find_method",
]
