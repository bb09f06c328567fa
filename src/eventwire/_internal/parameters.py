from __future__ import annotations

import functools
import inspect
import sys
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, ForwardRef, get_type_hints

_SKIPPED_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
_HINT_ERRORS = (AttributeError, NameError, SyntaxError, TypeError)


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Reflected view of one constructor, method or callable parameter."""

    name: str
    annotation: Any
    """Resolved type hint, or ``None`` when the parameter is untyped."""
    kind: Any
    has_default: bool
    default: Any = None
    annotation_error: Exception | None = None
    """Error raised while evaluating a string annotation that stayed unresolved."""

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is Parameter.KEYWORD_ONLY


@dataclass(slots=True)
class ParameterReader:
    """Reads parameter descriptors from classes and callables.

    Type hints come from ``get_type_hints`` of the constructor members or of
    the callable. When that fails for a member, each string annotation is
    evaluated on its own so one unresolvable name does not hide the others.
    Class-level attribute annotations are never used for constructor
    parameters.
    """

    def read_constructor(self, cls: type[Any]) -> list[ParameterDescriptor]:
        """Return constructor parameters of a class, without ``self``/``cls``.

        Args:
            cls: Class whose ``__init__``/``__new__`` signature is inspected.

        """
        return self._read(cls)

    def read_callable(self, target: Callable[..., Any]) -> list[ParameterDescriptor]:
        """Return parameters of a function, bound method, partial or callable object.

        Args:
            target: Callable whose signature is inspected.

        """
        return self._read(target)

    def declares_constructor(self, cls: type[Any]) -> bool:
        """Return true when the class or a base other than ``object`` defines a constructor."""
        return cls.__init__ is not object.__init__ or cls.__new__ is not object.__new__

    def _read(self, target: Callable[..., Any]) -> list[ParameterDescriptor]:
        try:
            signature = inspect.signature(target)
        except (ValueError, TypeError):
            return []

        source = _unwrap_partial(target)
        hints, hints_error = self._resolved_type_hints(source)
        globalns = _global_namespace(source)

        descriptors: list[ParameterDescriptor] = []
        for parameter in signature.parameters.values():
            if parameter.kind in _SKIPPED_KINDS:
                continue
            annotation, annotation_error = self._parameter_annotation(
                parameter,
                hints,
                globalns,
                hints_error,
            )
            has_default = parameter.default is not Parameter.empty
            descriptors.append(
                ParameterDescriptor(
                    name=parameter.name,
                    annotation=annotation,
                    kind=parameter.kind,
                    has_default=has_default,
                    default=parameter.default if has_default else None,
                    annotation_error=annotation_error,
                ),
            )
        return descriptors

    def _parameter_annotation(
        self,
        parameter: Parameter,
        hints: dict[str, Any],
        globalns: dict[str, Any],
        hints_error: Exception | None,
    ) -> tuple[Any, Exception | None]:
        if parameter.name in hints:
            return hints[parameter.name], None
        raw_annotation = parameter.annotation
        if raw_annotation is Parameter.empty:
            return None, None
        if isinstance(raw_annotation, ForwardRef):
            raw_annotation = raw_annotation.__forward_arg__
        if not isinstance(raw_annotation, str):
            return raw_annotation, None
        if hints_error is None:
            return raw_annotation, None

        try:
            return eval(raw_annotation, globalns), None  # noqa: S307
        except _HINT_ERRORS as error:
            # Unresolvable forward references stay strings and count as untyped.
            return raw_annotation, error

    def _resolved_type_hints(
        self,
        target: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        if inspect.isclass(target):
            members: tuple[Any, ...] = (target.__init__, target.__new__)
        elif inspect.isfunction(target) or inspect.ismethod(target):
            members = (target,)
        else:
            members = (target, getattr(type(target), "__call__", None))

        merged: dict[str, Any] = {}
        hints_error: Exception | None = None
        for member in members:
            if member is None:
                continue
            try:
                member_hints = get_type_hints(member, include_extras=True)
            except _HINT_ERRORS as error:
                if hints_error is None:
                    hints_error = error
                continue
            for name, hint in member_hints.items():
                if name != "return":
                    merged.setdefault(name, hint)
        return merged, hints_error


def _unwrap_partial(target: Callable[..., Any]) -> Callable[..., Any]:
    while isinstance(target, functools.partial):
        target = target.func
    return target


def _global_namespace(target: Callable[..., Any]) -> dict[str, Any]:
    if not inspect.isclass(target):
        function = inspect.unwrap(getattr(target, "__func__", target))
        globalns = getattr(function, "__globals__", None)
        if globalns is None:
            call = getattr(type(target), "__call__", None)
            globalns = getattr(call, "__globals__", None)
        if globalns is not None:
            return globalns
    module = sys.modules.get(getattr(target, "__module__", None) or "")
    return dict(vars(module)) if module is not None else {}
