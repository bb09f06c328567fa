from __future__ import annotations

import inspect
import types
from typing import Annotated, Any, TypeGuard, Union, get_args, get_origin

_ANNOTATED_MIN_ARGS = 2


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: type[Any]) -> bool:
    """Return true when candidate is a ``typing.Protocol`` definition."""
    return bool(getattr(candidate, "_is_protocol", False))


def is_instantiable_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a class the resolver is allowed to construct.

    Abstract classes, protocols and metaclasses are rejected.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    if not is_runtime_class(candidate):
        return False
    if inspect.isabstract(candidate):
        return False
    if is_protocol_class(candidate):
        return False
    return not issubclass(candidate, type)


def unwrap_annotation(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata and a single ``None`` member of an optional union.

    ``Annotated[Service, ...]`` and ``Service | None`` both unwrap to ``Service``.
    Any other union is returned unchanged.
    """
    if get_origin(annotation) is Annotated:
        args = get_args(annotation)
        if len(args) >= _ANNOTATED_MIN_ARGS:
            return unwrap_annotation(args[0])

    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return unwrap_annotation(members[0])

    return annotation


__all__ = [
    "is_instantiable_class",
    "is_protocol_class",
    "is_runtime_class",
    "unwrap_annotation",
]
