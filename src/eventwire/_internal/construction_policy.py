from __future__ import annotations

import datetime
import decimal
import enum
import pathlib
import uuid
from dataclasses import dataclass
from typing import Any, TypeGuard

from eventwire._internal.type_checks import is_runtime_class, unwrap_annotation

_PRIMITIVE_MODULES = frozenset({"builtins", "typing", "typing_extensions"})


@dataclass(frozen=True, slots=True)
class ParameterTypePolicy:
    """Internal policy deciding which parameter annotations are auto-wired.

    Builtins and value types are treated as primitives: the resolver never
    constructs them and falls back to the parameter default instead.
    """

    value_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
        enum.Enum,
    )

    def dependency_type(self, annotation: Any) -> type[Any] | None:
        """Return the class to construct for an annotation, or ``None`` for primitives.

        Args:
            annotation: Resolved parameter annotation, or ``None`` when the
                parameter is untyped.

        """
        if annotation is None:
            return None
        candidate = unwrap_annotation(annotation)
        if not self.is_class_dependency(candidate):
            return None
        return candidate

    def is_class_dependency(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a candidate is a class type rather than a primitive.

        Abstract classes and protocols pass this check; the resolver then
        reports them as not instantiable.

        Args:
            candidate: Value being checked for eligibility or runtime type constraints.

        """
        if not is_runtime_class(candidate):
            return False
        if candidate.__module__ in _PRIMITIVE_MODULES:
            return False
        if issubclass(candidate, type):
            return False
        return not issubclass(candidate, self.value_base_types)
