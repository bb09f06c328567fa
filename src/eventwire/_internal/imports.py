from __future__ import annotations

import importlib
from typing import Any

from eventwire._internal.type_checks import is_runtime_class
from eventwire.exceptions import EventWireClassNotFoundError


def import_class(identifier: str) -> type[Any]:
    """Import a class from a ``"package.module:QualName"`` or ``"package.module.Name"`` path.

    Args:
        identifier: Import path of the class.

    Raises:
        EventWireClassNotFoundError: The module cannot be imported, the name
            does not exist in it, or the object found is not a class.

    """
    module_name, separator, qualname = identifier.partition(":")
    if not separator:
        module_name, _, qualname = identifier.rpartition(".")
    if not module_name or not qualname:
        raise EventWireClassNotFoundError(identifier)

    try:
        found: Any = importlib.import_module(module_name)
    except ImportError as error:
        raise EventWireClassNotFoundError(identifier) from error

    for part in qualname.split("."):
        found = getattr(found, part, None)
        if found is None:
            raise EventWireClassNotFoundError(identifier)

    if not is_runtime_class(found):
        raise EventWireClassNotFoundError(identifier)
    return found


__all__ = ["import_class"]
