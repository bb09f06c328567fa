from eventwire._internal.resolver import (
    DEFAULT_MAX_RESOLUTION_DEPTH,
    DependencyResolver,
    find_method,
)

__all__ = [
    "DEFAULT_MAX_RESOLUTION_DEPTH",
    "DependencyResolver",
    "find_method",
]
