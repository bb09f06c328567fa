from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for event bus state.

    The bus assumes single-threaded use by default. Pick ``THREAD`` when
    listeners are registered, removed, emitted or deferred from several
    threads.
    """

    THREAD = "thread"
    """Guard registry, deferred queue and subscriber state with ``threading.RLock``."""

    NONE = "none"
    """Disable locking around registry and queue access."""
