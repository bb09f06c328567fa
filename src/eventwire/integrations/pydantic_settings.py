from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from eventwire._internal.resolver import DEFAULT_MAX_RESOLUTION_DEPTH
from eventwire.lock_mode import LockMode


class EventBusSettings(BaseSettings):
    """Environment-driven configuration for ``EventBus.from_settings``.

    Values are read from ``EVENTWIRE_``-prefixed environment variables, for
    example ``EVENTWIRE_CLEAR_AFTER_DISPATCH=true`` or
    ``EVENTWIRE_LOCK_MODE=thread``.
    """

    model_config = SettingsConfigDict(env_prefix="EVENTWIRE_")

    clear_after_dispatch: bool = False
    """Drop deferred events once ``dispatch`` has emitted them."""

    max_resolution_depth: int = Field(default=DEFAULT_MAX_RESOLUTION_DEPTH, ge=1)
    """Longest dependency chain the resolver follows before giving up."""

    lock_mode: LockMode = LockMode.NONE
    """Locking strategy for bus state."""


__all__ = ["EventBusSettings"]
