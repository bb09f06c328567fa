"""Shared pytest fixtures for eventwire tests."""

import pytest

from eventwire.event_bus import EventBus
from eventwire.lock_mode import LockMode
from eventwire.resolver import DependencyResolver


@pytest.fixture()
def resolver() -> DependencyResolver:
    """Resolver with the default depth ceiling."""
    return DependencyResolver()


@pytest.fixture()
def bus(resolver: DependencyResolver) -> EventBus:
    """Single-threaded bus that keeps its deferred queue."""
    return EventBus(resolver)


@pytest.fixture()
def threaded_bus() -> EventBus:
    """Bus guarded by a re-entrant thread lock."""
    return EventBus(lock_mode=LockMode.THREAD)
