from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import TYPE_CHECKING, Any, overload

from eventwire._internal.imports import import_class
from eventwire._internal.listeners import (
    DeferredEvent,
    Listener,
    MethodListener,
    OnceGroup,
    OnceSlot,
    PriorityBucket,
)
from eventwire._internal.resolver import DependencyResolver, find_method
from eventwire._internal.subscriber import DECLARED_EVENTS_METHOD, parse_event_map
from eventwire._internal.type_checks import is_runtime_class
from eventwire.exceptions import (
    EventWireInvalidEventNameError,
    EventWireInvalidListenerTypeError,
)
from eventwire.lock_mode import LockMode

if TYPE_CHECKING:
    from typing_extensions import Self

    from eventwire.integrations.pydantic_settings import EventBusSettings

logger = logging.getLogger(__name__)

_METHOD_LISTENER_PAIR_LENGTH = 2

BucketsSnapshot = dict[int, list[Listener | OnceGroup]]


class EventBus:
    """Register, prioritize and dispatch event listeners.

    Listeners run in ascending priority order. Within one priority, persistent
    listeners run in registration order and all ``once`` listeners run
    together at the position where the first of them was registered.

    A listener emitted with no arguments is invoked through the
    ``DependencyResolver``: its parameters are auto-wired, and a
    ``(Receiver, "method")`` listener gets a freshly constructed receiver.
    When arguments are given they are passed to the listener verbatim.

    The bus is synchronous. Listener errors propagate out of ``emit`` and
    abort the remaining listeners of that call.
    """

    def __init__(
        self,
        resolver: DependencyResolver | None = None,
        *,
        clear_after_dispatch: bool = False,
        lock_mode: LockMode = LockMode.NONE,
    ) -> None:
        """Initialize an empty bus.

        Args:
            resolver: Resolver used for zero-argument listener invocation.
                A default ``DependencyResolver`` is created when omitted.
            clear_after_dispatch: Drop deferred events once ``dispatch`` has
                taken them. By default the deferred queue is kept and replayed
                by every ``dispatch`` call.
            lock_mode: ``LockMode.THREAD`` guards all bus state with a
                re-entrant lock for multi-threaded use.

        """
        self._resolver = resolver if resolver is not None else DependencyResolver()
        self._clear_after_dispatch = clear_after_dispatch
        self._lock_mode = lock_mode
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )
        self._listeners: dict[str, dict[int, PriorityBucket]] = {}
        self._deferred: list[DeferredEvent] = []
        self._subscriptions: dict[type[Any], dict[str, list[MethodListener]]] = {}

    @classmethod
    def from_settings(cls, settings: EventBusSettings | None = None) -> Self:
        """Build a bus and its resolver from ``EventBusSettings``.

        Settings are read from ``EVENTWIRE_*`` environment variables when
        ``settings`` is omitted. Requires ``pydantic-settings``.

        Args:
            settings: Explicit settings instance.

        """
        if settings is None:
            from eventwire.integrations.pydantic_settings import EventBusSettings  # noqa: PLC0415

            settings = EventBusSettings()
        return cls(
            DependencyResolver(max_depth=settings.max_resolution_depth),
            clear_after_dispatch=settings.clear_after_dispatch,
            lock_mode=settings.lock_mode,
        )

    @property
    def resolver(self) -> DependencyResolver:
        return self._resolver

    def on(self, event: str, listener: Any, priority: int = 0) -> Self:
        """Register a persistent listener.

        Args:
            event: Event name; must not be empty.
            listener: A callable, or a ``(Receiver, "method")`` pair whose
                receiver may be a class or a ``"package.module:QualName"`` path.
            priority: Lower priorities run first.

        """
        self._add_listener(event, listener, priority, once=False)
        return self

    def once(self, event: str, listener: Any, priority: int = 0) -> Self:
        """Register a listener that fires on the next emit of ``event`` only.

        Args:
            event: Event name; must not be empty.
            listener: A callable or a ``(Receiver, "method")`` pair.
            priority: Lower priorities run first.

        """
        self._add_listener(event, listener, priority, once=True)
        return self

    def emit(self, event: str, *args: Any, **kwargs: Any) -> None:
        """Invoke the listeners of ``event``.

        Emitting an event without listeners does nothing. The listeners and
        their order are fixed when the call starts.

        Args:
            event: Event name; must not be empty.
            *args: Positional arguments passed to every listener.
            **kwargs: Keyword arguments passed to every listener.

        """
        self._check_event(event)

        with self._lock:
            buckets = self._listeners.get(event)
            if not buckets:
                return
            plan = [
                (priority, bucket, list(bucket.slots))
                for priority, bucket in sorted(buckets.items())
            ]

        for priority, bucket, slots in plan:
            for slot in slots:
                if isinstance(slot, OnceSlot):
                    with self._lock:
                        detached = bucket.detach(slot)
                        if detached:
                            self._prune(event, priority, bucket)
                    if not detached:
                        continue
                    for listener in slot.listeners:
                        self._invoke(listener, args, kwargs)
                else:
                    self._invoke(slot.listener, args, kwargs)

    def defer(self, event: str, *args: Any, **kwargs: Any) -> Self:
        """Queue ``event`` with its arguments for a later ``dispatch``.

        Args:
            event: Event name; must not be empty.
            *args: Positional arguments captured for the listeners.
            **kwargs: Keyword arguments captured for the listeners.

        """
        self._check_event(event)
        with self._lock:
            self._deferred.append(DeferredEvent(event, args, dict(kwargs)))
        return self

    def dispatch(self) -> None:
        """Emit every deferred event in the order it was deferred.

        The queue is not emptied unless the bus was created with
        ``clear_after_dispatch=True``, so calling ``dispatch`` again replays
        the same events.
        """
        with self._lock:
            queued = list(self._deferred)
            if self._clear_after_dispatch:
                del self._deferred[: len(queued)]

        logger.debug(
            "Dispatching deferred events: count=%d cleared=%s",
            len(queued),
            self._clear_after_dispatch,
        )
        for deferred in queued:
            self.emit(deferred.event, *deferred.args, **deferred.kwargs)

    def get_deferred(self) -> tuple[DeferredEvent, ...]:
        with self._lock:
            return tuple(self._deferred)

    def clear_deferred(self) -> None:
        with self._lock:
            self._deferred.clear()

    @overload
    def get_listeners(self, event: None = None) -> dict[str, BucketsSnapshot]: ...

    @overload
    def get_listeners(self, event: str) -> BucketsSnapshot: ...

    def get_listeners(
        self,
        event: str | None = None,
    ) -> BucketsSnapshot | dict[str, BucketsSnapshot]:
        """Return a snapshot of registered listeners.

        Args:
            event: Event name. When omitted the whole registry is returned as
                ``{event: {priority: [...]}}``; otherwise ``{priority: [...]}``
                for that event, empty if nothing is registered.

        Returns:
            Fresh containers with ascending priority keys. Persistent listeners
            appear as themselves and once-listeners as a ``OnceGroup``.

        """
        with self._lock:
            if event is None:
                return {
                    name: self._snapshot_buckets(buckets)
                    for name, buckets in self._listeners.items()
                }
            self._check_event(event)
            return self._snapshot_buckets(self._listeners.get(event, {}))

    def remove_listeners(self, event: str | None = None) -> None:
        """Remove every listener of ``event``, or of all events when omitted."""
        with self._lock:
            if event is None:
                self._listeners.clear()
                logger.debug("Removed all listeners")
                return
            self._check_event(event)
            self._listeners.pop(event, None)
        logger.debug("Removed listeners: event=%s", event)

    def remove_listener(self, event: str, listener: Any) -> None:
        """Remove the first registration equal to ``listener``.

        Priorities are scanned in ascending order and slots in positional
        order; only the first match is removed, so duplicate registrations of
        the same listener stay in place.

        Args:
            event: Event name; must not be empty.
            listener: The callable or ``(Receiver, "method")`` pair to remove.

        """
        self._check_event(event)
        entry = self._normalize_listener(listener)

        with self._lock:
            buckets = self._listeners.get(event)
            if not buckets:
                return
            for priority in sorted(buckets):
                bucket = buckets[priority]
                if bucket.remove_first(entry):
                    self._prune(event, priority, bucket)
                    logger.debug(
                        "Removed listener: event=%s priority=%d listener=%r",
                        event,
                        priority,
                        entry,
                    )
                    return

    def subscribe(self, subscriber: Any) -> Self:
        """Register every method a subscriber declares at priority 0.

        Args:
            subscriber: An ``EventSubscriber`` instance, its class (built
                through the resolver to read the event map) or an import path.

        Raises:
            EventWireInvalidListenerTypeError: The declared event map is malformed.
            EventWireClassNotFoundError: An import path cannot be resolved.

        """
        subscriber_type, events = self._read_subscriber(subscriber)

        installed: dict[str, list[MethodListener]] = {}
        for event, method_names in events.items():
            for method_name in method_names:
                listener = MethodListener(subscriber_type, method_name)
                self._add_listener(event, listener, 0, once=False)
                installed.setdefault(event, []).append(listener)

        with self._lock:
            existing = self._subscriptions.setdefault(subscriber_type, {})
            for event, listeners in installed.items():
                existing.setdefault(event, []).extend(listeners)

        logger.debug(
            "Subscribed %s: events=%d listeners=%d",
            subscriber_type.__qualname__,
            len(installed),
            sum(len(listeners) for listeners in installed.values()),
        )
        return self

    def unsubscribe(self, subscriber: Any) -> Self:
        """Remove a subscriber together with all listeners of its events.

        Every listener of each declared event is removed, including listeners
        registered independently with ``on``/``once``. Unknown subscribers are
        ignored.

        Args:
            subscriber: The subscriber instance, class or import path.

        """
        subscriber_type, events = self._read_subscriber(subscriber)

        with self._lock:
            if subscriber_type not in self._subscriptions:
                return self
            del self._subscriptions[subscriber_type]
            for event in events:
                self._listeners.pop(event, None)

        logger.debug(
            "Unsubscribed %s: cleared events=%s",
            subscriber_type.__qualname__,
            sorted(events),
        )
        return self

    def get_subscribers(self) -> tuple[type[Any], ...]:
        with self._lock:
            return tuple(self._subscriptions)

    def _add_listener(self, event: str, listener: Any, priority: int, *, once: bool) -> None:
        self._check_event(event)
        entry = self._normalize_listener(listener)

        with self._lock:
            buckets = self._listeners.setdefault(event, {})
            bucket = buckets.setdefault(priority, PriorityBucket())
            if once:
                bucket.add_once(entry)
            else:
                bucket.add(entry)

        logger.debug(
            "Registered listener: event=%s priority=%d once=%s listener=%r",
            event,
            priority,
            once,
            entry,
        )

    def _invoke(self, listener: Listener, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if isinstance(listener, MethodListener):
            if not args and not kwargs:
                self._resolver.resolve_method(listener.receiver, listener.method_name)
                return
            find_method(listener.receiver, listener.method_name)
            instance = self._resolver.resolve_constructor(listener.receiver)
            getattr(instance, listener.method_name)(*args, **kwargs)
            return

        if not args and not kwargs:
            self._resolver.resolve_callable(listener)
            return
        listener(*args, **kwargs)

    def _prune(self, event: str, priority: int, bucket: PriorityBucket) -> None:
        if not bucket.is_empty():
            return
        buckets = self._listeners.get(event)
        if buckets is None or buckets.get(priority) is not bucket:
            return
        del buckets[priority]
        if not buckets:
            del self._listeners[event]

    def _normalize_listener(self, listener: Any) -> Listener:
        if isinstance(listener, MethodListener):
            return listener
        if isinstance(listener, tuple | list):
            return self._method_listener_from_pair(listener)
        if callable(listener):
            return listener
        msg = f"Got {type(listener).__name__}."
        raise EventWireInvalidListenerTypeError(msg)

    def _method_listener_from_pair(self, pair: tuple[Any, ...] | list[Any]) -> MethodListener:
        if len(pair) != _METHOD_LISTENER_PAIR_LENGTH:
            msg = f"Got a sequence of length {len(pair)}."
            raise EventWireInvalidListenerTypeError(msg)

        receiver, method_name = pair
        if not isinstance(method_name, str) or not method_name:
            msg = f"Method name must be a non-empty string, got {method_name!r}."
            raise EventWireInvalidListenerTypeError(msg)
        if isinstance(receiver, str):
            receiver = import_class(receiver)
        if not is_runtime_class(receiver):
            msg = f"Receiver must be a class or an import path, got {receiver!r}."
            raise EventWireInvalidListenerTypeError(msg)
        return MethodListener(receiver, method_name)

    def _read_subscriber(self, subscriber: Any) -> tuple[type[Any], dict[str, tuple[str, ...]]]:
        if isinstance(subscriber, str):
            subscriber = import_class(subscriber)

        subscriber_type = subscriber if is_runtime_class(subscriber) else type(subscriber)
        declared_events: Callable[..., Any] | None = getattr(
            subscriber_type,
            DECLARED_EVENTS_METHOD,
            None,
        )
        if not callable(declared_events):
            msg = f"{subscriber_type.__qualname__} does not define {DECLARED_EVENTS_METHOD}()."
            raise EventWireInvalidListenerTypeError(msg)

        if subscriber is subscriber_type:
            declared = self._resolver.resolve_method(subscriber_type, DECLARED_EVENTS_METHOD)
        else:
            declared = getattr(subscriber, DECLARED_EVENTS_METHOD)()
        return subscriber_type, parse_event_map(declared, owner_name=subscriber_type.__qualname__)

    def _snapshot_buckets(self, buckets: dict[int, PriorityBucket]) -> BucketsSnapshot:
        return {priority: buckets[priority].snapshot() for priority in sorted(buckets)}

    def _check_event(self, event: Any) -> None:
        if not isinstance(event, str) or not event:
            raise EventWireInvalidEventNameError(event)


__all__ = ["EventBus"]
