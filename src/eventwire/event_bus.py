from eventwire._internal.event_bus import EventBus
from eventwire._internal.listeners import DeferredEvent, Listener, MethodListener, OnceGroup

__all__ = [
    "DeferredEvent",
    "EventBus",
    "Listener",
    "MethodListener",
    "OnceGroup",
]
