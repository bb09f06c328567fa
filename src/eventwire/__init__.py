from eventwire.event_bus import DeferredEvent, EventBus, MethodListener, OnceGroup
from eventwire.exceptions import (
    EventWireClassNotFoundError,
    EventWireDependencyCycleSuspectedError,
    EventWireError,
    EventWireInvalidEventNameError,
    EventWireInvalidListenerTypeError,
    EventWireMethodNotFoundError,
    EventWireNotInstantiableError,
    EventWireResolutionTargetMissingError,
    EventWireUnresolvableParameterError,
)
from eventwire.lock_mode import LockMode
from eventwire.resolver import DependencyResolver
from eventwire.subscriber import EventSubscriber

__all__ = [
    "DeferredEvent",
    "DependencyResolver",
    "EventBus",
    "EventSubscriber",
    "EventWireClassNotFoundError",
    "EventWireDependencyCycleSuspectedError",
    "EventWireError",
    "EventWireInvalidEventNameError",
    "EventWireInvalidListenerTypeError",
    "EventWireMethodNotFoundError",
    "EventWireNotInstantiableError",
    "EventWireResolutionTargetMissingError",
    "EventWireUnresolvableParameterError",
    "LockMode",
    "MethodListener",
    "OnceGroup",
]
