import inspect
from typing import Any, get_type_hints

import eventwire
import eventwire.event_bus
import eventwire.resolver
import eventwire.subscriber


def test_package_exports_are_importable() -> None:
    for name in eventwire.__all__:
        assert getattr(eventwire, name) is not None


def test_package_exports_bus_resolver_and_errors() -> None:
    assert {
        "EventBus",
        "DependencyResolver",
        "EventSubscriber",
        "LockMode",
        "MethodListener",
        "OnceGroup",
        "DeferredEvent",
        "EventWireError",
    } <= set(eventwire.__all__)


def test_public_modules_re_export_internal_objects() -> None:
    assert eventwire.EventBus is eventwire.event_bus.EventBus
    assert eventwire.DependencyResolver is eventwire.resolver.DependencyResolver
    assert eventwire.EventSubscriber is eventwire.subscriber.EventSubscriber


def test_public_classes_are_documented() -> None:
    for name in eventwire.__all__:
        exported = getattr(eventwire, name)
        if inspect.isclass(exported):
            assert inspect.getdoc(exported), name


def test_event_bus_signatures() -> None:
    assert list(inspect.signature(eventwire.EventBus.on).parameters) == [
        "self",
        "event",
        "listener",
        "priority",
    ]
    assert list(inspect.signature(eventwire.EventBus.emit).parameters) == [
        "self",
        "event",
        "args",
        "kwargs",
    ]
    assert inspect.signature(eventwire.EventBus.on).parameters["priority"].default == 0


def test_get_listeners_return_type_is_declared() -> None:
    hints = get_type_hints(eventwire.EventBus.get_listeners)

    assert hints["return"] is not Any
    assert "BucketsSnapshot" not in repr(hints["return"])
