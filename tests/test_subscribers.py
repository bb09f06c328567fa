from typing import Any, ClassVar

import pytest

from eventwire.event_bus import EventBus, MethodListener
from eventwire.exceptions import EventWireClassNotFoundError, EventWireInvalidListenerTypeError
from eventwire.subscriber import EventSubscriber
from tests import subjects


class Mailer:
    pass


class AuditSubscriber:
    calls: ClassVar[list[tuple[str, Any]]] = []

    def __init__(self, mailer: Mailer) -> None:
        self.mailer = mailer

    def declared_events(self) -> dict[str, Any]:
        return {
            "user.created": "on_created",
            "user.deleted": ["on_deleted", "flush"],
        }

    def on_created(self, *args: Any) -> None:
        AuditSubscriber.calls.append(("on_created", args))

    def on_deleted(self) -> None:
        AuditSubscriber.calls.append(("on_deleted", self.mailer))

    def flush(self) -> None:
        AuditSubscriber.calls.append(("flush", None))


class MalformedSubscriber:
    events: ClassVar[Any] = None

    def declared_events(self) -> Any:
        return MalformedSubscriber.events


class WithoutDeclaredEvents:
    pass


@pytest.fixture(autouse=True)
def _reset_calls() -> None:
    AuditSubscriber.calls.clear()
    subjects.calls.clear()


class TestSubscribe:
    def test_instance_methods_are_registered_at_priority_zero(self, bus: EventBus) -> None:
        bus.subscribe(AuditSubscriber(Mailer()))

        assert bus.get_listeners() == {
            "user.created": {0: [MethodListener(AuditSubscriber, "on_created")]},
            "user.deleted": {
                0: [
                    MethodListener(AuditSubscriber, "on_deleted"),
                    MethodListener(AuditSubscriber, "flush"),
                ],
            },
        }

    def test_emit_invokes_methods_on_a_fresh_receiver(self, bus: EventBus) -> None:
        bus.subscribe(AuditSubscriber(Mailer()))

        bus.emit("user.deleted")
        bus.emit("user.created", "ada")

        assert [name for name, _ in AuditSubscriber.calls] == ["on_deleted", "flush", "on_created"]
        assert isinstance(AuditSubscriber.calls[0][1], Mailer)
        assert AuditSubscriber.calls[2][1] == ("ada",)

    def test_class_subscriber_is_built_through_the_resolver(self, bus: EventBus) -> None:
        bus.subscribe(AuditSubscriber)

        assert set(bus.get_listeners()) == {"user.created", "user.deleted"}

    def test_import_path_subscriber(self, bus: EventBus) -> None:
        bus.subscribe("tests.subjects:PathSubscriber")
        bus.emit("path.ping")

        assert subjects.calls == ["path.ping"]
        assert bus.get_subscribers() == (subjects.PathSubscriber,)

    def test_unknown_import_path_is_rejected(self, bus: EventBus) -> None:
        with pytest.raises(EventWireClassNotFoundError):
            bus.subscribe("tests.subjects:MissingSubscriber")

    def test_subscribers_run_after_earlier_listeners_of_same_priority(
        self,
        bus: EventBus,
    ) -> None:
        order: list[str] = []
        bus.on("user.created", lambda *_: order.append("plain"))
        bus.subscribe(AuditSubscriber(Mailer()))

        bus.emit("user.created", "ada")

        assert order == ["plain"]
        assert [name for name, _ in AuditSubscriber.calls] == ["on_created"]

    def test_subscribe_returns_the_bus(self, bus: EventBus) -> None:
        assert bus.subscribe(AuditSubscriber) is bus

    def test_subscriber_satisfies_protocol(self) -> None:
        assert isinstance(AuditSubscriber(Mailer()), EventSubscriber)
        assert not isinstance(WithoutDeclaredEvents(), EventSubscriber)

    def test_get_subscribers_lists_each_type_once(self, bus: EventBus) -> None:
        bus.subscribe(AuditSubscriber)
        bus.subscribe(AuditSubscriber(Mailer()))

        assert bus.get_subscribers() == (AuditSubscriber,)
        assert len(bus.get_listeners("user.created")[0]) == 2


class TestMalformedSubscribers:
    @pytest.mark.parametrize(
        "events",
        [
            ["user.created"],
            "user.created",
            {"": "on_created"},
            {1: "on_created"},
            {"user.created": 5},
            {"user.created": ["on_created", ""]},
            {"user.created": ""},
        ],
    )
    def test_invalid_event_map_is_rejected(self, bus: EventBus, events: Any) -> None:
        MalformedSubscriber.events = events

        with pytest.raises(EventWireInvalidListenerTypeError):
            bus.subscribe(MalformedSubscriber())

        assert bus.get_listeners() == {}
        assert bus.get_subscribers() == ()

    def test_missing_declared_events_is_rejected(self, bus: EventBus) -> None:
        with pytest.raises(EventWireInvalidListenerTypeError, match="declared_events"):
            bus.subscribe(WithoutDeclaredEvents())


class TestUnsubscribe:
    def test_removes_subscriber_listeners(self, bus: EventBus) -> None:
        subscriber = AuditSubscriber(Mailer())
        bus.subscribe(subscriber)

        bus.unsubscribe(subscriber)
        bus.emit("user.created")
        bus.emit("user.deleted")

        assert AuditSubscriber.calls == []
        assert bus.get_listeners() == {}
        assert bus.get_subscribers() == ()

    def test_removes_every_listener_of_declared_events(self, bus: EventBus) -> None:
        calls: list[str] = []
        bus.on("user.created", lambda: calls.append("collateral"), 5)
        bus.once("user.deleted", lambda: calls.append("collateral once"))
        bus.on("user.renamed", lambda: calls.append("unrelated"))
        bus.subscribe(AuditSubscriber)

        bus.unsubscribe(AuditSubscriber)
        for event in ("user.created", "user.deleted", "user.renamed"):
            bus.emit(event)

        assert calls == ["unrelated"]
        assert list(bus.get_listeners()) == ["user.renamed"]

    def test_unknown_subscriber_is_ignored(self, bus: EventBus) -> None:
        listener = lambda: None  # noqa: E731
        bus.on("user.created", listener)

        result = bus.unsubscribe(AuditSubscriber(Mailer()))

        assert result is bus
        assert bus.get_listeners("user.created") == {0: [listener]}

    def test_unsubscribing_by_class_removes_instance_subscription(self, bus: EventBus) -> None:
        bus.subscribe(AuditSubscriber(Mailer()))

        bus.unsubscribe(AuditSubscriber)

        assert bus.get_subscribers() == ()
        assert bus.get_listeners() == {}

    def test_import_path_unsubscribe(self, bus: EventBus) -> None:
        bus.subscribe(subjects.PathSubscriber())

        bus.unsubscribe("tests.subjects:PathSubscriber")
        bus.emit("path.ping")

        assert subjects.calls == []
