"""Importable classes used by tests that reference receivers by import path."""

from typing import Any

calls: list[str] = []


class Clock:
    def now(self) -> str:
        return "12:00"


class Greeter:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock

    def greet(self) -> str:
        calls.append("greet")
        return f"hello at {self.clock.now()}"


class PathSubscriber:
    def declared_events(self) -> dict[str, Any]:
        return {"path.ping": "on_ping"}

    def on_ping(self) -> None:
        calls.append("path.ping")


not_a_class = object()
