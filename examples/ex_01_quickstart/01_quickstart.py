"""Quickstart: emit events to plain functions and to auto-wired methods.

Listeners emitted with arguments receive them as-is. Listeners emitted without
arguments get their parameters built from type hints, so a
``(Receiver, "method")`` pair runs on a freshly constructed receiver.
"""

from __future__ import annotations

from eventwire import EventBus


class Mailer:
    def __init__(self) -> None:
        self.sender = "noreply@example.com"


def log_signup(email: str) -> None:
    print(f"signup={email}")  # => signup=ada@example.com


class WelcomeEmail:
    def __init__(self, mailer: Mailer) -> None:
        self.mailer = mailer

    def send(self) -> None:
        print(f"welcome_from={self.mailer.sender}")  # => welcome_from=noreply@example.com


def main() -> None:
    bus = EventBus()
    bus.on("user.signed_up", log_signup)
    bus.on("user.welcomed", (WelcomeEmail, "send"))

    bus.emit("user.signed_up", "ada@example.com")
    bus.emit("user.welcomed")


if __name__ == "__main__":
    main()
