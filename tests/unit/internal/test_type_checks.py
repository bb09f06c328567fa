from abc import ABC, abstractmethod
from typing import Annotated, Optional, Protocol, Union

from eventwire._internal.type_checks import (
    is_instantiable_class,
    is_protocol_class,
    is_runtime_class,
    unwrap_annotation,
)


class Engine:
    pass


class Port(ABC):
    @abstractmethod
    def send(self) -> None: ...


class Adapter(Port):
    def send(self) -> None:
        pass


class Notifier(Protocol):
    def notify(self) -> None: ...


class Meta(type):
    pass


def test_is_runtime_class() -> None:
    assert is_runtime_class(Engine) is True
    assert is_runtime_class(list[int]) is False
    assert is_runtime_class(Engine()) is False


def test_is_protocol_class() -> None:
    assert is_protocol_class(Notifier) is True
    assert is_protocol_class(Engine) is False


def test_is_instantiable_class() -> None:
    assert is_instantiable_class(Engine) is True
    assert is_instantiable_class(Adapter) is True
    assert is_instantiable_class(Port) is False
    assert is_instantiable_class(Notifier) is False
    assert is_instantiable_class(Meta) is False
    assert is_instantiable_class("Engine") is False


def test_unwrap_annotation() -> None:
    assert unwrap_annotation(Annotated[Engine, "meta"]) is Engine
    assert unwrap_annotation(Optional[Engine]) is Engine  # noqa: UP045
    assert unwrap_annotation(Engine | None) is Engine
    assert unwrap_annotation(Annotated[Engine | None, "meta"]) is Engine
    assert unwrap_annotation(Union[Engine, int]) == Union[Engine, int]  # noqa: UP007
