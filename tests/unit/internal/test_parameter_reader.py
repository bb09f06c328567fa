from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass
from inspect import Parameter
from typing import Annotated, Any

from eventwire._internal.parameters import ParameterReader


class Engine:
    pass


class Plain:
    pass


class WithInit:
    def __init__(self, engine: Engine, *args: Any, retries: int = 3, **kwargs: Any) -> None:
        self.engine = engine
        self.retries = retries


class WithNew:
    def __new__(cls, engine: Engine) -> WithNew:
        instance = super().__new__(cls)
        instance.engine = engine  # type: ignore[attr-defined]
        return instance


class InheritsInit(WithInit):
    pass


class CallableObject:
    def __call__(self, engine: Engine, label: str = "x") -> None:
        pass


@dataclass
class DataclassService:
    engine: Engine
    name: str = "default"


def untyped(value, other=None):  # noqa: ANN001, ANN201
    return value


def annotated(engine: Annotated[Engine, "meta"]) -> None:
    pass


def unresolvable(engine: MissingType) -> None:  # noqa: F821
    pass


def test_read_constructor_skips_variadic_parameters() -> None:
    parameters = ParameterReader().read_constructor(WithInit)

    assert [parameter.name for parameter in parameters] == ["engine", "retries"]
    engine, retries = parameters
    assert engine.annotation is Engine
    assert engine.has_default is False
    assert retries.is_keyword_only is True
    assert retries.annotation is int
    assert retries.default == 3


def test_read_constructor_uses_new_when_init_is_inherited_from_object() -> None:
    parameters = ParameterReader().read_constructor(WithNew)

    assert [(parameter.name, parameter.annotation) for parameter in parameters] == [
        ("engine", Engine),
    ]


def test_read_constructor_of_dataclass() -> None:
    parameters = ParameterReader().read_constructor(DataclassService)

    assert [(parameter.name, parameter.annotation) for parameter in parameters] == [
        ("engine", Engine),
        ("name", str),
    ]
    assert parameters[1].default == "default"


def test_read_callable_object_reads_call_signature() -> None:
    parameters = ParameterReader().read_callable(CallableObject())

    assert [(parameter.name, parameter.annotation) for parameter in parameters] == [
        ("engine", Engine),
        ("label", str),
    ]


def test_untyped_parameters_have_no_annotation() -> None:
    parameters = ParameterReader().read_callable(untyped)

    assert [parameter.annotation for parameter in parameters] == [None, None]
    assert parameters[0].kind is Parameter.POSITIONAL_OR_KEYWORD
    assert parameters[1].has_default is True
    assert parameters[1].default is None


def test_annotated_metadata_is_kept() -> None:
    (parameter,) = ParameterReader().read_callable(annotated)

    assert parameter.annotation == Annotated[Engine, "meta"]


def test_unresolvable_forward_reference_stays_a_string() -> None:
    (parameter,) = ParameterReader().read_callable(unresolvable)

    assert parameter.annotation == "MissingType"


def test_unreadable_signature_has_no_parameters(monkeypatch: Any) -> None:
    def _raise(_target: object) -> None:
        raise ValueError

    monkeypatch.setattr(inspect, "signature", _raise)

    assert ParameterReader().read_callable(untyped) == []


def test_declares_constructor() -> None:
    reader = ParameterReader()

    assert reader.declares_constructor(Plain) is False
    assert reader.declares_constructor(WithInit) is True
    assert reader.declares_constructor(InheritsInit) is True
    assert reader.declares_constructor(WithNew) is True


class ClassLevelOnly:
    engine: Engine

    def __init__(self, engine) -> None:  # noqa: ANN001
        self.engine = engine


def wired(engine: Engine, label: str = "x") -> None:
    pass


def test_class_level_annotations_are_ignored() -> None:
    (parameter,) = ParameterReader().read_constructor(ClassLevelOnly)

    assert parameter.annotation is None


def test_partial_reads_hints_of_wrapped_function() -> None:
    parameters = ParameterReader().read_callable(functools.partial(wired, label="y"))

    assert [(parameter.name, parameter.annotation) for parameter in parameters] == [
        ("engine", Engine),
        ("label", str),
    ]
    assert parameters[1].default == "y"


def test_unresolved_annotation_keeps_its_error() -> None:
    (parameter,) = ParameterReader().read_callable(unresolvable)

    assert isinstance(parameter.annotation_error, NameError)
