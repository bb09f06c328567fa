import collections

import pytest

from eventwire._internal.imports import import_class
from eventwire.exceptions import EventWireClassNotFoundError
from tests import subjects


@pytest.mark.parametrize(
    "identifier",
    ["tests.subjects:Greeter", "tests.subjects.Greeter"],
)
def test_imports_class_from_path(identifier: str) -> None:
    assert import_class(identifier) is subjects.Greeter


def test_imports_standard_library_class() -> None:
    assert import_class("collections:OrderedDict") is collections.OrderedDict


@pytest.mark.parametrize(
    "identifier",
    [
        "",
        "Greeter",
        "tests.subjects:",
        ":Greeter",
        "tests.subjects:Missing",
        "tests.subjects:not_a_class",
        "tests.subjects:Greeter.missing",
        "eventwire_missing_module:Thing",
    ],
)
def test_unresolvable_paths_raise(identifier: str) -> None:
    with pytest.raises(EventWireClassNotFoundError) as exc_info:
        import_class(identifier)

    assert exc_info.value.identifier == identifier
