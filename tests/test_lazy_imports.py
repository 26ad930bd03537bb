"""Tests for warble.__init__ — lazy import registry covers all public names."""

import pytest

import warble


@pytest.mark.parametrize("name", warble.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(warble, name)
    assert obj is not None, f"warble.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        warble.__getattr__("ThisDoesNotExist")


def test_declarations_exported() -> None:
    route = warble.get("/pages", "PageController", "index")
    assert route.verb == "get"
