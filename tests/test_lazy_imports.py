"""Tests for urlshort.__init__: every public name resolves lazily."""

import pytest

import urlshort


@pytest.mark.parametrize("name", urlshort.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(urlshort, name)
    assert obj is not None, f"urlshort.{name} resolved to None"


def test_builders_are_the_module_functions() -> None:
    from urlshort import builders

    assert urlshort.from_yaml is builders.from_yaml
    assert urlshort.from_store is builders.from_store


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        urlshort.__getattr__("ThisDoesNotExist")
