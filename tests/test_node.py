from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
import pytest

from truedraw._http import MIN_SAFE_INTEGER
from truedraw.node import NODE_DESCRIPTION, NodeField, field_defaults

pytestmark = pytest.mark.contract


def test_description_matches_registered_node() -> None:
    payload = NODE_DESCRIPTION.model_dump()

    assert payload["name"] == "random"
    assert payload["display_name"] == "Random"
    assert payload["group"] == ["transform"]
    assert payload["version"] == 1
    assert payload["inputs"] == ["main"]
    assert payload["outputs"] == ["main"]
    assert [p["name"] for p in payload["properties"]] == ["notice", "min", "max"]


@pytest.mark.parametrize(("name", "default"), [("min", 1), ("max", 100)])
def test_range_fields_are_required_integers(name: str, default: int) -> None:
    prop = NODE_DESCRIPTION.get_field(name)

    assert prop.type == "number"
    assert prop.default == default
    assert prop.required is True
    assert prop.min_value == MIN_SAFE_INTEGER


def test_field_defaults_only_lists_numeric_fields() -> None:
    assert field_defaults() == {"min": 1, "max": 100}


def test_unknown_field_raises_key_error() -> None:
    with pytest.raises(KeyError):
        NODE_DESCRIPTION.get_field("seed")


def test_number_field_rejects_non_integer_default() -> None:
    with pytest.raises(PydanticValidationError):
        NodeField(display_name="Min", name="min", type="number", default=1.5)


def test_number_field_rejects_default_below_minimum() -> None:
    with pytest.raises(PydanticValidationError):
        NodeField(display_name="Min", name="min", type="number", default=-5, min_value=0)


def test_description_is_frozen() -> None:
    with pytest.raises(PydanticValidationError):
        NODE_DESCRIPTION.version = 2  # type: ignore[misc]
