"""Node description consumed by the host when registering the stage.

The host renders ``NODE_DESCRIPTION.model_dump()`` as the node's UI; the
executor only relies on the ``min``/``max`` field defaults.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from truedraw._http import MIN_SAFE_INTEGER

FieldType = Literal["notice", "number"]


class NodeField(BaseModel):
    """A single configuration field declared by the node."""

    display_name: str = Field(min_length=1)
    name: str = Field(pattern=r"^[a-z][a-zA-Z0-9_]*$")
    type: FieldType
    default: Any = None
    required: bool = False
    description: str = ""
    min_value: int | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_numeric_default(self) -> NodeField:
        if self.type == "number":
            if not isinstance(self.default, int) or isinstance(self.default, bool):
                raise ValueError(f"number field {self.name!r} needs an int default")
            if self.min_value is not None and self.default < self.min_value:
                raise ValueError(f"default of {self.name!r} is below min_value")
        return self


class NodeDescription(BaseModel):
    """Registration metadata for the stage."""

    display_name: str
    name: str
    group: list[str]
    version: int = Field(default=1, ge=1)
    description: str
    inputs: list[str] = Field(default_factory=lambda: ["main"])
    outputs: list[str] = Field(default_factory=lambda: ["main"])
    categories: dict[str, list[str]] = Field(default_factory=dict)
    properties: list[NodeField]

    model_config = {"frozen": True}

    def get_field(self, name: str) -> NodeField:
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(name)


NODE_DESCRIPTION = NodeDescription(
    display_name="Random",
    name="random",
    group=["transform"],
    version=1,
    description="True Random Number Generator via Random.org",
    categories={"Utilities": ["Misc"]},
    properties=[
        NodeField(
            display_name="True Random Number Generator",
            name="notice",
            type="notice",
            default="",
            description=(
                "Generate a true random integer using Random.org within the "
                "inclusive range [Min, Max]."
            ),
        ),
        NodeField(
            display_name="Min",
            name="min",
            type="number",
            default=1,
            required=True,
            min_value=MIN_SAFE_INTEGER,
            description="Lower bound (inclusive). Must be an integer.",
        ),
        NodeField(
            display_name="Max",
            name="max",
            type="number",
            default=100,
            required=True,
            min_value=MIN_SAFE_INTEGER,
            description="Upper bound (inclusive). Must be an integer and >= Min.",
        ),
    ],
)


def field_defaults(description: NodeDescription = NODE_DESCRIPTION) -> dict[str, int]:
    """Return the declared defaults of the numeric fields."""
    return {
        prop.name: prop.default
        for prop in description.properties
        if prop.type == "number"
    }
