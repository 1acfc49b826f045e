"""Domain models for records flowing through the draw stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypedDict

from truedraw._http import PROVIDER_ID

if TYPE_CHECKING:
    from collections.abc import Mapping


def _freeze_mapping(m: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return an immutable mapping view; empty when *m* is None."""
    if isinstance(m, MappingProxyType):
        return m
    return MappingProxyType(dict(m or {}))


@dataclass(frozen=True)
class InputRecord:
    """One item handed to the stage by the upstream pipeline.

    ``json`` is carried through untouched. ``parameters`` holds per-record
    values for the node fields (``min``/``max``); missing keys fall back to
    the configured defaults.
    """

    json: Mapping[str, Any] = field(default_factory=dict)
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "json", _freeze_mapping(self.json))
        object.__setattr__(self, "parameters", _freeze_mapping(self.parameters))


@dataclass(frozen=True)
class RangeParameters:
    """Validated inclusive range for a single draw."""

    min: int
    max: int


class DrawResultJSON(TypedDict):
    """Plain mapping emitted as an output record payload."""

    value: int
    min: int
    max: int
    source: str


@dataclass(frozen=True)
class DrawResult:
    """One integer drawn from the provider."""

    value: int
    min: int
    max: int
    source: str = PROVIDER_ID

    def as_json(self) -> DrawResultJSON:
        return {
            "value": self.value,
            "min": self.min,
            "max": self.max,
            "source": self.source,
        }


@dataclass(frozen=True)
class OutputRecord:
    """A DrawResult wrapped for one output slot.

    ``paired_item`` is the index of the input record that produced it.
    """

    json: DrawResultJSON
    paired_item: int

    @property
    def result(self) -> DrawResult:
        return DrawResult(**self.json)
