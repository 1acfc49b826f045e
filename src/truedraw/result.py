"""Result primitives for explicit error propagation.

The executor and transport return ``Success`` or ``Failure`` instead of
raising, so the abort-on-first-failure contract is visible in signatures.
"""

from __future__ import annotations

import dataclasses
import typing

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)
T = typing.TypeVar("T")


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful outcome."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failed outcome, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


def unwrap(result: Success[T] | Failure[Exception]) -> T:
    """Return the success value or raise the carried error."""
    if isinstance(result, Failure):
        raise result.error
    return result.value
