"""truedraw: true-random integers from random.org for pipeline stages.

Public API:
    - draw(): One draw within an inclusive range
    - draw_many(): One draw per input record, in order
    - RangeDrawExecutor: The per-record stage with an injectable HTTP client
    - Config: Configuration dataclass
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from truedraw.config import Config
from truedraw.errors import (
    ConfigurationError,
    ExecutorError,
    ProviderError,
    TransportError,
    TrueDrawError,
    ValidationError,
)
from truedraw.executor import RangeDrawExecutor
from truedraw.models import DrawResult, InputRecord, OutputRecord, RangeParameters
from truedraw.node import NODE_DESCRIPTION
from truedraw.result import Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Sequence

    from truedraw.transport.base import HttpClient

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("truedraw")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("truedraw").addHandler(logging.NullHandler())

logger = logging.getLogger(__name__)


async def draw(
    min: int | None = None,  # noqa: A002
    max: int | None = None,  # noqa: A002
    *,
    config: Config | None = None,
    client: HttpClient | None = None,
) -> DrawResult:
    """Draw a single integer in ``[min, max]``.

    Bounds left as *None* use the configured defaults (1 and 100).

    Example:
        result = await draw(1, 6)
        print(result.value)
    """
    parameters = {}
    if min is not None:
        parameters["min"] = min
    if max is not None:
        parameters["max"] = max
    outputs = await draw_many(
        [InputRecord(parameters=parameters)], config=config, client=client
    )
    return outputs[0].result


async def draw_many(
    inputs: Sequence[InputRecord],
    *,
    config: Config | None = None,
    client: HttpClient | None = None,
) -> list[OutputRecord]:
    """Draw one integer per input record, preserving order.

    Raises the first ValidationError, ProviderError or TransportError
    encountered; no records are returned in that case.

    Example:
        records = [InputRecord(parameters={"min": 1, "max": 6})] * 3
        for out in await draw_many(records):
            print(out.json["value"])
    """
    executor = RangeDrawExecutor(client, config=config)
    try:
        return await executor.execute_or_raise(inputs)
    finally:
        try:
            await executor.aclose()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            # Cleanup should never mask the primary failure.
            logger.warning("HTTP client cleanup failed: %s", exc)


__all__ = [
    "NODE_DESCRIPTION",
    "Config",
    "ConfigurationError",
    "DrawResult",
    "ExecutorError",
    "Failure",
    "InputRecord",
    "OutputRecord",
    "ProviderError",
    "RangeDrawExecutor",
    "RangeParameters",
    "Result",
    "Success",
    "TransportError",
    "TrueDrawError",
    "ValidationError",
    "draw",
    "draw_many",
]
