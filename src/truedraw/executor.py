"""Per-record draw loop: resolve, validate, request, parse, emit.

Records are processed strictly in order, one network call at a time. The
first failure aborts the invocation; records drawn before it are discarded,
so callers see either one output per input or a single error.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from numbers import Integral, Real
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from truedraw._http import (
    INTEGER_QUERY,
    INTEGERS_PATH,
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
    PROVIDER_ID,
)
from truedraw.config import Config
from truedraw.errors import (
    ExecutorError,
    ProviderError,
    TransportError,
    ValidationError,
)
from truedraw.models import DrawResult, OutputRecord, RangeParameters
from truedraw.result import Failure, Success, unwrap

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from truedraw.models import InputRecord
    from truedraw.result import Result
    from truedraw.transport.base import HttpClient

log = logging.getLogger(__name__)

_INTEGER_BODY_RE = re.compile(r"^[+-]?[0-9]+$")
# Sign plus the 16 digits of the largest safe integer.
_MAX_BODY_CHARS = len(str(MIN_SAFE_INTEGER))


@dataclass(frozen=True)
class DrawRequest:
    """A fully built GET request for one draw."""

    url: str
    headers: Mapping[str, str]
    timeout_s: float


def resolve_parameters(
    record: InputRecord,
    index: int,
    defaults: Mapping[str, Any],
) -> tuple[Any, Any]:
    """Return the raw ``(min, max)`` values for the record at *index*.

    Per-record overrides win over *defaults*. Values are returned unchecked;
    ``validate_parameters`` decides whether they are usable.
    """
    del index  # parameters are already scoped to the record
    params = record.parameters
    return (
        params.get("min", defaults["min"]),
        params.get("max", defaults["max"]),
    )


def _as_exact_integer(value: Any) -> int | None:
    """Return *value* as an int when it is a mathematical integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        as_float = float(value)
        if math.isfinite(as_float) and as_float.is_integer():
            return int(value)
    return None


def validate_parameters(
    raw_min: Any,
    raw_max: Any,
    *,
    index: int | None = None,
) -> Result[RangeParameters, ValidationError]:
    """Check that both bounds are integers and form a non-inverted range."""
    low = _as_exact_integer(raw_min)
    high = _as_exact_integer(raw_max)
    if low is None or high is None:
        return Failure(
            ValidationError(
                "non-integer parameter",
                hint=f"Min and Max must be integers, got {raw_min!r} and {raw_max!r}.",
                record_index=index,
            )
        )
    if not (
        MIN_SAFE_INTEGER <= low <= MAX_SAFE_INTEGER
        and MIN_SAFE_INTEGER <= high <= MAX_SAFE_INTEGER
    ):
        return Failure(
            ValidationError(
                "parameter outside safe-integer range",
                hint=f"Keep Min and Max within ±{MAX_SAFE_INTEGER}.",
                record_index=index,
            )
        )
    if high < low:
        return Failure(
            ValidationError(
                "inverted range",
                hint=f"Max ({high}) must be greater than or equal to Min ({low}).",
                record_index=index,
            )
        )
    return Success(RangeParameters(min=low, max=high))


def build_request(params: RangeParameters, config: Config) -> DrawRequest:
    """Build the integer-generation GET for *params*."""
    query = urlencode(
        [
            ("num", "1"),
            ("min", str(params.min)),
            ("max", str(params.max)),
            *INTEGER_QUERY,
        ]
    )
    return DrawRequest(
        url=f"{config.endpoint}{INTEGERS_PATH}?{query}",
        headers={"Accept": "text/plain", "User-Agent": config.user_agent},
        timeout_s=config.request_timeout_s,
    )


def parse_response(
    body: str | bytes | None,
    *,
    bounds: RangeParameters | None = None,
    index: int | None = None,
) -> Result[int, ProviderError]:
    """Parse a plain-text body such as ``"42\\n"`` into an integer.

    With *bounds*, a value outside the requested range is rejected too.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    text = (body or "").strip()
    value: int | None = None
    if len(text) <= _MAX_BODY_CHARS and _INTEGER_BODY_RE.match(text):
        value = int(text, 10)
    if value is None or (
        bounds is not None and not bounds.min <= value <= bounds.max
    ):
        return Failure(
            ProviderError(
                "unexpected response",
                provider=PROVIDER_ID,
                body_preview=text[:100],
                record_index=index,
            )
        )
    return Success(value)


class RangeDrawExecutor:
    """Draws one provider integer per input record.

    The HTTP capability is injected at construction; when omitted, an
    ``HttpxClient`` is created and ``aclose()`` releases it.
    """

    def __init__(
        self,
        client: HttpClient | None = None,
        *,
        config: Config | None = None,
    ) -> None:
        self.config = config or Config()
        if client is None:
            from truedraw.transport.httpx_client import HttpxClient

            client = HttpxClient()
            self._owns_client = True
        else:
            self._owns_client = False
        self.client = client
        self._defaults = {
            "min": self.config.default_min,
            "max": self.config.default_max,
        }

    async def execute(
        self, inputs: Sequence[InputRecord]
    ) -> Result[list[OutputRecord], ExecutorError]:
        """Process *inputs* in order, stopping at the first failure."""
        outputs: list[OutputRecord] = []
        log.debug("Drawing %d record(s) from %s", len(inputs), PROVIDER_ID)

        for index, record in enumerate(inputs):
            outcome = await self._draw_record(record, index)
            if isinstance(outcome, Failure):
                log.debug(
                    "Record %d failed (%s); discarding %d drawn record(s)",
                    index,
                    outcome.error.kind,
                    len(outputs),
                )
                return outcome
            outputs.append(outcome.value)

        return Success(outputs)

    async def execute_or_raise(
        self, inputs: Sequence[InputRecord]
    ) -> list[OutputRecord]:
        """Like ``execute`` but raise the error of a failed invocation."""
        return unwrap(await self.execute(inputs))

    async def _draw_record(
        self, record: InputRecord, index: int
    ) -> Result[OutputRecord, ExecutorError]:
        raw_min, raw_max = resolve_parameters(record, index, self._defaults)

        validated = validate_parameters(raw_min, raw_max, index=index)
        if isinstance(validated, Failure):
            return validated
        params = validated.value

        request = build_request(params, self.config)
        fetched = await self.client.get(
            request.url, headers=request.headers, timeout_s=request.timeout_s
        )
        if isinstance(fetched, Failure):
            err: TransportError = fetched.error
            if err.record_index is None:
                err.record_index = index
            return Failure(err)

        parsed = parse_response(fetched.value, bounds=params, index=index)
        if isinstance(parsed, Failure):
            return parsed

        result = DrawResult(value=parsed.value, min=params.min, max=params.max)
        log.debug(
            "Record %d drew %d in [%d, %d]", index, result.value, params.min, params.max
        )
        return Success(OutputRecord(json=result.as_json(), paired_item=index))

    async def aclose(self) -> None:
        """Release the HTTP client when this executor created it."""
        if not self._owns_client:
            return
        aclose = getattr(self.client, "aclose", None)
        if callable(aclose):
            await aclose()
