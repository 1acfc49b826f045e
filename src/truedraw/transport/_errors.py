"""Map transport-level exceptions into TransportError."""

from __future__ import annotations

import asyncio

import httpx

from truedraw._http import status_hint
from truedraw.errors import TransportError, _walk_exception_chain


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in _walk_exception_chain(exc):
        for attr in ("status_code", "status"):
            value = getattr(e, attr, None)
            if isinstance(value, int) and 100 <= value <= 599:
                return value
        response = getattr(e, "response", None)
        value = getattr(response, "status_code", None)
        if isinstance(value, int) and 100 <= value <= 599:
            return value
    return None


def _transport_code(exc: BaseException) -> str:
    """Name the failure the way the host reports error codes."""
    for e in _walk_exception_chain(exc):
        if isinstance(e, (httpx.TimeoutException, httpx.RequestError)):
            return type(e).__name__
        if isinstance(e, (TimeoutError, asyncio.TimeoutError)):
            return "TimeoutError"
        code = getattr(e, "code", None)
        if isinstance(code, str) and code:
            return code
    return "ERR"


def wrap_transport_error(
    exc: BaseException,
    *,
    provider: str,
    hint: str | None = None,
) -> TransportError:
    """Map an exception raised while talking to *provider* into TransportError."""
    if isinstance(exc, asyncio.CancelledError):
        raise exc

    # Already wrapped: fill in missing context only.
    if isinstance(exc, TransportError):
        if exc.hint is None:
            exc.hint = hint
        return exc

    status_code = extract_status_code(exc)
    code = str(status_code) if status_code is not None else _transport_code(exc)
    cause = str(exc) or type(exc).__name__

    return TransportError(
        cause,
        provider=provider,
        status_code=status_code,
        code=code,
        hint=hint if hint is not None else status_hint(status_code),
    )
