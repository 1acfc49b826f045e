"""Exception hierarchy for truedraw."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Iterator

ErrorKind = Literal["validation", "provider", "transport"]


class TrueDrawError(Exception):
    """Base exception for all truedraw errors."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        record_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.hint = hint
        self.record_index = record_index

    @property
    def message(self) -> str:
        return self.args[0] if self.args else ""


class ConfigurationError(TrueDrawError):
    """Configuration validation or resolution failed."""


class ExecutorError(TrueDrawError):
    """A per-record failure that aborts the whole invocation."""

    kind: ErrorKind


class ValidationError(ExecutorError):
    """Record parameters were rejected before any network call."""

    kind: ErrorKind = "validation"


class ProviderError(ExecutorError):
    """The provider answered, but not with a usable integer."""

    kind: ErrorKind = "provider"

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        status_code: int | None = None,
        body_preview: str | None = None,
        hint: str | None = None,
        record_index: int | None = None,
    ) -> None:
        status = status_code if status_code is not None else "ERR"
        super().__init__(
            f"{provider} request failed ({status}): {message}",
            hint=hint,
            record_index=record_index,
        )
        self.provider = provider
        self.status_code = status_code
        self.body_preview = body_preview
        self.reason = message


class TransportError(ExecutorError):
    """HTTP call failed: non-2xx status, network error or timeout.

    ``code`` is the status code rendered as text when one exists, otherwise
    the transport exception's class name (``"ConnectTimeout"``) or ``"ERR"``.
    """

    kind: ErrorKind = "transport"

    def __init__(
        self,
        cause_message: str,
        *,
        provider: str,
        status_code: int | None = None,
        code: str | None = None,
        hint: str | None = None,
        record_index: int | None = None,
    ) -> None:
        resolved = code or (str(status_code) if status_code is not None else "ERR")
        super().__init__(
            f"{provider} request failed ({resolved}): {cause_message}",
            hint=hint,
            record_index=record_index,
        )
        self.provider = provider
        self.status_code = status_code
        self.code = resolved
        self.cause_message = cause_message


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
