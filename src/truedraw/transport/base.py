"""HTTP capability protocol: the single seam between executor and network."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from truedraw.errors import TransportError
    from truedraw.result import Result


@runtime_checkable
class HttpClient(Protocol):
    """Minimal HTTP client protocol: one GET returning the body as text."""

    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        timeout_s: float,
    ) -> Result[str, TransportError]:
        """Fetch *url* and return its decoded body, or a TransportError."""
        ...
