"""Default HTTP capability backed by httpx."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Self

import httpx

from truedraw._http import PROVIDER_ID, status_hint
from truedraw.errors import TransportError
from truedraw.result import Failure, Success
from truedraw.transport._errors import wrap_transport_error

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from truedraw.result import Result

logger = logging.getLogger(__name__)


class HttpxClient:
    """HttpClient implementation on ``httpx.AsyncClient``.

    A client passed in is borrowed and left open; one created here is owned
    and closed by ``aclose()``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        provider: str = PROVIDER_ID,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self.provider = provider

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily initialize and return the httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
        return self._client

    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        timeout_s: float,
    ) -> Result[str, TransportError]:
        """Perform one GET; non-2xx and network failures become TransportError.

        *timeout_s* caps the whole call, body included, not just each phase.
        """
        client = self._get_client()
        try:
            async with asyncio.timeout(timeout_s):
                response = await client.get(
                    url, headers=dict(headers), timeout=httpx.Timeout(timeout_s)
                )
        except asyncio.CancelledError:
            raise
        except TimeoutError:
            logger.debug("GET %s exceeded %.1fs", url, timeout_s)
            return Failure(
                wrap_transport_error(
                    TimeoutError(f"no complete response within {timeout_s}s"),
                    provider=self.provider,
                )
            )
        except (httpx.HTTPError, OSError) as e:
            logger.debug("GET %s failed: %s: %s", url, type(e).__name__, e)
            return Failure(wrap_transport_error(e, provider=self.provider))

        if not response.is_success:
            reason = _error_reason(response)
            logger.debug("GET %s returned HTTP %d", url, response.status_code)
            return Failure(
                TransportError(
                    reason,
                    provider=self.provider,
                    status_code=response.status_code,
                    hint=status_hint(response.status_code),
                )
            )

        return Success(response.content.decode("utf-8", errors="replace"))

    async def aclose(self) -> None:
        """Close the underlying client when this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _error_reason(response: httpx.Response) -> str:
    """Prefer random.org's own error text, falling back to the reason phrase."""
    text = response.content.decode("utf-8", errors="replace").strip()
    if text:
        return text.splitlines()[0][:200]
    return response.reason_phrase or f"HTTP {response.status_code}"
