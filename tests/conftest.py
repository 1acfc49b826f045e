"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, marker handling,
automatic API test skipping and an HttpClient test double.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import TYPE_CHECKING, Any

import pytest

from truedraw.errors import TransportError
from truedraw.result import Failure, Success

if TYPE_CHECKING:
    from collections.abc import Mapping

    from truedraw.result import Result

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeHttpClient:
    """HttpClient test double.

    Replays ``replies`` in order: strings become response bodies,
    ``TransportError`` instances become failures and other exceptions are
    raised. Once exhausted, ``default_body`` is returned. Every call is
    captured in ``calls``.
    """

    replies: list[Any] = field(default_factory=list)
    default_body: str = "42\n"
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        timeout_s: float,
    ) -> Result[str, TransportError]:
        self.calls.append({"url": url, "headers": dict(headers), "timeout_s": timeout_s})
        reply = self.replies.pop(0) if self.replies else self.default_body
        if isinstance(reply, TransportError):
            return Failure(reply)
        if isinstance(reply, BaseException):
            raise reply
        return Success(reply)

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def fake_client() -> FakeHttpClient:
    return FakeHttpClient()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_truedraw_env(request, monkeypatch):
    """Clear TRUEDRAW_* env vars so tests see default configuration.

    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("TRUEDRAW_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)
