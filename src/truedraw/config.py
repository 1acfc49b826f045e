"""Configuration: frozen Config with environment fallbacks."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from truedraw._http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, USER_AGENT
from truedraw.errors import ConfigurationError
from truedraw.node import field_defaults

load_dotenv()

_BASE_URL_ENV_VAR = "TRUEDRAW_BASE_URL"
_TIMEOUT_ENV_VAR = "TRUEDRAW_TIMEOUT_S"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for drawing integers.

    ``default_min`` and ``default_max`` apply to records that do not
    override the node fields. ``base_url`` and ``timeout_s`` fall back to
    ``TRUEDRAW_BASE_URL`` and ``TRUEDRAW_TIMEOUT_S`` when left as *None*.

    Example:
        config = Config(timeout_s=5)
        result = await draw(1, 6, config=config)
    """

    #: Falls back to the node field default (1) when *None*.
    default_min: int | None = None
    #: Falls back to the node field default (100) when *None*.
    default_max: int | None = None
    #: Auto-resolved from ``TRUEDRAW_BASE_URL`` when *None*.
    base_url: str | None = None
    #: Auto-resolved from ``TRUEDRAW_TIMEOUT_S`` when *None*.
    timeout_s: float | None = None
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        """Resolve environment fallbacks and validate configuration."""
        defaults = field_defaults()
        if self.default_min is None:
            object.__setattr__(self, "default_min", defaults["min"])
        if self.default_max is None:
            object.__setattr__(self, "default_max", defaults["max"])
        if self.base_url is None:
            base_url = os.environ.get(_BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
            object.__setattr__(self, "base_url", base_url.rstrip("/"))
        if self.timeout_s is None:
            object.__setattr__(self, "timeout_s", _timeout_from_env())

        if not str(self.base_url).startswith(("https://", "http://")):
            raise ConfigurationError(
                f"base_url must be an http(s) URL, got {self.base_url!r}",
                hint=f"Pass Config(base_url=...) or set {_BASE_URL_ENV_VAR}.",
            )
        if isinstance(self.timeout_s, bool) or not isinstance(
            self.timeout_s, (int, float)
        ):
            raise ConfigurationError(
                f"timeout_s must be a number, got {self.timeout_s!r}",
                hint="This is the per-request ceiling in seconds (default 15).",
            )
        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This is the per-request ceiling in seconds (default 15).",
            )
        for name in ("default_min", "default_max"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(
                    f"{name} must be an integer, got {value!r}",
                    hint="Range defaults mirror the node's integer Min/Max fields.",
                )
        if self.default_max < self.default_min:
            raise ConfigurationError(
                f"default_max ({self.default_max}) must be >= default_min "
                f"({self.default_min})",
            )
        if not self.user_agent.strip():
            raise ConfigurationError(
                "user_agent must not be empty",
                hint="random.org asks clients to identify themselves.",
            )

    @property
    def request_timeout_s(self) -> float:
        """Timeout after environment resolution."""
        return DEFAULT_TIMEOUT_S if self.timeout_s is None else float(self.timeout_s)

    @property
    def endpoint(self) -> str:
        """Resolved base URL without a trailing slash."""
        return str(self.base_url).rstrip("/")


def _timeout_from_env() -> float:
    raw = os.environ.get(_TIMEOUT_ENV_VAR)
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_S
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{_TIMEOUT_ENV_VAR} must be a number, got {raw!r}",
            hint="Unset it to use the 15 second default.",
        ) from e
