"""HTTP capability used by the executor."""

from ._errors import extract_status_code, wrap_transport_error
from .base import HttpClient
from .httpx_client import HttpxClient

__all__ = [
    "HttpClient",
    "HttpxClient",
    "extract_status_code",
    "wrap_transport_error",
]
