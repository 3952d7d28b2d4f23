"""Frontend utilities package."""

from .common import (
    safe_api_call,
    get_cached_api_client,
    format_error_message,
)

__all__ = [
    "safe_api_call",
    "get_cached_api_client",
    "format_error_message",
]
