"""Utils package."""

from .errors import APIError, ErrorCode, raise_error, log_error
from .numbers import MAX_AMOUNT, to_number, to_non_negative

__all__ = [
    "APIError",
    "ErrorCode",
    "raise_error",
    "log_error",
    "to_number",
    "to_non_negative",
    "MAX_AMOUNT",
]
