"""Error handling utilities."""

from enum import Enum
from typing import Optional, Any, Dict
import logging


logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error code enumeration."""

    # Document errors
    RENDER_FAILED = "RENDER_FAILED"
    EXPORT_FAILED = "EXPORT_FAILED"
    UNSUPPORTED_EXPORT_FORMAT = "UNSUPPORTED_EXPORT_FORMAT"

    # Server errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    # Document errors
    ErrorCode.RENDER_FAILED: "Could not render the quotation",
    ErrorCode.EXPORT_FAILED: "Could not export the quotation",
    ErrorCode.UNSUPPORTED_EXPORT_FORMAT: "Unsupported export format",

    # Server errors
    ErrorCode.INTERNAL_ERROR: "Internal server error",
}


class APIError(Exception):
    """Custom API error exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        status_code: int = 400,
        details: Optional[Any] = None,
    ):
        """
        Initialize APIError.

        Args:
            error_code: Error code from ErrorCode enum
            message: Custom error message (overrides default)
            status_code: HTTP status code
            details: Additional error details
        """
        self.error_code = error_code
        self.message = message or ERROR_MESSAGES.get(error_code, "An error occurred")
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """String representation."""
        return self.message


def raise_error(
    error_code: ErrorCode,
    message: Optional[str] = None,
    status_code: int = 400,
    details: Optional[Any] = None,
) -> None:
    """
    Raise an API error.

    Args:
        error_code: Error code from ErrorCode enum
        message: Custom error message (overrides default)
        status_code: HTTP status code
        details: Additional error details

    Raises:
        APIError: Always raises APIError with provided parameters
    """
    raise APIError(
        error_code=error_code,
        message=message,
        status_code=status_code,
        details=details,
    )


def log_error(error: Exception, context: str = "") -> None:
    """
    Log an error with context.

    Args:
        error: Exception to log
        context: Context description
    """
    if isinstance(error, APIError):
        logger.error(
            f"APIError [{context}]: {error.error_code} - {error.message}",
            extra={"details": error.details},
        )
    else:
        logger.error(f"Error [{context}]: {str(error)}", exc_info=True)
