"""Custom exceptions for the uatuples service.

Provides structured error handling with categorized exceptions
and standardized error response format.
"""

from typing import Optional, Dict, Any


class UATuplesException(Exception):
    """Base exception for all uatuples errors.

    Provides structured error response format with:
    - error_code: Machine-readable error identifier
    - message: Human-readable error description
    - details: Optional additional context
    """

    error_code: str = "UATUPLES_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return structured error response dict."""
        response = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


# ============ Validation Errors (4xx) ============


class ValidationError(UATuplesException):
    """Input validation failed."""

    error_code = "VALIDATION_ERROR"
    status_code = 400


class UserAgentTooLongError(ValidationError):
    """User-Agent exceeds the configured maximum length."""

    error_code = "USER_AGENT_TOO_LONG"

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"User-Agent too long: {length} > {max_length} characters",
            details={"length": length, "max_length": max_length},
        )


# ============ Configuration Errors ============


class ConfigurationError(UATuplesException):
    """Configuration issue."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, setting: str, message: str):
        super().__init__(f"Configuration error for {setting}: {message}", details={"setting": setting})


# ============ Utility Functions ============


def error_response(exception: UATuplesException) -> tuple:
    """Create Flask JSON response from exception.

    Returns:
        Tuple of (response_dict, status_code) ready for jsonify
    """
    return exception.to_dict(), exception.status_code
