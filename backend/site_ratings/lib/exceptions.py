"""Custom exception classes for the site ratings backend."""

from typing import Optional, Dict, Any


class BaseRatingsError(Exception):
    """Base exception for ratings backend errors."""

    ERROR_CODE = "RATINGS_001"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize exception with message, code, and optional details.

        Args:
            message: Error message
            error_code: Optional error code override
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.error_code = error_code or self.ERROR_CODE
        self.details = details or {}


class StoreError(BaseRatingsError):
    """Raised when the ratings store rejects or fails an operation."""

    ERROR_CODE = "STORE_001"


class StoreConnectionError(StoreError):
    """Raised when the ratings store cannot be reached.

    This is the only store failure the retry wrapper treats as transient.
    """

    ERROR_CODE = "STORE_CONN_001"


class EmailDeliveryError(BaseRatingsError):
    """Raised when the email provider refuses a message."""

    ERROR_CODE = "EMAIL_001"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        """Initialize with the provider's HTTP status code."""
        super().__init__(message, error_code)
        self.status_code = status_code
        self.details["status_code"] = status_code


class ConfigurationError(BaseRatingsError):
    """Raised when configuration is invalid or missing required values."""

    ERROR_CODE = "CONFIG_001"
