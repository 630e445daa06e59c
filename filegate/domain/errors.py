"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
Application exceptions carry user-facing messaging for API responses.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    INVALID_TOKEN = "invalid_token"
    SCOPE_MISMATCH = "scope_mismatch"
    FILE_NOT_FOUND = "file_not_found"
    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED = "unauthorized"
    TOKEN_GENERATION_FAILED = "token_generation_failed"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.INVALID_TOKEN: {
        "title": "Invalid or Expired Token",
        "message": "The access token is invalid or has expired.",
        "action": "Request a new access token for this file.",
    },
    ErrorCategory.SCOPE_MISMATCH: {
        "title": "Token Does Not Match Resource",
        "message": "The access token was issued for a different file.",
        "action": "Use the token issued for the file you are requesting.",
    },
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "File Not Found",
        "message": "The requested file could not be found.",
        "action": "Check the bucket and path and try again.",
    },
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.UNAUTHORIZED: {
        "title": "Unauthorized",
        "message": "You are not allowed to issue file access tokens.",
        "action": "Provide valid issuer credentials.",
    },
    ErrorCategory.TOKEN_GENERATION_FAILED: {
        "title": "Token Generation Failed",
        "message": "An access token could not be generated.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================


class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions are pure and have no external dependencies.
    They can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class TokenRejectedError(DomainError):
    """
    Raised when a capability token fails verification.

    The subclasses record the specific cause for operators. Callers facing
    untrusted clients should catch this base class and report one generic
    outcome.
    """

    reason = "rejected"


class MalformedTokenError(TokenRejectedError):
    """Structural failure: segments, base64, field count, encoding or integer."""

    reason = "malformed"


class SignatureMismatchError(TokenRejectedError):
    """The MAC carried by the token does not match the payload."""

    reason = "bad_signature"


class TokenExpiredError(TokenRejectedError):
    """The MAC is valid but the token is past its expiry."""

    reason = "expired"

    def __init__(self, message: str, expiry: int, now: int):
        super().__init__(message)
        self.expiry = expiry
        self.now = now


class ScopeMismatchError(DomainError):
    """A verified token was presented for a resource it was not issued for."""

    pass


class ObjectNotFoundError(DomainError):
    """The storage backend reports the requested object absent."""

    pass


class StorageBackendError(DomainError):
    """
    Raised when the storage backend fails unexpectedly.

    Absence of an object is not a backend failure.
    """

    pass


class TokenGenerationError(DomainError):
    """Raised when a token could not be produced for well-formed input."""

    pass


class InvalidRequestError(DomainError):
    """Raised when caller-supplied parameters are out of range or missing."""

    pass


# ============================================================================
# Application Layer Exceptions
# ============================================================================


class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and HTTP responses.
    The technical message is kept for logging and never serialized.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        context: Additional context information
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context)
    return error.to_dict(), status_code
