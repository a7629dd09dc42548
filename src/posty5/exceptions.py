"""
Custom exceptions for the Posty5 SDK.

Every failure surfaced by the transport client is one of these classes.
Callers branch on the class (or on ``error.kind``) rather than inspecting
httpx internals.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class ErrorKind(str, Enum):
    NETWORK = "network"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    GENERIC = "generic"


@dataclass(frozen=True)
class InvalidField:
    """A single field-level problem reported with a 400 response."""

    path: List[str] = field(default_factory=list)
    message: str = ""


class Posty5Error(Exception):
    """Base exception for all SDK errors."""

    kind = ErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"status_code={self.status_code!r})"
        )


class NetworkError(Posty5Error):
    """Raised when no response was received (connection failure, timeout)."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Network error occurred", details: Any = None):
        super().__init__(message, "NETWORK_ERROR", None, details)


class ValidationError(Posty5Error):
    """Raised on 400 responses; carries field-level descriptors when provided."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[InvalidField]] = None,
        details: Any = None,
    ):
        super().__init__(message, "VALIDATION_ERROR", 400, details)
        self.errors = list(errors or [])


class AuthenticationError(Posty5Error):
    """Raised on 401 responses."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Authentication failed", details: Any = None):
        super().__init__(message, "AUTHENTICATION_ERROR", 401, details)


class AuthorizationError(Posty5Error):
    """Raised on 403 responses."""

    kind = ErrorKind.AUTHORIZATION

    def __init__(self, message: str = "Access denied", details: Any = None):
        super().__init__(message, "AUTHORIZATION_ERROR", 403, details)


class NotFoundError(Posty5Error):
    """Raised on 404 responses."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Resource not found", details: Any = None):
        super().__init__(message, "NOT_FOUND", 404, details)


class RateLimitError(Posty5Error):
    """Raised on 429 responses; ``retry_after`` is in seconds."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message, "RATE_LIMIT_ERROR", 429, details)
        self.retry_after = retry_after


class ServerError(Posty5Error):
    """Raised on 5xx responses once retries are exhausted."""

    kind = ErrorKind.SERVER

    def __init__(
        self,
        message: str = "Server error occurred",
        status_code: int = 500,
        details: Any = None,
    ):
        super().__init__(message, "SERVER_ERROR", status_code, details)


class UploadError(Posty5Error):
    """Raised when a transfer to a pre-signed storage URL is rejected."""

    def __init__(self, message: str, status_code: int, details: Any = None):
        super().__init__(message, "UPLOAD_ERROR", status_code, details)


class EmptyResultError(Posty5Error):
    """Raised when a successful response has no ``result`` but one is required."""

    def __init__(self, message: str = "Response did not include a result"):
        super().__init__(message, "EMPTY_RESULT")
