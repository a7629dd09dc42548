"""
Pure functions for mapping failures onto the SDK error taxonomy.

Functions for reading error bodies, parsing field-level validation
descriptors and classifying transport failures without I/O dependencies.
"""

import copy
from typing import Any, Dict, List, Optional

import httpx

from ..exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidField,
    NetworkError,
    NotFoundError,
    Posty5Error,
    RateLimitError,
    ServerError,
    ValidationError,
)
from .utils import classify_request_exception

SERVER_ERROR_STATUSES = (500, 502, 503, 504)
FIELD_ERROR_KEYS = ("exception", "exeption", "errors")


def read_error_body(response: httpx.Response) -> Dict[str, Any]:
    """Decode a JSON error body, returning an empty dict when there is none."""
    try:
        data = response.json()
    except (ValueError, TypeError):
        return {}
    return data if isinstance(data, dict) else {"data": data}


def parse_invalid_fields(data: Dict[str, Any]) -> List[InvalidField]:
    """Extract field-level descriptors from a 400 response body."""
    for key in FIELD_ERROR_KEYS:
        entries = data.get(key)
        if isinstance(entries, list):
            break
    else:
        return []

    fields = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        path = entry.get("path", entry.get("field", []))
        if isinstance(path, (str, int)):
            path = [path]
        fields.append(
            InvalidField(
                path=[str(part) for part in path],
                message=str(entry.get("message", "")),
            )
        )
    return fields


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Parse a ``retry-after`` header given in seconds."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def map_status_code_to_exception(
    status_code: int,
    message: str,
    data: Dict[str, Any],
    headers: Optional[httpx.Headers] = None,
) -> Posty5Error:
    """Map an HTTP status code to the matching SDK exception."""
    details = copy.deepcopy(data.get("details") or data)

    if status_code == 400:
        return ValidationError(message, parse_invalid_fields(data), details)
    elif status_code == 401:
        return AuthenticationError(message, details)
    elif status_code == 403:
        return AuthorizationError(message, details)
    elif status_code == 404:
        return NotFoundError(message, details)
    elif status_code == 429:
        retry_after = parse_retry_after(headers.get("retry-after") if headers else None)
        return RateLimitError(message, retry_after, details)
    elif status_code in SERVER_ERROR_STATUSES:
        return ServerError(message, status_code, details)
    else:
        return Posty5Error(message, data.get("code"), status_code, details)


def error_from_response(
    response: httpx.Response, fallback_message: Optional[str] = None
) -> Posty5Error:
    """Build the SDK exception for a non-2xx response."""
    data = read_error_body(response)
    message = data.get("message") or fallback_message or "An error occurred"
    return map_status_code_to_exception(
        response.status_code, str(message), data, response.headers
    )


def normalize_error(error: Any) -> Posty5Error:
    """Convert any failure into a Posty5 SDK exception.

    Already-normalized errors are returned unchanged.
    """
    if isinstance(error, Posty5Error):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        return error_from_response(error.response, str(error))

    if isinstance(error, BaseException):
        category = classify_request_exception(error)
        if category == "timeout":
            return NetworkError("Request timeout", {"original_error": error})
        if category == "network":
            return NetworkError(
                "Network error: unable to connect", {"original_error": error}
            )
        return Posty5Error(
            str(error) or type(error).__name__, details={"original_error": error}
        )

    return Posty5Error("An unknown error occurred", details={"original_error": error})
