"""
Utility functions for transport operations.
"""

import asyncio
from typing import Any, Dict, Mapping, Optional

import httpx

from ..exceptions import NetworkError

USER_AGENT = "posty5-python/1.0"
API_KEY_HEADER = "X-API-Key"

RETRYABLE_EXCEPTIONS = (
    httpx.TransportError,
    asyncio.TimeoutError,
    ConnectionError,
    NetworkError,
)


def build_default_headers(extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Build headers sent with every API request."""
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if extra:
        headers.update(extra)
    return headers


def build_auth_headers(
    api_key: Optional[str], extra: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Build per-call headers, injecting the API key when one is configured."""
    headers = dict(extra or {})
    if api_key:
        headers[API_KEY_HEADER] = api_key
    return headers


def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop unset query parameters and render booleans the way the API expects."""
    cleaned = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def compact(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of a request body without keys whose value is None."""
    return {key: value for key, value in payload.items() if value is not None}


def classify_request_exception(exception: BaseException) -> str:
    """Classify exception type for error handling logic.

    Only transport-level failures count as network errors; any other
    exception is "unknown", whatever its message says.
    """
    if isinstance(exception, (httpx.TimeoutException, asyncio.TimeoutError)):
        return "timeout"
    elif isinstance(exception, (httpx.TransportError, ConnectionError)):
        return "network"
    else:
        return "unknown"


def should_retry_request(
    attempt: int,
    max_retries: int,
    exception: Optional[BaseException] = None,
    status_code: Optional[int] = None,
) -> bool:
    """Determine if a request should be retried.

    Only connection-level failures and 5xx responses are retried; 4xx
    responses never are.
    """
    if attempt >= max_retries:
        return False

    if status_code is not None:
        return status_code >= 500

    return isinstance(exception, RETRYABLE_EXCEPTIONS)


def calculate_retry_delay(retry_count: int, base_delay: float) -> float:
    """Calculate linear backoff delay for the given (1-based) retry."""
    return retry_count * base_delay


def strip_query(url: str) -> str:
    """Return the URL without its query string or fragment."""
    return url.split("?", 1)[0].split("#", 1)[0]
