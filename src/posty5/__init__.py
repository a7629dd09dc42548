"""
Posty5 SDK

Async Python client for the Posty5 API: short links, QR codes, HTML
hosting, form submissions and social publishing.
"""

from .api import Posty5
from .client import HttpClient
from .config import ClientConfig, Settings
from .models import ApiResponse, FileInput, Pagination, RequestOptions, RetryPolicy
from .upload import FinalizeMode, UploadHooks, UploadResult
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    EmptyResultError,
    ErrorKind,
    InvalidField,
    NetworkError,
    NotFoundError,
    Posty5Error,
    RateLimitError,
    ServerError,
    UploadError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    "Posty5",
    "HttpClient",
    "ClientConfig",
    "Settings",
    "ApiResponse",
    "FileInput",
    "Pagination",
    "RequestOptions",
    "RetryPolicy",
    "FinalizeMode",
    "UploadHooks",
    "UploadResult",
    "AuthenticationError",
    "AuthorizationError",
    "EmptyResultError",
    "ErrorKind",
    "InvalidField",
    "NetworkError",
    "NotFoundError",
    "Posty5Error",
    "RateLimitError",
    "ServerError",
    "UploadError",
    "ValidationError",
]
