"""
Data models for requests, response envelopes and uploads.
"""

import mimetypes
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .core.utils import strip_query
from .exceptions import EmptyResultError


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded linear backoff applied to network and 5xx failures.

    Attributes:
        max_retries: Retries after the first attempt (0 disables retrying)
        base_delay: Seconds; retry n waits ``n * base_delay``

    Example:
        >>> await http.get("/api/short-link", RequestOptions(retry=RetryPolicy.disabled()))
    """

    max_retries: int = 3
    base_delay: float = 1.0

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if self.base_delay < 0:
            raise ValueError("base_delay cannot be negative")

    @classmethod
    def disabled(cls) -> "RetryPolicy":
        return cls(max_retries=0, base_delay=0.0)


@dataclass
class RequestOptions:
    """
    Per-call overrides for a single transport request.

    Attributes:
        headers: Extra headers for this call only
        params: Query parameters; entries set to None are dropped
        timeout: Timeout in seconds overriding the client default
        retry: Retry policy overriding the client default
    """

    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    timeout: Optional[float] = None
    retry: Optional[RetryPolicy] = None


@dataclass
class ApiResponse:
    """
    Decoded response envelope.

    ``result`` is None when the server omitted it. Callers that need a
    value use ``unwrap()``, which raises instead of handing back None.
    """

    result: Any = None
    message: str = ""
    is_success: Optional[bool] = None
    exception: Any = None
    status_code: int = 200

    @classmethod
    def from_payload(cls, payload: Any, status_code: int = 200) -> "ApiResponse":
        if not isinstance(payload, dict):
            return cls(result=payload, status_code=status_code)

        result = payload.get("result")
        if result is None:
            result = payload.get("data")

        return cls(
            result=result,
            message=payload.get("message") or "",
            is_success=payload.get("isSuccess", payload.get("success")),
            exception=payload.get("exeption", payload.get("exception")),
            status_code=status_code,
        )

    @property
    def has_result(self) -> bool:
        return self.result is not None

    def unwrap(self) -> Any:
        if self.result is None:
            raise EmptyResultError(
                self.message or "Response did not include a result"
            )
        return self.result


@dataclass(frozen=True)
class Pagination:
    """Page (1-based), page size and optional sorting for list endpoints."""

    page: int = 1
    page_size: int = 10
    sort_field: Optional[str] = None
    sort_type: Optional[str] = None

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be 1 or greater")
        if self.page_size < 1:
            raise ValueError("page_size must be 1 or greater")
        if self.sort_type not in (None, "asc", "desc"):
            raise ValueError("sort_type must be 'asc' or 'desc'")

    def to_params(self) -> Dict[str, Any]:
        params = {"page": self.page, "pageSize": self.page_size}
        if self.sort_field:
            params["sortField"] = self.sort_field
        if self.sort_type:
            params["sortType"] = self.sort_type
        return params


@dataclass
class FileInput:
    """
    A binary payload destined for object storage.

    ``source`` may be bytes, a str (encoded as UTF-8), a ``pathlib.Path``,
    a file-like object (sync or async ``read()``) or an iterable / async
    iterable of byte chunks.

    Example:
        >>> FileInput(Path("landing.html"))
        >>> FileInput(b"<h1>hi</h1>", filename="index.html")
    """

    source: Any
    filename: Optional[str] = None
    content_type: Optional[str] = None

    def __post_init__(self):
        if self.filename is None:
            name = getattr(self.source, "name", None)
            if isinstance(name, str):
                self.filename = name.replace("\\", "/").rsplit("/", 1)[-1]

    @property
    def resolved_content_type(self) -> str:
        if self.content_type:
            return self.content_type
        if self.filename:
            guessed, _ = mimetypes.guess_type(self.filename)
            if guessed:
                return guessed
        return "application/octet-stream"


@dataclass(frozen=True)
class UploadTarget:
    """
    Pre-signed storage location returned by a metadata call.

    ``fields`` is only set for legacy backends that expect a multipart POST.
    """

    url: str
    fields: Dict[str, str] = field(default_factory=dict)
    public_url: Optional[str] = None

    @property
    def file_url(self) -> str:
        return self.public_url or strip_query(self.url)
