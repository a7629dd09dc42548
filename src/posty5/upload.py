"""
Upload-then-finalize workflow for resources that accept binary payloads.

A metadata call through the HttpClient returns one pre-signed storage
target per asset. Each asset is drained into memory and transferred
directly to its target (no API key, no retries: the URL itself is the
authorization). Resources whose publication is not automatic then issue
one finalize call. Nothing is rolled back when a step fails; a metadata
record left without its file is the caller's to clean up.
"""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import httpx

from .config import get_logger
from .core.errors import normalize_error, read_error_body
from .exceptions import Posty5Error, UploadError
from .models import FileInput, UploadTarget

logger = get_logger("upload")


class FinalizeMode(str, Enum):
    """How a resource becomes live once its files are in storage."""

    EXPLICIT = "explicit"
    AUTOMATIC = "automatic"
    NONE = "none"


@dataclass
class MetadataResult:
    """Record returned by the metadata call, with one target slot per asset."""

    record: Dict[str, Any]
    targets: List[Optional[UploadTarget]] = field(default_factory=list)


@dataclass
class UploadOutcome:
    record: Dict[str, Any]
    file_urls: List[Optional[str]] = field(default_factory=list)
    finalized: Any = None


@dataclass
class UploadHooks:
    """
    Lifecycle callbacks for one storage transfer.

    ``on_progress`` receives 0 when the transfer starts (and again if it
    fails) and 100 once storage accepts it; there is no finer-grained
    progress. ``on_complete`` runs after either outcome.
    """

    on_start: Optional[Callable[[], Any]] = None
    on_progress: Optional[Callable[[int], Any]] = None
    on_success: Optional[Callable[[str], Any]] = None
    on_error: Optional[Callable[[Posty5Error], Any]] = None
    on_complete: Optional[Callable[[], Any]] = None


@dataclass
class UploadResult:
    url: Optional[str] = None
    success: bool = False
    error: Optional[Posty5Error] = None


MetadataCall = Callable[[], Awaitable[MetadataResult]]
FinalizeCall = Callable[[MetadataResult, List[Optional[str]]], Awaitable[Any]]


async def read_binary(source: Any) -> bytes:
    """Drain any supported binary source into a single bytes buffer."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, str):
        return source.encode("utf-8")
    if isinstance(source, Path):
        return source.read_bytes()

    if hasattr(source, "read"):
        data = source.read()
        if inspect.isawaitable(data):
            data = await data
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)

    if hasattr(source, "__aiter__"):
        chunks = [chunk async for chunk in source]
    elif hasattr(source, "__iter__"):
        chunks = list(source)
    else:
        raise TypeError(f"Unsupported upload source: {type(source).__name__}")

    return b"".join(
        chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)
        for chunk in chunks
    )


class StorageUploader:
    """Transfers buffers to pre-signed storage URLs."""

    def __init__(
        self,
        timeout: float = 300.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout), transport=transport
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def upload(
        self,
        target: UploadTarget,
        data: bytes,
        content_type: str,
        filename: Optional[str] = None,
        hooks: Optional[UploadHooks] = None,
    ) -> str:
        """Upload ``data`` and return the public URL of the stored file.

        Raises:
            UploadError: If storage answers with a non-2xx status
            NetworkError: If storage could not be reached
        """
        hooks = hooks or UploadHooks()
        if hooks.on_start:
            hooks.on_start()
        if hooks.on_progress:
            hooks.on_progress(0)

        try:
            url = await self._transfer(target, data, content_type, filename)
        except Posty5Error as e:
            if hooks.on_progress:
                hooks.on_progress(0)
            if hooks.on_error:
                hooks.on_error(e)
            raise
        else:
            if hooks.on_progress:
                hooks.on_progress(100)
            if hooks.on_success:
                hooks.on_success(url)
            return url
        finally:
            if hooks.on_complete:
                hooks.on_complete()

    async def upload_with_result(
        self,
        target: UploadTarget,
        data: bytes,
        content_type: str,
        filename: Optional[str] = None,
        hooks: Optional[UploadHooks] = None,
    ) -> UploadResult:
        """Like ``upload`` but reports a storage failure in the result."""
        try:
            url = await self.upload(target, data, content_type, filename, hooks)
        except Posty5Error as e:
            return UploadResult(success=False, error=e)
        return UploadResult(url=url, success=True)

    async def _transfer(
        self,
        target: UploadTarget,
        data: bytes,
        content_type: str,
        filename: Optional[str],
    ) -> str:
        try:
            if target.fields:
                # Storage expects the form fields first and the file part last.
                response = await self._client.post(
                    target.url,
                    data=dict(target.fields),
                    files={"file": (filename or "file", data, content_type)},
                )
            else:
                response = await self._client.put(
                    target.url,
                    content=data,
                    headers={"Content-Type": content_type},
                )
        except httpx.HTTPError as e:
            raise normalize_error(e) from e

        if not 200 <= response.status_code < 300:
            raise UploadError(
                f"File upload failed with status {response.status_code}",
                response.status_code,
                read_error_body(response) or None,
            )

        logger.debug("Uploaded %d bytes to %s", len(data), target.file_url)
        return target.file_url


class UploadWorkflow:
    """
    Sequences metadata call, storage transfers and optional finalize call.

    Example:
        >>> workflow = UploadWorkflow(storage, FinalizeMode.EXPLICIT)
        >>> outcome = await workflow.run(create_record, [FileInput(html)], publish)
    """

    def __init__(self, storage: StorageUploader, finalize_mode: FinalizeMode):
        self.storage = storage
        self.finalize_mode = finalize_mode

    async def run(
        self,
        metadata: MetadataCall,
        assets: Sequence[FileInput],
        finalize: Optional[FinalizeCall] = None,
        hooks: Optional[UploadHooks] = None,
    ) -> UploadOutcome:
        if self.finalize_mode is FinalizeMode.EXPLICIT and finalize is None:
            raise ValueError("Explicit finalize mode requires a finalize call")
        if self.finalize_mode is not FinalizeMode.EXPLICIT and finalize is not None:
            raise ValueError(
                f"Finalize call given for {self.finalize_mode.value} finalize mode"
            )

        result = await metadata()

        file_urls: List[Optional[str]] = []
        for index, asset in enumerate(assets):
            target = result.targets[index] if index < len(result.targets) else None
            if target is None:
                file_urls.append(None)
                continue
            data = await read_binary(asset.source)
            file_urls.append(
                await self.storage.upload(
                    target, data, asset.resolved_content_type, asset.filename, hooks
                )
            )

        outcome = UploadOutcome(record=result.record, file_urls=file_urls)
        if finalize is not None:
            outcome.finalized = await finalize(result, file_urls)
        return outcome
