from typing import Any, Dict, Optional

from ..client import HttpClient
from ..models import Pagination, RequestOptions
from ..upload import FinalizeMode, StorageUploader, UploadWorkflow

CREATED_FROM = "pythonPackage"


class ResourceClient:
    """Shared plumbing for the per-resource API clients."""

    base_path = ""

    def __init__(self, http: HttpClient):
        self._http = http

    def _path(self, *parts: str) -> str:
        return "/".join([self.base_path, *(str(part).strip("/") for part in parts)])

    @staticmethod
    def _list_options(
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> RequestOptions:
        params = dict(filters or {})
        if pagination is not None:
            params.update(pagination.to_params())
        return RequestOptions(params=params)


class UploadingResourceClient(ResourceClient):
    """
    Resource client whose writes go through the upload workflow.

    A client built without a ``storage`` uploader creates and owns one;
    ``close()`` (or ``async with``) releases it. A shared uploader is left
    open for its owner to close.
    """

    finalize_mode = FinalizeMode.NONE

    def __init__(self, http: HttpClient, storage: Optional[StorageUploader] = None):
        super().__init__(http)
        self._owns_storage = storage is None
        self._storage = storage or StorageUploader()
        self._workflow = UploadWorkflow(self._storage, self.finalize_mode)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._owns_storage:
            await self._storage.close()
