from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.utils import compact
from ..exceptions import EmptyResultError
from ..models import FileInput, Pagination, UploadTarget
from ..upload import FinalizeMode, MetadataResult, UploadHooks
from .base import CREATED_FROM, UploadingResourceClient


@dataclass
class WorkspaceResult:
    id: str
    image_url: Optional[str] = None


def parse_workspace_upload(
    result: Optional[Dict[str, Any]], require_target: bool = False
) -> MetadataResult:
    if not result or not result.get("workspaceId"):
        raise EmptyResultError("Response did not include a workspace id")

    config = result.get("uploadImageConfig")
    target = None
    if config and config.get("uploadUrl"):
        target = UploadTarget(url=config["uploadUrl"], public_url=config.get("imageUrl"))
    elif require_target:
        raise EmptyResultError("Response did not include an image upload URL")
    return MetadataResult(record=result, targets=[target])


class SocialWorkspaceClient(UploadingResourceClient):
    """
    Social publisher workspaces.

    A workspace logo is uploaded straight to storage after the workspace
    record is saved; the API attaches it on its own, so there is no
    publish call.
    """

    base_path = "/api/social-publisher-workspace"
    finalize_mode = FinalizeMode.AUTOMATIC

    async def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self._http.get(
            self.base_path, self._list_options(filters, pagination)
        )

    async def get(self, workspace_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(workspace_id))

    async def create(
        self,
        name: str,
        description: str,
        *,
        image: Optional[FileInput] = None,
        tag: Optional[str] = None,
        ref_id: Optional[str] = None,
        upload_hooks: Optional[UploadHooks] = None,
    ) -> WorkspaceResult:
        payload = self._payload(name, description, image, tag, ref_id)
        payload["createdFrom"] = CREATED_FROM
        return await self._save("POST", self.base_path, payload, image, upload_hooks)

    async def update(
        self,
        workspace_id: str,
        name: str,
        description: str,
        *,
        image: Optional[FileInput] = None,
        tag: Optional[str] = None,
        ref_id: Optional[str] = None,
        upload_hooks: Optional[UploadHooks] = None,
    ) -> WorkspaceResult:
        payload = self._payload(name, description, image, tag, ref_id)
        return await self._save(
            "PUT", self._path(workspace_id), payload, image, upload_hooks
        )

    async def delete(self, workspace_id: str) -> None:
        await self._http.delete(self._path(workspace_id))

    async def _save(
        self,
        method: str,
        path: str,
        payload: Dict[str, Any],
        image: Optional[FileInput],
        hooks: Optional[UploadHooks] = None,
    ) -> WorkspaceResult:
        async def save_record() -> MetadataResult:
            response = await self._http.request(method, path, json=payload)
            return parse_workspace_upload(
                response.result, require_target=image is not None
            )

        outcome = await self._workflow.run(
            save_record, [image] if image else [], hooks=hooks
        )
        image_url = outcome.file_urls[0] if outcome.file_urls else None
        return WorkspaceResult(id=outcome.record["workspaceId"], image_url=image_url)

    @staticmethod
    def _payload(
        name: str,
        description: str,
        image: Optional[FileInput],
        tag: Optional[str],
        ref_id: Optional[str],
    ) -> Dict[str, Any]:
        if not name or not name.strip():
            raise ValueError("Workspace name cannot be empty")
        return compact(
            {
                "name": name,
                "description": description,
                "tag": tag,
                "refId": ref_id,
                "hasImage": image is not None,
            }
        )
