from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..core.utils import compact
from ..exceptions import EmptyResultError
from ..models import ApiResponse, FileInput, Pagination, UploadTarget
from ..upload import FinalizeMode, MetadataResult, UploadHooks, read_binary
from .base import CREATED_FROM, UploadingResourceClient


@dataclass
class HostedPage:
    """Identifying fields of an HTML page after create/update."""

    id: str
    shorter_link: Optional[str] = None
    file_url: Optional[str] = None
    github_info: Optional[Dict[str, Any]] = None


def parse_page_upload(response: ApiResponse, require_target: bool) -> MetadataResult:
    """Split a create/update response into page details and upload target."""
    result = response.unwrap()
    details = result.get("details")
    if not details:
        raise EmptyResultError("Response did not include page details")

    # The API spells this key "uplaodFileConfig".
    config = result.get("uplaodFileConfig") or result.get("uploadFileConfig")
    target = None
    if config and config.get("uploadUrl"):
        target = UploadTarget(url=config["uploadUrl"], fields=config.get("fields") or {})
    elif require_target:
        raise EmptyResultError("Response did not include an upload URL")

    return MetadataResult(record=details, targets=[target])


class HtmlHostingClient(UploadingResourceClient):
    """
    HTML page hosting.

    File-backed pages are created in three steps: the page record is
    created (POST) or updated (PUT), the HTML is uploaded to the returned
    pre-signed URL, then the page is published with a separate call.

    Example:
        >>> page = await client.create_with_file(
        ...     "Contact form", FileInput(Path("contact.html"))
        ... )
        >>> print(page.shorter_link)
    """

    base_path = "/api/html-hosting"
    finalize_mode = FinalizeMode.EXPLICIT

    async def create_with_file(
        self,
        name: str,
        file: FileInput,
        *,
        file_name: Optional[str] = None,
        custom_landing_id: Optional[str] = None,
        is_enable_monetization: Optional[bool] = None,
        auto_save_in_google_sheet: Optional[bool] = None,
        tag: Optional[str] = None,
        ref_id: Optional[str] = None,
        upload_hooks: Optional[UploadHooks] = None,
    ) -> HostedPage:
        file = await self._load_html(file, file_name)
        payload = compact(
            {
                "name": name,
                "fileName": file.filename,
                "customLandingId": custom_landing_id,
                "isEnableMonetization": is_enable_monetization,
                "autoSaveInGoogleSheet": auto_save_in_google_sheet,
                "tag": tag,
                "refId": ref_id,
                "sourceType": "file",
            }
        )

        async def create_record() -> MetadataResult:
            response = await self._http.request("POST", self.base_path, json=payload)
            return parse_page_upload(response, require_target=True)

        return await self._upload_and_publish(create_record, file, upload_hooks)

    async def update_with_new_file(
        self,
        page_id: str,
        name: str,
        file: FileInput,
        *,
        file_name: Optional[str] = None,
        custom_landing_id: Optional[str] = None,
        is_enable_monetization: Optional[bool] = None,
        auto_save_in_google_sheet: Optional[bool] = None,
        upload_hooks: Optional[UploadHooks] = None,
    ) -> HostedPage:
        """Replace the page's HTML. The upload is skipped when the API
        returns no upload target; the page is republished either way."""
        file = await self._load_html(file, file_name)
        payload = compact(
            {
                "name": name,
                "fileName": file.filename,
                "customLandingId": custom_landing_id,
                "isEnableMonetization": is_enable_monetization,
                "autoSaveInGoogleSheet": auto_save_in_google_sheet,
                "sourceType": "file",
                "isNewFile": True,
                "createdFrom": CREATED_FROM,
            }
        )

        async def update_record() -> MetadataResult:
            response = await self._http.request(
                "PUT", self._path(page_id), json=payload
            )
            return parse_page_upload(response, require_target=False)

        return await self._upload_and_publish(update_record, file, upload_hooks)

    async def create_with_github_file(
        self,
        name: str,
        github_file_url: str,
        *,
        custom_landing_id: Optional[str] = None,
        is_enable_monetization: Optional[bool] = None,
        auto_save_in_google_sheet: Optional[bool] = None,
        tag: Optional[str] = None,
        ref_id: Optional[str] = None,
    ) -> HostedPage:
        """Create a page served from a GitHub file; the API fetches it itself."""
        payload = compact(
            {
                "name": name,
                "githubInfo": {"fileURL": github_file_url},
                "customLandingId": custom_landing_id,
                "isEnableMonetization": is_enable_monetization,
                "autoSaveInGoogleSheet": auto_save_in_google_sheet,
                "tag": tag,
                "refId": ref_id,
                "sourceType": "github",
            }
        )
        response = await self._http.request("POST", self.base_path, json=payload)
        return self._github_page(response)

    async def update_with_github_file(
        self,
        page_id: str,
        name: str,
        github_file_url: str,
        *,
        custom_landing_id: Optional[str] = None,
        is_enable_monetization: Optional[bool] = None,
        auto_save_in_google_sheet: Optional[bool] = None,
    ) -> HostedPage:
        payload = compact(
            {
                "name": name,
                "githubInfo": {"fileURL": github_file_url},
                "customLandingId": custom_landing_id,
                "isEnableMonetization": is_enable_monetization,
                "autoSaveInGoogleSheet": auto_save_in_google_sheet,
                "sourceType": "github",
            }
        )
        response = await self._http.request("PUT", self._path(page_id), json=payload)
        return self._github_page(response)

    async def get(self, page_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(page_id))

    async def delete(self, page_id: str) -> None:
        await self._http.delete(self._path(page_id))

    async def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self._http.get(
            self.base_path, self._list_options(filters, pagination)
        )

    async def lookup(self) -> Optional[List[Dict[str, Any]]]:
        """ID/name pairs of every page, for selection lists."""
        return await self._http.get(self._path("lookup"))

    async def lookup_forms(self, page_id: str) -> Optional[List[Dict[str, Any]]]:
        # Path segment is spelled "lookup-froms" by the API.
        return await self._http.get(self._path("lookup-froms", page_id))

    async def clean_cache(self, page_id: str) -> None:
        await self._http.put(self._path(page_id, "clean-cache"), {})

    async def _publish(self, page_id: str) -> None:
        await self._http.put(self._path("publish", page_id), {})

    async def _upload_and_publish(
        self, metadata, file: FileInput, hooks: Optional[UploadHooks] = None
    ) -> HostedPage:
        async def publish(result: MetadataResult, file_urls) -> None:
            await self._publish(result.record["_id"])

        outcome = await self._workflow.run(metadata, [file], publish, hooks)
        details = outcome.record
        return HostedPage(
            id=details["_id"],
            shorter_link=details.get("shorterLink"),
            file_url=details.get("fileUrl") or outcome.file_urls[0],
        )

    @staticmethod
    async def _load_html(file: FileInput, file_name: Optional[str]) -> FileInput:
        # Read before the page record exists so an unreadable source
        # fails without leaving an empty page behind.
        filename = file_name or file.filename
        if not filename:
            raise ValueError("A file name is required for HTML uploads")
        data = await read_binary(file.source)
        return FileInput(
            data, filename=filename, content_type=file.content_type or "text/html"
        )

    @staticmethod
    def _github_page(response: ApiResponse) -> HostedPage:
        details = response.unwrap().get("details")
        if not details:
            raise EmptyResultError("Response did not include page details")
        return HostedPage(
            id=details["_id"],
            shorter_link=details.get("shorterLink"),
            github_info=details.get("githubInfo"),
        )
