from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.utils import compact
from ..models import Pagination
from .base import CREATED_FROM, ResourceClient


@dataclass
class PageInfo:
    """Landing page details shown before redirecting."""

    title: Optional[str] = None
    description: Optional[str] = None
    description_is_html_file: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "title": self.title,
                "description": self.description,
                "descriptionIsHtmlFile": self.description_is_html_file,
            }
        )


class ShortLinkClient(ResourceClient):
    """Short link management."""

    base_path = "/api/short-link"

    async def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self._http.get(
            self.base_path, self._list_options(filters, pagination)
        )

    async def get(self, short_link_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(short_link_id))

    async def create(
        self,
        base_url: str,
        *,
        name: Optional[str] = None,
        ref_id: Optional[str] = None,
        tag: Optional[str] = None,
        template_id: Optional[str] = None,
        custom_landing_id: Optional[str] = None,
        is_enable_monetization: Optional[bool] = None,
        page_info: Optional[PageInfo] = None,
    ) -> Optional[Dict[str, Any]]:
        """Create a short link pointing at ``base_url``."""
        if not base_url or not base_url.strip():
            raise ValueError("base_url cannot be empty")

        payload = compact(
            {
                "baseUrl": base_url,
                "name": name,
                "refId": ref_id,
                "tag": tag,
                "templateId": template_id,
                "customLandingId": custom_landing_id,
                "isEnableMonetization": is_enable_monetization,
                "pageInfo": page_info.to_payload() if page_info else None,
                "templateType": "user",
                "createdFrom": CREATED_FROM,
            }
        )
        return await self._http.post(self.base_path, payload)

    async def update(
        self,
        short_link_id: str,
        base_url: str,
        *,
        name: Optional[str] = None,
        ref_id: Optional[str] = None,
        tag: Optional[str] = None,
        template_id: Optional[str] = None,
        is_enable_landing_page: Optional[bool] = None,
        is_enable_monetization: Optional[bool] = None,
        page_info: Optional[PageInfo] = None,
    ) -> Optional[Dict[str, Any]]:
        payload = compact(
            {
                "baseUrl": base_url,
                "name": name,
                "refId": ref_id,
                "tag": tag,
                "templateId": template_id,
                "isEnableLandingPage": is_enable_landing_page,
                "isEnableMonetization": is_enable_monetization,
                "pageInfo": page_info.to_payload() if page_info else None,
            }
        )
        return await self._http.put(self._path(short_link_id), payload)

    async def delete(self, short_link_id: str) -> None:
        await self._http.delete(self._path(short_link_id))
