from typing import Any, Dict, Optional

from ..core.utils import compact
from ..models import Pagination
from .base import CREATED_FROM, ResourceClient

VARIABLE_KEY_PREFIX = "pst5_"


def validate_variable_key(key: str) -> str:
    """Check that a variable key carries the required prefix."""
    key = (key or "").strip()
    if not key.startswith(VARIABLE_KEY_PREFIX):
        raise ValueError(
            f"Key must start with '{VARIABLE_KEY_PREFIX}', "
            f"change to {VARIABLE_KEY_PREFIX}{key}"
        )
    return key


class HtmlHostingVariablesClient(ResourceClient):
    """Key/value variables substituted into hosted HTML pages."""

    base_path = "/api/html-hosting-variables"

    async def create(
        self,
        name: str,
        key: str,
        value: str,
        *,
        tag: Optional[str] = None,
        ref_id: Optional[str] = None,
    ) -> None:
        payload = compact(
            {
                "name": name,
                "key": validate_variable_key(key),
                "value": value,
                "tag": tag,
                "refId": ref_id,
                "createdFrom": CREATED_FROM,
            }
        )
        await self._http.post(self.base_path, payload)

    async def update(
        self,
        variable_id: str,
        name: str,
        key: str,
        value: str,
        *,
        tag: Optional[str] = None,
        ref_id: Optional[str] = None,
    ) -> None:
        payload = compact(
            {
                "name": name,
                "key": validate_variable_key(key),
                "value": value,
                "tag": tag,
                "refId": ref_id,
            }
        )
        await self._http.put(self._path(variable_id), payload)

    async def get(self, variable_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(variable_id))

    async def delete(self, variable_id: str) -> None:
        await self._http.delete(self._path(variable_id))

    async def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self._http.get(
            self.base_path, self._list_options(filters, pagination)
        )
