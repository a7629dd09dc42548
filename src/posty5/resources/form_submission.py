from enum import Enum
from typing import Any, Dict, Optional, Union

from ..core.utils import compact
from ..models import Pagination
from .base import ResourceClient


class FormStatus(str, Enum):
    NEW = "New"
    PENDING_REVIEW = "Pending Review"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    NEED_MORE_INFO = "Need More Info"
    APPROVED = "Approved"
    PARTIALLY_APPROVED = "Partially Approved"
    REJECTED = "Rejected"
    COMPLETED = "Completed"
    ARCHIVED = "Archived"
    CANCELLED = "Cancelled"


class FormSubmissionClient(ResourceClient):
    """Submissions collected by forms on hosted HTML pages."""

    base_path = "/api/html-hosting-form-submission"

    async def get(self, submission_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(submission_id))

    async def get_next_previous(self, submission_id: str) -> Optional[Dict[str, Any]]:
        """References to the neighbouring submissions, for navigation."""
        return await self._http.get(self._path(submission_id, "next-previous"))

    async def list(
        self,
        html_hosting_id: str,
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> Optional[Dict[str, Any]]:
        if not html_hosting_id:
            raise ValueError("html_hosting_id is required")

        params = {"htmlHostingId": html_hosting_id, **(filters or {})}
        status = params.get("status")
        if isinstance(status, FormStatus):
            params["status"] = status.value
        return await self._http.get(
            self.base_path, self._list_options(params, pagination)
        )

    async def change_status(
        self,
        submission_id: str,
        status: Union[FormStatus, str],
        *,
        rejected_reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Move a submission to a new status; returns the grouped status history."""
        status = FormStatus(status)
        payload = compact(
            {
                "status": status.value,
                "rejectedReason": rejected_reason,
                "notes": notes,
            }
        )
        return await self._http.put(self._path(submission_id, "status"), payload)

    async def delete(self, submission_id: str) -> None:
        await self._http.delete(self._path(submission_id))
