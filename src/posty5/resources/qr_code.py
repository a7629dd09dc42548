"""
QR code management.

A QR code encodes exactly one target. Each target type is its own
dataclass; ``to_text()`` renders the string the QR code will contain.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Union

from ..core.utils import compact
from ..models import Pagination
from .base import CREATED_FROM, ResourceClient


@dataclass(frozen=True)
class FreeTextTarget:
    text: str

    kind: ClassVar[str] = "freeText"

    def to_text(self) -> str:
        return self.text

    def to_payload(self) -> Dict[str, Any]:
        return {"text": self.text}


@dataclass(frozen=True)
class UrlTarget:
    url: str

    kind: ClassVar[str] = "url"

    def to_text(self) -> str:
        return self.url

    def to_payload(self) -> Dict[str, Any]:
        return {"url": self.url}


@dataclass(frozen=True)
class EmailTarget:
    email: str
    subject: str = ""
    body: str = ""

    kind: ClassVar[str] = "email"

    def to_text(self) -> str:
        return f"mailto:{self.email}?subject={self.subject}&body={self.body}"

    def to_payload(self) -> Dict[str, Any]:
        return {"email": self.email, "subject": self.subject, "body": self.body}


@dataclass(frozen=True)
class WifiTarget:
    name: str
    authentication_type: str = "WPA"
    password: str = ""

    kind: ClassVar[str] = "wifi"

    def to_text(self) -> str:
        return f"WIFI:T:{self.authentication_type};S:{self.name};P:{self.password};"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "authenticationType": self.authentication_type,
            "password": self.password,
        }


@dataclass(frozen=True)
class CallTarget:
    phone_number: str

    kind: ClassVar[str] = "call"

    def to_text(self) -> str:
        return f"tel:{self.phone_number}"

    def to_payload(self) -> Dict[str, Any]:
        return {"phoneNumber": self.phone_number}


@dataclass(frozen=True)
class SmsTarget:
    phone_number: str
    message: str = ""

    kind: ClassVar[str] = "sms"

    def to_text(self) -> str:
        return f"sms:{self.phone_number}?body={self.message}"

    def to_payload(self) -> Dict[str, Any]:
        return {"phoneNumber": self.phone_number, "message": self.message}


@dataclass(frozen=True)
class GeolocationTarget:
    latitude: Union[float, str]
    longitude: Union[float, str]

    kind: ClassVar[str] = "geolocation"

    def to_text(self) -> str:
        return f"geo:{self.latitude},{self.longitude}"

    def to_payload(self) -> Dict[str, Any]:
        return {"latitude": self.latitude, "longitude": self.longitude}


QRCodeTarget = Union[
    FreeTextTarget,
    UrlTarget,
    EmailTarget,
    WifiTarget,
    CallTarget,
    SmsTarget,
    GeolocationTarget,
]

TARGET_TYPES = (
    FreeTextTarget,
    UrlTarget,
    EmailTarget,
    WifiTarget,
    CallTarget,
    SmsTarget,
    GeolocationTarget,
)


def build_qr_code_payload(
    target: QRCodeTarget,
    template_id: Optional[str],
    **fields: Any,
) -> Dict[str, Any]:
    """Build the create/update body for a QR code target."""
    if not isinstance(target, TARGET_TYPES):
        raise TypeError(f"Unsupported QR code target: {type(target).__name__}")

    payload = compact(fields)
    payload.update(
        {
            "templateId": template_id,
            "qrCodeTarget": {"type": target.kind, target.kind: target.to_payload()},
            "options": {"text": target.to_text()},
            "templateType": "user",
            "createdFrom": CREATED_FROM,
        }
    )
    return compact(payload)


class QRCodeClient(ResourceClient):
    """
    QR code management.

    Example:
        >>> qr = await client.create(
        ...     UrlTarget("https://example.com"), template_id="tpl_1", name="Site"
        ... )
    """

    base_path = "/api/qr-code"

    async def create(
        self,
        target: QRCodeTarget,
        *,
        template_id: Optional[str] = None,
        name: Optional[str] = None,
        ref_id: Optional[str] = None,
        tag: Optional[str] = None,
        custom_landing_id: Optional[str] = None,
        is_enable_monetization: Optional[bool] = None,
        page_info: Optional[Dict[str, str]] = None,
    ) -> Optional[Dict[str, Any]]:
        payload = build_qr_code_payload(
            target,
            template_id,
            name=name,
            refId=ref_id,
            tag=tag,
            customLandingId=custom_landing_id,
            isEnableMonetization=is_enable_monetization,
            pageInfo=page_info,
        )
        return await self._http.post(self.base_path, payload)

    async def update(
        self,
        qr_code_id: str,
        target: QRCodeTarget,
        *,
        name: str,
        template_id: Optional[str] = None,
        ref_id: Optional[str] = None,
        tag: Optional[str] = None,
        custom_landing_id: Optional[str] = None,
        is_enable_monetization: Optional[bool] = None,
        page_info: Optional[Dict[str, str]] = None,
    ) -> Optional[Dict[str, Any]]:
        # The API takes QR code updates as POST on the item path.
        payload = build_qr_code_payload(
            target,
            template_id,
            name=name,
            refId=ref_id,
            tag=tag,
            customLandingId=custom_landing_id,
            isEnableMonetization=is_enable_monetization,
            pageInfo=page_info,
        )
        return await self._http.post(self._path(qr_code_id), payload)

    async def get(self, qr_code_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(qr_code_id))

    async def delete(self, qr_code_id: str) -> None:
        await self._http.delete(self._path(qr_code_id))

    async def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self._http.get(
            self.base_path, self._list_options(filters, pagination)
        )
