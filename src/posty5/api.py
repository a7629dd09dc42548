from typing import Optional

import httpx

from .client import HttpClient
from .config import ClientConfig, Settings, get_logger, get_settings
from .resources import (
    FormSubmissionClient,
    HtmlHostingClient,
    HtmlHostingVariablesClient,
    QRCodeClient,
    ShortLinkClient,
    SocialTaskClient,
    SocialWorkspaceClient,
)
from .upload import StorageUploader

logger = get_logger("api")


class Posty5:
    """
    Entry point bundling every resource client over one shared transport.

    Settings not given explicitly come from ``POSTY5_*`` environment
    variables (or a ``.env`` file).

    Example:
        >>> async with Posty5(api_key="your-key") as posty5:
        ...     link = await posty5.short_links.create("https://example.com")
        ...     print(link["shorterLink"])
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        debug: Optional[bool] = None,
        *,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        storage_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or get_settings()
        config = ClientConfig.from_settings(
            settings, api_key=api_key, base_url=base_url, debug=debug
        )

        self.http = HttpClient(config, transport=transport)
        self.storage = StorageUploader(
            settings.upload_timeout_seconds, transport=storage_transport
        )

        self.short_links = ShortLinkClient(self.http)
        self.qr_codes = QRCodeClient(self.http)
        self.html_hosting = HtmlHostingClient(self.http, self.storage)
        self.html_hosting_variables = HtmlHostingVariablesClient(self.http)
        self.form_submissions = FormSubmissionClient(self.http)
        self.social_workspaces = SocialWorkspaceClient(self.http, self.storage)
        self.social_tasks = SocialTaskClient(self.http, self.storage)

        logger.debug("Posty5 client ready for %s", config.base_url)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self.http.close()
        await self.storage.close()

    def set_api_key(self, api_key: str) -> None:
        self.http.set_api_key(api_key)

    def clear_auth(self) -> None:
        self.http.clear_auth()
