from .form_submission import FormStatus, FormSubmissionClient
from .html_hosting import HostedPage, HtmlHostingClient
from .html_hosting_variables import HtmlHostingVariablesClient
from .qr_code import (
    CallTarget,
    EmailTarget,
    FreeTextTarget,
    GeolocationTarget,
    QRCodeClient,
    SmsTarget,
    UrlTarget,
    WifiTarget,
)
from .short_link import PageInfo, ShortLinkClient
from .social_task import (
    FacebookPageConfig,
    InstagramConfig,
    SocialTaskClient,
    TaskSettings,
    TikTokConfig,
    YouTubeConfig,
)
from .social_workspace import SocialWorkspaceClient, WorkspaceResult

__all__ = [
    "FormStatus",
    "FormSubmissionClient",
    "HostedPage",
    "HtmlHostingClient",
    "HtmlHostingVariablesClient",
    "CallTarget",
    "EmailTarget",
    "FreeTextTarget",
    "GeolocationTarget",
    "QRCodeClient",
    "SmsTarget",
    "UrlTarget",
    "WifiTarget",
    "PageInfo",
    "ShortLinkClient",
    "FacebookPageConfig",
    "InstagramConfig",
    "SocialTaskClient",
    "TaskSettings",
    "TikTokConfig",
    "YouTubeConfig",
    "SocialWorkspaceClient",
    "WorkspaceResult",
]
