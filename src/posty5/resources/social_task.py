"""
Social publisher tasks: publish one short video to several platforms.

Each target platform is described by its own config dataclass; a task
lists the platforms it publishes to, so a platform can never be enabled
without its settings.

Video and thumbnail files are uploaded to pre-signed URLs obtained from
the API first; the task itself is created afterwards with the public URLs
of the uploaded files.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Union

from ..core.utils import compact
from ..core.validation import (
    DEFAULT_MAX_IMAGE_BYTES,
    DEFAULT_MAX_VIDEO_BYTES,
    FACEBOOK_VIDEO_PATTERN,
    TIKTOK_VIDEO_PATTERN,
    YOUTUBE_SHORTS_PATTERN,
    detect_repost_platform,
    validate_upload_size,
    validate_video_filename,
    validate_video_url,
)
from ..exceptions import EmptyResultError
from ..models import FileInput, Pagination, UploadTarget
from ..upload import (
    FinalizeMode,
    MetadataResult,
    StorageUploader,
    UploadHooks,
    read_binary,
)
from .base import CREATED_FROM, UploadingResourceClient


@dataclass(frozen=True)
class YouTubeConfig:
    title: str
    description: str
    tags: List[str] = field(default_factory=list)
    made_for_kids: Optional[bool] = None
    default_language: Optional[str] = None
    default_audio_language: Optional[str] = None
    category_id: Optional[str] = None
    localization_languages: Optional[List[str]] = None

    platform: ClassVar[str] = "youtube"
    allow_flag: ClassVar[str] = "isAllowYouTube"
    payload_key: ClassVar[str] = "youTube"

    def to_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "title": self.title,
                "description": self.description,
                "tags": list(self.tags),
                "madeForKids": self.made_for_kids,
                "defaultLanguage": self.default_language,
                "defaultAudioLanguage": self.default_audio_language,
                "categoryId": self.category_id,
                "localizationLanguages": self.localization_languages,
            }
        )


@dataclass(frozen=True)
class TikTokConfig:
    caption: str
    privacy_level: str = "public"
    disable_duet: bool = False
    disable_stitch: bool = False
    disable_comment: bool = False

    platform: ClassVar[str] = "tiktok"
    allow_flag: ClassVar[str] = "isAllowTiktok"
    payload_key: ClassVar[str] = "tiktok"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "caption": self.caption,
            "privacy_level": self.privacy_level,
            "disable_duet": self.disable_duet,
            "disable_stitch": self.disable_stitch,
            "disable_comment": self.disable_comment,
        }


@dataclass(frozen=True)
class FacebookPageConfig:
    description: str
    title: Optional[str] = None

    platform: ClassVar[str] = "facebook"
    allow_flag: ClassVar[str] = "isAllowFacebookPage"
    payload_key: ClassVar[str] = "facebook"

    def to_payload(self) -> Dict[str, Any]:
        return compact({"description": self.description, "title": self.title})


@dataclass(frozen=True)
class InstagramConfig:
    description: str
    share_to_feed: Optional[bool] = None
    is_published_to_both_feed_and_story: Optional[bool] = None

    platform: ClassVar[str] = "instagram"
    allow_flag: ClassVar[str] = "isAllowInstagram"
    payload_key: ClassVar[str] = "instagram"

    def to_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "description": self.description,
                "share_to_feed": self.share_to_feed,
                "is_published_to_both_feed_and_story": (
                    self.is_published_to_both_feed_and_story
                ),
            }
        )


PlatformConfig = Union[YouTubeConfig, TikTokConfig, FacebookPageConfig, InstagramConfig]
PLATFORM_TYPES = (YouTubeConfig, TikTokConfig, FacebookPageConfig, InstagramConfig)


@dataclass
class TaskSettings:
    """
    Where and when a video is published.

    Attributes:
        workspace_id: Workspace whose connected accounts publish the video
        platforms: One config per target platform
        schedule: Publish time; None publishes immediately
        tag: Free-form tag for filtering tasks
        ref_id: Identifier from the caller's own system
    """

    workspace_id: str
    platforms: Sequence[PlatformConfig]
    schedule: Optional[datetime] = None
    tag: Optional[str] = None
    ref_id: Optional[str] = None

    def validate(self) -> None:
        if not self.workspace_id:
            raise ValueError("workspace_id is required")
        if not self.platforms:
            raise ValueError("At least one platform is required")

        seen = set()
        for config in self.platforms:
            if not isinstance(config, PLATFORM_TYPES):
                raise TypeError(f"Unsupported platform config: {type(config).__name__}")
            if config.platform in seen:
                raise ValueError(f"Platform '{config.platform}' is configured twice")
            seen.add(config.platform)

    def to_payload(
        self,
        source: str,
        *,
        video_url: Optional[str] = None,
        thumb_url: Optional[str] = None,
        post_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "workspaceId": self.workspace_id,
            "source": source,
        }
        for platform_type in PLATFORM_TYPES:
            payload[platform_type.allow_flag] = False
        for config in self.platforms:
            payload[config.allow_flag] = True
            payload[config.payload_key] = config.to_payload()

        if self.schedule is None:
            payload["schedule"] = {"type": "now"}
        else:
            payload["schedule"] = {
                "type": "schedule",
                "scheduledAt": self.schedule.isoformat(),
            }

        payload.update(
            compact(
                {
                    "videoURL": video_url,
                    "thumbURL": thumb_url,
                    "postURL": post_url,
                    "tag": self.tag,
                    "refId": self.ref_id,
                }
            )
        )
        return payload


def parse_signed_upload(
    result: Dict[str, Any], key: str, legacy_key: str, legacy_url_key: str
) -> Optional[UploadTarget]:
    """Read one upload target from a generate-upload-URLs response.

    Newer responses carry ``{key: {uploadFileURL, fileURL}}`` for a raw PUT;
    legacy ones carry ``{legacy_key: {url, fields}}`` for a multipart POST.
    """
    section = result.get(key) or {}
    if section.get("uploadFileURL"):
        return UploadTarget(url=section["uploadFileURL"], public_url=section.get("fileURL"))

    legacy = result.get(legacy_key) or {}
    if legacy.get("url"):
        return UploadTarget(
            url=legacy["url"],
            fields=legacy.get("fields") or {},
            public_url=result.get(legacy_url_key),
        )
    return None


class SocialTaskClient(UploadingResourceClient):
    """
    Social publisher tasks.

    Example:
        >>> settings = TaskSettings(
        ...     workspace_id="ws_1",
        ...     platforms=[TikTokConfig(caption="New video #launch")],
        ... )
        >>> task = await client.publish(settings, FileInput(Path("clip.mp4")))
    """

    base_path = "/api/social-publisher-task"
    finalize_mode = FinalizeMode.EXPLICIT

    def __init__(
        self,
        http,
        storage: Optional[StorageUploader] = None,
        *,
        max_video_upload_size_bytes: int = DEFAULT_MAX_VIDEO_BYTES,
        max_image_upload_size_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ):
        super().__init__(http, storage)
        self.max_video_upload_size_bytes = max_video_upload_size_bytes
        self.max_image_upload_size_bytes = max_image_upload_size_bytes

    async def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        pagination: Optional[Pagination] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self._http.get(
            self.base_path, self._list_options(filters, pagination)
        )

    async def get_default_settings(self) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path("default-settings"))

    async def get_status(self, task_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(task_id, "status"))

    async def get_next_and_previous(self, task_id: str) -> Optional[Dict[str, Any]]:
        return await self._http.get(self._path(task_id, "next-previous"))

    async def publish(
        self,
        settings: TaskSettings,
        video: Union[FileInput, str],
        thumbnail: Union[FileInput, str, None] = None,
    ) -> Optional[Dict[str, Any]]:
        """Publish from a file, a direct video URL or a repostable post URL."""
        if isinstance(video, FileInput):
            return await self.publish_short_video_by_file(settings, video, thumbnail)

        platform = detect_repost_platform(video)
        if platform == "facebook":
            return await self.publish_repost_video_by_facebook(settings, video, thumbnail)
        if platform == "tiktok":
            return await self.publish_repost_video_by_tiktok(settings, video, thumbnail)
        if platform == "youtube":
            return await self.publish_repost_video_by_youtube(settings, video, thumbnail)
        return await self.publish_short_video_by_url(settings, video, thumbnail)

    async def publish_short_video_by_file(
        self,
        settings: TaskSettings,
        video: FileInput,
        thumbnail: Union[FileInput, str, None] = None,
        upload_hooks: Optional[UploadHooks] = None,
    ) -> Optional[Dict[str, Any]]:
        validate_video_filename(video.filename)
        video = await self._load(video, self.max_video_upload_size_bytes, "Video")
        return await self._publish(
            settings, "video-file", thumbnail, video=video, hooks=upload_hooks
        )

    async def publish_short_video_by_url(
        self,
        settings: TaskSettings,
        video_url: str,
        thumbnail: Union[FileInput, str, None] = None,
    ) -> Optional[Dict[str, Any]]:
        validate_video_url(video_url)
        return await self._publish(settings, "video-url", thumbnail, video_url=video_url)

    async def publish_repost_video_by_facebook(
        self,
        settings: TaskSettings,
        post_url: str,
        thumbnail: Union[FileInput, str, None] = None,
    ) -> Optional[Dict[str, Any]]:
        if not FACEBOOK_VIDEO_PATTERN.match(post_url or ""):
            raise ValueError("Invalid Facebook video URL")
        return await self._publish(settings, "facebook-video", thumbnail, post_url=post_url)

    async def publish_repost_video_by_tiktok(
        self,
        settings: TaskSettings,
        post_url: str,
        thumbnail: Union[FileInput, str, None] = None,
    ) -> Optional[Dict[str, Any]]:
        if not TIKTOK_VIDEO_PATTERN.match(post_url or ""):
            raise ValueError("Invalid TikTok video URL")
        return await self._publish(settings, "tiktok-video", thumbnail, post_url=post_url)

    async def publish_repost_video_by_youtube(
        self,
        settings: TaskSettings,
        post_url: str,
        thumbnail: Union[FileInput, str, None] = None,
    ) -> Optional[Dict[str, Any]]:
        if not YOUTUBE_SHORTS_PATTERN.match(post_url or ""):
            raise ValueError("Invalid YouTube Shorts URL")
        return await self._publish(settings, "youtube-video", thumbnail, post_url=post_url)

    async def _publish(
        self,
        settings: TaskSettings,
        source: str,
        thumbnail: Union[FileInput, str, None],
        *,
        video: Optional[FileInput] = None,
        video_url: Optional[str] = None,
        post_url: Optional[str] = None,
        hooks: Optional[UploadHooks] = None,
    ) -> Optional[Dict[str, Any]]:
        settings.validate()

        thumb_url = thumbnail if isinstance(thumbnail, str) else None
        thumb_file = None
        if isinstance(thumbnail, FileInput):
            thumb_file = await self._load(
                thumbnail, self.max_image_upload_size_bytes, "Thumbnail"
            )

        if video is None and thumb_file is None:
            payload = settings.to_payload(
                source, video_url=video_url, thumb_url=thumb_url, post_url=post_url
            )
            return await self._create_task(payload)

        # Thumbnail goes up before the video.
        slots = []
        if thumb_file is not None:
            slots.append(("thumb", thumb_file))
        if video is not None:
            slots.append(("video", video))

        async def generate_upload_urls() -> MetadataResult:
            response = await self._http.request(
                "POST",
                self._path("generate-uplaod-signd-urls"),
                json=compact(
                    {
                        "thumbFileType": (
                            thumb_file.resolved_content_type if thumb_file else None
                        ),
                        "videoFileType": video.resolved_content_type if video else None,
                    }
                ),
            )
            result = response.unwrap()
            targets = []
            for kind, _ in slots:
                if kind == "thumb":
                    target = parse_signed_upload(
                        result, "thumb", "uploadThumb", "thumbUploadFileURL"
                    )
                else:
                    target = parse_signed_upload(
                        result, "video", "uploadVideo", "videoUplaodFileURL"
                    )
                    if target is None:
                        raise EmptyResultError("Response did not include a video upload URL")
                targets.append(target)
            return MetadataResult(record=result, targets=targets)

        async def create_task(result: MetadataResult, file_urls: List[Optional[str]]):
            uploaded = {kind: url for (kind, _), url in zip(slots, file_urls)}
            payload = settings.to_payload(
                source,
                video_url=uploaded.get("video") or video_url,
                thumb_url=uploaded.get("thumb") or thumb_url,
                post_url=post_url,
            )
            task_id = result.record.get("taskId") if video is not None else None
            return await self._create_task(payload, task_id)

        outcome = await self._workflow.run(
            generate_upload_urls, [asset for _, asset in slots], create_task, hooks
        )
        return outcome.finalized

    async def _create_task(
        self, payload: Dict[str, Any], task_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        path = self._path("short-video", task_id) if task_id else self._path("short-video")
        return await self._http.post(path, {**payload, "createdFrom": CREATED_FROM})

    @staticmethod
    async def _load(file: FileInput, max_size: int, label: str) -> FileInput:
        data = await read_binary(file.source)
        validate_upload_size(len(data), max_size, label)
        return FileInput(data, filename=file.filename, content_type=file.content_type)
