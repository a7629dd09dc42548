"""
Pure functions for validating publish inputs before any network call.
"""

import re
from pathlib import PurePosixPath
from typing import Optional

ALLOWED_VIDEO_EXTENSIONS = (".mp4", ".mov", ".avi", ".mkv", ".webm")

DEFAULT_MAX_VIDEO_BYTES = 1024 * 1024 * 1024
DEFAULT_MAX_IMAGE_BYTES = 8 * 1024 * 1024

HTTP_URL_PATTERN = re.compile(r"^https?://.+", re.IGNORECASE)
FACEBOOK_VIDEO_PATTERN = re.compile(
    r"^https?://(www\.)?(facebook\.com|fb\.watch)/(reel|watch|.*/videos)/.*",
    re.IGNORECASE,
)
TIKTOK_VIDEO_PATTERN = re.compile(
    r"^https?://(www\.)?(tiktok\.com|vm\.tiktok\.com)/@?.*/(video/\d+|.*)",
    re.IGNORECASE,
)
YOUTUBE_SHORTS_PATTERN = re.compile(
    r"^https?://(www\.)?(youtube\.com/shorts/|youtu\.be/)[A-Za-z0-9_-]+",
    re.IGNORECASE,
)


def validate_upload_size(size: int, max_size: int, label: str) -> None:
    if size == 0:
        raise ValueError(f"{label} file cannot be empty")
    if size > max_size:
        raise ValueError(
            f"{label} file size ({size} bytes) exceeds maximum allowed size "
            f"({max_size} bytes)"
        )


def validate_video_filename(filename: Optional[str]) -> None:
    """Check that a video file name carries a supported extension."""
    suffix = PurePosixPath(filename or "").suffix.lower()
    if suffix not in ALLOWED_VIDEO_EXTENSIONS:
        raise ValueError(
            "Invalid video file type. Allowed types: "
            + ", ".join(ALLOWED_VIDEO_EXTENSIONS)
        )


def validate_video_url(url: str) -> None:
    """Check a direct video URL: http(s) and a supported extension."""
    if not url or not HTTP_URL_PATTERN.match(url):
        raise ValueError("Invalid video URL format")
    lowered = url.lower()
    if not any(ext in lowered for ext in ALLOWED_VIDEO_EXTENSIONS):
        raise ValueError(
            "Invalid video URL. Must contain one of: "
            + ", ".join(ALLOWED_VIDEO_EXTENSIONS)
        )


def detect_repost_platform(url: str) -> Optional[str]:
    """Return "facebook", "tiktok" or "youtube" for a repostable post URL."""
    if FACEBOOK_VIDEO_PATTERN.match(url):
        return "facebook"
    if TIKTOK_VIDEO_PATTERN.match(url):
        return "tiktok"
    if YOUTUBE_SHORTS_PATTERN.match(url):
        return "youtube"
    return None
