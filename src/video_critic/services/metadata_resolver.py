"""Video metadata resolution for URL and upload sources."""

import re
from datetime import datetime
from typing import Any

from video_critic.adapters.video_platform.base import VideoPlatformAdapter
from video_critic.domain.enums import SourceType
from video_critic.domain.errors import InvalidInput, InvalidReference, UpstreamUnavailable
from video_critic.domain.models import VideoMetadata, VideoSource
from video_critic.logging import get_logger

logger = get_logger(__name__)

# watch / short, embed, legacy /v/
VIDEO_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/embed/([^&\n?#]+)"),
    re.compile(r"youtube\.com/v/([^&\n?#]+)"),
)

ISO_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

REQUIRED_PARTS = ("snippet", "contentDetails", "statistics")


def extract_video_id(url: str) -> str | None:
    """Extract the platform video id from a YouTube URL, or None."""
    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match and match.group(1):
            return match.group(1)
    return None


def parse_iso_duration(duration: str | None) -> int:
    """Decode a ``PT#H#M#S`` token into seconds (0 when unrecognized)."""
    if not duration:
        return 0
    match = ISO_DURATION_PATTERN.search(duration)
    if not match:
        return 0
    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def parse_published_at(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def has_required_parts(item: dict[str, Any]) -> bool:
    """Whether a videos.list item carries snippet, contentDetails and statistics."""
    return all(item.get(part) for part in REQUIRED_PARTS)


def _count(statistics: dict[str, Any], key: str) -> int:
    try:
        return int(statistics.get(key) or 0)
    except (TypeError, ValueError):
        return 0


def metadata_from_item(item: dict[str, Any]) -> VideoMetadata:
    """Normalize a complete videos.list item into VideoMetadata."""
    snippet = item["snippet"]
    statistics = item["statistics"]
    thumbnails = snippet.get("thumbnails") or {}
    thumbnail = (thumbnails.get("high") or {}).get("url") or (
        thumbnails.get("default") or {}
    ).get("url")

    return VideoMetadata(
        video_id=item.get("id") or None,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        duration=parse_iso_duration(item["contentDetails"].get("duration")),
        thumbnail_url=thumbnail or "",
        channel_name=snippet.get("channelTitle") or "",
        views=_count(statistics, "viewCount"),
        likes=_count(statistics, "likeCount"),
        published_at=parse_published_at(snippet.get("publishedAt")),
        category=snippet.get("categoryId") or "",
        tags=list(snippet.get("tags") or []),
    )


def title_from_filename(file_name: str) -> str:
    """Strip the final extension from an uploaded file name."""
    return re.sub(r"\.[^/.]+$", "", file_name)


class MetadataResolver:
    """Produces normalized metadata for a submitted video source."""

    def __init__(self, platform: VideoPlatformAdapter | None = None) -> None:
        self._platform = platform

    @property
    def platform(self) -> VideoPlatformAdapter:
        if self._platform is None:
            from video_critic.adapters.video_platform import get_video_platform_adapter

            self._platform = get_video_platform_adapter()
        return self._platform

    async def close(self) -> None:
        if self._platform is not None:
            await self._platform.close()

    async def resolve(self, source: VideoSource) -> VideoMetadata:
        """Resolve a source into metadata.

        Raises:
            InvalidReference: URL does not match a known shape or the video does not exist
            UpstreamUnavailable: Platform error or incomplete payload
            MisconfiguredCredentials: Platform API key missing
        """
        if source.kind == SourceType.UPLOAD:
            if not source.file_name:
                raise InvalidInput("Video file is required")
            return self.resolve_upload(source.file_name)
        if not source.url:
            raise InvalidInput("YouTube URL is required")
        return await self.resolve_url(source.url)

    async def resolve_url(self, url: str) -> VideoMetadata:
        video_id = extract_video_id(url)
        if not video_id:
            raise InvalidReference("Invalid YouTube URL")

        items = await self.platform.fetch_videos([video_id])
        if not items:
            raise InvalidReference("Video not found")

        item = items[0]
        if not has_required_parts(item):
            logger.warning("video_metadata_incomplete", video_id=video_id)
            raise UpstreamUnavailable("Incomplete video data returned from YouTube API")

        metadata = metadata_from_item(item)
        metadata.video_id = metadata.video_id or video_id
        logger.info(
            "video_metadata_resolved",
            video_id=video_id,
            duration=metadata.duration,
            views=metadata.views,
        )
        return metadata

    def resolve_upload(self, file_name: str) -> VideoMetadata:
        return VideoMetadata(title=title_from_filename(file_name))
