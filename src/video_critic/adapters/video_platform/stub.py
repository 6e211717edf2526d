"""Stub video platform adapter for testing."""

from typing import Any

from video_critic.adapters.video_platform.base import VideoPlatformAdapter
from video_critic.logging import get_logger

logger = get_logger(__name__)


def make_video_item(
    video_id: str,
    title: str,
    views: int,
    likes: int,
    duration: str = "PT4M10S",
    channel: str = "Stub Channel",
    category_id: str = "22",
    description: str = "",
) -> dict[str, Any]:
    """Build a videos.list item in the YouTube Data API shape."""
    return {
        "id": video_id,
        "snippet": {
            "title": title,
            "description": description,
            "channelTitle": channel,
            "publishedAt": "2024-03-01T12:00:00Z",
            "categoryId": category_id,
            "tags": ["stub"],
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"},
            },
        },
        "contentDetails": {"duration": duration},
        "statistics": {"viewCount": str(views), "likeCount": str(likes)},
    }


def _default_catalog() -> dict[str, dict[str, Any]]:
    items = [
        make_video_item(
            "dQw4w9WgXcQ",
            "How I Edit Travel Videos Faster",
            views=120_000,
            likes=6_000,
            duration="PT8M32S",
            description="My full editing workflow for travel vlogs.",
        ),
        make_video_item("bench00001", "Editing Travel Videos Like a Pro", 250_000, 11_000),
        make_video_item("bench00002", "Travel Video Editing Secrets", 90_000, 3_600),
        make_video_item("bench00003", "Faster Editing Workflow Tips", 40_000, 2_400),
    ]
    return {item["id"]: item for item in items}


class StubVideoPlatformAdapter(VideoPlatformAdapter):
    """In-memory video platform.

    Args:
        catalog: Video items keyed by id (defaults to a small fixture set)
        search_results: Ids returned by every search; defaults to every
            catalog entry except the first
        error: Exception raised by every call
    """

    def __init__(
        self,
        catalog: dict[str, dict[str, Any]] | None = None,
        search_results: list[str | None] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else _default_catalog()
        if search_results is None:
            search_results = list(self.catalog)[1:]
        self.search_results = search_results
        self.error = error
        self.searches: list[dict[str, Any]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "stub"

    async def close(self) -> None:
        self.closed = True

    async def fetch_videos(self, video_ids: list[str]) -> list[dict[str, Any]]:
        if self.error is not None:
            raise self.error
        logger.debug("stub_platform_fetch", count=len(video_ids))
        return [self.catalog[vid] for vid in video_ids if vid in self.catalog]

    async def search_videos(
        self,
        query: str,
        category_id: str | None = None,
        max_results: int = 10,
    ) -> list[dict[str, Any]]:
        self.searches.append(
            {"query": query, "category_id": category_id, "max_results": max_results}
        )
        if self.error is not None:
            raise self.error
        return [
            {"id": {"videoId": vid} if vid else {}, "snippet": {}}
            for vid in self.search_results[:max_results]
        ]
