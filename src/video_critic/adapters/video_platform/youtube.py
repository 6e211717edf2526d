"""YouTube Data API v3 adapter."""

from typing import Any

import httpx

from video_critic.adapters.video_platform.base import VideoPlatformAdapter
from video_critic.config import settings
from video_critic.domain.errors import MisconfiguredCredentials, UpstreamUnavailable
from video_critic.logging import get_logger

logger = get_logger(__name__)

VIDEO_PARTS = "snippet,contentDetails,statistics"


class YouTubeDataAdapter(VideoPlatformAdapter):
    """Reads public video data with an API key.

    Uses:
    - videos.list for metadata, duration and statistics
    - search.list for finding comparable videos
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            api_key: YouTube Data API key (uses YOUTUBE_API_KEY if not provided)
            base_url: API base URL override
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.api_key = api_key or settings.youtube_api_key
        self.base_url = (base_url or settings.youtube_api_base_url).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        if not self.api_key:
            logger.warning("YouTube API key not configured")

    @property
    def name(self) -> str:
        return "youtube"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=30, transport=self._transport)
        return self._client

    async def close(self) -> None:
        """Close the cached HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, resource: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise MisconfiguredCredentials("YOUTUBE_API_KEY is not configured")

        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/{resource}",
                params={**params, "key": self.api_key},
            )
        except httpx.HTTPError as e:
            logger.error("youtube_request_failed", resource=resource, error=str(e))
            raise UpstreamUnavailable(f"YouTube API request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "youtube_data_api_error",
                resource=resource,
                status=response.status_code,
                body=response.text[:500],
            )
            raise UpstreamUnavailable(f"YouTube Data API error: {response.status_code}")

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            logger.error("youtube_invalid_json", resource=resource, body=response.text[:500])
            raise UpstreamUnavailable("YouTube Data API returned an invalid response") from e
        return data

    async def fetch_videos(self, video_ids: list[str]) -> list[dict[str, Any]]:
        if not video_ids:
            return []

        data = await self._get(
            "videos",
            {"part": VIDEO_PARTS, "id": ",".join(video_ids)},
        )
        items: list[dict[str, Any]] = data.get("items") or []
        logger.debug("youtube_videos_fetched", requested=len(video_ids), returned=len(items))
        return items

    async def search_videos(
        self,
        query: str,
        category_id: str | None = None,
        max_results: int = 10,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": max_results,
            "order": "viewCount",
        }
        if category_id:
            params["videoCategoryId"] = category_id

        data = await self._get("search", params)
        items: list[dict[str, Any]] = data.get("items") or []
        logger.debug("youtube_search_completed", query=query, results=len(items))
        return items

    async def health_check(self) -> bool:
        return bool(self.api_key)
