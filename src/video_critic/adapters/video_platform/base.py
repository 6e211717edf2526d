"""Base interface for video platform adapters.

Adapters return raw items in the YouTube Data API v3 shape
(``id``, ``snippet``, ``contentDetails``, ``statistics``); normalization
into domain records happens in the services.
"""

from abc import ABC, abstractmethod
from typing import Any


class VideoPlatformAdapter(ABC):
    """Abstract base class for video platform adapters.

    Implementations:
    - YouTubeDataAdapter: YouTube Data API v3 over HTTP
    - StubVideoPlatformAdapter: In-memory catalog for testing
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Adapter name identifier."""
        ...

    @abstractmethod
    async def fetch_videos(self, video_ids: list[str]) -> list[dict[str, Any]]:
        """Fetch full video items (snippet, contentDetails, statistics) by id.

        Args:
            video_ids: Platform video ids

        Returns:
            Raw video items; unknown ids are simply absent

        Raises:
            MisconfiguredCredentials: If the API key is missing
            UpstreamUnavailable: If the platform request fails
        """
        ...

    @abstractmethod
    async def search_videos(
        self,
        query: str,
        category_id: str | None = None,
        max_results: int = 10,
    ) -> list[dict[str, Any]]:
        """Search public videos ordered by view count.

        Args:
            query: Free-text search query
            category_id: Optional platform category filter
            max_results: Maximum number of results

        Returns:
            Raw search result items (``{"id": {"videoId": ...}, "snippet": ...}``)
        """
        ...

    async def health_check(self) -> bool:
        """Check if the platform API is available."""
        return True

    async def close(self) -> None:
        """Release any connections held by the adapter."""
        return None
