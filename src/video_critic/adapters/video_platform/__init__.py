"""Video platform adapters."""

from video_critic.adapters.video_platform.base import VideoPlatformAdapter
from video_critic.adapters.video_platform.stub import StubVideoPlatformAdapter
from video_critic.adapters.video_platform.youtube import YouTubeDataAdapter

__all__ = [
    "StubVideoPlatformAdapter",
    "VideoPlatformAdapter",
    "YouTubeDataAdapter",
    "get_video_platform_adapter",
]


def get_video_platform_adapter() -> VideoPlatformAdapter:
    """Get the configured video platform adapter."""
    from video_critic.config import settings

    if settings.video_platform_provider.lower() == "stub":
        return StubVideoPlatformAdapter()
    return YouTubeDataAdapter()
