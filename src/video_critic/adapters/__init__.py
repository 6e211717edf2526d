"""Adapters for external services."""

from video_critic.adapters.llm.base import LLMProvider
from video_critic.adapters.video_platform.base import VideoPlatformAdapter

__all__ = [
    "LLMProvider",
    "VideoPlatformAdapter",
]
