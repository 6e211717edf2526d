"""Shared utilities."""

from video_critic.utils.async_utils import run_async

__all__ = ["run_async"]
