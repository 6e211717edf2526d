"""API route modules."""

from video_critic.api.routes import analyses, health

__all__ = ["analyses", "health"]
