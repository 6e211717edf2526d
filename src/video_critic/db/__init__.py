"""Database layer."""

from video_critic.db.models import (
    Base,
    BenchmarkVideoModel,
    CritiqueResultModel,
    SubmissionModel,
)
from video_critic.db.session import get_session, get_session_context, init_db

__all__ = [
    "Base",
    "get_session",
    "get_session_context",
    "init_db",
    # Models
    "BenchmarkVideoModel",
    "CritiqueResultModel",
    "SubmissionModel",
]
