"""Application services."""

from video_critic.services.benchmark import BenchmarkAggregator, BenchmarkReport
from video_critic.services.critique import AUDIENCE_PROFILES, AudienceProfile, CritiqueGenerator
from video_critic.services.metadata_resolver import MetadataResolver
from video_critic.services.orchestrator import AnalysisOrchestrator
from video_critic.services.uploads import StoredUpload, UploadStorage

__all__ = [
    "AUDIENCE_PROFILES",
    "AnalysisOrchestrator",
    "AudienceProfile",
    "BenchmarkAggregator",
    "BenchmarkReport",
    "CritiqueGenerator",
    "MetadataResolver",
    "StoredUpload",
    "UploadStorage",
]
