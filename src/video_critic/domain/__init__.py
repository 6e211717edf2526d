"""Domain models and business logic."""

from video_critic.domain.enums import (
    AnalysisStatus,
    PerformanceLabel,
    Severity,
    SourceType,
    TargetAudience,
)
from video_critic.domain.errors import (
    InvalidInput,
    InvalidReference,
    MalformedUpstreamResponse,
    MisconfiguredCredentials,
    PersistenceFailure,
    UpstreamUnavailable,
    VideoCriticError,
)
from video_critic.domain.models import (
    AudioAnalysis,
    BenchmarkInsights,
    BenchmarkVideo,
    CritiqueResult,
    DescriptionPreview,
    EditAnalysis,
    PacingAnalysis,
    RiskZone,
    VideoMetadata,
    VideoSource,
)

__all__ = [
    "AnalysisStatus",
    "AudioAnalysis",
    "BenchmarkInsights",
    "BenchmarkVideo",
    "CritiqueResult",
    "DescriptionPreview",
    "EditAnalysis",
    "InvalidInput",
    "InvalidReference",
    "MalformedUpstreamResponse",
    "MisconfiguredCredentials",
    "PacingAnalysis",
    "PerformanceLabel",
    "PersistenceFailure",
    "RiskZone",
    "Severity",
    "SourceType",
    "TargetAudience",
    "UpstreamUnavailable",
    "VideoCriticError",
    "VideoMetadata",
    "VideoSource",
]
