"""Domain models (pure Python, no ORM dependencies).

The nested critique structures are stored as JSON and exchanged with the
model in camelCase. ``from_dict`` / ``to_dict`` are the only place that
shape is spelled out; everything else works with these records.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from video_critic.domain.enums import PerformanceLabel, Severity, SourceType


def engagement_ratio(views: int, likes: int) -> float:
    """Likes per view, 0 when there are no views."""
    if views <= 0:
        return 0.0
    return likes / views


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _score(value: Any) -> int:
    """Coerce a model-provided score into an integer in [0, 100]."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number):
        return 0
    return max(0, min(100, int(round(number))))


def _seconds(value: Any) -> float:
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        return 0.0


@dataclass
class VideoSource:
    """A submitted video reference: a URL or an uploaded file."""

    kind: SourceType
    url: str | None = None
    file_name: str | None = None


@dataclass
class VideoMetadata:
    """Normalized metadata for the video under analysis."""

    title: str
    description: str | None = None
    duration: int | None = None
    thumbnail_url: str | None = None
    video_id: str | None = None
    channel_name: str = ""
    views: int = 0
    likes: int = 0
    published_at: datetime | None = None
    category: str = ""
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "thumbnailUrl": self.thumbnail_url,
            "channelName": self.channel_name,
            "views": self.views,
            "likes": self.likes,
            "publishedAt": self.published_at.isoformat() if self.published_at else None,
            "category": self.category,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoMetadata":
        published_at = data.get("publishedAt")
        return cls(
            video_id=data.get("videoId"),
            title=_text(data.get("title")),
            description=data.get("description"),
            duration=data.get("duration"),
            thumbnail_url=data.get("thumbnailUrl"),
            channel_name=_text(data.get("channelName")),
            views=int(data.get("views") or 0),
            likes=int(data.get("likes") or 0),
            published_at=datetime.fromisoformat(published_at) if published_at else None,
            category=_text(data.get("category")),
            tags=_text_list(data.get("tags")),
        )


@dataclass
class BenchmarkVideo:
    """A comparable public video used for relative statistics."""

    youtube_id: str
    title: str
    channel_name: str
    views: int
    likes: int
    duration: int
    published_at: datetime | None = None
    engagement: float = field(init=False)

    def __post_init__(self) -> None:
        self.engagement = engagement_ratio(self.views, self.likes)


@dataclass
class BenchmarkInsights:
    """Aggregate engagement figures over a benchmark set."""

    avg_views: float = 0.0
    avg_engagement: float = 0.0
    performance_vs_benchmark: str = PerformanceLabel.NO_DATA
    insights: list[str] = field(default_factory=list)
    sample_size: int = 0

    @classmethod
    def empty(cls) -> "BenchmarkInsights":
        return cls()

    @property
    def has_data(self) -> bool:
        return self.sample_size > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgViews": self.avg_views,
            "avgEngagement": self.avg_engagement,
            "performanceVsBenchmark": str(self.performance_vs_benchmark),
            "insights": list(self.insights),
            "sampleSize": self.sample_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BenchmarkInsights":
        return cls(
            avg_views=float(data.get("avgViews") or 0),
            avg_engagement=float(data.get("avgEngagement") or 0),
            performance_vs_benchmark=_text(
                data.get("performanceVsBenchmark") or PerformanceLabel.NO_DATA
            ),
            insights=_text_list(data.get("insights")),
            sample_size=int(data.get("sampleSize") or 0),
        )


@dataclass
class RiskZone:
    """A time interval flagged as a viewer drop-off risk."""

    timestamp: float
    end_timestamp: float
    severity: Severity
    issue: str
    suggestion: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "endTimestamp": self.end_timestamp,
            "severity": str(self.severity),
            "issue": self.issue,
            "suggestion": self.suggestion,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RiskZone":
        start = _seconds(data.get("timestamp"))
        end = _seconds(data.get("endTimestamp", start))
        if end < start:
            start, end = end, start
        return cls(
            timestamp=start,
            end_timestamp=end,
            severity=Severity.coerce(data.get("severity")),
            issue=_text(data.get("issue")),
            suggestion=_text(data.get("suggestion")),
        )


@dataclass
class EditAnalysis:
    transitions: str = ""
    cut_quality: str = ""
    visual_effects: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "transitions": self.transitions,
            "cutQuality": self.cut_quality,
            "visualEffects": self.visual_effects,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "EditAnalysis":
        if not isinstance(data, dict):
            return cls()
        return cls(
            transitions=_text(data.get("transitions")),
            cut_quality=_text(data.get("cutQuality")),
            visual_effects=_text(data.get("visualEffects")),
        )


@dataclass
class PacingAnalysis:
    rhythm: str = ""
    engagement: str = ""
    momentum: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "rhythm": self.rhythm,
            "engagement": self.engagement,
            "momentum": self.momentum,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "PacingAnalysis":
        if not isinstance(data, dict):
            return cls()
        return cls(
            rhythm=_text(data.get("rhythm")),
            engagement=_text(data.get("engagement")),
            momentum=_text(data.get("momentum")),
        )


@dataclass
class AudioAnalysis:
    music_choice: str = ""
    sound_design: str = ""
    audience_alignment: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "musicChoice": self.music_choice,
            "soundDesign": self.sound_design,
            "audienceAlignment": self.audience_alignment,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "AudioAnalysis":
        if not isinstance(data, dict):
            return cls()
        return cls(
            music_choice=_text(data.get("musicChoice")),
            sound_design=_text(data.get("soundDesign")),
            audience_alignment=_text(data.get("audienceAlignment")),
        )


@dataclass
class CritiqueResult:
    """Structured output of a critique for one submission."""

    overall_score: int
    edit_quality_score: int
    pacing_score: int
    retention_score: int
    overall_feedback: str
    strengths: list[str]
    weaknesses: list[str] = field(default_factory=list)
    edit_analysis: EditAnalysis = field(default_factory=EditAnalysis)
    pacing_analysis: PacingAnalysis = field(default_factory=PacingAnalysis)
    audio_analysis: AudioAnalysis = field(default_factory=AudioAnalysis)
    risk_zones: list[RiskZone] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    benchmark: BenchmarkInsights | None = None
    raw_response: dict[str, Any] | None = None
    model_used: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CritiqueResult":
        """Build a result from the camelCase payload returned by the model."""
        zones = data.get("riskZones")
        benchmark = data.get("benchmarkData")
        return cls(
            overall_score=_score(data.get("overallScore")),
            edit_quality_score=_score(data.get("editQualityScore")),
            pacing_score=_score(data.get("pacingScore")),
            retention_score=_score(data.get("retentionScore")),
            overall_feedback=_text(data.get("overallFeedback")),
            strengths=_text_list(data.get("strengths")),
            weaknesses=_text_list(data.get("weaknesses")),
            edit_analysis=EditAnalysis.from_dict(data.get("editAnalysis")),
            pacing_analysis=PacingAnalysis.from_dict(data.get("pacingAnalysis")),
            audio_analysis=AudioAnalysis.from_dict(data.get("audioAnalysis")),
            risk_zones=[
                RiskZone.from_dict(zone)
                for zone in (zones if isinstance(zones, list) else [])
                if isinstance(zone, dict)
            ],
            recommendations=_text_list(data.get("recommendations")),
            benchmark=(
                BenchmarkInsights.from_dict(benchmark) if isinstance(benchmark, dict) else None
            ),
            raw_response=data,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "editQualityScore": self.edit_quality_score,
            "pacingScore": self.pacing_score,
            "retentionScore": self.retention_score,
            "overallFeedback": self.overall_feedback,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "editAnalysis": self.edit_analysis.to_dict(),
            "pacingAnalysis": self.pacing_analysis.to_dict(),
            "audioAnalysis": self.audio_analysis.to_dict(),
            "riskZones": [zone.to_dict() for zone in self.risk_zones],
            "recommendations": list(self.recommendations),
            "benchmarkData": self.benchmark.to_dict() if self.benchmark else None,
        }


@dataclass
class DescriptionPreview:
    """Quick insights derived from a video description alone."""

    initial_insights: str = ""
    potential_strengths: list[str] = field(default_factory=list)
    potential_concerns: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.initial_insights or self.potential_strengths or self.potential_concerns
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DescriptionPreview":
        return cls(
            initial_insights=_text(data.get("initialInsights")),
            potential_strengths=_text_list(data.get("potentialStrengths")),
            potential_concerns=_text_list(data.get("potentialConcerns")),
        )
