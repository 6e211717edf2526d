"""Tests for domain models."""

from datetime import UTC, datetime

import pytest

from video_critic.domain.enums import AnalysisStatus, PerformanceLabel, Severity
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
    BenchmarkInsights,
    CritiqueResult,
    RiskZone,
    VideoMetadata,
    engagement_ratio,
)


def test_terminal_statuses() -> None:
    """Completed and failed are final."""
    assert AnalysisStatus.COMPLETED.is_terminal
    assert AnalysisStatus.FAILED.is_terminal
    assert not AnalysisStatus.PROCESSING.is_terminal
    assert not AnalysisStatus.PENDING.is_terminal


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("high", Severity.HIGH),
        (" LOW ", Severity.LOW),
        ("Medium", Severity.MEDIUM),
        ("catastrophic", Severity.MEDIUM),
        (None, Severity.MEDIUM),
        (3, Severity.MEDIUM),
    ],
)
def test_severity_coerce(value: object, expected: Severity) -> None:
    assert Severity.coerce(value) == expected


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (InvalidInput("x"), 400),
        (InvalidReference("x"), 400),
        (MisconfiguredCredentials("x"), 400),
        (UpstreamUnavailable("x"), 400),
        (MalformedUpstreamResponse("x"), 502),
        (PersistenceFailure("x"), 500),
    ],
)
def test_error_http_status(error: VideoCriticError, status: int) -> None:
    assert isinstance(error, VideoCriticError)
    assert error.http_status == status
    assert error.message == "x"


def test_engagement_ratio() -> None:
    assert engagement_ratio(1_000, 50) == pytest.approx(0.05)
    assert engagement_ratio(0, 50) == 0.0


def test_risk_zone_from_dict_defaults() -> None:
    zone = RiskZone.from_dict({"timestamp": "12.5", "issue": "Slow"})

    assert zone.timestamp == 12.5
    assert zone.end_timestamp == 12.5
    assert zone.severity == Severity.MEDIUM
    assert zone.suggestion == ""


def test_negative_timestamps_clamp_to_zero() -> None:
    zone = RiskZone.from_dict({"timestamp": -4, "endTimestamp": 6, "severity": "low"})

    assert zone.timestamp == 0
    assert zone.end_timestamp == 6


def test_benchmark_insights_defaults() -> None:
    insights = BenchmarkInsights.from_dict({})

    assert insights.performance_vs_benchmark == PerformanceLabel.NO_DATA
    assert insights.insights == []
    assert not insights.has_data


def test_metadata_keeps_published_at() -> None:
    published = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    metadata = VideoMetadata(title="Clip", views=10, likes=1, published_at=published)

    restored = VideoMetadata.from_dict(metadata.to_dict())

    assert restored.published_at == published
    assert restored.views == 10


def test_critique_result_camel_case_projection() -> None:
    result = CritiqueResult.from_dict(
        {
            "overallScore": 81,
            "editQualityScore": 77,
            "pacingScore": 90,
            "retentionScore": 84,
            "overallFeedback": "Tight edit.",
            "strengths": ["Hook", None, "Captions"],
        }
    )

    data = result.to_dict()

    assert data["overallScore"] == 81
    assert data["strengths"] == ["Hook", "Captions"]
    assert data["editAnalysis"] == {"transitions": "", "cutQuality": "", "visualEffects": ""}
    assert data["riskZones"] == []
    assert data["benchmarkData"] is None
