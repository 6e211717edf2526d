"""Tests for benchmark aggregation."""

import pytest

from video_critic.adapters.video_platform.stub import StubVideoPlatformAdapter, make_video_item
from video_critic.domain.enums import PerformanceLabel
from video_critic.domain.errors import MisconfiguredCredentials, UpstreamUnavailable
from video_critic.domain.models import BenchmarkVideo, VideoMetadata
from video_critic.services.benchmark import (
    BenchmarkAggregator,
    compute_insights,
    engagement_insight,
    extract_keywords,
    performance_label,
    views_insight,
)

TARGET = VideoMetadata(
    title="How I Edit Travel Videos Faster",
    views=120_000,
    likes=6_000,
    category="22",
)


class TestPerformanceLabel:
    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (151, PerformanceLabel.ABOVE_AVERAGE),
            (150, PerformanceLabel.AVERAGE),
            (100, PerformanceLabel.AVERAGE),
            (50, PerformanceLabel.AVERAGE),
            (49, PerformanceLabel.BELOW_AVERAGE),
            (0, PerformanceLabel.BELOW_AVERAGE),
        ],
    )
    def test_thresholds_are_strict(self, target: int, expected: PerformanceLabel) -> None:
        assert performance_label(target, 100) == expected


class TestInsightSentences:
    def test_outperforming(self) -> None:
        assert views_insight(150, 100) == (
            "Your video is outperforming similar content with 50.0% more views"
        )

    def test_room_for_growth(self) -> None:
        assert views_insight(100, 125) == (
            "Similar videos average 25.0% more views - there's room for growth"
        )

    def test_no_view_data(self) -> None:
        assert views_insight(0, 100) == "Not enough view data to compare performance"
        assert views_insight(100, 0) == "Not enough view data to compare performance"

    def test_engagement_higher(self) -> None:
        assert engagement_insight(0.06, 0.04) == (
            "Your engagement rate is 50.0% higher than similar videos"
        )

    def test_engagement_lower(self) -> None:
        assert engagement_insight(0.02, 0.04) == (
            "Engagement could be improved - similar videos have 100.0% better like ratios"
        )

    def test_no_engagement_data(self) -> None:
        assert engagement_insight(0, 0.04) == "Not enough engagement data to compare"


def test_extract_keywords_keeps_long_words() -> None:
    assert extract_keywords("How I Edit Travel Videos Faster") == "Edit Travel Videos Faster"
    assert extract_keywords("one two three four five six seven eight") == (
        "three four five seven eight"
    )


def test_benchmark_video_engagement() -> None:
    video = BenchmarkVideo(
        youtube_id="abc", title="t", channel_name="c", views=200, likes=10, duration=60
    )
    assert video.engagement == pytest.approx(0.05)

    empty = BenchmarkVideo(youtube_id="x", title="t", channel_name="c", views=0, likes=5, duration=0)
    assert empty.engagement == 0.0


def test_compute_insights_without_videos() -> None:
    insights = compute_insights(TARGET, [])

    assert insights.performance_vs_benchmark == PerformanceLabel.NO_DATA
    assert insights.avg_views == 0
    assert insights.avg_engagement == 0
    assert insights.insights == []
    assert not insights.has_data


@pytest.mark.asyncio
async def test_aggregate(video_platform: StubVideoPlatformAdapter) -> None:
    aggregator = BenchmarkAggregator(video_platform)

    report = await aggregator.aggregate(TARGET)

    assert [video.youtube_id for video in report.videos] == [
        "bench00001",
        "bench00002",
        "bench00003",
    ]
    insights = report.insights
    assert insights.sample_size == 3
    assert insights.avg_views == pytest.approx(380_000 / 3)
    assert insights.avg_engagement == pytest.approx(0.048)
    assert insights.performance_vs_benchmark == PerformanceLabel.AVERAGE
    assert insights.insights == [
        "Similar videos average 5.6% more views - there's room for growth",
        "Your engagement rate is 4.2% higher than similar videos",
    ]
    assert video_platform.searches == [
        {"query": "Edit Travel Videos Faster", "category_id": "22", "max_results": 10}
    ]


@pytest.mark.asyncio
async def test_aggregate_skips_results_without_ids() -> None:
    platform = StubVideoPlatformAdapter(search_results=[None, "bench00001", None])
    aggregator = BenchmarkAggregator(platform)

    report = await aggregator.aggregate(TARGET)

    assert [video.youtube_id for video in report.videos] == ["bench00001"]
    assert report.insights.sample_size == 1


@pytest.mark.asyncio
async def test_aggregate_skips_incomplete_items() -> None:
    partial = make_video_item("partial0001", "Partial", 10, 1)
    del partial["contentDetails"]
    catalog = {
        "target": make_video_item("target", "Target", 1, 1),
        "partial0001": partial,
        "bench00001": make_video_item("bench00001", "Complete", 1000, 50),
    }
    aggregator = BenchmarkAggregator(StubVideoPlatformAdapter(catalog=catalog))

    report = await aggregator.aggregate(TARGET)

    assert [video.youtube_id for video in report.videos] == ["bench00001"]


@pytest.mark.asyncio
async def test_aggregate_with_no_results() -> None:
    aggregator = BenchmarkAggregator(StubVideoPlatformAdapter(search_results=[]))

    report = await aggregator.aggregate(TARGET)

    assert report.videos == []
    assert report.insights.performance_vs_benchmark == PerformanceLabel.NO_DATA


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        UpstreamUnavailable("YouTube Data API error: 500"),
        MisconfiguredCredentials("YOUTUBE_API_KEY is not configured"),
        RuntimeError("connection reset"),
    ],
)
async def test_aggregate_degrades_on_errors(error: Exception) -> None:
    aggregator = BenchmarkAggregator(StubVideoPlatformAdapter(error=error))

    report = await aggregator.aggregate(TARGET)

    assert report.videos == []
    assert report.insights.sample_size == 0
    assert report.insights.performance_vs_benchmark == PerformanceLabel.NO_DATA
