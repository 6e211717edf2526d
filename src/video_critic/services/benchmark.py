"""Benchmarking against comparable public videos.

Benchmarking is best-effort: every failure degrades to an empty report so
a critique can still be produced.
"""

from dataclasses import dataclass, field

from video_critic.adapters.video_platform.base import VideoPlatformAdapter
from video_critic.config import settings
from video_critic.domain.enums import PerformanceLabel
from video_critic.domain.models import (
    BenchmarkInsights,
    BenchmarkVideo,
    VideoMetadata,
    engagement_ratio,
)
from video_critic.logging import get_logger
from video_critic.services.metadata_resolver import has_required_parts, metadata_from_item

logger = get_logger(__name__)

ABOVE_AVERAGE_FACTOR = 1.5
BELOW_AVERAGE_FACTOR = 0.5


@dataclass
class BenchmarkReport:
    """Insights plus the comparable videos they were computed from."""

    insights: BenchmarkInsights = field(default_factory=BenchmarkInsights.empty)
    videos: list[BenchmarkVideo] = field(default_factory=list)


def extract_keywords(title: str, max_words: int = 5) -> str:
    """Build a search query from the longer words of a title."""
    words = [word for word in title.split() if len(word) > 3]
    return " ".join(words[:max_words])


def performance_label(target_views: float, avg_views: float) -> PerformanceLabel:
    if target_views > avg_views * ABOVE_AVERAGE_FACTOR:
        return PerformanceLabel.ABOVE_AVERAGE
    if target_views < avg_views * BELOW_AVERAGE_FACTOR:
        return PerformanceLabel.BELOW_AVERAGE
    return PerformanceLabel.AVERAGE


def _percent(ratio: float) -> str:
    return f"{(ratio - 1) * 100:.1f}"


def views_insight(target_views: float, avg_views: float) -> str:
    if target_views > avg_views and avg_views > 0:
        return (
            "Your video is outperforming similar content with "
            f"{_percent(target_views / avg_views)}% more views"
        )
    if target_views > 0 and avg_views > 0:
        return (
            f"Similar videos average {_percent(avg_views / target_views)}% more views"
            " - there's room for growth"
        )
    return "Not enough view data to compare performance"


def engagement_insight(target_engagement: float, avg_engagement: float) -> str:
    if target_engagement > avg_engagement and avg_engagement > 0:
        return (
            f"Your engagement rate is {_percent(target_engagement / avg_engagement)}% "
            "higher than similar videos"
        )
    if target_engagement > 0 and avg_engagement > 0:
        return (
            "Engagement could be improved - similar videos have "
            f"{_percent(avg_engagement / target_engagement)}% better like ratios"
        )
    return "Not enough engagement data to compare"


def compute_insights(target: VideoMetadata, videos: list[BenchmarkVideo]) -> BenchmarkInsights:
    """Compare a video against its benchmark set."""
    if not videos:
        return BenchmarkInsights.empty()

    avg_views = sum(video.views for video in videos) / len(videos)
    avg_engagement = sum(video.engagement for video in videos) / len(videos)
    target_engagement = engagement_ratio(target.views, target.likes)

    return BenchmarkInsights(
        avg_views=avg_views,
        avg_engagement=avg_engagement,
        performance_vs_benchmark=performance_label(target.views, avg_views),
        insights=[
            views_insight(target.views, avg_views),
            engagement_insight(target_engagement, avg_engagement),
        ],
        sample_size=len(videos),
    )


class BenchmarkAggregator:
    """Finds comparable videos and summarizes how a video stacks up."""

    def __init__(self, platform: VideoPlatformAdapter | None = None) -> None:
        self._platform = platform

    @property
    def platform(self) -> VideoPlatformAdapter:
        if self._platform is None:
            from video_critic.adapters.video_platform import get_video_platform_adapter

            self._platform = get_video_platform_adapter()
        return self._platform

    async def close(self) -> None:
        if self._platform is not None:
            await self._platform.close()

    async def search_similar(
        self,
        title: str,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[BenchmarkVideo]:
        """Search and fetch comparable videos. Returns [] on any upstream error."""
        limit = limit or settings.benchmark_limit
        query = extract_keywords(title)

        try:
            results = await self.platform.search_videos(
                query, category_id=category or None, max_results=limit
            )
            video_ids = [
                video_id
                for video_id in ((item.get("id") or {}).get("videoId") for item in results)
                if video_id
            ]
            if not video_ids:
                return []

            items = await self.platform.fetch_videos(video_ids)
        except Exception as e:
            logger.warning("benchmark_search_failed", query=query, error=str(e))
            return []

        videos: list[BenchmarkVideo] = []
        for item in items:
            if not has_required_parts(item) or not item.get("id"):
                continue
            metadata = metadata_from_item(item)
            videos.append(
                BenchmarkVideo(
                    youtube_id=item["id"],
                    title=metadata.title,
                    channel_name=metadata.channel_name,
                    views=metadata.views,
                    likes=metadata.likes,
                    duration=metadata.duration or 0,
                    published_at=metadata.published_at,
                )
            )

        logger.info(
            "benchmark_search_completed",
            query=query,
            candidates=len(video_ids),
            usable=len(videos),
        )
        return videos

    async def aggregate(self, target: VideoMetadata, limit: int | None = None) -> BenchmarkReport:
        """Benchmark a video. Never raises."""
        try:
            videos = await self.search_similar(target.title, target.category, limit)
            return BenchmarkReport(insights=compute_insights(target, videos), videos=videos)
        except Exception as e:
            logger.warning("benchmark_aggregate_failed", error=str(e))
            return BenchmarkReport()
