"""Tests for video metadata resolution."""

import pytest

from video_critic.adapters.video_platform.stub import StubVideoPlatformAdapter, make_video_item
from video_critic.domain.enums import SourceType
from video_critic.domain.errors import InvalidInput, InvalidReference, UpstreamUnavailable
from video_critic.domain.models import VideoSource
from video_critic.services.metadata_resolver import (
    MetadataResolver,
    extract_video_id,
    parse_iso_duration,
    title_from_filename,
)


class TestExtractVideoId:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ?si=abc123",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/v/dQw4w9WgXcQ#t=5",
        ],
    )
    def test_known_shapes(self, url: str) -> None:
        assert extract_video_id(url) == "dQw4w9WgXcQ"

    @pytest.mark.parametrize(
        "url",
        [
            "https://vimeo.com/123456",
            "https://www.youtube.com/channel/UC123",
            "not a url",
            "https://youtu.be/",
        ],
    )
    def test_unknown_shapes(self, url: str) -> None:
        assert extract_video_id(url) is None


class TestParseIsoDuration:
    @pytest.mark.parametrize(
        ("token", "seconds"),
        [
            ("PT1H2M3S", 3723),
            ("PT8M32S", 512),
            ("PT5M", 300),
            ("PT45S", 45),
            ("PT2H", 7200),
            ("PT", 0),
            ("P1D", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_tokens(self, token: str | None, seconds: int) -> None:
        assert parse_iso_duration(token) == seconds


def test_title_from_filename() -> None:
    assert title_from_filename("travel vlog.mp4") == "travel vlog"
    assert title_from_filename("cut.v2.final.mov") == "cut.v2.final"
    assert title_from_filename("no_extension") == "no_extension"


@pytest.mark.asyncio
async def test_resolve_url(video_platform) -> None:
    resolver = MetadataResolver(video_platform)

    metadata = await resolver.resolve_url("https://youtu.be/dQw4w9WgXcQ")

    assert metadata.video_id == "dQw4w9WgXcQ"
    assert metadata.title == "How I Edit Travel Videos Faster"
    assert metadata.duration == 512
    assert metadata.views == 120_000
    assert metadata.likes == 6_000
    assert metadata.category == "22"
    assert metadata.thumbnail_url.endswith("hqdefault.jpg")
    assert metadata.published_at is not None


@pytest.mark.asyncio
async def test_resolve_url_rejects_unknown_shape(video_platform) -> None:
    resolver = MetadataResolver(video_platform)

    with pytest.raises(InvalidReference, match="Invalid YouTube URL"):
        await resolver.resolve_url("https://vimeo.com/123456")


@pytest.mark.asyncio
async def test_resolve_url_video_not_found(video_platform) -> None:
    resolver = MetadataResolver(video_platform)

    with pytest.raises(InvalidReference, match="Video not found"):
        await resolver.resolve_url("https://www.youtube.com/watch?v=missing0000")


@pytest.mark.asyncio
async def test_resolve_url_incomplete_item() -> None:
    item = make_video_item("partial0001", "Partial", 10, 1)
    del item["statistics"]
    resolver = MetadataResolver(StubVideoPlatformAdapter(catalog={"partial0001": item}))

    with pytest.raises(UpstreamUnavailable):
        await resolver.resolve_url("https://youtu.be/partial0001")


@pytest.mark.asyncio
async def test_resolve_url_platform_error_propagates() -> None:
    resolver = MetadataResolver(
        StubVideoPlatformAdapter(error=UpstreamUnavailable("YouTube Data API error: 403"))
    )

    with pytest.raises(UpstreamUnavailable, match="403"):
        await resolver.resolve_url("https://youtu.be/dQw4w9WgXcQ")


@pytest.mark.asyncio
async def test_resolve_upload_source(video_platform) -> None:
    resolver = MetadataResolver(video_platform)

    metadata = await resolver.resolve(
        VideoSource(kind=SourceType.UPLOAD, file_name="my edit.mp4")
    )

    assert metadata.title == "my edit"
    assert metadata.duration is None


@pytest.mark.asyncio
async def test_resolve_url_source_requires_url(video_platform) -> None:
    resolver = MetadataResolver(video_platform)

    with pytest.raises(InvalidInput):
        await resolver.resolve(VideoSource(kind=SourceType.YOUTUBE))
