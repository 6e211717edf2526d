"""Tests for the command-line interface."""

from pathlib import Path
from uuid import uuid4

from typer.testing import CliRunner

from video_critic.cli import app

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "Video Critic v" in result.output


def test_audiences() -> None:
    result = runner.invoke(app, ["audiences"])

    assert result.exit_code == 0
    assert "Gen Z" in result.output
    assert "baby_boomers" in result.output


def test_analyze_inline() -> None:
    result = runner.invoke(
        app,
        ["analyze", "https://youtu.be/dQw4w9WgXcQ", "--audience", "gen_z", "--inline"],
    )

    assert result.exit_code == 0, result.output
    assert "Analysis started" in result.output
    assert "completed" in result.output


def test_analyze_rejects_bad_url() -> None:
    result = runner.invoke(app, ["analyze", "https://vimeo.com/1", "--audience", "gen_z", "--inline"])

    assert result.exit_code == 1
    assert "Invalid YouTube URL" in result.output


def test_upload_inline(tmp_path: Path) -> None:
    video = tmp_path / "rough cut.mp4"
    video.write_bytes(b"not really a video")

    result = runner.invoke(app, ["upload", str(video), "--audience", "gen_x", "--inline"])

    assert result.exit_code == 0, result.output
    assert "rough cut" in result.output


def test_status_unknown_submission() -> None:
    result = runner.invoke(app, ["status", str(uuid4())])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_status_invalid_id() -> None:
    result = runner.invoke(app, ["status", "nope"])

    assert result.exit_code == 1
