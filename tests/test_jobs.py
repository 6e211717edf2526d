"""Tests for the background analysis task."""

from video_critic.db.session import get_session_context
from video_critic.domain.enums import AnalysisStatus, SourceType
from video_critic.domain.models import VideoMetadata
from video_critic.jobs import analysis as analysis_job
from video_critic.jobs.analysis import run_analysis_task
from video_critic.services import store
from video_critic.services.orchestrator import AnalysisOrchestrator
from video_critic.worker import celery_app


def test_task_is_routed_to_analysis_queue() -> None:
    assert run_analysis_task.name == "analysis.run_pipeline"
    assert celery_app.conf.task_routes["analysis.run_pipeline"] == {"queue": "analysis"}
    assert celery_app.conf.task_time_limit == 300


def test_task_runs_pipeline() -> None:
    """Calling the task directly runs it in-process against the configured stubs."""
    with get_session_context() as session:
        submission_id = store.create_submission(
            session,
            source_type=SourceType.YOUTUBE,
            target_audience="gen_z",
            metadata=VideoMetadata(
                title="How I Edit Travel Videos Faster",
                duration=512,
                views=120_000,
                likes=6_000,
                category="22",
            ),
            youtube_url="https://youtu.be/dQw4w9WgXcQ",
        ).id

    result = run_analysis_task(str(submission_id))

    assert result == {"submission_id": str(submission_id), "status": "completed"}
    with get_session_context() as session:
        submission = store.get_submission(session, submission_id)
        assert submission.status == AnalysisStatus.COMPLETED
        assert submission.critique is not None


def test_task_unknown_submission() -> None:
    result = run_analysis_task("00000000-0000-0000-0000-000000000000")

    assert result["status"] is None


def test_task_closes_orchestrator(monkeypatch) -> None:
    closed: list[bool] = []

    class TrackingOrchestrator(AnalysisOrchestrator):
        async def close(self) -> None:
            closed.append(True)
            await super().close()

    monkeypatch.setattr(analysis_job, "AnalysisOrchestrator", TrackingOrchestrator)

    run_analysis_task("00000000-0000-0000-0000-000000000000")

    assert closed == [True]
