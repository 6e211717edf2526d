"""Result store: submission, critique and benchmark persistence.

JSON columns are decoded into domain records here and nowhere else.
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from video_critic.db.models import BenchmarkVideoModel, CritiqueResultModel, SubmissionModel
from video_critic.domain.enums import AnalysisStatus
from video_critic.domain.errors import PersistenceFailure
from video_critic.domain.models import (
    AudioAnalysis,
    BenchmarkInsights,
    BenchmarkVideo,
    CritiqueResult,
    EditAnalysis,
    PacingAnalysis,
    RiskZone,
    VideoMetadata,
)
from video_critic.logging import get_logger

logger = get_logger(__name__)


def create_submission(
    session: Session,
    *,
    source_type: str,
    target_audience: str,
    metadata: VideoMetadata,
    youtube_url: str | None = None,
    file_name: str | None = None,
    file_path: str | None = None,
) -> SubmissionModel:
    """Insert a submission already in ``processing`` and commit it.

    Raises:
        PersistenceFailure: If the insert fails
    """
    submission = SubmissionModel(
        source_type=source_type,
        target_audience=target_audience,
        youtube_url=youtube_url,
        file_name=file_name,
        file_path=file_path,
        title=metadata.title,
        duration=metadata.duration,
        thumbnail_url=metadata.thumbnail_url or None,
        status=AnalysisStatus.PROCESSING,
        source_metadata=metadata.to_dict(),
    )
    try:
        session.add(submission)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("submission_create_failed", error=str(e))
        raise PersistenceFailure(
            "Failed to save video data to database. Please check your database connection."
        ) from e

    logger.info(
        "submission_created",
        submission_id=str(submission.id),
        source_type=source_type,
        target_audience=target_audience,
    )
    return submission


def get_submission(session: Session, submission_id: UUID) -> SubmissionModel | None:
    return session.get(SubmissionModel, submission_id)


def set_task_id(session: Session, submission_id: UUID, task_id: str | None) -> None:
    submission = session.get(SubmissionModel, submission_id)
    if submission is not None:
        submission.celery_task_id = task_id
        session.commit()


def save_critique(
    session: Session,
    submission_id: UUID,
    result: CritiqueResult,
) -> CritiqueResultModel:
    """Stage a critique row (caller commits together with the status change)."""
    model = CritiqueResultModel(
        submission_id=submission_id,
        overall_score=result.overall_score,
        edit_quality_score=result.edit_quality_score,
        pacing_score=result.pacing_score,
        retention_score=result.retention_score,
        overall_feedback=result.overall_feedback,
        strengths=list(result.strengths),
        weaknesses=list(result.weaknesses),
        edit_analysis=result.edit_analysis.to_dict(),
        pacing_analysis=result.pacing_analysis.to_dict(),
        audio_analysis=result.audio_analysis.to_dict(),
        risk_zones=[zone.to_dict() for zone in result.risk_zones],
        recommendations=list(result.recommendations),
        benchmark_data=result.benchmark.to_dict() if result.benchmark else None,
        model_response=result.raw_response,
        model_used=result.model_used,
    )
    session.add(model)
    return model


def _set_status(
    session: Session,
    submission_id: UUID,
    status: AnalysisStatus,
    error_message: str | None = None,
) -> SubmissionModel:
    """Move a ``processing`` submission to a terminal status.

    The guard lives in the UPDATE so overlapping runs of the same submission
    cannot overwrite each other; a terminal row is returned unchanged.

    Raises:
        PersistenceFailure: If the submission does not exist
    """
    result = session.execute(
        update(SubmissionModel)
        .where(
            SubmissionModel.id == submission_id,
            SubmissionModel.status == AnalysisStatus.PROCESSING,
        )
        .values(status=status, error_message=error_message, completed_at=datetime.now(UTC))
        .execution_options(synchronize_session=False)
    )
    submission = session.get(SubmissionModel, submission_id, populate_existing=True)
    if submission is None:
        raise PersistenceFailure(f"Submission not found: {submission_id}")
    if result.rowcount == 0:
        logger.warning(
            "submission_status_unchanged",
            submission_id=str(submission_id),
            current=submission.status,
            requested=status,
        )
    return submission


def mark_completed(session: Session, submission_id: UUID) -> SubmissionModel:
    return _set_status(session, submission_id, AnalysisStatus.COMPLETED)


def mark_failed(session: Session, submission_id: UUID, error_message: str) -> SubmissionModel:
    return _set_status(session, submission_id, AnalysisStatus.FAILED, error_message[:2000])


def upsert_benchmark_video(session: Session, video: BenchmarkVideo) -> BenchmarkVideoModel:
    """Insert a benchmark video or refresh the counts of an existing one."""
    existing = session.scalar(
        select(BenchmarkVideoModel).where(BenchmarkVideoModel.youtube_id == video.youtube_id)
    )
    if existing is not None:
        existing.views = video.views
        existing.likes = video.likes
        existing.engagement = video.engagement
        return existing

    model = BenchmarkVideoModel(
        youtube_id=video.youtube_id,
        title=video.title,
        channel_name=video.channel_name,
        views=video.views,
        likes=video.likes,
        duration=video.duration,
        published_at=video.published_at,
        engagement=video.engagement,
    )
    session.add(model)
    return model


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def critique_from_model(model: CritiqueResultModel) -> CritiqueResult:
    """Decode a stored critique row into a CritiqueResult."""
    risk_zones = model.risk_zones if isinstance(model.risk_zones, list) else []
    return CritiqueResult(
        overall_score=model.overall_score,
        edit_quality_score=model.edit_quality_score,
        pacing_score=model.pacing_score,
        retention_score=model.retention_score,
        overall_feedback=model.overall_feedback or "",
        strengths=list(model.strengths or []),
        weaknesses=list(model.weaknesses or []),
        edit_analysis=EditAnalysis.from_dict(_as_dict(model.edit_analysis)),
        pacing_analysis=PacingAnalysis.from_dict(_as_dict(model.pacing_analysis)),
        audio_analysis=AudioAnalysis.from_dict(_as_dict(model.audio_analysis)),
        risk_zones=[RiskZone.from_dict(zone) for zone in risk_zones if isinstance(zone, dict)],
        recommendations=list(model.recommendations or []),
        benchmark=(
            BenchmarkInsights.from_dict(model.benchmark_data)
            if isinstance(model.benchmark_data, dict)
            else None
        ),
        raw_response=model.model_response,
        model_used=model.model_used,
    )


def metadata_from_submission(submission: SubmissionModel) -> VideoMetadata:
    """Recover the metadata captured when the submission was accepted."""
    if submission.source_metadata:
        return VideoMetadata.from_dict(submission.source_metadata)
    return VideoMetadata(
        title=submission.title or "",
        duration=submission.duration,
        thumbnail_url=submission.thumbnail_url,
    )
