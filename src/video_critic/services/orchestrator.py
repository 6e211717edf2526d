"""Analysis orchestration: accept submissions, run the pipeline in the background.

State machine per submission::

    processing --(pipeline ok)--> completed
    processing --(any error)----> failed

The record is created already ``processing`` before anything is dispatched,
so a caller always gets an id. The background run owns its error boundary
and always writes a terminal status itself.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager
from uuid import UUID

from sqlalchemy.orm import Session

from video_critic.db.session import get_session_context
from video_critic.domain.enums import AnalysisStatus, SourceType, TargetAudience
from video_critic.domain.errors import InvalidInput, PersistenceFailure
from video_critic.domain.models import CritiqueResult
from video_critic.logging import get_logger
from video_critic.services import store
from video_critic.services.benchmark import BenchmarkAggregator, BenchmarkReport
from video_critic.services.critique import CritiqueGenerator
from video_critic.services.metadata_resolver import MetadataResolver
from video_critic.services.uploads import UploadStorage

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]
Dispatcher = Callable[[UUID], str | None]


def dispatch_analysis(submission_id: UUID) -> str | None:
    """Enqueue the analysis task and return its Celery task id."""
    from video_critic.jobs.analysis import run_analysis_task

    result = run_analysis_task.delay(str(submission_id))
    return str(result.id)


def validate_audience(audience: str | None) -> TargetAudience:
    if not audience:
        raise InvalidInput("Missing required fields")
    try:
        return TargetAudience(audience)
    except ValueError as e:
        raise InvalidInput(f"Invalid target audience: {audience}") from e


class AnalysisOrchestrator:
    """Coordinates the resolver, aggregator and generator for a submission.

    All collaborators are injectable; defaults are built from settings on
    first use so the request path never constructs an LLM client.
    """

    def __init__(
        self,
        resolver: MetadataResolver | None = None,
        aggregator: BenchmarkAggregator | None = None,
        generator: CritiqueGenerator | None = None,
        uploads: UploadStorage | None = None,
        session_factory: SessionFactory = get_session_context,
        dispatcher: Dispatcher = dispatch_analysis,
    ) -> None:
        self._resolver = resolver
        self._aggregator = aggregator
        self._generator = generator
        self._uploads = uploads
        self.session_factory = session_factory
        self.dispatcher = dispatcher

    @property
    def resolver(self) -> MetadataResolver:
        if self._resolver is None:
            self._resolver = MetadataResolver()
        return self._resolver

    @property
    def aggregator(self) -> BenchmarkAggregator:
        if self._aggregator is None:
            self._aggregator = BenchmarkAggregator()
        return self._aggregator

    @property
    def generator(self) -> CritiqueGenerator:
        if self._generator is None:
            self._generator = CritiqueGenerator()
        return self._generator

    @property
    def uploads(self) -> UploadStorage:
        if self._uploads is None:
            self._uploads = UploadStorage()
        return self._uploads

    # ------------------------------------------------------------------
    # Submission (synchronous part, errors go back to the caller)
    # ------------------------------------------------------------------

    async def submit_youtube(self, url: str | None, audience: str | None) -> UUID:
        """Accept a YouTube URL submission and start the background pipeline.

        Raises:
            InvalidInput, InvalidReference, UpstreamUnavailable,
            MisconfiguredCredentials, PersistenceFailure
        """
        target = validate_audience(audience)
        if not url:
            raise InvalidInput("YouTube URL is required")

        metadata = await self.resolver.resolve_url(url)

        with self.session_factory() as session:
            submission = store.create_submission(
                session,
                source_type=SourceType.YOUTUBE,
                target_audience=target,
                metadata=metadata,
                youtube_url=url,
            )
            submission_id = submission.id

        self._dispatch(submission_id)
        return submission_id

    async def submit_upload(
        self,
        file_name: str | None,
        data: bytes,
        audience: str | None,
    ) -> UUID:
        """Accept an uploaded file and start the background pipeline."""
        target = validate_audience(audience)
        if not file_name:
            raise InvalidInput("Video file is required")

        stored = self.uploads.save(file_name, data)
        metadata = self.resolver.resolve_upload(stored.file_name)

        try:
            with self.session_factory() as session:
                submission = store.create_submission(
                    session,
                    source_type=SourceType.UPLOAD,
                    target_audience=target,
                    metadata=metadata,
                    file_name=stored.file_name,
                    file_path=str(stored.file_path),
                )
                submission_id = submission.id
        except PersistenceFailure:
            # No record points at the file
            self.uploads.delete(stored.file_path)
            raise

        self._dispatch(submission_id)
        return submission_id

    def _dispatch(self, submission_id: UUID) -> None:
        try:
            task_id = self.dispatcher(submission_id)
        except Exception as e:
            # The record exists and the caller still gets its id
            logger.error("analysis_dispatch_failed", submission_id=str(submission_id), error=str(e))
            with self.session_factory() as session:
                store.mark_failed(session, submission_id, f"Failed to start analysis: {e}")
            return

        if task_id:
            with self.session_factory() as session:
                store.set_task_id(session, submission_id, task_id)
        logger.info("analysis_dispatched", submission_id=str(submission_id), task_id=task_id)

    # ------------------------------------------------------------------
    # Background pipeline
    # ------------------------------------------------------------------

    async def run(self, submission_id: UUID) -> AnalysisStatus | None:
        """Run the pipeline for a submission and write its terminal status.

        Returns the resulting status, or None for an unknown id.
        """
        with self.session_factory() as session:
            submission = store.get_submission(session, submission_id)
            if submission is None:
                logger.error("analysis_submission_not_found", submission_id=str(submission_id))
                return None

            status = AnalysisStatus(submission.status)
            if status.is_terminal:
                logger.info(
                    "analysis_already_finished",
                    submission_id=str(submission_id),
                    status=status,
                )
                return status

            source_type = SourceType(submission.source_type)
            audience = submission.target_audience
            metadata = store.metadata_from_submission(submission)

        logger.info(
            "analysis_started",
            submission_id=str(submission_id),
            source_type=source_type,
            audience=audience,
        )

        try:
            report = BenchmarkReport()
            if source_type == SourceType.YOUTUBE:
                report = await self.aggregator.aggregate(metadata)

            result = await self.generator.critique(audience, metadata)

            if source_type == SourceType.YOUTUBE:
                result.benchmark = report.insights
                self._store_benchmark_videos(report)

            final = self._complete(submission_id, result)
        except Exception as e:
            logger.exception("analysis_failed", submission_id=str(submission_id), error=str(e))
            with self.session_factory() as session:
                submission = store.mark_failed(session, submission_id, str(e) or type(e).__name__)
                # A run that finished first keeps its status
                return AnalysisStatus(submission.status)

        if final == AnalysisStatus.COMPLETED:
            logger.info(
                "analysis_completed",
                submission_id=str(submission_id),
                overall_score=result.overall_score,
            )
        return final

    async def close(self) -> None:
        """Release the HTTP clients held by the platform adapters."""
        if self._resolver is not None:
            await self._resolver.close()
        if self._aggregator is not None:
            await self._aggregator.close()

    def _store_benchmark_videos(self, report: BenchmarkReport) -> None:
        for video in report.videos:
            try:
                with self.session_factory() as session:
                    store.upsert_benchmark_video(session, video)
            except Exception as e:
                logger.warning(
                    "benchmark_video_upsert_failed",
                    youtube_id=video.youtube_id,
                    error=str(e),
                )

    def _complete(self, submission_id: UUID, result: CritiqueResult) -> AnalysisStatus:
        # Critique row and status change commit together
        with self.session_factory() as session:
            store.save_critique(session, submission_id, result)
            final = AnalysisStatus(store.mark_completed(session, submission_id).status)
            if final != AnalysisStatus.COMPLETED:
                # Another run of this submission finished first
                session.rollback()
                logger.info(
                    "analysis_already_finished",
                    submission_id=str(submission_id),
                    status=final,
                )
        return final
