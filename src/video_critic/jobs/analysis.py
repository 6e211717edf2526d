"""Background analysis task."""

from typing import Any
from uuid import UUID

from video_critic.logging import bind_submission, get_logger
from video_critic.services.orchestrator import AnalysisOrchestrator
from video_critic.utils import run_async
from video_critic.worker import celery_app

logger = get_logger(__name__)


@celery_app.task(bind=True, name="analysis.run_pipeline")
def run_analysis_task(self: Any, submission_id: str) -> dict[str, Any]:
    """Run the analysis pipeline for one submission.

    No retries: a single upstream failure is terminal for the submission.
    The orchestrator records ``failed`` itself, including on soft time limits.

    Args:
        submission_id: UUID of the submission to analyze

    Returns:
        Dict with the submission id and its resulting status
    """
    task_id = self.request.id
    logger.info("analysis_task_started", task_id=task_id, submission_id=submission_id)

    orchestrator = AnalysisOrchestrator()
    try:
        with bind_submission(submission_id):
            status = run_async(orchestrator.run(UUID(submission_id)))
    finally:
        run_async(orchestrator.close())

    logger.info(
        "analysis_task_finished",
        task_id=task_id,
        submission_id=submission_id,
        status=status,
    )
    return {
        "submission_id": submission_id,
        "status": str(status) if status else None,
    }
