"""Video analysis endpoints: submit, poll results, audience table, previews."""

from datetime import datetime
from typing import Annotated, Any, NoReturn
from uuid import UUID

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from video_critic.api.deps import CritiqueGeneratorDep, OrchestratorDep, SessionDep
from video_critic.config import settings
from video_critic.domain.enums import SourceType
from video_critic.domain.errors import VideoCriticError
from video_critic.logging import get_logger
from video_critic.services import store
from video_critic.services.critique import AUDIENCE_PROFILES, get_audience_profile

router = APIRouter(tags=["Analysis"])
logger = get_logger(__name__)


class CamelModel(BaseModel):
    """Response model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeResponse(CamelModel):
    """Response after a submission is accepted."""

    video_id: str
    message: str


class VideoResponse(CamelModel):
    """Submission summary shown while the analysis runs and after."""

    id: str
    source_type: str
    youtube_url: str | None
    file_name: str | None
    title: str | None
    duration: int | None
    thumbnail_url: str | None
    target_audience: str
    analysis_status: str
    error_message: str | None = None
    created_at: datetime | None


class RiskZoneResponse(CamelModel):
    timestamp: float
    end_timestamp: float
    severity: str
    issue: str
    suggestion: str


class BenchmarkResponse(CamelModel):
    avg_views: float
    avg_engagement: float
    performance_vs_benchmark: str
    insights: list[str]
    sample_size: int = 0


class AnalysisResponse(CamelModel):
    """Stored critique for a completed submission."""

    overall_score: int
    edit_quality_score: int
    pacing_score: int
    retention_score: int
    overall_feedback: str
    strengths: list[str]
    weaknesses: list[str]
    edit_analysis: dict[str, str]
    pacing_analysis: dict[str, str]
    audio_analysis: dict[str, str]
    risk_zones: list[RiskZoneResponse]
    recommendations: list[str]
    benchmark_data: BenchmarkResponse | None = None


class ResultsResponse(CamelModel):
    """Polling projection: the submission and, once completed, its critique."""

    video: VideoResponse
    analysis: AnalysisResponse | None = None


class AudienceResponse(CamelModel):
    id: str
    name: str
    characteristics: str
    preferences: str
    retention_keys: str


class DescriptionInsightsRequest(CamelModel):
    """Request for a quick preview based on a description."""

    description: str = Field(..., min_length=1, max_length=5000)
    target_audience: str


class DescriptionInsightsResponse(CamelModel):
    initial_insights: str
    potential_strengths: list[str]
    potential_concerns: list[str]


def _raise_http(e: VideoCriticError) -> NoReturn:
    raise HTTPException(status_code=e.http_status, detail=e.message) from e


def _video_to_response(submission: Any) -> VideoResponse:
    return VideoResponse(
        id=str(submission.id),
        source_type=submission.source_type,
        youtube_url=submission.youtube_url,
        file_name=submission.file_name,
        title=submission.title,
        duration=submission.duration,
        thumbnail_url=submission.thumbnail_url,
        target_audience=submission.target_audience,
        analysis_status=submission.status,
        error_message=submission.error_message,
        created_at=submission.created_at,
    )


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Submit a video for analysis",
    description=(
        "Accept a YouTube URL or an uploaded file plus a target audience. "
        "The critique runs in the background; poll /results/{id} for the outcome."
    ),
)
async def analyze_video(
    orchestrator: OrchestratorDep,
    source_type: Annotated[str | None, Form(alias="sourceType")] = None,
    target_audience: Annotated[str | None, Form(alias="targetAudience")] = None,
    youtube_url: Annotated[str | None, Form(alias="youtubeUrl")] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> AnalyzeResponse:
    """Submit a video for analysis."""
    if not source_type or not target_audience:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    try:
        if source_type == SourceType.YOUTUBE:
            video_id = await orchestrator.submit_youtube(youtube_url, target_audience)
            return AnalyzeResponse(video_id=str(video_id), message="Analysis started")

        if source_type == SourceType.UPLOAD:
            if file is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Video file is required",
                )
            # One byte past the limit is enough to reject the upload
            limit = settings.max_upload_size_mb * 1024 * 1024
            data = await file.read(limit + 1)
            video_id = await orchestrator.submit_upload(file.filename, data, target_audience)
            return AnalyzeResponse(
                video_id=str(video_id),
                message="Upload successful, analysis started",
            )
    except VideoCriticError as e:
        logger.warning("analysis_submission_rejected", source_type=source_type, error=e.message)
        _raise_http(e)

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid source type")


@router.get(
    "/results/{video_id}",
    response_model=ResultsResponse,
    summary="Get analysis results",
    description="Return the submission and its critique once the analysis has completed.",
)
async def get_results(video_id: str, session: SessionDep) -> ResultsResponse:
    """Poll the status and critique of a submission."""
    try:
        submission_id = UUID(video_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Video not found")

    submission = store.get_submission(session, submission_id)
    if submission is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Video not found")

    analysis = None
    if submission.critique is not None:
        result = store.critique_from_model(submission.critique)
        analysis = AnalysisResponse.model_validate(result.to_dict())

    return ResultsResponse(video=_video_to_response(submission), analysis=analysis)


@router.get(
    "/audiences",
    response_model=list[AudienceResponse],
    summary="List target audiences",
    description="Audience segments a critique can be steered towards.",
)
async def list_audiences() -> list[AudienceResponse]:
    """List the supported audience profiles."""
    return [
        AudienceResponse(
            id=str(audience),
            name=profile.name,
            characteristics=profile.characteristics,
            preferences=profile.preferences,
            retention_keys=profile.retention_keys,
        )
        for audience, profile in AUDIENCE_PROFILES.items()
    ]


@router.post(
    "/insights/description",
    response_model=DescriptionInsightsResponse,
    summary="Preview insights from a description",
    description="Quick strengths and concerns based on the description alone.",
)
async def description_insights(
    request: DescriptionInsightsRequest,
    generator: CritiqueGeneratorDep,
) -> DescriptionInsightsResponse:
    """Quick insights for the submission wizard."""
    try:
        get_audience_profile(request.target_audience)
        preview = await generator.preview_description(request.description, request.target_audience)
    except VideoCriticError as e:
        _raise_http(e)

    return DescriptionInsightsResponse(
        initial_insights=preview.initial_insights,
        potential_strengths=preview.potential_strengths,
        potential_concerns=preview.potential_concerns,
    )
