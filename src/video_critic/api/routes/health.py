"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from video_critic.config import settings
from video_critic.logging import get_logger

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    components: dict[str, str] | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    database: bool
    redis: bool
    credentials: dict[str, bool] | None = None


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint that verifies the API is running.",
)
async def health_check() -> HealthResponse:
    """Basic health check - is the API up?

    Returns which providers are configured.
    """
    from video_critic import __version__

    components = {
        "llm": settings.llm_provider,
        "video_platform": settings.video_platform_provider,
    }

    return HealthResponse(
        status="healthy",
        version=__version__,
        components=components,
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check that verifies the database, Redis and API keys.",
)
async def readiness_check() -> ReadinessResponse:
    """Readiness check including dependencies."""
    database_ok = False
    try:
        from sqlalchemy import text

        from video_critic.db.session import engine

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            database_ok = True
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))

    redis_ok = False
    try:
        import redis

        r = redis.from_url(settings.redis_url)
        r.ping()
        redis_ok = True
    except Exception as e:
        logger.error("redis_health_check_failed", error=str(e))

    credentials = {
        "youtube": bool(settings.youtube_api_key),
        "gemini": bool(settings.google_api_key),
        "openai": bool(settings.openai_api_key),
    }

    return ReadinessResponse(
        ready=database_ok and redis_ok,
        database=database_ok,
        redis=redis_ok,
        credentials=credentials,
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Simple liveness probe for Kubernetes.",
)
async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness probe - is the process alive?"""
    return {"status": "alive"}
