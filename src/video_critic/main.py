"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from video_critic import __version__
from video_critic.api.routes import analyses, health
from video_critic.config import settings
from video_critic.domain.errors import VideoCriticError
from video_critic.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("application_starting", version=__version__)

    # SQLite is only used for local runs, where tables are created on demand
    try:
        from video_critic.db.session import init_db

        init_db(create_tables=settings.database_url.startswith("sqlite"))
        logger.info("database_connected")
    except Exception as e:
        logger.error("database_connection_failed", error=str(e))
        # Health checks report the issue

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="Video Critic",
    description="AI video critique with audience-specific retention analysis",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VideoCriticError)
async def video_critic_error_handler(request: Request, exc: VideoCriticError) -> JSONResponse:
    """Render domain errors that escape a route with their HTTP status."""
    logger.warning("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.http_status, content={"detail": exc.message})


# Register routers
app.include_router(health.router)
app.include_router(analyses.router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing at the docs."""
    return {
        "name": "Video Critic",
        "version": __version__,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "video_critic.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
