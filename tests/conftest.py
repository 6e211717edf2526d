"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
_TEST_DIR = Path(tempfile.mkdtemp(prefix="video-critic-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR / 'test.db'}"
os.environ["REDIS_URL"] = "redis://localhost:6379/1"
os.environ["CELERY_BROKER_URL"] = "redis://localhost:6379/1"
os.environ["CELERY_RESULT_BACKEND"] = "redis://localhost:6379/1"
os.environ["UPLOAD_DIR"] = str(_TEST_DIR / "uploads")
os.environ["LLM_PROVIDER"] = "stub"
os.environ["VIDEO_PLATFORM_PROVIDER"] = "stub"
os.environ["LOG_LEVEL"] = "WARNING"
for _key in ("YOUTUBE_API_KEY", "GOOGLE_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY"):
    os.environ.pop(_key, None)


@pytest.fixture(scope="session", autouse=True)
def database() -> Generator[None, None, None]:
    """Create the schema once for the whole test run."""
    from video_critic.db.models import Base
    from video_critic.db.session import engine

    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="session")
def test_client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    from video_critic.main import app

    with TestClient(app) as client:
        yield client


class RecordingDispatcher:
    """Collects dispatched submission ids instead of enqueueing Celery tasks."""

    def __init__(self) -> None:
        self.dispatched: list[UUID] = []

    def __call__(self, submission_id: UUID) -> str:
        self.dispatched.append(submission_id)
        return f"task-{len(self.dispatched)}"


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def video_platform():
    """Get a stub video platform adapter."""
    from video_critic.adapters.video_platform.stub import StubVideoPlatformAdapter

    return StubVideoPlatformAdapter()


@pytest.fixture
def llm_provider():
    """Get a stub LLM provider."""
    from video_critic.adapters.llm.stub import StubLLMProvider

    return StubLLMProvider()


@pytest.fixture
def upload_storage(tmp_path: Path):
    from video_critic.services.uploads import UploadStorage

    return UploadStorage(base_path=tmp_path / "uploads", max_size_bytes=1024)


@pytest.fixture
def orchestrator(video_platform, llm_provider, upload_storage, dispatcher):
    """Orchestrator wired to stubs; the pipeline runs only when a test calls run()."""
    from video_critic.services.benchmark import BenchmarkAggregator
    from video_critic.services.critique import CritiqueGenerator
    from video_critic.services.metadata_resolver import MetadataResolver
    from video_critic.services.orchestrator import AnalysisOrchestrator

    return AnalysisOrchestrator(
        resolver=MetadataResolver(video_platform),
        aggregator=BenchmarkAggregator(video_platform),
        generator=CritiqueGenerator(llm_provider),
        uploads=upload_storage,
        dispatcher=dispatcher,
    )
