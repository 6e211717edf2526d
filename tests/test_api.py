"""Tests for the analysis endpoints."""

import asyncio
from collections.abc import Generator
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from video_critic.adapters.llm.stub import StubLLMProvider
from video_critic.api.deps import get_critique_generator, get_orchestrator
from video_critic.services.critique import CritiqueGenerator
from video_critic.services.orchestrator import AnalysisOrchestrator

URL = "https://youtu.be/dQw4w9WgXcQ"


@pytest.fixture
def api(test_client: TestClient, orchestrator: AnalysisOrchestrator) -> Generator[TestClient, None, None]:
    """Test client whose analysis endpoints use the stubbed orchestrator."""
    from video_critic.main import app

    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield test_client
    app.dependency_overrides.clear()


class TestAnalyze:
    def test_youtube_submission(self, api: TestClient, dispatcher) -> None:
        response = api.post(
            "/api/v1/analyze",
            data={"sourceType": "youtube", "targetAudience": "gen_z", "youtubeUrl": URL},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Analysis started"
        assert str(dispatcher.dispatched[0]) == data["videoId"]

    def test_upload_submission(self, api: TestClient) -> None:
        response = api.post(
            "/api/v1/analyze",
            data={"sourceType": "upload", "targetAudience": "millennials"},
            files={"file": ("vacation.mp4", b"not really a video", "video/mp4")},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Upload successful, analysis started"

    @pytest.mark.parametrize(
        ("form", "detail"),
        [
            ({"sourceType": "youtube", "youtubeUrl": URL}, "Missing required fields"),
            ({"targetAudience": "gen_z", "youtubeUrl": URL}, "Missing required fields"),
            ({"sourceType": "vimeo", "targetAudience": "gen_z"}, "Invalid source type"),
            ({"sourceType": "youtube", "targetAudience": "gen_z"}, "YouTube URL is required"),
            (
                {"sourceType": "youtube", "targetAudience": "gen_z", "youtubeUrl": "https://vimeo.com/1"},
                "Invalid YouTube URL",
            ),
            (
                {
                    "sourceType": "youtube",
                    "targetAudience": "gen_z",
                    "youtubeUrl": "https://youtu.be/missing0000",
                },
                "Video not found",
            ),
            ({"sourceType": "upload", "targetAudience": "gen_z"}, "Video file is required"),
        ],
    )
    def test_rejected_submissions(self, api: TestClient, dispatcher, form: dict, detail: str) -> None:
        response = api.post("/api/v1/analyze", data=form)

        assert response.status_code == 400
        assert response.json()["detail"] == detail
        assert dispatcher.dispatched == []

    def test_invalid_audience(self, api: TestClient) -> None:
        response = api.post(
            "/api/v1/analyze",
            data={"sourceType": "youtube", "targetAudience": "toddlers", "youtubeUrl": URL},
        )

        assert response.status_code == 400
        assert "toddlers" in response.json()["detail"]

    def test_upload_too_large(self, api: TestClient, dispatcher) -> None:
        response = api.post(
            "/api/v1/analyze",
            data={"sourceType": "upload", "targetAudience": "gen_z"},
            files={"file": ("big.mp4", b"x" * 2048, "video/mp4")},
        )

        assert response.status_code == 400
        assert dispatcher.dispatched == []


class TestResults:
    def test_processing_then_completed(self, api: TestClient, orchestrator) -> None:
        submit = api.post(
            "/api/v1/analyze",
            data={"sourceType": "youtube", "targetAudience": "gen_z", "youtubeUrl": URL},
        )
        video_id = submit.json()["videoId"]

        response = api.get(f"/api/v1/results/{video_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["analysis"] is None
        video = data["video"]
        assert video["id"] == video_id
        assert video["analysisStatus"] == "processing"
        assert video["sourceType"] == "youtube"
        assert video["youtubeUrl"] == URL
        assert video["targetAudience"] == "gen_z"
        assert video["duration"] == 512

        asyncio.run(orchestrator.run(UUID(video_id)))

        data = api.get(f"/api/v1/results/{video_id}").json()
        assert data["video"]["analysisStatus"] == "completed"
        analysis = data["analysis"]
        assert analysis["overallScore"] == 72
        assert analysis["editQualityScore"] == 68
        assert len(analysis["recommendations"]) == 5
        assert analysis["riskZones"][0]["endTimestamp"] == 8
        assert analysis["editAnalysis"]["cutQuality"]
        assert analysis["benchmarkData"]["performanceVsBenchmark"] == "average"
        assert analysis["benchmarkData"]["sampleSize"] == 3

    def test_failed_analysis_has_no_critique(self, api: TestClient, orchestrator) -> None:
        orchestrator._generator = CritiqueGenerator(StubLLMProvider(response_text="no json"))
        submit = api.post(
            "/api/v1/analyze",
            data={"sourceType": "youtube", "targetAudience": "gen_z", "youtubeUrl": URL},
        )
        video_id = submit.json()["videoId"]

        asyncio.run(orchestrator.run(UUID(video_id)))

        data = api.get(f"/api/v1/results/{video_id}").json()
        assert data["video"]["analysisStatus"] == "failed"
        assert data["video"]["errorMessage"]
        assert data["analysis"] is None

    def test_unknown_id(self, test_client: TestClient) -> None:
        response = test_client.get(f"/api/v1/results/{uuid4()}")

        assert response.status_code == 404

    def test_malformed_id(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/results/not-a-uuid")

        assert response.status_code == 404


def test_list_audiences(test_client: TestClient) -> None:
    response = test_client.get("/api/v1/audiences")

    assert response.status_code == 200
    audiences = {item["id"]: item for item in response.json()}
    assert set(audiences) == {"gen_z", "millennials", "gen_x", "baby_boomers"}
    assert audiences["gen_z"]["name"] == "Gen Z"
    assert audiences["gen_z"]["retentionKeys"]


class TestDescriptionInsights:
    @pytest.fixture
    def api(self, test_client: TestClient, llm_provider) -> Generator[TestClient, None, None]:
        from video_critic.main import app

        app.dependency_overrides[get_critique_generator] = lambda: CritiqueGenerator(llm_provider)
        yield test_client
        app.dependency_overrides.clear()

    def test_preview(self, api: TestClient) -> None:
        response = api.post(
            "/api/v1/insights/description",
            json={"description": "A week in Lisbon on a budget", "targetAudience": "gen_z"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["initialInsights"]
        assert data["potentialStrengths"]
        assert data["potentialConcerns"]

    def test_unknown_audience(self, api: TestClient) -> None:
        response = api.post(
            "/api/v1/insights/description",
            json={"description": "A week in Lisbon", "targetAudience": "toddlers"},
        )

        assert response.status_code == 400

    def test_empty_description(self, api: TestClient) -> None:
        response = api.post(
            "/api/v1/insights/description",
            json={"description": "", "targetAudience": "gen_z"},
        )

        assert response.status_code == 422


@pytest.mark.asyncio
async def test_orchestrator_dependency_closes_adapters(
    orchestrator: AnalysisOrchestrator, video_platform, monkeypatch
) -> None:
    from video_critic.api import deps

    monkeypatch.setattr(deps, "AnalysisOrchestrator", lambda: orchestrator)
    dependency = deps.get_orchestrator()

    assert await anext(dependency) is orchestrator
    assert not video_platform.closed

    with pytest.raises(StopAsyncIteration):
        await anext(dependency)
    assert video_platform.closed
