"""FastAPI dependencies."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from video_critic.db.session import get_session
from video_critic.services.critique import CritiqueGenerator
from video_critic.services.orchestrator import AnalysisOrchestrator

# Database session dependency
SessionDep = Annotated[Session, Depends(get_session)]


async def get_orchestrator() -> AsyncIterator[AnalysisOrchestrator]:
    """Get an analysis orchestrator, closed once the response is sent."""
    orchestrator = AnalysisOrchestrator()
    try:
        yield orchestrator
    finally:
        await orchestrator.close()


def get_critique_generator() -> CritiqueGenerator:
    """Get a critique generator for the configured LLM provider."""
    return CritiqueGenerator()


OrchestratorDep = Annotated[AnalysisOrchestrator, Depends(get_orchestrator)]
CritiqueGeneratorDep = Annotated[CritiqueGenerator, Depends(get_critique_generator)]
