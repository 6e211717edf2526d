"""LLM provider adapters."""

from video_critic.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse
from video_critic.adapters.llm.openai import OpenAIProvider
from video_critic.adapters.llm.stub import StubLLMProvider

__all__ = [
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "StubLLMProvider",
    "get_llm_provider",
]


def get_llm_provider() -> LLMProvider:
    """Get the configured LLM provider."""
    from video_critic.config import settings

    provider = settings.llm_provider.lower()

    if provider == "stub":
        return StubLLMProvider()
    if provider == "openai":
        return OpenAIProvider(model=settings.openai_model)

    from video_critic.adapters.llm.gemini import GeminiProvider

    return GeminiProvider(model=settings.gemini_model)
