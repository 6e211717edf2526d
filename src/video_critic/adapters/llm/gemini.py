"""Google Gemini LLM provider (default critique model)."""

import asyncio
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from video_critic.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse
from video_critic.config import settings
from video_critic.domain.errors import MisconfiguredCredentials, UpstreamUnavailable
from video_critic.logging import get_logger

logger = get_logger(__name__)

ROLE_MAP = {"user": "user", "assistant": "model"}


def _usage(response: types.GenerateContentResponse) -> dict[str, int]:
    metadata = response.usage_metadata
    if metadata is None:
        return {}
    return {
        "prompt_tokens": metadata.prompt_token_count or 0,
        "completion_tokens": metadata.candidates_token_count or 0,
        "total_tokens": metadata.total_token_count or 0,
    }


class GeminiProvider(LLMProvider):
    """Gemini over the google-genai SDK.

    The SDK client is synchronous; calls run in the default executor so the
    event loop driving the pipeline is not blocked. System messages become the
    request's ``system_instruction``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_api_key
        self.model: str = model or settings.gemini_model
        self._client: genai.Client | None = None

        if not self.api_key:
            logger.warning("gemini_api_key_missing")

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise MisconfiguredCredentials("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @property
    def name(self) -> str:
        return f"gemini:{self.model}"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _generate(self, contents: Any, config: types.GenerateContentConfig | None):
        client = self.client
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None,
                lambda: client.models.generate_content(
                    model=self.model,
                    contents=contents,
                    config=config,
                ),
            )
        except genai_errors.APIError as e:
            logger.error("gemini_request_failed", model=self.model, code=e.code, error=str(e))
            raise UpstreamUnavailable(f"Gemini request failed: {e}") from e

    async def complete(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Send the conversation to Gemini and return the text of the first candidate."""
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = [
            types.Content(role=ROLE_MAP[m.role], parts=[types.Part(text=m.content)])
            for m in messages
            if m.role in ROLE_MAP
        ]

        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            system_instruction=system or None,
            response_mime_type="application/json" if json_mode else None,
        )

        logger.debug("gemini_request", model=self.model, messages=len(contents), json_mode=json_mode)
        response = await self._generate(contents, config)

        candidates = response.candidates or []
        finish_reason = str(candidates[0].finish_reason) if candidates else None
        usage = _usage(response)
        logger.info(
            "gemini_response",
            model=self.model,
            tokens_used=usage.get("total_tokens", 0),
            finish_reason=finish_reason,
        )

        return LLMResponse(
            content=response.text or "",
            model=self.model,
            usage=usage,
            finish_reason=finish_reason,
        )

    async def health_check(self) -> bool:
        if not self.api_key:
            return False
        try:
            response = await self._generate("Reply with the word ok.", None)
        except UpstreamUnavailable:
            return False
        return bool(response.text)
