"""OpenAI chat-completions provider (alternative critique model)."""

from typing import Any

import httpx

from video_critic.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse
from video_critic.config import settings
from video_critic.domain.errors import MisconfiguredCredentials, UpstreamUnavailable
from video_critic.logging import get_logger

logger = get_logger(__name__)


class OpenAIProvider(LLMProvider):
    """Calls ``/chat/completions`` over httpx.

    Args:
        api_key: Uses OPENAI_API_KEY when omitted
        model: Chat model name
        base_url: API root, overridable for compatible gateways
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.openai_api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._transport = transport

        if not self.api_key:
            logger.warning("openai_api_key_missing")

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _client(self, timeout: float) -> httpx.AsyncClient:
        if not self.api_key:
            raise MisconfiguredCredentials("OPENAI_API_KEY is not configured")
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=timeout,
            transport=self._transport,
        )

    async def complete(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        async with self._client(timeout=120.0) as client:
            try:
                response = await client.post("/chat/completions", json=payload)
            except httpx.HTTPError as e:
                logger.error("openai_request_failed", model=self.model, error=str(e))
                raise UpstreamUnavailable(f"OpenAI request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "openai_api_error",
                model=self.model,
                status=response.status_code,
                body=response.text[:500],
            )
            raise UpstreamUnavailable(f"OpenAI API error: {response.status_code}")

        data = response.json()
        choice = data["choices"][0]
        usage = data.get("usage") or {}
        logger.info(
            "openai_response",
            model=self.model,
            tokens_used=usage.get("total_tokens", 0),
            finish_reason=choice.get("finish_reason"),
        )

        return LLMResponse(
            content=choice["message"].get("content") or "",
            model=data.get("model", self.model),
            usage={
                "prompt_tokens": usage.get("prompt_tokens", 0),
                "completion_tokens": usage.get("completion_tokens", 0),
                "total_tokens": usage.get("total_tokens", 0),
            },
            raw_response=data,
            finish_reason=choice.get("finish_reason"),
        )

    async def health_check(self) -> bool:
        if not self.api_key:
            return False
        try:
            async with self._client(timeout=10.0) as client:
                response = await client.get("/models")
        except httpx.HTTPError as e:
            logger.error("openai_health_check_failed", error=str(e))
            return False
        return response.status_code == 200
