"""Stub LLM provider for testing."""

import asyncio
import json
from typing import Any

from video_critic.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse
from video_critic.logging import get_logger

logger = get_logger(__name__)


STUB_CRITIQUE: dict[str, Any] = {
    "overallScore": 72,
    "editQualityScore": 68,
    "pacingScore": 75,
    "retentionScore": 70,
    "overallFeedback": (
        "Solid structure with a clear premise, but the opening takes too long "
        "to reach the payoff. Tighter cuts in the middle section would help."
    ),
    "strengths": [
        "Clear topic introduced early",
        "Consistent visual style",
        "Good use of on-screen text",
    ],
    "weaknesses": [
        "Slow first ten seconds",
        "Repetitive B-roll in the middle",
        "Abrupt ending without a call to action",
    ],
    "editAnalysis": {
        "transitions": "Mostly hard cuts, appropriate for the format.",
        "cutQuality": "Cuts land slightly late on several beats.",
        "visualEffects": "Minimal effects, nothing distracting.",
    },
    "pacingAnalysis": {
        "rhythm": "Uneven - fast intro montage then a long static segment.",
        "engagement": "Attention dips around the midpoint.",
        "momentum": "Builds well in the final third.",
    },
    "audioAnalysis": {
        "musicChoice": "Track fits the mood but is mixed too loud.",
        "soundDesign": "Few sound effects; transitions could use whooshes.",
        "audienceAlignment": "Music style matches the target audience.",
    },
    "riskZones": [
        {
            "timestamp": 0,
            "endTimestamp": 8,
            "severity": "high",
            "issue": "Hook arrives too late",
            "suggestion": "Open with the most surprising moment",
        },
        {
            "timestamp": 45,
            "endTimestamp": 70,
            "severity": "medium",
            "issue": "Static talking-head segment",
            "suggestion": "Add B-roll or punch-in zooms",
        },
    ],
    "recommendations": [
        "Cut the first five seconds",
        "Add captions for sound-off viewing",
        "Lower the music bed by 6dB under speech",
        "Insert pattern interrupts every 8-10 seconds",
        "End with a clear call to action",
    ],
}

STUB_DESCRIPTION_PREVIEW: dict[str, Any] = {
    "initialInsights": "The description sets clear expectations for the video.",
    "potentialStrengths": ["Specific promise to the viewer", "Keyword-rich first line"],
    "potentialConcerns": ["No timestamps", "Call to action buried at the end"],
}


class StubLLMProvider(LLMProvider):
    """Stub provider that returns canned LLM responses for testing.

    Args:
        response_text: Fixed text to return instead of the canned payloads.
        error: Exception to raise on every call.
        delay: Seconds to wait before answering, to let calls overlap.
    """

    def __init__(
        self,
        response_text: str | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.response_text = response_text
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    @property
    def name(self) -> str:
        return "stub"

    async def complete(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,  # noqa: ARG002
        max_tokens: int = 4096,  # noqa: ARG002
        json_mode: bool = False,
    ) -> LLMResponse:
        """Return a canned completion response."""
        user_message = ""
        for msg in reversed(messages):
            if msg.role == "user":
                user_message = msg.content
                break

        self.prompts.append(user_message)
        if self.delay:
            await asyncio.sleep(self.delay)
        logger.info(
            "stub_llm_complete",
            message_count=len(messages),
            json_mode=json_mode,
        )

        if self.error is not None:
            raise self.error

        if self.response_text is not None:
            content = self.response_text
        elif "initialInsights" in user_message:
            content = json.dumps(STUB_DESCRIPTION_PREVIEW, indent=2)
        else:
            # Wrapped in a code fence like real model output
            content = f"```json\n{json.dumps(STUB_CRITIQUE, indent=2)}\n```"

        return LLMResponse(
            content=content,
            model="stub-model",
            usage={
                "prompt_tokens": len(user_message.split()),
                "completion_tokens": len(content.split()),
                "total_tokens": len(user_message.split()) + len(content.split()),
            },
            finish_reason="stop",
        )

    async def health_check(self) -> bool:
        """Stub provider is always healthy."""
        return True
