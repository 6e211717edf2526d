"""Critique generation with a generative model."""

import json
import math
import re
import time
from dataclasses import dataclass
from typing import Any

from video_critic.adapters.llm.base import LLMProvider
from video_critic.config import settings
from video_critic.domain.enums import TargetAudience
from video_critic.domain.errors import InvalidInput, MalformedUpstreamResponse
from video_critic.domain.models import CritiqueResult, DescriptionPreview, VideoMetadata
from video_critic.logging import get_logger

logger = get_logger(__name__)

# Greedy: first "{" to last "}" across newlines
JSON_SPAN_PATTERN = re.compile(r"\{[\s\S]*\}")

SCORE_FIELDS = ("overallScore", "editQualityScore", "pacingScore", "retentionScore")


@dataclass(frozen=True)
class AudienceProfile:
    """What a demographic segment responds to."""

    name: str
    characteristics: str
    preferences: str
    retention_keys: str


AUDIENCE_PROFILES: dict[TargetAudience, AudienceProfile] = {
    TargetAudience.GEN_Z: AudienceProfile(
        name="Gen Z",
        characteristics=(
            "Fast-paced, trend-aware, meme culture, short attention span, "
            "authentic, visual-first"
        ),
        preferences=(
            "Quick cuts, trending music, relatable humor, mobile-optimized, "
            "captions/text overlays"
        ),
        retention_keys=(
            "Hook in first 3 seconds, rapid pacing, trend integration, authentic personality"
        ),
    ),
    TargetAudience.MILLENNIALS: AudienceProfile(
        name="Millennials",
        characteristics=(
            "Story-driven, value authenticity, appreciate quality production, nostalgic"
        ),
        preferences=(
            "Narrative structure, polished but authentic, meaningful content, "
            "clear value proposition"
        ),
        retention_keys=(
            "Strong storytelling, relatable experiences, quality over quantity, "
            "emotional connection"
        ),
    ),
    TargetAudience.GEN_X: AudienceProfile(
        name="Gen X",
        characteristics=(
            "Skeptical, independent, value straightforward information, practical"
        ),
        preferences="Clear structure, informative, no-nonsense approach, credible sources",
        retention_keys=(
            "Direct value delivery, credibility, practical takeaways, respect their time"
        ),
    ),
    TargetAudience.BABY_BOOMERS: AudienceProfile(
        name="Baby Boomers",
        characteristics=(
            "Traditional, detail-oriented, prefer clear explanations, patient viewers"
        ),
        preferences=(
            "Slower pacing, thorough explanations, professional presentation, clear audio"
        ),
        retention_keys=(
            "Clear structure, thorough coverage, professional quality, respect and formality"
        ),
    ),
}


OUTPUT_SHAPE = """{
  "overallScore": <0-100>,
  "editQualityScore": <0-100>,
  "pacingScore": <0-100>,
  "retentionScore": <0-100>,
  "overallFeedback": "<2-3 sentences of direct, honest feedback>",
  "strengths": ["<strength 1>", "<strength 2>", "<strength 3>"],
  "weaknesses": ["<weakness 1>", "<weakness 2>", "<weakness 3>"],
  "editAnalysis": {
    "transitions": "<analysis of transition quality and appropriateness>",
    "cutQuality": "<analysis of cut timing and rhythm>",
    "visualEffects": "<analysis of effects usage and relevance>"
  },
  "pacingAnalysis": {
    "rhythm": "<analysis of overall rhythm and tempo>",
    "engagement": "<analysis of engagement maintenance>",
    "momentum": "<analysis of momentum building>"
  },
  "audioAnalysis": {
    "musicChoice": "<analysis of music selection>",
    "soundDesign": "<analysis of sound effects and mixing>",
    "audienceAlignment": "<how well audio aligns with target audience>"
  },
  "riskZones": [
    {
      "timestamp": <seconds>,
      "endTimestamp": <seconds>,
      "severity": "high|medium|low",
      "issue": "<what's wrong>",
      "suggestion": "<how to fix it>"
    }
  ],
  "recommendations": [
    "<specific, actionable recommendation 1>",
    "<specific, actionable recommendation 2>",
    "<specific, actionable recommendation 3>",
    "<specific, actionable recommendation 4>",
    "<specific, actionable recommendation 5>"
  ]
}"""


def get_audience_profile(audience: str) -> AudienceProfile:
    try:
        return AUDIENCE_PROFILES[TargetAudience(audience)]
    except ValueError as e:
        raise InvalidInput(f"Unknown target audience: {audience}") from e


def format_duration(seconds: int | None) -> str:
    """Format seconds as M:SS, or "Unknown"."""
    if not seconds:
        return "Unknown"
    return f"{seconds // 60}:{seconds % 60:02d}"


def build_critique_prompt(profile: AudienceProfile, metadata: VideoMetadata) -> str:
    """Render the single instruction sent to the model."""
    return f"""You are a senior video editor and content strategist analyzing a video for maximum retention.

TARGET AUDIENCE: {profile.name}
Characteristics: {profile.characteristics}
Preferences: {profile.preferences}
Retention Keys: {profile.retention_keys}

VIDEO METADATA:
- Title: {metadata.title or "Unknown"}
- Duration: {format_duration(metadata.duration)}
- Description: {metadata.description or "Not provided"}

Provide a comprehensive analysis of this video's edit quality, pacing, and effectiveness for the target audience. Your analysis should be honest, direct, and actionable.

Return your analysis in the following JSON format:

{OUTPUT_SHAPE}

Return only the JSON object, with no other text.
Be specific, be honest, and focus on actionable insights that will improve retention for {profile.name} viewers."""


def build_description_prompt(description: str, profile: AudienceProfile) -> str:
    return f"""Based on this video description, provide initial insights about potential strengths and areas of concern for {profile.name} audience:

"{description}"

Return a JSON object with:
{{
  "initialInsights": "<brief analysis>",
  "potentialStrengths": ["<strength 1>", "<strength 2>"],
  "potentialConcerns": ["<concern 1>", "<concern 2>"]
}}"""


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the brace-delimited span of a model response.

    Raises:
        MalformedUpstreamResponse: No span, invalid JSON, or not an object
    """
    match = JSON_SPAN_PATTERN.search(text)
    if not match:
        raise MalformedUpstreamResponse(
            "Failed to parse AI response: no JSON object found in response"
        )
    try:
        data = json.loads(match.group(0))
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the digit limit
        raise MalformedUpstreamResponse(f"Failed to parse AI response as JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedUpstreamResponse("AI response is not a JSON object")
    return data


def _is_number(value: Any) -> bool:
    # json.loads reads NaN, Infinity and out-of-range literals like 1e400
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers too large for a float
        return False


def parse_critique(text: str) -> CritiqueResult:
    """Turn raw model text into a validated CritiqueResult."""
    data = extract_json_object(text)

    if not _is_number(data.get("overallScore")) or not isinstance(data.get("strengths"), list):
        raise MalformedUpstreamResponse("AI response is missing required fields")

    missing = [name for name in SCORE_FIELDS if not _is_number(data.get(name))]
    if missing:
        raise MalformedUpstreamResponse(f"AI response has non-numeric scores: {missing}")
    if not data["strengths"]:
        raise MalformedUpstreamResponse("AI response has no strengths")

    return CritiqueResult.from_dict(data)


class CritiqueGenerator:
    """Asks a generative model for an audience-specific critique."""

    def __init__(self, llm_provider: LLMProvider | None = None) -> None:
        """Initialize the generator.

        Args:
            llm_provider: Optional LLM provider. If None, uses the configured provider.
        """
        if llm_provider is None:
            from video_critic.adapters.llm import get_llm_provider

            llm_provider = get_llm_provider()
        self.llm = llm_provider
        logger.info("critique_generator_initialized", provider=self.llm.name)

    async def critique(self, audience: str, metadata: VideoMetadata) -> CritiqueResult:
        """Generate a critique.

        Raises:
            InvalidInput: Unknown audience segment
            MisconfiguredCredentials: Model API key missing
            MalformedUpstreamResponse: Model output is not a usable critique
        """
        profile = get_audience_profile(audience)
        prompt = build_critique_prompt(profile, metadata)

        start_time = time.time()
        logger.info("critique_started", audience=audience, title=metadata.title[:80])

        response = await self.llm.generate(
            prompt,
            temperature=settings.critique_temperature,
            max_tokens=settings.critique_max_tokens,
        )

        try:
            result = parse_critique(response.content)
        except MalformedUpstreamResponse:
            logger.error(
                "critique_response_malformed",
                provider=self.llm.name,
                response_preview=response.content[:200],
            )
            raise

        result.model_used = self.llm.name

        logger.info(
            "critique_completed",
            overall_score=result.overall_score,
            risk_zones=len(result.risk_zones),
            duration=time.time() - start_time,
        )
        return result

    async def preview_description(self, description: str, audience: str) -> DescriptionPreview:
        """Quick insights from a description alone. Empty on unusable output."""
        profile = get_audience_profile(audience)
        response = await self.llm.generate(
            build_description_prompt(description, profile),
            temperature=settings.critique_temperature,
            max_tokens=1024,
        )
        try:
            data = extract_json_object(response.content)
        except MalformedUpstreamResponse:
            logger.warning("description_preview_unparseable", provider=self.llm.name)
            return DescriptionPreview()
        return DescriptionPreview.from_dict(data)
