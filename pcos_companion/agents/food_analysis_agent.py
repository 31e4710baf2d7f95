"""
Food Analysis Agent - Analyzes a food photo for PCOS compatibility.
Sends the image with a profile-aware instruction and normalizes the JSON reply.
"""

import json
from typing import Any, Optional, Union

from .base_agent import AgentResult, BaseAgent
from .normalization import normalize_analysis
from .prompts import build_analysis_prompt
from ..llm.base import LLMMessage, LLMProvider, encode_image
from ..llm.errors import EmptyResponseError, MalformedResponseError
from ..models import AnalysisResult, Profile

JSON_RESPONSE_FORMAT = {"type": "json_object"}


def _strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` wrapper some models put around JSON replies."""
    stripped = text.strip()
    if stripped.startswith("```") and stripped.endswith("```"):
        stripped = stripped[3:-3]
        if stripped.lower().startswith("json"):
            stripped = stripped[4:]
    return stripped.strip()


class FoodAnalysisAgent(BaseAgent):
    """AI Analysis Client: one image in, one normalized AnalysisResult out."""

    def __init__(
        self,
        provider: LLMProvider,
        temperature: float = 0.4,
        max_tokens: int = 1024,
        top_p: float = 0.95,
        model: Optional[str] = None,
    ):
        super().__init__("FoodAnalysisAgent", provider, temperature, max_tokens, top_p, model)

    def build_prompt(self, profile: Profile) -> str:
        return build_analysis_prompt(profile)

    async def analyze_image(
        self,
        image_data: Union[str, bytes],
        profile: Profile,
        media_type: str = "image/jpeg",
    ) -> AgentResult[AnalysisResult]:
        """
        Analyze a food image.

        Args:
            image_data: Image URL or data URL, or raw image bytes
            profile: Current profile, used to personalize the assessment
            media_type: MIME type used when image_data is raw bytes

        Returns:
            AgentResult with the normalized analysis, or ConfigurationError,
            ServiceError, EmptyResponseError, MalformedResponseError or
            RequestInProgressError
        """
        if isinstance(image_data, bytes):
            image_data = encode_image(image_data, media_type)
        return await self._guarded(lambda: self._analyze(image_data, profile))

    async def _analyze(self, image_url: str, profile: Profile) -> AnalysisResult:
        messages = [LLMMessage.multimodal("user", self.build_prompt(profile), image_urls=[image_url])]
        response = await self.call_llm(messages, response_format=JSON_RESPONSE_FORMAT)

        if not response.content or not response.content.strip():
            raise EmptyResponseError()

        parsed = self._parse(response.content)
        result = normalize_analysis(parsed)
        self.log.info(
            f"Food analyzed: {result.food_name} ({result.pcos_compatibility})",
            extra={"extra_fields": {"food_name": result.food_name,
                                    "pcos_compatibility": result.pcos_compatibility}}
        )
        return result

    @staticmethod
    def _parse(content: str) -> Any:
        try:
            parsed = json.loads(_strip_code_fence(content))
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Analysis reply is not valid JSON: {e.msg}") from e
        if not isinstance(parsed, dict):
            raise MalformedResponseError("Analysis reply is not a JSON object")
        return parsed
