"""
Services - Hallucination Detector

Flags content in a response that is not backed by its sources with one
LLM call. Provider failures propagate to the caller.
"""

import logging
from typing import List

from ai_validator.exceptions import ParseError
from ai_validator.schemas import HallucinationResult, Source
from ai_validator.services.base_check import LLMBackedCheck
from ai_validator.services.llm_judge import extract_json_object, unit_float

logger = logging.getLogger(__name__)


class HallucinationDetector(LLMBackedCheck):
    """LLM hallucination detection."""

    SYSTEM = "You are a hallucination detector. You flag statements that the sources do not support."

    async def detect(
        self,
        response: str,
        sources: List[Source],
        provider: str,
        model: str = None,
    ) -> HallucinationResult:
        """Detect invented statements in response."""
        if not sources:
            return HallucinationResult(detected=True, risk=1.0)

        prompt = f"""Compare the AI RESPONSE with the SOURCES and identify any statements that are invented, unsupported, or contradict the sources.

SOURCES:
{self.format_sources(sources)}

AI RESPONSE:
{response}

Return ONLY a JSON object with this exact format:
{{
  "hallucination_detected": true/false,
  "risk": 0.0-1.0,
  "hallucinated_parts": ["exact unsupported statement", ...]
}}

Respond with ONLY the JSON, no other text."""

        raw = await self.provider(provider, model).complete(
            prompt,
            system=self.SYSTEM,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
        )
        return self.parse_result(raw)

    def parse_result(self, raw: str) -> HallucinationResult:
        try:
            parsed = extract_json_object(raw)
        except ParseError as e:
            logger.warning("Failed to parse hallucination result: %s", e.message)
            return HallucinationResult(detected=False, risk=0.5)

        parts = parsed.get("hallucinated_parts") or []
        if not isinstance(parts, list):
            parts = [parts]
        parts = [str(p) for p in parts if p]

        return HallucinationResult(
            detected=parsed.get("hallucination_detected") is True,
            risk=unit_float(parsed.get("risk")),
            hallucinated_parts=parts or None,
        )
