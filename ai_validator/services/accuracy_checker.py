"""
Services - Accuracy Checker

Verifies the factual claims of a response against its sources with one
LLM call. Provider failures propagate to the caller.
"""

import logging
from typing import List

from ai_validator.exceptions import ParseError
from ai_validator.schemas import AccuracyResult, Source
from ai_validator.services.base_check import LLMBackedCheck
from ai_validator.services.llm_judge import extract_json_object, unit_float

logger = logging.getLogger(__name__)


class AccuracyChecker(LLMBackedCheck):
    """LLM claim verification."""

    VERIFIED_THRESHOLD = 0.7
    SYSTEM = "You are a fact-checking system. You compare claims against source documents."

    async def check(
        self,
        response: str,
        sources: List[Source],
        provider: str,
        model: str = None,
    ) -> AccuracyResult:
        """
        Check how many claims in the response the sources support.

        Args:
            response: AI-generated answer
            sources: Retrieved sources
            provider: "openai" or "claude"
            model: Model name (default: configured model for provider)

        Returns:
            AccuracyResult with verification_rate = verified / total claims
        """
        if not sources:
            return AccuracyResult(verified=False, verification_rate=0.0, reason="no_sources")

        prompt = f"""List every factual claim made in the AI RESPONSE and decide, for each, whether the SOURCES support it.

SOURCES:
{self.format_sources(sources)}

AI RESPONSE:
{response}

Return ONLY a JSON object with this exact format:
{{
  "total_claims": <number of factual claims>,
  "verified_claims": <number of claims supported by the sources>,
  "reason": "brief explanation"
}}

Respond with ONLY the JSON, no other text."""

        raw = await self.provider(provider, model).complete(
            prompt,
            system=self.SYSTEM,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
        )
        return self.parse_result(raw)

    def parse_result(self, raw: str) -> AccuracyResult:
        try:
            parsed = extract_json_object(raw)
            total = int(parsed.get("total_claims", 0))
            verified = int(parsed.get("verified_claims", 0))
        except (ParseError, TypeError, ValueError) as e:
            logger.warning("Failed to parse accuracy result: %s", e)
            return AccuracyResult(verified=False, verification_rate=0.5, reason="unparsable_response")

        # Nothing to contradict
        rate = 1.0 if total <= 0 else unit_float(verified / total)
        return AccuracyResult(
            verified=rate >= self.VERIFIED_THRESHOLD,
            verification_rate=rate,
            reason=parsed.get("reason") if isinstance(parsed.get("reason"), str) else None,
        )
