"""
Services - LLM Judge

Asks a single LLM provider whether a response is grounded in the given
sources and parses a structured verdict out of its free-form output.
"""

import json
import logging
import math
import re
from typing import Any, List

from ai_validator.config import get_settings
from ai_validator.exceptions import ParseError
from ai_validator.llm import BaseLLMProvider, get_provider, select_provider
from ai_validator.schemas import ContextResult, Source, UNPARSED_CONTEXT

logger = logging.getLogger(__name__)


DEVELOPER_RULES = """TASK (Developer Mode - STRICT CODE GROUNDING):
1. Does the response reference SPECIFIC code elements (functions, classes, files) from sources?
2. Is the response explaining actual code implementation, not generic advice?
3. Did the AI cite filenames, function names, or code patterns from the sources?
4. Score LOW if response is generic "how to" advice instead of code analysis.
5. Score HIGH only if response directly explains code from sources.

Scoring Guidelines for Developer Mode:
- valid: true ONLY if response cites specific code elements from sources
- confidence: HIGH (80-100) if response references actual code/functions/files
- confidence: MEDIUM (50-79) if response mentions code but is partly generic
- confidence: LOW (0-49) if response is generic advice not grounded in code
- source_relevance: How much the response references actual code from sources
- source_usage_rate: How many code elements/files from sources were mentioned"""

JUDGE_SYSTEM = (
    "You are a validation system. Given a user query, code/text sources, and an "
    "AI-generated response, determine if the response is accurate and grounded in "
    "the provided sources."
)

USER_RULES = """TASK (User Mode - Helpful Response):
1. Is the response accurate and helpful based on the sources?
2. Did the AI hallucinate or invent information not in the sources?
3. Is the response properly grounded in the provided code/text?

Scoring Guidelines for User Mode:
- valid: true if response is accurate and grounded
- confidence: 0-100 (how confident you are in this assessment)
- source_relevance: 0.0-1.0 (how relevant sources are to response)
- source_usage_rate: 0.0-1.0 (how much of sources were used)"""


def extract_json_object(text: str) -> dict:
    """
    Parse the first {...} block found anywhere in text.

    Raises:
        ParseError: No block found, invalid JSON, or not an object
    """
    match = re.search(r"\{.*\}", text or "", re.DOTALL)
    if not match:
        raise ParseError("No JSON found in response", raw=text)

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in response: {e}", raw=text) from e

    if not isinstance(parsed, dict):
        raise ParseError("JSON in response is not an object", raw=text)
    return parsed


def unit_float(value: Any) -> float:
    """Coerce to float and clamp into [0, 1]; non-numeric becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return max(0.0, min(1.0, number))


class LLMJudge:
    """LLM-as-judge for context grounding."""

    MAX_SOURCE_CHARS = 3000
    MAX_TOKENS = 200
    TEMPERATURE = 0.1

    def __init__(self, settings=None, developer_mode: bool = None):
        self.settings = settings or get_settings()
        # Raises ConfigurationError when neither credential is present
        self.selection = select_provider(self.settings)
        if developer_mode is None:
            developer_mode = self.settings.validation.developer_mode
        self.developer_mode = developer_mode
        self._provider = None

    @property
    def provider(self) -> BaseLLMProvider:
        """Lazy provider client."""
        if self._provider is None:
            self._provider = get_provider(self.selection, self.settings)
        return self._provider

    async def validate_context(
        self,
        query: str,
        response: str,
        sources: List[Source],
    ) -> ContextResult:
        """
        Grade grounding of response in sources.

        Provider failures propagate; unparsable output does not.
        """
        prompt = self.build_prompt(query, response, sources)
        raw = await self.provider.complete(
            prompt,
            system=JUDGE_SYSTEM,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
        )
        return self.parse_verdict(raw)

    def build_prompt(self, query: str, response: str, sources: List[Source]) -> str:
        sources_text = "\n\n".join(
            f"Source {i + 1} ({s.label}):\n{s.content[:self.MAX_SOURCE_CHARS]}"
            for i, s in enumerate(sources)
        )
        rules = DEVELOPER_RULES if self.developer_mode else USER_RULES

        return f"""USER QUERY:
{query}

PROVIDED SOURCES:
{sources_text}

AI RESPONSE:
{response}

{rules}

Return ONLY a JSON object with this exact format:
{{
  "valid": true/false,
  "confidence": 0-100,
  "source_relevance": 0.0-1.0,
  "source_usage_rate": 0.0-1.0,
  "reason": "brief explanation"
}}

Respond with ONLY the JSON, no other text."""

    def parse_verdict(self, raw: str) -> ContextResult:
        """Parse judge output; conservative neutral defaults on failure."""
        try:
            parsed = extract_json_object(raw)
        except ParseError as e:
            logger.warning("Failed to parse LLM judge result: %s", e.message)
            return UNPARSED_CONTEXT

        logger.debug("LLM judge reason: %s", parsed.get("reason"))
        return ContextResult(
            valid=parsed.get("valid") is True,
            source_relevance=unit_float(parsed.get("source_relevance")),
            source_usage_rate=unit_float(parsed.get("source_usage_rate")),
        )
