"""
Services - Context Validator

Scores how well a response is grounded in its sources. Delegates to the
LLM judge when enabled and falls back to lexical word matching when the
judge is unavailable or fails.
"""

import logging
import re
from typing import List, Optional

from ai_validator.config import get_settings
from ai_validator.schemas import ContextResult, Source, EMPTY_CONTEXT
from ai_validator.services.llm_judge import LLMJudge

logger = logging.getLogger(__name__)


def tokenize(text: str, min_length: int) -> List[str]:
    """Lowercase, drop non-word characters, keep tokens longer than min_length."""
    cleaned = re.sub(r"[^\w\s]", "", text.lower())
    return [word for word in cleaned.split() if len(word) > min_length]


class ContextValidator:
    """Two-stage context relevance: LLM judge, then word matching."""

    def __init__(self, settings=None, use_llm_judge: bool = None, judge: Optional[LLMJudge] = None):
        self.settings = settings or get_settings()
        if use_llm_judge is None:
            use_llm_judge = self.settings.validation.use_llm_judge

        self.use_llm_judge = use_llm_judge and self.settings.llm.has_any_api_key
        self.judge = judge
        if self.use_llm_judge and self.judge is None:
            self.judge = LLMJudge(self.settings)

    async def validate_context(
        self,
        query: str,
        response: str,
        sources: List[Source],
    ) -> ContextResult:
        """
        Validate response context against sources.

        Never raises on a judge failure; falls back to word matching.
        """
        if not sources:
            return EMPTY_CONTEXT

        if self.use_llm_judge and self.judge is not None:
            try:
                return await self.judge.validate_context(query, response, sources)
            except Exception as e:
                logger.warning("LLM judge failed, falling back to word matching: %s", e)

        return self.word_matching_validation(query, response, sources)

    def word_matching_validation(
        self,
        query: str,
        response: str,
        sources: List[Source],
    ) -> ContextResult:
        """Lexical fallback. Pure and total."""
        response_words = tokenize(response, min_length=3)
        source_words = set(tokenize(" ".join(s.content for s in sources), min_length=3))

        if response_words:
            in_source = sum(1 for word in response_words if word in source_words)
            source_relevance = min(1.0, in_source / len(response_words))
        else:
            source_relevance = 0.5

        query_words = tokenize(query, min_length=2)
        response_set = set(response_words)
        if query_words:
            in_response = sum(1 for word in query_words if word in response_set)
            source_usage_rate = in_response / len(query_words)
        else:
            source_usage_rate = 0.5

        return ContextResult(
            source_relevance=source_relevance,
            source_usage_rate=source_usage_rate,
            valid=source_relevance > 0.3,
        )
