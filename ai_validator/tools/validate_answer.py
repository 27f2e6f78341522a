"""
MCP Tool - validate_answer

Grades an AI-generated answer against its retrieved sources.
"""

from typing import Any, Dict, List, Optional

from ai_validator.schemas import Source, ValidationInput
from ai_validator.services import AIValidator

_validator: Optional[AIValidator] = None


def get_validator() -> AIValidator:
    """Shared validator; instances are stateless across calls."""
    global _validator
    if _validator is None:
        _validator = AIValidator()
    return _validator


async def validate_answer(
    query: str,
    response: str,
    sources: Optional[List[Dict[str, Any]]] = None,
) -> dict:
    """
    Validate an AI response against the sources it was generated from.

    Args:
        query: The user's question
        response: The AI-generated answer
        sources: List of {"content": ..., "title": ..., "url": ..., "id": ..., "embedding": [...]}

    Returns:
        Confidence (0-1), valid flag, per-check results and warnings
    """
    result = await get_validator().validate(
        ValidationInput(
            query=query,
            response=response,
            sources=[Source(**s) for s in sources or []],
        )
    )
    return result.model_dump(exclude_none=True)
