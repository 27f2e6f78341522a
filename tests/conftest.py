"""
Shared fixtures.
"""

import pytest

from ai_validator.config import (
    LLMSettings,
    LogSettings,
    MCPSettings,
    Settings,
    ValidationSettings,
)


def build_settings(
    provider="openai",
    openai_api_key=None,
    claude_api_key=None,
    **validation,
) -> Settings:
    """Settings built in code so environment keys never leak into tests."""
    toggles = dict(
        confidence_threshold=0.7,
        enable_query_classification=True,
        enable_context_validation=True,
        use_llm_judge=False,
        enable_accuracy_check=False,
        enable_hallucination_detection=False,
        developer_mode=False,
    )
    toggles.update(validation)

    return Settings(
        llm=LLMSettings(
            provider=provider,
            openai_api_key=openai_api_key,
            claude_api_key=claude_api_key,
            openai_model="gpt-4o-mini",
            claude_model="claude-3-haiku-20240307",
            openai_base_url="https://api.openai.com/v1",
            claude_base_url="https://api.anthropic.com/v1",
            timeout_ms=30000,
        ),
        validation=ValidationSettings(**toggles),
        mcp=MCPSettings(transport="stdio", host="127.0.0.1", port=8080),
        log=LogSettings(level="INFO", format="text"),
    )


@pytest.fixture
def make_settings():
    return build_settings
