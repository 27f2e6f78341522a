"""
LLM Module - Provider Abstraction Layer

Supports OpenAI and Anthropic Claude providers.
"""

from dataclasses import dataclass
from typing import Literal

from ai_validator.exceptions import ConfigurationError
from ai_validator.llm.base_provider import BaseLLMProvider
from ai_validator.llm.openai_provider import OpenAIProvider
from ai_validator.llm.claude_provider import ClaudeProvider

__all__ = [
    "BaseLLMProvider",
    "OpenAIProvider",
    "ClaudeProvider",
    "ProviderSelection",
    "select_provider",
    "provider_for",
    "get_provider",
]

ProviderName = Literal["openai", "claude"]


@dataclass(frozen=True)
class ProviderSelection:
    """A resolved provider: which one, with which credential and model."""
    name: ProviderName
    api_key: str
    model: str

    def __repr__(self) -> str:
        return f"ProviderSelection(name={self.name!r}, model={self.model!r})"


def provider_for(settings, name: str, model: str = None) -> ProviderSelection:
    """Selection for a named provider; fails if its credential is missing."""
    api_key = settings.llm.api_key_for(name)
    if not api_key:
        raise ConfigurationError(
            f"No API key configured for provider '{name}'",
            details={"provider": name},
        )
    return ProviderSelection(
        name=name,
        api_key=api_key,
        model=model or settings.llm.model_for(name),
    )


def select_provider(settings) -> ProviderSelection:
    """OpenAI if its key is present, else Claude, else ConfigurationError."""
    for name in ("openai", "claude"):
        if settings.llm.api_key_for(name):
            return provider_for(settings, name)
    raise ConfigurationError(
        "At least one API key (OpenAI or Claude) must be provided for LLM Judge"
    )


def get_provider(selection: ProviderSelection, settings=None) -> BaseLLMProvider:
    """Factory function to build the client for a provider selection."""
    from ai_validator.config import get_settings
    settings = settings or get_settings()

    if selection.name == "openai":
        return OpenAIProvider(
            api_key=selection.api_key,
            model=selection.model,
            base_url=settings.llm.openai_base_url,
            timeout_ms=settings.llm.timeout_ms,
        )
    elif selection.name == "claude":
        return ClaudeProvider(
            api_key=selection.api_key,
            model=selection.model,
            base_url=settings.llm.claude_base_url,
            timeout_ms=settings.llm.timeout_ms,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {selection.name}")
