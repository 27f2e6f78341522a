"""
Services - LLM-Backed Check Base

Shared provider handling for the prompt-call-parse checks.
"""

from typing import Dict, List, Tuple

from ai_validator.config import get_settings
from ai_validator.llm import BaseLLMProvider, get_provider, provider_for
from ai_validator.schemas import Source


class LLMBackedCheck:
    """Base for checks that send one prompt to a named provider."""

    MAX_SOURCE_CHARS = 3000
    MAX_TOKENS = 500
    TEMPERATURE = 0.1

    def __init__(self, settings=None):
        self.settings = settings or get_settings()
        self._providers: Dict[Tuple[str, str], BaseLLMProvider] = {}

    def provider(self, name: str, model: str = None) -> BaseLLMProvider:
        """Lazy provider client per (provider, model)."""
        selection = provider_for(self.settings, name, model)
        key = (selection.name, selection.model)
        if key not in self._providers:
            self._providers[key] = get_provider(selection, self.settings)
        return self._providers[key]

    def format_sources(self, sources: List[Source]) -> str:
        return "\n\n".join(
            f"Source {i + 1} ({s.label}):\n{s.content[:self.MAX_SOURCE_CHARS]}"
            for i, s in enumerate(sources)
        )
