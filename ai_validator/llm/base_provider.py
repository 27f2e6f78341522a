"""
LLM - Base Provider

Every check talks to a provider through complete(): one instruction
prompt, an optional system prompt, and free-form text back.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional


class BaseLLMProvider(ABC):
    """Chat-style provider; subclasses speak one vendor's wire format."""

    name: str = "base"

    async def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """
        Send a single user prompt, preceded by a system prompt if given.

        Raises:
            ProviderError: Transport failure or malformed vendor response
        """
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return await self.chat(messages, max_tokens=max_tokens, temperature=temperature)

    @abstractmethod
    async def chat(
        self,
        messages: List[Dict[str, str]],
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """Return the assistant text for a {"role", "content"} message list."""
