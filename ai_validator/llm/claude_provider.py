"""
LLM - Claude Provider

Anthropic Messages API provider implementation.
"""

from typing import List, Dict
import httpx

from ai_validator.exceptions import ProviderError
from ai_validator.llm.base_provider import BaseLLMProvider


ANTHROPIC_VERSION = "2023-06-01"


class ClaudeProvider(BaseLLMProvider):
    """Anthropic Claude provider."""

    name = "claude"

    def __init__(self, api_key: str, model: str, base_url: str, timeout_ms: int = 30000):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout_ms / 1000

    async def chat(
        self,
        messages: List[Dict[str, str]],
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """Generate chat completion using the Messages API."""
        url = f"{self.base_url}/messages"

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

        # System prompts go in a top-level field, not in messages
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        payload = {
            "model": self.model,
            "messages": [m for m in messages if m["role"] != "system"],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if system:
            payload["system"] = system

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"Claude request failed: {e}",
                provider=self.name,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Claude request failed: {e}", provider=self.name) from e

        try:
            block = data["content"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Malformed Claude response", provider=self.name) from e

        if block.get("type") != "text":
            return "{}"
        return block.get("text", "{}")
