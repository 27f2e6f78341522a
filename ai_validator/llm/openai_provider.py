"""
LLM - OpenAI Provider

OpenAI chat completions provider implementation.
"""

from typing import List, Dict
import httpx

from ai_validator.exceptions import ProviderError
from ai_validator.llm.base_provider import BaseLLMProvider


class OpenAIProvider(BaseLLMProvider):
    """OpenAI provider."""

    name = "openai"

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
        """Generate chat completion using OpenAI API."""
        url = f"{self.base_url}/chat/completions"

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"OpenAI request failed: {e}",
                provider=self.name,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"OpenAI request failed: {e}", provider=self.name) from e

        try:
            return data["choices"][0]["message"]["content"] or "{}"
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Malformed OpenAI response", provider=self.name) from e
