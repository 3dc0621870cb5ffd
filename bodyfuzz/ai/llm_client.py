"""LLM client supporting multiple providers."""

import logging
from typing import Optional

import httpx

from bodyfuzz.config import get_api_key

logger = logging.getLogger(__name__)


class LLMClient:
    """Calls LLM APIs. Supports Ollama, OpenAI, Groq, Anthropic."""

    def __init__(
        self,
        provider: Optional[str] = None,
        api_key: str = "",
        base_url: str = "",
        model: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if provider is None:
            provider, api_key, base_url, model = get_api_key()

        self.provider = provider
        self.api_key = api_key or ""
        self.base_url = (base_url or "").rstrip("/")
        self.model = model or ""
        self.transport = transport

    @property
    def available(self) -> bool:
        return self.provider is not None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=120.0, transport=self.transport)

    async def chat(self, system: str, user: str, temperature: float = 0.7) -> Optional[str]:
        """Send a chat completion request. Returns None when the call fails."""
        if not self.available:
            return None

        if self.provider == "anthropic":
            return await self._call_anthropic(system, user, temperature)
        # Ollama, OpenAI, Groq — all OpenAI-compatible
        return await self._call_openai_compat(system, user, temperature)

    async def _call_openai_compat(self, system: str, user: str, temp: float) -> Optional[str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temp,
            "top_p": 0.95,
            "max_tokens": 2048,
        }

        async with self._client() as client:
            try:
                resp = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=payload,
                )
                resp.raise_for_status()
                return resp.json()["choices"][0]["message"]["content"]
            except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
                logger.debug("%s chat call failed: %s", self.provider, e)
                return None

    async def _call_anthropic(self, system: str, user: str, temp: float) -> Optional[str]:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
        }
        payload = {
            "model": self.model,
            "max_tokens": 2048,
            "system": system,
            "messages": [{"role": "user", "content": user}],
            "temperature": temp,
        }

        async with self._client() as client:
            try:
                resp = await client.post(
                    f"{self.base_url}/messages",
                    headers=headers,
                    json=payload,
                )
                resp.raise_for_status()
                return resp.json()["content"][0]["text"]
            except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
                logger.debug("anthropic chat call failed: %s", e)
                return None
