"""OpenAI-compatible chat completions adapter (Groq, Cerebras)."""

from typing import Any

import httpx
from loguru import logger

from exabrowser.config.schema import ChatProviderConfig
from exabrowser.errors import ConfigurationError, ProviderError


class TextGenerationClient:
    """Text-generation client for any OpenAI-compatible chat endpoint."""

    def __init__(self, config: ChatProviderConfig):
        self.config = config

    @property
    def name(self) -> str:
        return self.config.DISPLAY_NAME or "LLM"

    def ensure_configured(self) -> None:
        if not self.config.resolved_api_key():
            env_key = self.config.ENV_KEY or "API key"
            raise ConfigurationError(f"{env_key} not configured")

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Send a chat completion request and return the first choice's text."""
        self.ensure_configured()
        body: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        url = self.config.base_url.rstrip("/") + "/chat/completions"
        logger.debug("{} completion: model={} messages={}", self.name, self.config.model, len(messages))
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url,
                    json=body,
                    headers={
                        "Content-Type": "application/json",
                        "Authorization": f"Bearer {self.config.resolved_api_key()}",
                    },
                    timeout=self.config.timeout,
                )
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} API request failed: {e}") from e

        if response.status_code >= 400:
            raise ProviderError(f"{self.name} API error: {response.status_code} - {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"{self.name} API returned invalid JSON: {e}") from e

        content = None
        choices = data.get("choices") if isinstance(data, dict) else None
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") or {}
            content = message.get("content")
        if not content:
            raise ProviderError(f"No response from {self.name} API")
        return content
