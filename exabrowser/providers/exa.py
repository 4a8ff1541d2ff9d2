"""Exa search-and-contents API adapter."""

from typing import Any

import httpx
from loguru import logger

from exabrowser.config.schema import ExaProviderConfig
from exabrowser.errors import ConfigurationError, ProviderError
from exabrowser.providers.models import ProviderRecord

# Exa nests these under "contents" on the search endpoint.
_CONTENT_PARAMS = ("text", "livecrawl", "highlights", "summary")

_PARAM_ALIASES = {
    "num_results": "numResults",
    "include_domains": "includeDomains",
    "exclude_domains": "excludeDomains",
    "start_published_date": "startPublishedDate",
    "end_published_date": "endPublishedDate",
}


def build_search_payload(query: str, params: dict[str, Any]) -> dict[str, Any]:
    """Translate flat search options into an Exa /search request body."""
    payload: dict[str, Any] = {"query": query}
    contents: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        key = _PARAM_ALIASES.get(key, key)
        if key in _CONTENT_PARAMS:
            contents[key] = value
        elif key == "contents" and isinstance(value, dict):
            contents.update(value)
        elif key == "includeDomains":
            payload[key] = [value] if isinstance(value, str) else list(value)
        else:
            payload[key] = value
    if contents:
        payload["contents"] = contents
    return payload


class ExaClient:
    """Content-search client backed by the Exa API."""

    def __init__(self, config: ExaProviderConfig | None = None):
        self.config = config or ExaProviderConfig()

    @property
    def api_key(self) -> str:
        return self.config.resolved_api_key()

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when no API key is available."""
        if not self.api_key:
            raise ConfigurationError("EXA_API_KEY not configured")

    async def search(self, query: str, **params: Any) -> list[ProviderRecord]:
        """Search with Exa and normalize results."""
        self.ensure_configured()
        payload = build_search_payload(query, params)
        url = self.config.base_url.rstrip("/") + "/search"
        logger.debug("Exa search: query={!r} params={}", query[:80], sorted(params))

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "x-api-key": self.api_key,
                    },
                    timeout=self.config.timeout,
                )
                response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"exa search failed: {e.response.status_code} {e.response.text[:200]}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(f"exa search failed: {e}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise ProviderError("exa search failed: malformed response (missing results)")
        try:
            return [ProviderRecord.from_dict(item) for item in results]
        except ValueError as e:
            raise ProviderError(f"exa search failed: {e}") from e
