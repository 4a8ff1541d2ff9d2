"""Framework-agnostic JSON request handlers.

Each handler takes an already-decoded JSON payload and returns a
``(status, body)`` pair that a hosting web framework can serialize as-is.
Provider clients are built from config unless a test double is injected.
"""

from __future__ import annotations

import json
from typing import Any, Awaitable, Callable

from loguru import logger

from exabrowser.aggregator import Aggregator
from exabrowser.config.schema import Config
from exabrowser.entity import EntityResolver, SocialProfile, fetch_recents, fetch_socials
from exabrowser.entity.socials import DEFAULT_RECENT_DAYS
from exabrowser.errors import ConfigurationError, InputError, ProxyError
from exabrowser.mentions import fetch_mentions
from exabrowser.providers import ExaClient, ProviderRecord, SearchClient, TextClient, TextGenerationClient
from exabrowser.proxy import fetch_proxied_page
from exabrowser.summary import MentionSummarizer

Response = tuple[int, dict[str, Any]]


def parse_body(raw: str | bytes) -> Any:
    """Decode a raw request body, raising InputError on malformed JSON."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InputError("Invalid JSON body.") from e


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise InputError("Invalid JSON body.")
    return payload


def _ensure_configured(client: Any) -> None:
    check = getattr(client, "ensure_configured", None)
    if callable(check):
        check()


def _search_client(config: Config | None, search_client: SearchClient | None) -> SearchClient:
    client = search_client or ExaClient((config or Config()).providers.exa)
    _ensure_configured(client)
    return client


def _days_from_range(value: Any) -> int:
    if value is None:
        return DEFAULT_RECENT_DAYS
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise InputError("dateRange must be a pair of integers")
    return value[1]


async def _respond(
    action: Callable[[], Awaitable[dict[str, Any]]],
    *,
    failure: str,
) -> Response:
    try:
        return 200, await action()
    except InputError as e:
        return 400, {"error": str(e)}
    except ConfigurationError as e:
        logger.error("Configuration error: {}", e)
        return 500, {"error": str(e)}
    except Exception as e:
        logger.exception("{}: {}", failure, e)
        return 500, {"error": failure, "details": str(e)}


async def handle_search(
    payload: Any,
    config: Config | None = None,
    *,
    search_client: SearchClient | None = None,
) -> Response:
    """Request ``{query, mode?, resultTypes?, options?}`` -> ``{mode, results, errors?}``."""

    async def action() -> dict[str, Any]:
        client = _search_client(config, search_client)
        body = _require_object(payload)

        query = body.get("query")
        result_types = body.get("resultTypes")
        options = body.get("options")
        if result_types is not None and (
            not isinstance(result_types, list) or not all(isinstance(t, str) for t in result_types)
        ):
            raise InputError("resultTypes must be a list of strings")
        if options is not None and not isinstance(options, dict):
            raise InputError("options must be an object")

        response = await Aggregator(client).aggregate(
            query if isinstance(query, str) else "",
            mode=body.get("mode") if isinstance(body.get("mode"), str) else None,
            channels=result_types or None,
            options=options,
        )
        return response.to_dict()

    return await _respond(action, failure="Failed to fetch results from Exa.")


async def handle_entity_search(
    payload: Any,
    config: Config | None = None,
    *,
    search_client: SearchClient | None = None,
) -> Response:
    async def action() -> dict[str, Any]:
        client = _search_client(config, search_client)
        query = _require_object(payload).get("query")
        entity = await EntityResolver(client).resolve(query if isinstance(query, str) else "")
        return {"entity": entity.to_dict()}

    return await _respond(action, failure="Failed to search for entity")


async def handle_entity_socials(
    payload: Any,
    config: Config | None = None,
    *,
    search_client: SearchClient | None = None,
) -> Response:
    async def action() -> dict[str, Any]:
        client = _search_client(config, search_client)
        name = _require_object(payload).get("entityName")
        return await fetch_socials(client, name if isinstance(name, str) else "")

    return await _respond(action, failure="Failed to fetch socials")


async def handle_entity_recents(
    payload: Any,
    config: Config | None = None,
    *,
    search_client: SearchClient | None = None,
) -> Response:
    async def action() -> dict[str, Any]:
        client = _search_client(config, search_client)
        body = _require_object(payload)
        name = body.get("entityName")
        raw_profiles = body.get("socialProfiles") or []
        if not isinstance(raw_profiles, list):
            raise InputError("socialProfiles must be a list")
        try:
            profiles = [SocialProfile.from_dict(p) for p in raw_profiles]
        except ValueError as e:
            raise InputError(str(e)) from e
        return await fetch_recents(
            client,
            name if isinstance(name, str) else "",
            profiles,
            days=_days_from_range(body.get("dateRange")),
        )

    return await _respond(action, failure="Failed to fetch recents")


def _parse_grouped_results(raw: Any) -> dict[str, list[ProviderRecord]]:
    if not isinstance(raw, dict) or not raw:
        raise InputError("No results to analyze")
    grouped: dict[str, list[ProviderRecord]] = {}
    try:
        for channel, records in raw.items():
            if not isinstance(records, list):
                raise ValueError(f"results for {channel} must be a list")
            grouped[channel] = [ProviderRecord.from_dict(r) for r in records]
    except ValueError as e:
        raise InputError(str(e)) from e
    return grouped


async def handle_summary(
    payload: Any,
    config: Config | None = None,
    *,
    text_client: TextClient | None = None,
) -> Response:
    cfg = config or Config()

    async def action() -> dict[str, Any]:
        client = text_client or TextGenerationClient(cfg.chat_provider())
        _ensure_configured(client)
        body = _require_object(payload)
        results = _parse_grouped_results(body.get("results"))
        name = body.get("entityName")
        summarizer = MentionSummarizer(
            client,
            max_items=cfg.summary.max_items,
            excerpt_chars=cfg.summary.excerpt_chars,
            temperature=cfg.summary.temperature,
            max_tokens=cfg.summary.max_tokens,
        )
        summary = await summarizer.summarize(
            results,
            name if isinstance(name, str) else "",
            days=_days_from_range(body.get("dateRange")),
        )
        return {"summary": summary.to_dict()}

    return await _respond(action, failure="Failed to generate summary")


async def handle_mentions(
    config: Config | None = None,
    *,
    search_client: SearchClient | None = None,
) -> Response:
    """Mentions never fail outward: any problem yields an empty list."""
    try:
        client = _search_client(config, search_client)
    except ConfigurationError:
        return 200, {"mentions": []}
    mentions = await fetch_mentions(client)
    return 200, {"mentions": [m.to_dict() for m in mentions]}


async def handle_proxy(url: str | None, config: Config | None = None) -> tuple[int, Any, dict[str, str]]:
    """Return ``(status, html_or_error_body, headers)`` for the page proxy."""
    try:
        page = await fetch_proxied_page(url or "", (config or Config()).proxy)
    except InputError as e:
        return 400, {"error": str(e)}, {}
    except ProxyError as e:
        return e.status, {"error": str(e)}, {}
    return 200, page.html, page.headers
