"""Entity social footprint: per-platform mentions and recent posts."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Awaitable, Iterable, Mapping

from loguru import logger

from exabrowser.aggregator.channels import PLATFORM_CHANNELS, ChannelConfig
from exabrowser.aggregator.fanout import gather_channels, partition_outcomes
from exabrowser.entity.platforms import PLATFORM_DOMAINS
from exabrowser.entity.resolver import SocialProfile
from exabrowser.errors import InputError
from exabrowser.providers.models import ProviderRecord, SearchClient, newest_first

RECENTS_PER_PLATFORM = 10
DEFAULT_RECENT_DAYS = 30


def _require_name(entity_name: str) -> str:
    name = (entity_name or "").strip() if isinstance(entity_name, str) else ""
    if not name:
        raise InputError("Entity name is required")
    return name


def _grouped_payload(
    results: dict[str, list[ProviderRecord]], errors: dict[str, str]
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "results": {k: [r.to_dict() for r in v] for k, v in results.items()}
    }
    if errors:
        payload["errors"] = errors
    return payload


async def fetch_socials(
    search_client: SearchClient,
    entity_name: str,
    platforms: Mapping[str, ChannelConfig] = PLATFORM_CHANNELS,
) -> dict[str, Any]:
    """Search every platform channel for the entity and group hits by platform."""
    name = _require_name(entity_name)

    calls: dict[str, Awaitable[list[ProviderRecord]]] = {}
    for platform, config in platforms.items():
        params: dict[str, Any] = {
            "type": "auto",
            "numResults": config.num_results,
            "text": True,
        }
        if config.include_domains:
            params["includeDomains"] = list(config.include_domains)
        if config.category:
            params["category"] = config.category
        calls[platform] = search_client.search(name, **params)

    results, errors = partition_outcomes(await gather_channels(calls))
    return _grouped_payload(results, errors)


def build_domain_filters(profiles: Iterable[SocialProfile]) -> dict[str, list[str]]:
    """Map each known platform among the profiles to the domains to search."""
    domain_map: dict[str, list[str]] = {}
    for profile in profiles:
        domains = PLATFORM_DOMAINS.get(profile.platform)
        if domains is None or profile.platform in domain_map:
            continue
        domain_map[profile.platform] = list(domains)
    return domain_map


async def fetch_recents(
    search_client: SearchClient,
    entity_name: str,
    social_profiles: Iterable[SocialProfile],
    *,
    days: int = DEFAULT_RECENT_DAYS,
    today: date | None = None,
) -> dict[str, Any]:
    """Gather recent posts from the entity's own platforms, newest first."""
    name = _require_name(entity_name)
    profiles = list(social_profiles)
    domain_map = build_domain_filters(profiles)
    start_date = ((today or date.today()) - timedelta(days=days)).isoformat()

    calls: dict[str, Awaitable[list[ProviderRecord]]] = {}
    for platform, domains in domain_map.items():
        profile = next((p for p in profiles if p.platform == platform), None)
        if profile is not None and profile.username:
            query = f"from:{profile.username} OR @{profile.username} OR {name}"
        else:
            query = name
        calls[platform] = search_client.search(
            query,
            type="auto",
            includeDomains=domains,
            numResults=RECENTS_PER_PLATFORM,
            text=True,
            startPublishedDate=start_date,
        )

    logger.debug("Recents for {!r} since {}: {}", name, start_date, list(calls))
    results, errors = partition_outcomes(await gather_channels(calls))
    results = {platform: newest_first(records) for platform, records in results.items()}
    return _grouped_payload(results, errors)
