"""Resolve a free-text query to a named entity and its social profiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from exabrowser.aggregator.fanout import gather_channels
from exabrowser.entity.platforms import extract_username, identify_platform
from exabrowser.errors import InputError
from exabrowser.providers.models import SearchClient

WIKIPEDIA_DOMAIN = "wikipedia.org"
DESCRIPTION_CHARS = 300

# (query suffix, domains) per platform probed during resolution.
SOCIAL_PROBES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("twitter profile", ("twitter.com", "x.com")),
    ("linkedin profile", ("linkedin.com",)),
    ("youtube channel", ("youtube.com",)),
    ("github profile", ("github.com",)),
    ("instagram profile", ("instagram.com",)),
)


@dataclass(slots=True)
class SocialProfile:
    platform: str
    url: str
    username: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SocialProfile":
        if not isinstance(data, dict):
            raise ValueError("social profile must be an object")
        platform = str(data.get("platform", "")).strip()
        if not platform:
            raise ValueError("social profile platform is required")
        username = data.get("username")
        return cls(
            platform=platform,
            url=str(data.get("url", "")),
            username=str(username).strip() or None if username else None,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"platform": self.platform, "url": self.url}
        if self.username:
            payload["username"] = self.username
        return payload


@dataclass(slots=True)
class Entity:
    name: str
    description: str = ""
    website: str | None = None
    social_profiles: list[SocialProfile] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "description": self.description}
        if self.website:
            payload["website"] = self.website
        payload["socialProfiles"] = [p.to_dict() for p in self.social_profiles]
        return payload


class EntityResolver:
    """Three sequential lookups: encyclopedia entry, official site, social profiles."""

    def __init__(self, search_client: SearchClient):
        self.search_client = search_client

    async def resolve(self, query: str) -> Entity:
        text = (query or "").strip()
        if not text:
            raise InputError("Query is required")

        entity = Entity(name=text)
        await self._lookup_encyclopedia(text, entity)
        await self._lookup_website(text, entity)
        entity.social_profiles = await self._lookup_socials(text)
        logger.info(
            "Resolved {!r} -> {!r} ({} social profiles)",
            text,
            entity.name,
            len(entity.social_profiles),
        )
        return entity

    async def _lookup_encyclopedia(self, query: str, entity: Entity) -> None:
        try:
            hits = await self.search_client.search(
                f"{query} wikipedia page",
                type="keyword",
                includeDomains=[WIKIPEDIA_DOMAIN],
                numResults=1,
                text=True,
            )
        except Exception as e:
            logger.warning("Wikipedia lookup failed for {!r}: {}", query, e)
            return
        if not hits:
            return

        hit = hits[0]
        first_paragraph = (hit.text or "").split("\n\n")[0]
        entity.description = first_paragraph[:DESCRIPTION_CHARS]
        if hit.title:
            entity.name = hit.title.replace(" - Wikipedia", "")

    async def _lookup_website(self, query: str, entity: Entity) -> None:
        try:
            hits = await self.search_client.search(
                f"{query} official website",
                type="auto",
                numResults=1,
            )
        except Exception as e:
            logger.warning("Website lookup failed for {!r}: {}", query, e)
            return
        if hits:
            entity.website = hits[0].url or None

    async def _lookup_socials(self, query: str) -> list[SocialProfile]:
        outcomes = await gather_channels(
            {
                suffix: self.search_client.search(
                    f"{query} {suffix}",
                    type="keyword",
                    includeDomains=list(domains),
                    numResults=1,
                )
                for suffix, domains in SOCIAL_PROBES
            }
        )

        profiles: list[SocialProfile] = []
        for outcome in outcomes:
            if not outcome.records:
                continue
            url = outcome.records[0].url
            platform = identify_platform(url)
            profiles.append(
                SocialProfile(platform=platform, url=url, username=extract_username(url, platform))
            )
        return profiles
