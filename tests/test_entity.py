from datetime import date

import pytest

from exabrowser.entity import (
    EntityResolver,
    SocialProfile,
    extract_username,
    fetch_recents,
    fetch_socials,
    identify_platform,
)
from exabrowser.entity.socials import build_domain_filters
from exabrowser.errors import InputError, ProviderError
from exabrowser.providers.models import ProviderRecord


class QueryRoutedClient:
    """Answers by the first registered substring found in the query."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls: list[tuple[str, dict]] = []

    async def search(self, query: str, **params) -> list[ProviderRecord]:
        self.calls.append((query, params))
        for needle, outcome in self.routes.items():
            if needle in query:
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        return []


@pytest.mark.parametrize(
    ("url", "platform"),
    [
        ("https://twitter.com/exa", "Twitter/X"),
        ("https://x.com/exa", "Twitter/X"),
        ("https://www.linkedin.com/company/exa", "LinkedIn"),
        ("https://m.youtube.com/@exa", "YouTube"),
        ("https://old.reddit.com/u/exa", "Reddit"),
        ("https://medium.com/@exa", "Medium"),
        ("https://github.com/exa-labs", "GitHub"),
        ("https://www.tiktok.com/@exa", "TikTok"),
        ("https://instagram.com/exa", "Instagram"),
        ("https://facebook.com/exa", "Facebook"),
        ("https://box.com/exa", "Other"),
    ],
)
def test_identify_platform(url: str, platform: str) -> None:
    assert identify_platform(url) == platform


@pytest.mark.parametrize(
    ("url", "platform", "username"),
    [
        ("https://x.com/exa_labs/status/1", "Twitter/X", "exa_labs"),
        ("https://www.linkedin.com/in/jane-doe", "LinkedIn", "jane-doe"),
        ("https://www.linkedin.com/company/exa", "LinkedIn", "exa"),
        ("https://www.linkedin.com/posts/123", "LinkedIn", None),
        ("https://youtube.com/@exa", "YouTube", "exa"),
        ("https://youtube.com/c/ExaChannel", "YouTube", "ExaChannel"),
        ("https://youtube.com/user/legacy", "YouTube", "legacy"),
        ("https://reddit.com/u/bee_fan", "Reddit", "bee_fan"),
        ("https://reddit.com/r/bees", "Reddit", None),
        ("https://medium.com/@writer/post", "Medium", "writer"),
        ("https://github.com/exa-labs", "GitHub", None),
        ("https://x.com/", "Twitter/X", None),
    ],
)
def test_extract_username(url: str, platform: str, username: str | None) -> None:
    assert extract_username(url, platform) == username


@pytest.mark.asyncio
async def test_resolver_runs_all_three_lookups() -> None:
    client = QueryRoutedClient(
        {
            "wikipedia page": [
                ProviderRecord(
                    title="Exa (company) - Wikipedia",
                    url="https://en.wikipedia.org/wiki/Exa",
                    text="Exa is a search engine built for AIs.\n\nHistory follows.",
                )
            ],
            "official website": [ProviderRecord(title="Exa", url="https://exa.ai")],
            "twitter profile": [ProviderRecord(title="Exa", url="https://x.com/ExaAILabs")],
            "github profile": [ProviderRecord(title="exa-labs", url="https://github.com/exa-labs")],
            "linkedin profile": ProviderError("exa search failed: 500"),
        }
    )

    entity = await EntityResolver(client).resolve("  Exa ")

    assert entity.name == "Exa (company)"
    assert entity.description == "Exa is a search engine built for AIs."
    assert entity.website == "https://exa.ai"
    assert [p.to_dict() for p in entity.social_profiles] == [
        {"platform": "Twitter/X", "url": "https://x.com/ExaAILabs", "username": "ExaAILabs"},
        {"platform": "GitHub", "url": "https://github.com/exa-labs"},
    ]

    wiki_query, wiki_params = client.calls[0]
    assert wiki_query == "Exa wikipedia page"
    assert wiki_params == {
        "type": "keyword",
        "includeDomains": ["wikipedia.org"],
        "numResults": 1,
        "text": True,
    }
    assert len(client.calls) == 7


@pytest.mark.asyncio
async def test_resolver_degrades_when_every_lookup_fails() -> None:
    client = QueryRoutedClient({"": RuntimeError("offline")})
    entity = await EntityResolver(client).resolve("Save the Bees")

    assert entity.to_dict() == {
        "name": "Save the Bees",
        "description": "",
        "socialProfiles": [],
    }


@pytest.mark.asyncio
async def test_resolver_truncates_description() -> None:
    client = QueryRoutedClient(
        {"wikipedia page": [ProviderRecord(title="Bee", url="https://w/bee", text="x" * 500)]}
    )
    entity = await EntityResolver(client).resolve("bee")
    assert len(entity.description) == 300


@pytest.mark.asyncio
async def test_resolver_keeps_query_when_wikipedia_hit_has_no_title() -> None:
    hit = ProviderRecord.from_dict({"url": "https://en.wikipedia.org/wiki/Exa", "text": "Exa is a search engine."})
    client = QueryRoutedClient({"wikipedia page": [hit]})

    entity = await EntityResolver(client).resolve("Exa")

    assert entity.name == "Exa"
    assert entity.description == "Exa is a search engine."


@pytest.mark.asyncio
async def test_resolver_rejects_empty_query() -> None:
    client = QueryRoutedClient({})
    with pytest.raises(InputError):
        await EntityResolver(client).resolve("  ")
    assert client.calls == []


@pytest.mark.asyncio
async def test_fetch_socials_groups_by_platform() -> None:
    calls: list[dict] = []

    class DomainClient:
        async def search(self, query, **params):
            calls.append(params)
            domains = params.get("includeDomains") or []
            if "github.com" in domains:
                raise ProviderError("exa search failed: timeout")
            if "youtube.com" in domains:
                return [ProviderRecord(title="Video", url="https://youtube.com/watch?v=1")]
            return []

    payload = await fetch_socials(DomainClient(), "Exa")

    assert payload == {
        "results": {"YouTube": [{"title": "Video", "url": "https://youtube.com/watch?v=1"}]},
        "errors": {"GitHub": "exa search failed: timeout"},
    }
    assert len(calls) == 7
    news = next(p for p in calls if p.get("category") == "news")
    assert news == {"type": "auto", "numResults": 10, "text": True, "category": "news"}


def test_build_domain_filters_skips_unknown_platforms() -> None:
    profiles = [
        SocialProfile(platform="Twitter/X", url="https://x.com/a", username="a"),
        SocialProfile(platform="Instagram", url="https://instagram.com/a"),
        SocialProfile(platform="GitHub", url="https://github.com/a"),
    ]
    assert build_domain_filters(profiles) == {
        "Twitter/X": ["x.com", "twitter.com"],
        "GitHub": ["github.com"],
    }


@pytest.mark.asyncio
async def test_fetch_recents_uses_username_and_date_filter() -> None:
    calls: list[tuple[str, dict]] = []

    class RecentsClient:
        async def search(self, query, **params):
            calls.append((query, params))
            return [
                ProviderRecord(title="old", url="https://x.com/a/1", published_date="2024-01-01"),
                ProviderRecord(title="undated", url="https://x.com/a/2"),
                ProviderRecord(title="new", url="https://x.com/a/3", published_date="2024-06-01"),
            ]

    profiles = [
        SocialProfile(platform="Twitter/X", url="https://x.com/a", username="a"),
        SocialProfile(platform="LinkedIn", url="https://linkedin.com/feed"),
    ]
    payload = await fetch_recents(
        RecentsClient(), "Exa", profiles, days=7, today=date(2024, 6, 8)
    )

    queries = dict((params["includeDomains"][0], query) for query, params in calls)
    assert queries == {"x.com": "from:a OR @a OR Exa", "linkedin.com": "Exa"}
    assert all(params["startPublishedDate"] == "2024-06-01" for _, params in calls)
    assert [r["title"] for r in payload["results"]["Twitter/X"]] == ["new", "old", "undated"]
    assert "errors" not in payload


@pytest.mark.asyncio
async def test_fetch_recents_requires_entity_name() -> None:
    with pytest.raises(InputError):
        await fetch_recents(QueryRoutedClient({}), "", [])
