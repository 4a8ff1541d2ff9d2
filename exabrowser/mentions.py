"""Rotating social mentions ticker (X and Reddit)."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from itertools import zip_longest
from typing import Any
from urllib.parse import urlparse

from loguru import logger

from exabrowser.aggregator.fanout import gather_channels
from exabrowser.providers.models import ProviderRecord, SearchClient

SEED_QUERIES: tuple[str, ...] = (
    "AI for climate change conservation tracking planet",
    "we need better tools to monitor endangered species environment",
    "building AI to help save the planet conservation tech",
)

MENTIONS_PER_SOURCE = 8
EXCERPT_CHARS = 200

_MARKDOWN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"#{1,6}\s*"), ""),
    (re.compile(r"\*\*(.+?)\*\*"), r"\1"),
    (re.compile(r"\*(.+?)\*"), r"\1"),
    (re.compile(r"__(.+?)__"), r"\1"),
    (re.compile(r"_(.+?)_"), r"\1"),
    (re.compile(r"~~(.+?)~~"), r"\1"),
    (re.compile(r"`(.+?)`"), r"\1"),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"^>\s*", re.MULTILINE), ""),
    (re.compile(r"---+"), ""),
    (re.compile(r"\n{2,}"), " "),
    (re.compile(r"\n"), " "),
)

_SUBREDDIT_RE = re.compile(r"/r/([^/]+)")


@dataclass(slots=True)
class Mention:
    platform: str
    handle: str
    text: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"platform": self.platform, "handle": self.handle, "text": self.text, "url": self.url}


def strip_markdown(text: str) -> str:
    """Reduce markdown to a single line of plain text."""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def _twitter_handle(url: str) -> str:
    segments = urlparse(url).path.split("/")
    return f"@{segments[1]}" if len(segments) > 1 and segments[1] else "@unknown"


def _subreddit(url: str) -> str:
    match = _SUBREDDIT_RE.search(urlparse(url).path)
    return f"r/{match.group(1)}" if match else "r/environment"


def _excerpt(text: str) -> str:
    return strip_markdown(text)[:EXCERPT_CHARS].strip()


def _to_mentions(records: list[ProviderRecord] | None, *, reddit: bool) -> list[Mention]:
    mentions: list[Mention] = []
    for record in records or []:
        if reddit:
            snippet = _excerpt(record.text or record.title or "")
            handle = _subreddit(record.url)
            platform = "Reddit"
        else:
            snippet = _excerpt(record.text or "")
            handle = _twitter_handle(record.url)
            platform = "X"
        if snippet:
            mentions.append(Mention(platform=platform, handle=handle, text=snippet, url=record.url))
    return mentions


async def fetch_mentions(search_client: SearchClient, rng: random.Random | None = None) -> list[Mention]:
    """Fetch X and Reddit mentions concurrently and interleave them."""
    chooser = rng or random.Random()
    outcomes = await gather_channels(
        {
            "twitter": search_client.search(
                chooser.choice(SEED_QUERIES),
                type="auto",
                numResults=MENTIONS_PER_SOURCE,
                includeDomains=["x.com", "twitter.com"],
                text=True,
            ),
            "reddit": search_client.search(
                chooser.choice(SEED_QUERIES),
                type="auto",
                numResults=MENTIONS_PER_SOURCE,
                includeDomains=["reddit.com"],
                text=True,
            ),
        }
    )
    by_source = {outcome.channel: outcome for outcome in outcomes}
    if any(not outcome.ok for outcome in outcomes):
        logger.error(
            "Mentions fetch failed: {}",
            {name: o.error for name, o in by_source.items() if not o.ok},
        )
        return []

    twitter = _to_mentions(by_source["twitter"].records, reddit=False)
    reddit = _to_mentions(by_source["reddit"].records, reddit=True)

    interleaved: list[Mention] = []
    for tweet, post in zip_longest(twitter, reddit):
        if tweet is not None:
            interleaved.append(tweet)
        if post is not None:
            interleaved.append(post)
    return interleaved
