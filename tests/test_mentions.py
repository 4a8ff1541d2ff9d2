import random

import pytest

from exabrowser.mentions import fetch_mentions, strip_markdown
from exabrowser.providers.models import ProviderRecord


def test_strip_markdown_flattens_to_one_line() -> None:
    text = "# Title\n\n**Bold** and *italic* with [a link](https://x.y) and `code`\n- item\n> quote"
    assert strip_markdown(text) == "Title Bold and italic with a link and code item quote"


def test_strip_markdown_drops_images() -> None:
    assert strip_markdown("before ![alt](https://img.png) after") == "before  after"


class DomainClient:
    def __init__(self, twitter, reddit):
        self.twitter = twitter
        self.reddit = reddit
        self.queries: list[str] = []

    async def search(self, query, **params):
        self.queries.append(query)
        if "reddit.com" in params["includeDomains"]:
            if isinstance(self.reddit, Exception):
                raise self.reddit
            return self.reddit
        return self.twitter


@pytest.mark.asyncio
async def test_fetch_mentions_interleaves_sources() -> None:
    client = DomainClient(
        twitter=[
            ProviderRecord(title="t1", url="https://x.com/alice/status/1", text="**Save** bees"),
            ProviderRecord(title="t2", url="https://x.com/", text="second tweet"),
            ProviderRecord(title="t3", url="https://x.com/carol/status/3", text=""),
        ],
        reddit=[
            ProviderRecord(title="Reddit title", url="https://reddit.com/r/bees/comments/1"),
        ],
    )

    mentions = await fetch_mentions(client, rng=random.Random(0))

    assert [m.to_dict() for m in mentions] == [
        {"platform": "X", "handle": "@alice", "text": "Save bees", "url": "https://x.com/alice/status/1"},
        {
            "platform": "Reddit",
            "handle": "r/bees",
            "text": "Reddit title",
            "url": "https://reddit.com/r/bees/comments/1",
        },
        {"platform": "X", "handle": "@unknown", "text": "second tweet", "url": "https://x.com/"},
    ]
    assert len(client.queries) == 2


@pytest.mark.asyncio
async def test_fetch_mentions_returns_empty_on_failure() -> None:
    client = DomainClient(
        twitter=[ProviderRecord(title="t", url="https://x.com/a", text="hi")],
        reddit=RuntimeError("down"),
    )
    assert await fetch_mentions(client) == []


@pytest.mark.asyncio
async def test_reddit_without_subreddit_uses_default_handle() -> None:
    client = DomainClient(
        twitter=[],
        reddit=[ProviderRecord(title="t", url="https://reddit.com/user/x", text="long " * 100)],
    )
    mentions = await fetch_mentions(client)

    assert mentions[0].handle == "r/environment"
    assert len(mentions[0].text) <= 200
