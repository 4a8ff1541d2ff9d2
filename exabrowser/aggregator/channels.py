"""Static channel configuration tables."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class ChannelConfig:
    """Request shaping for one named result channel."""

    num_results: int
    include_domains: tuple[str, ...] | None = None
    category: str | None = None
    needs_text: bool = True


DEFAULT_CHANNEL = "general"

SEARCH_CHANNELS: Mapping[str, ChannelConfig] = MappingProxyType(
    {
        "general": ChannelConfig(num_results=10),
        "video": ChannelConfig(
            num_results=10,
            include_domains=("youtube.com", "vimeo.com", "tiktok.com"),
            needs_text=False,
        ),
        "social": ChannelConfig(
            num_results=10,
            include_domains=("x.com", "twitter.com", "reddit.com", "linkedin.com"),
        ),
        "news": ChannelConfig(num_results=10, category="news"),
        "developer": ChannelConfig(
            num_results=8,
            include_domains=("github.com", "stackoverflow.com", "dev.to"),
        ),
        "academic": ChannelConfig(num_results=8, category="research paper"),
    }
)

# Keyed by display platform name, used for an entity's social footprint.
PLATFORM_CHANNELS: Mapping[str, ChannelConfig] = MappingProxyType(
    {
        "YouTube": ChannelConfig(num_results=10, include_domains=("youtube.com",)),
        "Twitter/X": ChannelConfig(num_results=10, include_domains=("x.com", "twitter.com")),
        "LinkedIn": ChannelConfig(num_results=10, include_domains=("linkedin.com",)),
        "News": ChannelConfig(num_results=10, category="news"),
        "Reddit": ChannelConfig(num_results=10, include_domains=("reddit.com",)),
        "Medium": ChannelConfig(num_results=10, include_domains=("medium.com",)),
        "GitHub": ChannelConfig(num_results=5, include_domains=("github.com",)),
    }
)
