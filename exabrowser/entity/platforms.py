"""Platform classification and username extraction from profile URLs."""

from __future__ import annotations

import re
from urllib.parse import urlparse

# Order matters: first hostname fragment that matches wins.
_PLATFORM_HOSTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Twitter/X", ("twitter.com", "x.com")),
    ("LinkedIn", ("linkedin.com",)),
    ("YouTube", ("youtube.com",)),
    ("Reddit", ("reddit.com",)),
    ("Medium", ("medium.com",)),
    ("GitHub", ("github.com",)),
    ("TikTok", ("tiktok.com",)),
    ("Instagram", ("instagram.com",)),
    ("Facebook", ("facebook.com",)),
)

# Domains searched when gathering an entity's own posts, per platform.
PLATFORM_DOMAINS: dict[str, tuple[str, ...]] = {
    "Twitter/X": ("x.com", "twitter.com"),
    "LinkedIn": ("linkedin.com",),
    "YouTube": ("youtube.com",),
    "GitHub": ("github.com",),
    "Medium": ("medium.com",),
    "Reddit": ("reddit.com",),
}

_FIRST_SEGMENT_RE = re.compile(r"^/([^/]+)")
_LINKEDIN_RE = re.compile(r"^/(?:in|company)/([^/]+)")
_YOUTUBE_LEGACY_RE = re.compile(r"^/(?:c|user)/([^/]+)")
_REDDIT_RE = re.compile(r"^/u/([^/]+)")
_MEDIUM_RE = re.compile(r"^/@([^/]+)")


def _hostname_matches(hostname: str, domain: str) -> bool:
    return hostname == domain or hostname.endswith("." + domain)


def identify_platform(url: str) -> str:
    """Map a profile URL to its platform display name, or "Other"."""
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return "Other"
    for platform, domains in _PLATFORM_HOSTS:
        if any(_hostname_matches(hostname, domain) for domain in domains):
            return platform
    return "Other"


def extract_username(url: str, platform: str) -> str | None:
    """Pull a username out of a profile URL where the URL shape is known."""
    try:
        path = urlparse(url).path
    except ValueError:
        return None

    key = platform.lower()
    if key in ("twitter", "x", "twitter/x"):
        match = _FIRST_SEGMENT_RE.match(path)
        return match.group(1) if match else None
    if key == "linkedin":
        match = _LINKEDIN_RE.match(path)
        return match.group(1) if match else None
    if key == "youtube":
        match = _YOUTUBE_LEGACY_RE.match(path) or _FIRST_SEGMENT_RE.match(path)
        if not match:
            return None
        return match.group(1).lstrip("@") or None
    if key == "reddit":
        match = _REDDIT_RE.match(path)
        return match.group(1) if match else None
    if key == "medium":
        match = _MEDIUM_RE.match(path)
        return match.group(1) if match else None
    return None
