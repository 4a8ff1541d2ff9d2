"""Entity resolution and social footprint lookups."""

from exabrowser.entity.platforms import extract_username, identify_platform
from exabrowser.entity.resolver import Entity, EntityResolver, SocialProfile
from exabrowser.entity.socials import fetch_recents, fetch_socials

__all__ = [
    "Entity",
    "EntityResolver",
    "SocialProfile",
    "extract_username",
    "fetch_recents",
    "fetch_socials",
    "identify_platform",
]
