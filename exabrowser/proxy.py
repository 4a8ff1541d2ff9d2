"""HTML page proxy for the embedded browser."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlparse

import httpx
from loguru import logger

from exabrowser.config.schema import ProxyConfig
from exabrowser.errors import InputError, ProxyError

_HEAD_RE = re.compile(r"<head>", re.IGNORECASE)

FRAME_HEADERS = {
    "Content-Type": "text/html; charset=utf-8",
    "X-Frame-Options": "ALLOWALL",
    "Content-Security-Policy": "",
}


@dataclass(slots=True)
class ProxiedPage:
    url: str
    html: str
    headers: dict[str, str] = field(default_factory=lambda: dict(FRAME_HEADERS))


def validate_url(url: str | None) -> str:
    text = (url or "").strip()
    if not text:
        raise InputError("URL parameter is required")
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InputError(f"Invalid URL: {text}")
    return text


def inject_base_tag(html: str, url: str) -> str:
    """Insert a <base> tag so relative links resolve against the origin."""
    parsed = urlparse(url)
    base_tag = f'<base href="{parsed.scheme}://{parsed.netloc}">'
    return _HEAD_RE.sub(lambda _: f"<head>{base_tag}", html, count=1)


async def fetch_proxied_page(url: str, config: ProxyConfig | None = None) -> ProxiedPage:
    """Fetch an HTML page and rewrite it for framing inside the app."""
    cfg = config or ProxyConfig()
    target = validate_url(url)

    try:
        async with httpx.AsyncClient(follow_redirects=True) as client:
            response = await client.get(
                target,
                headers={
                    "User-Agent": cfg.user_agent,
                    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
                    "Accept-Language": "en-US,en;q=0.5",
                    "Cache-Control": "no-cache",
                },
                timeout=cfg.timeout,
            )
    except httpx.HTTPError as e:
        logger.error("Proxy fetch failed for {}: {}", target, e)
        raise ProxyError(f"Failed to proxy URL: {e}", status=500) from e

    if response.status_code >= 400:
        raise ProxyError(
            f"Failed to fetch URL: {response.status_code} {response.reason_phrase}",
            status=response.status_code,
        )

    content_type = response.headers.get("content-type", "")
    if "text/html" not in content_type:
        raise InputError("Only HTML content can be proxied")

    return ProxiedPage(url=target, html=inject_base_tag(response.text, target))
