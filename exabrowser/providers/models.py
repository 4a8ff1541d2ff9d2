"""Shared provider models and the narrow interfaces services depend on."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol


def _normalize_date(value: Any) -> str | None:
    # Numeric timestamps are epoch milliseconds.
    if isinstance(value, str):
        return value or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            return None
    return None


@dataclass(slots=True)
class ProviderRecord:
    """Normalized search-and-contents result item."""

    title: str
    url: str
    text: str | None = None
    author: str | None = None
    published_date: str | None = None
    id: str | None = None
    score: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProviderRecord":
        if not isinstance(data, dict):
            raise ValueError("result item must be an object")
        score = data.get("score")
        text = data.get("text")
        return cls(
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            text=text if isinstance(text, str) else None,
            author=data.get("author") or None,
            published_date=_normalize_date(data.get("publishedDate") or data.get("published_date")),
            id=data.get("id"),
            score=float(score) if isinstance(score, (int, float)) else None,
        )

    def published_at(self) -> datetime | None:
        """Parse the publish timestamp, or None when missing or unparseable."""
        if not self.published_date:
            return None
        try:
            value = datetime.fromisoformat(self.published_date.replace("Z", "+00:00"))
        except (TypeError, ValueError, AttributeError):
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "url": self.url}
        if self.id is not None:
            payload["id"] = self.id
        if self.text is not None:
            payload["text"] = self.text
        if self.author is not None:
            payload["author"] = self.author
        if self.published_date is not None:
            payload["publishedDate"] = self.published_date
        if self.score is not None:
            payload["score"] = self.score
        return payload


class SearchClient(Protocol):
    """search(query, filters) -> records."""

    async def search(self, query: str, **params: Any) -> list[ProviderRecord]: ...


class TextClient(Protocol):
    """complete(messages) -> text."""

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str: ...


def newest_first(records: list[ProviderRecord]) -> list[ProviderRecord]:
    """Stable sort by publish time, newest first; undated records sort last."""

    def key(record: ProviderRecord) -> float:
        published = record.published_at()
        return published.timestamp() if published else float("-inf")

    return sorted(records, key=key, reverse=True)
