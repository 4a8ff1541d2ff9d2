"""Mention summarizer: flatten, sort, truncate and ask a chat model for themes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import json_repair
from loguru import logger

from exabrowser.errors import InputError
from exabrowser.providers.models import ProviderRecord, TextClient, newest_first

SYSTEM_PROMPT = (
    "You are an expert at analyzing social media and news content to identify themes, "
    "trends, and key quotes. You extract insights about what people or companies are discussing."
)

USER_PROMPT_TEMPLATE = """Analyze the following content about "{entity_name}" from the last {days} days. Provide:

1. **Hottest Topics**: Identify the 3-5 most frequently discussed themes with approximate mention counts
2. **Key Quotes**: Extract 3-5 notable quotes from {entity_name} (if available in the content)
3. **Theme Evolution**: Show how themes have changed over time (e.g., "Last 7 days", "7-14 days ago", etc.)

Content to analyze:
{context}

Respond in JSON format:
{{
  "hottestTopics": [
    {{"theme": "Topic name", "count": 5, "period": "Last 7 days"}}
  ],
  "keyQuotes": ["Quote 1", "Quote 2"],
  "themeTimeline": [
    {{"period": "Last 7 days", "themes": ["Theme 1", "Theme 2"]}},
    {{"period": "7-14 days ago", "themes": ["Theme 3"]}}
  ]
}}"""


@dataclass(slots=True)
class MentionSummary:
    hottest_topics: list[dict[str, Any]] = field(default_factory=list)
    key_quotes: list[str] = field(default_factory=list)
    theme_timeline: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hottestTopics": self.hottest_topics,
            "keyQuotes": self.key_quotes,
            "themeTimeline": self.theme_timeline,
        }


def flatten_results(results: Mapping[str, list[ProviderRecord]]) -> list[ProviderRecord]:
    """Merge every channel's records into one list, newest first."""
    flat: list[ProviderRecord] = []
    for records in results.values():
        flat.extend(records)
    return newest_first(flat)


def _list_field(data: Any, key: str) -> list[Any]:
    if not isinstance(data, dict):
        return []
    value = data.get(key)
    return value if isinstance(value, list) else []


class MentionSummarizer:
    """Summarize recent mentions of an entity with a text-generation provider."""

    def __init__(
        self,
        text_client: TextClient,
        *,
        max_items: int = 30,
        excerpt_chars: int = 200,
        temperature: float = 0.7,
        max_tokens: int = 1500,
    ):
        self.text_client = text_client
        self.max_items = max_items
        self.excerpt_chars = excerpt_chars
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_context(self, records: list[ProviderRecord]) -> str:
        lines: list[str] = []
        for idx, record in enumerate(records[: self.max_items], start=1):
            published = record.published_at()
            stamp = published.date().isoformat() if published else "Unknown date"
            excerpt = (record.text or "")[: self.excerpt_chars]
            lines.append(f"[{idx}] {stamp} - {record.title}\n{excerpt}")
        return "\n\n".join(lines)

    def build_messages(self, records: list[ProviderRecord], entity_name: str, days: int) -> list[dict[str, str]]:
        prompt = USER_PROMPT_TEMPLATE.format(
            entity_name=entity_name,
            days=days,
            context=self.build_context(records),
        )
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

    async def summarize(
        self,
        results: Mapping[str, list[ProviderRecord]],
        entity_name: str,
        days: int = 30,
    ) -> MentionSummary:
        if not results or not any(results.values()):
            raise InputError("No results to analyze")

        records = flatten_results(results)
        messages = self.build_messages(records, entity_name, days)
        reply = await self.text_client.complete(
            messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            json_mode=True,
        )

        try:
            data = json_repair.loads(reply)
        except Exception as e:
            logger.warning("Summary reply is not JSON, returning empty summary: {}", e)
            data = {}
        if not isinstance(data, dict):
            logger.warning("Summary reply has unexpected type: {}", type(data).__name__)

        return MentionSummary(
            hottest_topics=_list_field(data, "hottestTopics"),
            key_quotes=_list_field(data, "keyQuotes"),
            theme_timeline=_list_field(data, "themeTimeline"),
        )
