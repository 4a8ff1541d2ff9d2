"""Aggregate response model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from exabrowser.providers.models import ProviderRecord

SearchMode = Literal["auto", "fast"]


@dataclass(slots=True)
class AggregateResponse:
    """Per-channel partitioned result of one multi-channel search."""

    mode: SearchMode
    results: dict[str, list[ProviderRecord]] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "mode": self.mode,
            "results": {
                channel: [record.to_dict() for record in records]
                for channel, records in self.results.items()
            },
        }
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload
