"""Aggregator: fan a query out across channels and merge the outcomes."""

from __future__ import annotations

from typing import Any, Awaitable, Iterable, Mapping

from loguru import logger

from exabrowser.aggregator.channels import DEFAULT_CHANNEL, SEARCH_CHANNELS, ChannelConfig
from exabrowser.aggregator.fanout import ChannelOutcome, gather_channels, partition_outcomes
from exabrowser.aggregator.models import AggregateResponse, SearchMode
from exabrowser.errors import InputError
from exabrowser.providers.models import ProviderRecord, SearchClient

_MODE_PARAMS: dict[str, dict[str, Any]] = {
    "fast": {"type": "fast", "livecrawl": "never"},
    "auto": {"type": "auto"},
}

# The query text is positional on every search client; options cannot replace it.
_RESERVED_OPTIONS = frozenset({"query"})


def normalize_mode(mode: str | None) -> SearchMode:
    """Anything other than "fast" is treated as "auto"."""
    return "fast" if (mode or "").strip().lower() == "fast" else "auto"


def build_channel_request(
    mode: SearchMode,
    config: ChannelConfig,
    options: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build provider params for one channel; caller options override defaults."""
    params: dict[str, Any] = dict(_MODE_PARAMS[mode])
    if config.include_domains:
        params["includeDomains"] = list(config.include_domains)
    if config.category:
        params["category"] = config.category
    params["numResults"] = config.num_results
    if config.needs_text:
        params["text"] = True
    if options:
        params.update((k, v) for k, v in options.items() if k not in _RESERVED_OPTIONS)
    return params


def _unique(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        ordered.append(name)
    return ordered


class Aggregator:
    """Issue one provider search per requested channel and merge the results."""

    def __init__(
        self,
        search_client: SearchClient,
        channels: Mapping[str, ChannelConfig] = SEARCH_CHANNELS,
    ):
        self.search_client = search_client
        self.channels = channels

    async def aggregate(
        self,
        query: str,
        *,
        mode: str | None = "auto",
        channels: Iterable[str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> AggregateResponse:
        text = (query or "").strip() if isinstance(query, str) else ""
        if not text:
            raise InputError("Provide a non-empty query.")

        selected_mode = normalize_mode(mode)
        requested = _unique(channels or [DEFAULT_CHANNEL])

        calls: dict[str, Awaitable[list[ProviderRecord]]] = {}
        unknown: list[ChannelOutcome] = []
        for name in requested:
            config = self.channels.get(name)
            if config is None:
                unknown.append(ChannelOutcome(channel=name, error=f"Unknown result type: {name}"))
                continue
            params = build_channel_request(selected_mode, config, options)
            calls[name] = self._search(text, params)

        logger.debug(
            "Aggregating {!r} mode={} channels={} unknown={}",
            text[:80],
            selected_mode,
            list(calls),
            [o.channel for o in unknown],
        )
        outcomes = await gather_channels(calls)
        results, errors = partition_outcomes(unknown + outcomes)

        if errors:
            logger.info("Aggregate for {!r}: {} channel(s) ok, {} failed", text[:80], len(results), len(errors))
        return AggregateResponse(mode=selected_mode, results=results, errors=errors)

    async def _search(self, text: str, params: dict[str, Any]) -> list[ProviderRecord]:
        # Errors raised while starting the call belong to this channel alone.
        return await self.search_client.search(text, **params)
