"""Settle-all fan-out/fan-in over independent channel calls."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Mapping

from loguru import logger

from exabrowser.providers.models import ProviderRecord


@dataclass(slots=True)
class ChannelOutcome:
    """Result of one channel call: records or an error message, never both."""

    channel: str
    records: list[ProviderRecord] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _error_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


async def gather_channels(
    calls: Mapping[str, Awaitable[list[ProviderRecord]]],
) -> list[ChannelOutcome]:
    """
    Await every channel call concurrently and capture each outcome.

    All awaitables are scheduled before any is awaited. A failing channel never
    cancels or blocks its siblings.
    """
    names = list(calls)
    settled = await asyncio.gather(*(calls[name] for name in names), return_exceptions=True)

    outcomes: list[ChannelOutcome] = []
    for name, result in zip(names, settled):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            logger.warning("Channel {} failed: {}", name, result)
            outcomes.append(ChannelOutcome(channel=name, error=_error_message(result)))
        else:
            outcomes.append(ChannelOutcome(channel=name, records=list(result or [])))
    return outcomes


def partition_outcomes(
    outcomes: list[ChannelOutcome],
) -> tuple[dict[str, list[ProviderRecord]], dict[str, str]]:
    """Split outcomes into non-empty results and errors; empty channels are dropped."""
    results: dict[str, list[ProviderRecord]] = {}
    errors: dict[str, str] = {}
    for outcome in outcomes:
        if outcome.error is not None:
            errors[outcome.channel] = outcome.error
        elif outcome.records:
            results[outcome.channel] = outcome.records
    return results, errors
