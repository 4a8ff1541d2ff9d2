"""Multi-channel fan-out and result aggregation."""

from exabrowser.aggregator.channels import (
    DEFAULT_CHANNEL,
    PLATFORM_CHANNELS,
    SEARCH_CHANNELS,
    ChannelConfig,
)
from exabrowser.aggregator.fanout import ChannelOutcome, gather_channels, partition_outcomes
from exabrowser.aggregator.models import AggregateResponse
from exabrowser.aggregator.service import Aggregator, build_channel_request, normalize_mode

__all__ = [
    "Aggregator",
    "AggregateResponse",
    "ChannelConfig",
    "ChannelOutcome",
    "DEFAULT_CHANNEL",
    "PLATFORM_CHANNELS",
    "SEARCH_CHANNELS",
    "build_channel_request",
    "gather_channels",
    "normalize_mode",
    "partition_outcomes",
]
