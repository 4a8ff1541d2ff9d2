"""Multi-channel search aggregation for the Exa browser."""

__version__ = "0.1.0"
