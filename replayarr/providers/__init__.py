"""Data providers."""

from replayarr.providers.mlbstats import MLBStatsProvider, StatsAPIClient

__all__ = ["MLBStatsProvider", "StatsAPIClient"]
