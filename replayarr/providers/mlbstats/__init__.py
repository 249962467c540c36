"""MLB Stats API provider.

Provides schedule, game content and standings from the public,
read-only statsapi.mlb.com API.
"""

from replayarr.providers.mlbstats.client import StatsAPIClient
from replayarr.providers.mlbstats.parser import is_completed
from replayarr.providers.mlbstats.provider import MLBStatsProvider

__all__ = ["MLBStatsProvider", "StatsAPIClient", "is_completed"]
