"""MLB Stats API provider.

Turns raw client responses into core types. Consumers call this (via
ReplayService) - never the client directly.
"""

import logging

from replayarr.core.types import CivilDate, MediaItem, ScheduledGame, StandingsRecord
from replayarr.providers.mlbstats.client import StatsAPIClient
from replayarr.providers.mlbstats.parser import (
    parse_media_items,
    parse_schedule,
    parse_standings,
)

logger = logging.getLogger(__name__)


class MLBStatsProvider:
    """Schedule, media and standings lookups against statsapi.mlb.com."""

    name = "mlbstats"

    def __init__(self, client: StatsAPIClient | None = None):
        self._client = client or StatsAPIClient()

    async def fetch_range(
        self, team_id: int, start_date: CivilDate, end_date: CivilDate
    ) -> list[ScheduledGame]:
        """Games for a team in an inclusive civil-date range.

        Raises:
            NetworkError: upstream failure (no retry)
        """
        data = await self._client.get_schedule(team_id, start_date.iso, end_date.iso)
        games = parse_schedule(data)
        logger.debug(
            "Schedule %s..%s team=%s: %d games", start_date.iso, end_date.iso, team_id, len(games)
        )
        return games

    async def fetch_media(self, game_pk: int) -> list[MediaItem]:
        """Media items from a game's content feed."""
        data = await self._client.get_game_content(game_pk)
        return parse_media_items(data)

    async def fetch_standings(
        self, league_ids: tuple[int, ...] | list[int], season: int
    ) -> list[StandingsRecord]:
        data = await self._client.get_standings(league_ids, season)
        return parse_standings(data)

    async def close(self) -> None:
        await self._client.close()
