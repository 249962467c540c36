"""Replay service layer.

Composes the pipeline: civil date -> schedule -> selected game ->
condensed media -> one renderable reference. Consumers (the session
controller and the HTTP routes) call this service - never the provider
directly.

Failure model:
- NetworkError from a primary lookup propagates to the caller.
- Secondary lookups (game content, opponent standings) are isolated:
  a failure is logged and the affected field degrades.
- "Nothing found" is a normal return value (None or empty list).
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta

from replayarr.config import (
    get_division_id,
    get_latest_lookback_months,
    get_league_ids,
    get_next_game_window_days,
    get_team_id,
    get_timezone_str,
)
from replayarr.core.errors import NetworkError
from replayarr.core.types import (
    CalendarDay,
    CivilDate,
    GameDetails,
    MediaItem,
    NextGameDetails,
    ScheduledGame,
    StandingsRecord,
    Team,
)
from replayarr.providers.mlbstats import MLBStatsProvider
from replayarr.services.media import find_condensed, resolve_media
from replayarr.services.selection import (
    group_by_date,
    select_completed,
    select_next_upcoming,
)
from replayarr.services.standings import (
    filter_division,
    find_team_record,
    format_opponent_standing,
    sort_by_rank,
)
from replayarr.utilities.tz import (
    add_months,
    build_calendar_days,
    format_date,
    format_game_time,
    month_bounds,
    now_utc,
    resolve,
    shift,
    start_of_month,
    to_instant,
)

logger = logging.getLogger(__name__)

ALL_MLB_LEAGUE_IDS = (103, 104)
OPPOSING_TEAM = "Opposing Team"

NO_COMPLETED_GAMES_MESSAGE = "No completed games found yet this season."
NO_STANDINGS_MESSAGE = "Standings data is not available right now."


def _team_name(team: Team) -> str:
    return team.team_name or team.name or OPPOSING_TEAM


def opponent_name(game: ScheduledGame, team_id: int) -> str:
    return _team_name(game.opponent_side(team_id).team)


def compute_outcome(team_score: int | None, opponent_score: int | None) -> str | None:
    if team_score is None or opponent_score is None:
        return None
    if team_score == opponent_score:
        return "Tie"
    return "Win" if team_score > opponent_score else "Loss"


def redact_spoilers(details: GameDetails) -> GameDetails:
    """Copy of details without scores or result."""
    return replace(details, team_score=None, opponent_score=None, outcome=None)


class ReplayService:
    """Replay lookups for one franchise.

    Args:
        provider: Data provider (default: MLBStatsProvider)
        team_id: Franchise team id (default: config)
        tz: Timezone the franchise's day is anchored to (default: config)
    """

    def __init__(
        self,
        provider: MLBStatsProvider | None = None,
        team_id: int | None = None,
        tz: str | None = None,
    ):
        self._provider = provider or MLBStatsProvider()
        self.team_id = team_id if team_id is not None else get_team_id()
        self.tz = tz or get_timezone_str()

    async def close(self) -> None:
        await self._provider.close()

    async def get_game(self, day: CivilDate) -> GameDetails | None:
        """The completed game on a civil date, with its condensed replay.

        Returns:
            GameDetails, or None when the day has no completed game

        Raises:
            NetworkError: schedule lookup failed
        """
        games = await self._provider.fetch_range(self.team_id, day, day)
        # Upstream can return a game that starts after the civil day ends
        game = select_completed(games, to_instant(shift(day, 1)) - timedelta(microseconds=1))
        if game is None:
            logger.info("No completed game on %s", day.iso)
            return None

        media = resolve_media(await self._find_condensed_item(game))
        team_side = game.side(self.team_id)
        opponent_side = game.opponent_side(self.team_id)

        return GameDetails(
            iso_date=day.iso,
            display_date=format_date(day, "full"),
            opponent=opponent_name(game, self.team_id),
            home_away="home" if game.is_home(self.team_id) else "away",
            venue=game.venue.name if game.venue else None,
            team_score=team_side.score,
            opponent_score=opponent_side.score,
            outcome=compute_outcome(team_side.score, opponent_side.score),
            status_text=game.status.detailed_state or game.status.abstract_state,
            video_url=media.video_url,
            embed_url=media.embed_url,
            headline=media.headline,
            description=media.description,
        )

    async def _find_condensed_item(self, game: ScheduledGame) -> MediaItem | None:
        try:
            items = await self._provider.fetch_media(game.game_pk)
        except NetworkError as e:
            logger.warning("Content lookup failed for game %s: %s", game.game_pk, e)
            return None
        return find_condensed(items)

    async def find_latest_game_date(self, now: datetime | None = None) -> CivilDate | None:
        """Civil date of the most recent completed game.

        Searches month by month backwards from the current month, up to
        the configured lookback.
        """
        now = now or now_utc()
        search_start = start_of_month(resolve(now, self.tz))

        for offset in range(get_latest_lookback_months()):
            month_start, month_end = month_bounds(add_months(search_start, -offset))
            games = await self._provider.fetch_range(self.team_id, month_start, month_end)
            latest = select_completed(games, now)
            if latest:
                found = resolve(latest.start_time, self.tz)
                logger.debug("Latest completed game: %s (game %s)", found.iso, latest.game_pk)
                return found

        logger.info("No completed game in the last %d months", get_latest_lookback_months())
        return None

    async def get_month_games(self, month: CivilDate) -> dict[str, list[ScheduledGame]]:
        """Games in a month keyed by civil date."""
        month_start, month_end = month_bounds(month)
        games = await self._provider.fetch_range(self.team_id, month_start, month_end)
        return group_by_date(games, self.tz)

    async def get_calendar(self, month: CivilDate) -> list[CalendarDay]:
        """Month grid with each day's games attached."""
        games_by_date = await self.get_month_games(month)
        days = build_calendar_days(month)
        for day in days:
            day.games = games_by_date.get(day.iso, [])
        return days

    async def get_division_standings(self, season: int | None = None) -> list[StandingsRecord]:
        """Franchise division table, sorted by rank. Empty when unavailable."""
        if season is None:
            season = resolve(now_utc(), self.tz).day.year
        records = await self._provider.fetch_standings(get_league_ids(), season)
        return sort_by_rank(filter_division(records, get_division_id()))

    async def get_next_game(self, now: datetime | None = None) -> NextGameDetails | None:
        """Next scheduled game within the look-ahead window.

        Opponent standing is best effort: a failed standings lookup
        leaves it unset without failing the game itself.
        """
        now = now or now_utc()
        start = resolve(now, self.tz)
        end = shift(start, get_next_game_window_days())

        games = await self._provider.fetch_range(self.team_id, start, end)
        game = select_next_upcoming(games, now)
        if game is None:
            return None

        opponent = game.opponent_side(self.team_id).team
        season = resolve(game.start_time, self.tz).day.year
        opponent_standing = None
        try:
            records = await self._provider.fetch_standings(ALL_MLB_LEAGUE_IDS, season)
        except NetworkError as e:
            logger.warning("Opponent standings lookup failed: %s", e)
        else:
            opponent_standing = format_opponent_standing(find_team_record(records, opponent.id))

        return NextGameDetails(
            start_time=game.start_time,
            display_date_time=format_game_time(game.start_time, self.tz),
            opponent=_team_name(opponent),
            home_away="home" if game.is_home(self.team_id) else "away",
            venue=game.venue.name if game.venue else None,
            opponent_standing=opponent_standing,
        )
