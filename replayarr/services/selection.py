"""Game selection over an already-fetched schedule.

Pure functions, no I/O.
"""

from collections.abc import Iterable
from datetime import datetime

from replayarr.core.types import ScheduledGame
from replayarr.providers.mlbstats.parser import is_completed
from replayarr.utilities.tz import resolve


def _start_time(game: ScheduledGame) -> datetime:
    return game.start_time


def select_latest_completed(games: Iterable[ScheduledGame]) -> ScheduledGame | None:
    """Completed game with the latest start time, if any."""
    completed = [game for game in games if is_completed(game)]
    if not completed:
        return None
    return max(completed, key=_start_time)


def select_completed(games: Iterable[ScheduledGame], as_of: datetime) -> ScheduledGame | None:
    """Most recently started completed game with start time <= as_of."""
    return select_latest_completed(game for game in games if game.start_time <= as_of)


def select_next_upcoming(games: Iterable[ScheduledGame], as_of: datetime) -> ScheduledGame | None:
    """Earliest non-completed game with start time >= as_of."""
    upcoming = [game for game in games if not is_completed(game) and game.start_time >= as_of]
    if not upcoming:
        return None
    return min(upcoming, key=_start_time)


def group_by_date(
    games: Iterable[ScheduledGame], tz: str | None = None
) -> dict[str, list[ScheduledGame]]:
    """Index games by the civil date (YYYY-MM-DD) they start on in tz."""
    by_date: dict[str, list[ScheduledGame]] = {}
    for game in games:
        by_date.setdefault(resolve(game.start_time, tz).iso, []).append(game)
    return by_date
