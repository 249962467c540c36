"""Parsing for MLB Stats API payloads.

Upstream JSON is treated as untrusted and possibly incomplete: every
field is optional, wrong-typed values degrade to None, and a malformed
entry is skipped without failing the whole response.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from replayarr.core.types import (
    Division,
    GameStatus,
    GameTeam,
    MediaItem,
    Playback,
    ScheduledGame,
    StandingsRecord,
    Team,
    Venue,
)

logger = logging.getLogger(__name__)

# statusCode values that mean play is over (Final, Final: Tied, Game Over,
# Cancelled). "S" is Scheduled upstream, so it is not in this set.
FINAL_STATUS_CODES = frozenset({"F", "FR", "O", "X"})


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_instant(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp ('2025-09-14T20:10:00Z') to aware UTC."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def is_completed(game: ScheduledGame) -> bool:
    """Whether a game has finished.

    Any one signal is enough: upstream status vocabularies are not
    consistent between historical and live data.
    """
    code = (game.status.code or "").upper()
    abstract_state = (game.status.abstract_state or "").lower()
    detailed_state = (game.status.detailed_state or "").lower()

    return (
        code in FINAL_STATUS_CODES
        or abstract_state == "final"
        or "final" in detailed_state
        or "completed" in detailed_state
    )


def _parse_team(data: Any) -> Team:
    data = _dict(data)
    return Team(
        id=_int(data.get("id")),
        name=_str(data.get("name")),
        team_name=_str(data.get("teamName")),
        short_name=_str(data.get("shortName")),
        abbreviation=_str(data.get("abbreviation")),
    )


def _parse_game_team(data: Any) -> GameTeam:
    data = _dict(data)
    return GameTeam(team=_parse_team(data.get("team")), score=_int(data.get("score")))


def parse_game(data: Any) -> ScheduledGame | None:
    """Parse one schedule game; None when the id or start time is unusable."""
    data = _dict(data)
    game_pk = _int(data.get("gamePk"))
    start_time = parse_instant(data.get("gameDate"))
    if game_pk is None or start_time is None:
        logger.debug("Skipping game with missing gamePk/gameDate: %s", data.get("gamePk"))
        return None

    status = _dict(data.get("status"))
    teams = _dict(data.get("teams"))
    venue_name = _str(_dict(data.get("venue")).get("name"))

    return ScheduledGame(
        game_pk=game_pk,
        start_time=start_time,
        status=GameStatus(
            code=_str(status.get("statusCode")),
            abstract_state=_str(status.get("abstractGameState")),
            detailed_state=_str(status.get("detailedState")),
        ),
        home=_parse_game_team(teams.get("home")),
        away=_parse_game_team(teams.get("away")),
        venue=Venue(name=venue_name) if venue_name else None,
    )


def parse_schedule(data: Any) -> list[ScheduledGame]:
    """Flatten a schedule response to games, in response order."""
    games = []
    for schedule_date in _list(_dict(data).get("dates")):
        for raw_game in _list(_dict(schedule_date).get("games")):
            game = parse_game(raw_game)
            if game:
                games.append(game)
    return games


def _parse_playback(data: Any) -> Playback | None:
    if not isinstance(data, dict):
        return None
    return Playback(name=_str(data.get("name")), url=_str(data.get("url")))


def parse_media_item(data: Any) -> MediaItem | None:
    if not isinstance(data, dict):
        return None

    keywords = tuple(
        value
        for value in (_str(_dict(keyword).get("value")) for keyword in _list(data.get("keywords")))
        if value
    )
    playbacks = tuple(
        playback
        for playback in (_parse_playback(p) for p in _list(data.get("playbacks")))
        if playback
    )

    return MediaItem(
        type=_str(data.get("type")),
        media_playback_type=_str(data.get("mediaPlaybackType")),
        title=_str(data.get("title")),
        headline=_str(data.get("headline")),
        blurb=_str(data.get("blurb")),
        description=_str(data.get("description")),
        caption=_str(data.get("caption")),
        slug=_str(data.get("slug")),
        url=_str(data.get("url")),
        playback_url=_str(data.get("playbackUrl")),
        keywords=keywords,
        playbacks=playbacks,
    )


def parse_media_items(data: Any) -> list[MediaItem]:
    """All media items from a game content response.

    Items from media.epg come first, then media.epgAlternate, each in
    channel order.
    """
    media = _dict(_dict(data).get("media"))
    channels = _list(media.get("epg")) + _list(media.get("epgAlternate"))

    items = []
    for channel in channels:
        for raw_item in _list(_dict(channel).get("items")):
            item = parse_media_item(raw_item)
            if item:
                items.append(item)
    return items


def parse_standings_record(data: Any) -> StandingsRecord | None:
    if not isinstance(data, dict):
        return None

    division_data = data.get("division")
    division = None
    if isinstance(division_data, dict):
        division = Division(
            id=_int(division_data.get("id")),
            name=_str(division_data.get("name")),
            name_short=_str(division_data.get("nameShort")),
        )

    return StandingsRecord(
        team=_parse_team(data.get("team")),
        wins=_int(data.get("wins")),
        losses=_int(data.get("losses")),
        winning_percentage=_str(data.get("winningPercentage")),
        games_back=_str(data.get("gamesBack")),
        division_rank=_str(data.get("divisionRank")),
        division=division,
    )


def parse_standings(data: Any) -> list[StandingsRecord]:
    """Flatten every team record across the response's standings tables."""
    records = []
    for table in _list(_dict(data).get("records")):
        table = _dict(table)
        # Team rows usually omit the division; the enclosing table carries it
        table_division = table.get("division")
        for raw_record in _list(table.get("teamRecords")):
            if isinstance(raw_record, dict) and "division" not in raw_record and table_division:
                raw_record = {**raw_record, "division": table_division}
            record = parse_standings_record(raw_record)
            if record:
                records.append(record)
    return records
