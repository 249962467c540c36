"""Shared fixtures: an in-memory provider and game builders."""

import asyncio
from datetime import datetime

import pytest

from replayarr.core.types import GameStatus, GameTeam, ScheduledGame, Team, Venue
from replayarr.utilities.tz import resolve

TZ = "America/Los_Angeles"

DODGERS = Team(id=119, name="Los Angeles Dodgers", team_name="Dodgers")
GIANTS = Team(id=137, name="San Francisco Giants", team_name="Giants")
PADRES = Team(id=135, name="San Diego Padres", team_name="Padres")

FINAL = GameStatus(code="F", abstract_state="Final", detailed_state="Final")
SCHEDULED = GameStatus(code="S", abstract_state="Preview", detailed_state="Scheduled")


class FakeProvider:
    """MLBStatsProvider stand-in backed by in-memory games.

    Schedule lookups filter games by their civil date in TZ. A schedule
    request whose start date has an entry in `gates` blocks until that
    event is set, so tests can hold a request in flight.
    """

    def __init__(self, games=(), media=None, standings=()):
        self.games = list(games)
        self.media = media or {}
        self.standings = list(standings)
        self.schedule_error: Exception | None = None
        self.standings_error: Exception | None = None
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple] = []
        self.closed = False

    async def fetch_range(self, team_id, start_date, end_date):
        self.calls.append(("schedule", start_date.iso, end_date.iso))
        gate = self.gates.get(start_date.iso)
        if gate is not None:
            await gate.wait()
        if self.schedule_error is not None:
            raise self.schedule_error
        return [
            game
            for game in self.games
            if start_date.day <= resolve(game.start_time, TZ).day <= end_date.day
        ]

    async def fetch_media(self, game_pk):
        self.calls.append(("media", game_pk))
        result = self.media.get(game_pk, [])
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_standings(self, league_ids, season):
        self.calls.append(("standings", tuple(league_ids), season))
        if self.standings_error is not None:
            raise self.standings_error
        return self.standings

    async def close(self):
        self.closed = True

    def schedule_calls(self) -> list[tuple]:
        return [call for call in self.calls if call[0] == "schedule"]


def build_game(
    game_pk: int,
    start: datetime,
    status: GameStatus = FINAL,
    home: Team = GIANTS,
    away: Team = DODGERS,
    home_score: int | None = 3,
    away_score: int | None = 5,
    venue: str | None = "Oracle Park",
) -> ScheduledGame:
    return ScheduledGame(
        game_pk=game_pk,
        start_time=start,
        status=status,
        home=GameTeam(team=home, score=home_score),
        away=GameTeam(team=away, score=away_score),
        venue=Venue(name=venue) if venue else None,
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def make_game():
    return build_game
