"""Tests for completion status and game selection."""

from datetime import UTC, datetime, timedelta

import pytest

from replayarr.core.types import GameStatus, GameTeam, ScheduledGame, Team
from replayarr.providers.mlbstats.parser import is_completed
from replayarr.services.selection import (
    group_by_date,
    select_completed,
    select_latest_completed,
    select_next_upcoming,
)

DODGERS = Team(id=119, name="Los Angeles Dodgers", team_name="Dodgers")
GIANTS = Team(id=137, name="San Francisco Giants", team_name="Giants")

FINAL = GameStatus(code="F", abstract_state="Final", detailed_state="Final")
SCHEDULED = GameStatus(code="S", abstract_state="Preview", detailed_state="Scheduled")
PREVIEW = GameStatus(code="P", abstract_state="Preview", detailed_state="Pre-Game")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_game(game_pk: int, start: datetime, status: GameStatus = FINAL) -> ScheduledGame:
    return ScheduledGame(
        game_pk=game_pk,
        start_time=start,
        status=status,
        home=GameTeam(team=DODGERS, score=5),
        away=GameTeam(team=GIANTS, score=3),
    )


AS_OF = datetime(2025, 9, 15, 12, 0, tzinfo=UTC)


class TestIsCompleted:
    """Any one final signal is enough."""

    @pytest.mark.parametrize(
        "status",
        [
            GameStatus(code="F"),
            GameStatus(code="fr"),
            GameStatus(code="O"),
            GameStatus(code="X"),
            GameStatus(abstract_state="FINAL"),
            GameStatus(detailed_state="Final: Tied"),
            GameStatus(detailed_state="Completed Early: Rain"),
        ],
    )
    def test_final_signals(self, status):
        assert is_completed(_make_game(1, AS_OF, status)) is True

    @pytest.mark.parametrize(
        "status",
        [
            GameStatus(),
            GameStatus(code="P", abstract_state="Preview", detailed_state="Pre-Game"),
            GameStatus(code="I", abstract_state="Live", detailed_state="In Progress"),
            GameStatus(code="S", abstract_state="Preview", detailed_state="Scheduled"),
        ],
    )
    def test_not_final(self, status):
        assert is_completed(_make_game(1, AS_OF, status)) is False


class TestSelectCompleted:
    def test_latest_completed_before_as_of(self):
        games = [
            _make_game(1, AS_OF - timedelta(days=2)),
            _make_game(2, AS_OF - timedelta(hours=20)),
            _make_game(3, AS_OF - timedelta(days=1, hours=2)),
        ]
        assert select_completed(games, AS_OF).game_pk == 2

    def test_never_returns_game_after_as_of(self):
        games = [
            _make_game(1, AS_OF - timedelta(days=1)),
            _make_game(2, AS_OF + timedelta(minutes=1)),
        ]
        assert select_completed(games, AS_OF).game_pk == 1

    def test_start_equal_to_as_of_is_included(self):
        assert select_completed([_make_game(7, AS_OF)], AS_OF).game_pk == 7

    def test_skips_incomplete(self):
        games = [
            _make_game(1, AS_OF - timedelta(days=3)),
            _make_game(2, AS_OF - timedelta(hours=1), PREVIEW),
        ]
        assert select_completed(games, AS_OF).game_pk == 1

    def test_empty(self):
        assert select_completed([], AS_OF) is None

    def test_doubleheader_picks_later_game(self):
        day = datetime(2025, 9, 14, 17, 0, tzinfo=UTC)
        games = [_make_game(1, day), _make_game(2, day + timedelta(hours=4))]
        assert select_latest_completed(games).game_pk == 2


class TestSelectNextUpcoming:
    def test_earliest_future_game(self):
        games = [
            _make_game(1, AS_OF + timedelta(days=2), SCHEDULED),
            _make_game(2, AS_OF + timedelta(days=1), SCHEDULED),
            _make_game(3, AS_OF - timedelta(days=1), FINAL),
        ]
        assert select_next_upcoming(games, AS_OF).game_pk == 2

    def test_ignores_past_and_completed(self):
        games = [
            _make_game(1, AS_OF - timedelta(hours=1), PREVIEW),
            _make_game(2, AS_OF + timedelta(hours=1), FINAL),
        ]
        assert select_next_upcoming(games, AS_OF) is None


class TestGroupByDate:
    def test_night_game_belongs_to_pacific_day(self):
        # 7:10 PM PDT Sep 14 is 02:10 UTC Sep 15
        night = _make_game(1, datetime(2025, 9, 15, 2, 10, tzinfo=UTC))
        afternoon = _make_game(2, datetime(2025, 9, 15, 20, 10, tzinfo=UTC))
        grouped = group_by_date([night, afternoon], "America/Los_Angeles")
        assert [g.game_pk for g in grouped["2025-09-14"]] == [1]
        assert [g.game_pk for g in grouped["2025-09-15"]] == [2]
