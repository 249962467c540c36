"""Tests for the HTTP API."""

from datetime import UTC, datetime
from unittest.mock import patch

from fastapi.testclient import TestClient

from replayarr.api import create_app
from replayarr.core.errors import NetworkError
from replayarr.core.types import Division, GameStatus, MediaItem, Playback, StandingsRecord, Team
from replayarr.services.replay import NO_COMPLETED_GAMES_MESSAGE, NO_STANDINGS_MESSAGE, ReplayService

TZ = "America/Los_Angeles"
NL_WEST = Division(id=203, name_short="NL West")
DODGERS = Team(id=119, name="Los Angeles Dodgers", team_name="Dodgers")
PADRES = Team(id=135, name="San Diego Padres", team_name="Padres")

# 7:10 PM PDT on Sunday 2025-09-14
SEP_14_NIGHT = datetime(2025, 9, 15, 2, 10, tzinfo=UTC)
NOW = datetime(2025, 9, 15, 19, 0, tzinfo=UTC)

CONDENSED = MediaItem(
    headline="Condensed Game: LAD@SF",
    playbacks=(Playback(name="mp4Avc", url="http://a/y.mp4"),),
)


def _client(provider) -> TestClient:
    return TestClient(create_app(ReplayService(provider=provider, team_id=119, tz=TZ)))


class TestReplayEndpoint:
    def test_game_without_spoilers(self, provider, make_game):
        provider.games = [make_game(776543, SEP_14_NIGHT)]
        provider.media = {776543: [CONDENSED]}

        with _client(provider) as client:
            response = client.get("/api/replay", params={"date": "2025-09-14"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "game"
        assert data["date"] == "2025-09-14"
        assert data["display_date"] == "Sunday, September 14, 2025"
        game = data["game"]
        assert game["opponent"] == "Giants"
        assert game["video_url"] == "https://a/y.mp4"
        assert game["embed_url"] is None
        assert game["team_score"] is None
        assert game["outcome"] is None

    def test_game_with_spoilers(self, provider, make_game):
        provider.games = [make_game(776543, SEP_14_NIGHT)]

        with _client(provider) as client:
            response = client.get("/api/replay", params={"date": "2025-09-14", "spoilers": "true"})

        game = response.json()["game"]
        assert (game["team_score"], game["opponent_score"], game["outcome"]) == (5, 3, "Win")

    def test_no_game(self, provider):
        with _client(provider) as client:
            response = client.get("/api/replay", params={"date": "2025-09-15"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "no_game"
        assert data["display_date"] == "Monday, September 15, 2025"
        assert data["game"] is None

    def test_defaults_to_yesterday(self, provider):
        with patch("replayarr.api.routes.replay.now_utc", return_value=NOW):
            with _client(provider) as client:
                response = client.get("/api/replay")

        assert response.json()["date"] == "2025-09-14"

    def test_invalid_date(self, provider):
        with _client(provider) as client:
            assert client.get("/api/replay", params={"date": "09/14/2025"}).status_code == 400
            assert client.get("/api/replay", params={"date": "2025-13-01"}).status_code == 400
        assert provider.calls == []

    def test_upstream_failure_is_retryable_502(self, provider):
        provider.schedule_error = NetworkError("Request failed (503)", status_code=503)

        with _client(provider) as client:
            response = client.get("/api/replay", params={"date": "2025-09-14"})

        assert response.status_code == 502
        assert response.json() == {"detail": "Request failed (503)", "retryable": True}


class TestLatestEndpoint:
    def test_latest(self, provider, make_game):
        provider.games = [make_game(776543, SEP_14_NIGHT)]

        with patch("replayarr.services.replay.now_utc", return_value=NOW):
            with _client(provider) as client:
                data = client.get("/api/latest").json()

        assert data["date"] == "2025-09-14"
        assert data["display_date"] == "Sunday, September 14, 2025"
        assert data["message"] is None

    def test_none_found(self, provider):
        with patch("replayarr.services.replay.now_utc", return_value=NOW):
            with _client(provider) as client:
                data = client.get("/api/latest").json()

        assert data["date"] is None
        assert data["message"] == NO_COMPLETED_GAMES_MESSAGE


class TestCalendarEndpoint:
    def test_month_grid(self, provider, make_game):
        provider.games = [make_game(776543, SEP_14_NIGHT)]

        with _client(provider) as client:
            data = client.get("/api/calendar", params={"month": "2025-09"}).json()

        assert data["month"] == "2025-09"
        assert data["label"] == "September 2025"
        assert data["weekdays"][0] == "Sun"
        assert len(data["days"]) == 42
        assert data["days"][0]["iso"] == "2025-08-31"
        assert data["days"][0]["in_current_month"] is False

        day = next(d for d in data["days"] if d["iso"] == "2025-09-14")
        assert day["day"] == 14
        assert day["games"][0]["game_pk"] == 776543
        assert day["games"][0]["completed"] is True
        assert day["games"][0]["opponent"] == "Giants"
        assert day["games"][0]["home_away"] == "away"

    def test_invalid_month(self, provider):
        with _client(provider) as client:
            assert client.get("/api/calendar", params={"month": "Sept"}).status_code == 400


class TestStandingsEndpoint:
    def test_division_table(self, provider):
        provider.standings = [
            StandingsRecord(team=PADRES, wins=90, losses=72, division_rank="2", division=NL_WEST),
            StandingsRecord(
                team=DODGERS, wins=93, losses=69, games_back="-", division_rank="1", division=NL_WEST
            ),
        ]

        with _client(provider) as client:
            data = client.get("/api/standings", params={"season": 2025}).json()

        assert data["season"] == 2025
        assert data["message"] is None
        first, second = data["records"]
        assert first["team"] == "Dodgers"
        assert first["is_franchise"] is True
        assert first["winning_percentage"] == ".574"
        assert second["team"] == "Padres"
        assert second["is_franchise"] is False

    def test_empty_table_message(self, provider):
        with _client(provider) as client:
            data = client.get("/api/standings", params={"season": 2025}).json()

        assert data["records"] == []
        assert data["message"] == NO_STANDINGS_MESSAGE


class TestNextGameEndpoint:
    def test_next_game(self, provider, make_game):
        provider.games = [
            make_game(
                2,
                datetime(2025, 9, 17, 2, 10, tzinfo=UTC),
                status=GameStatus(code="S", detailed_state="Scheduled"),
                home=DODGERS,
                away=PADRES,
                venue="Dodger Stadium",
            )
        ]
        provider.standings_error = NetworkError("Request failed (500)", status_code=500)

        with patch("replayarr.services.replay.now_utc", return_value=NOW):
            with _client(provider) as client:
                data = client.get("/api/next-game").json()

        game = data["game"]
        assert game["opponent"] == "Padres"
        assert game["display_date_time"] == "Tuesday, September 16 at 7:10 PM PT"
        assert game["opponent_standing"] is None

    def test_nothing_scheduled(self, provider):
        with patch("replayarr.services.replay.now_utc", return_value=NOW):
            with _client(provider) as client:
                assert client.get("/api/next-game").json() == {"game": None}


class TestHealth:
    def test_health(self, provider):
        with _client(provider) as client:
            data = client.get("/health").json()

        assert data["status"] == "ok"
        assert data["team_id"] == 119
