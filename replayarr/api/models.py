"""API response models."""

from datetime import datetime

from pydantic import BaseModel


class GameModel(BaseModel):
    """Selected game with its replay reference.

    Scores and outcome are null unless spoilers were requested.
    """

    iso_date: str
    display_date: str
    opponent: str
    home_away: str
    venue: str | None = None
    team_score: int | None = None
    opponent_score: int | None = None
    outcome: str | None = None
    status_text: str | None = None
    video_url: str | None = None
    embed_url: str | None = None
    headline: str | None = None
    description: str | None = None


class ReplayResponse(BaseModel):
    date: str
    display_date: str
    status: str  # "game" | "no_game"
    game: GameModel | None = None


class LatestGameResponse(BaseModel):
    date: str | None = None
    display_date: str | None = None
    message: str | None = None


class CalendarGameModel(BaseModel):
    game_pk: int
    start_time: datetime
    completed: bool
    opponent: str
    home_away: str


class CalendarDayModel(BaseModel):
    iso: str
    day: int
    in_current_month: bool
    games: list[CalendarGameModel]


class CalendarResponse(BaseModel):
    month: str  # YYYY-MM
    label: str  # "September 2025"
    weekdays: list[str]
    days: list[CalendarDayModel]


class StandingsRowModel(BaseModel):
    team_id: int | None = None
    team: str
    wins: int | None = None
    losses: int | None = None
    winning_percentage: str | None = None
    games_back: str | None = None
    division_rank: str | None = None
    is_franchise: bool = False


class StandingsResponse(BaseModel):
    season: int
    records: list[StandingsRowModel]
    message: str | None = None


class NextGameModel(BaseModel):
    start_time: datetime
    display_date_time: str
    opponent: str
    home_away: str
    venue: str | None = None
    opponent_standing: str | None = None


class NextGameResponse(BaseModel):
    game: NextGameModel | None = None
