"""Core data types for Replayarr.

All data structures are dataclasses with attribute access.
Upstream entities are frozen: fetched fresh per query, never mutated.
"""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True, order=True)
class CivilDate:
    """A calendar day interpreted in a named timezone.

    Holds no instant: two equal values format identically on any host.
    Arithmetic lives in replayarr.utilities.tz.
    """

    day: date
    tz: str = "America/Los_Angeles"

    @property
    def iso(self) -> str:
        return self.day.isoformat()

    def __str__(self) -> str:
        return self.iso


@dataclass(frozen=True)
class Team:
    """Team identity as the schedule/standings endpoints report it."""

    id: int | None
    name: str | None = None
    team_name: str | None = None  # "Dodgers"
    short_name: str | None = None
    abbreviation: str | None = None


@dataclass(frozen=True)
class Venue:
    name: str


@dataclass(frozen=True)
class GameStatus:
    """Raw status fields; vocabularies differ between historical and live data."""

    code: str | None = None  # "F", "S", "I", ...
    abstract_state: str | None = None  # "Preview" | "Live" | "Final"
    detailed_state: str | None = None  # "Final", "Completed Early", "Scheduled"


@dataclass(frozen=True)
class GameTeam:
    """One side of a game."""

    team: Team
    score: int | None = None


@dataclass(frozen=True)
class ScheduledGame:
    """A single game from the schedule endpoint."""

    game_pk: int
    start_time: datetime  # UTC
    status: GameStatus
    home: GameTeam
    away: GameTeam
    venue: Venue | None = None

    def is_home(self, team_id: int) -> bool:
        return self.home.team.id == team_id

    def side(self, team_id: int) -> GameTeam:
        """The given team's side (home when the team is not in the game)."""
        return self.away if self.away.team.id == team_id else self.home

    def opponent_side(self, team_id: int) -> GameTeam:
        return self.away if self.is_home(team_id) else self.home


@dataclass(frozen=True)
class Playback:
    """One encoding of a media item."""

    name: str | None = None  # "mp4Avc", "http_cloud_tablet", ...
    url: str | None = None


@dataclass(frozen=True)
class MediaItem:
    """An entry from a game's media feed."""

    type: str | None = None
    media_playback_type: str | None = None
    title: str | None = None
    headline: str | None = None
    blurb: str | None = None
    description: str | None = None
    caption: str | None = None
    slug: str | None = None
    url: str | None = None
    playback_url: str | None = None
    keywords: tuple[str, ...] = ()
    playbacks: tuple[Playback, ...] = ()


@dataclass(frozen=True)
class Division:
    id: int | None = None
    name: str | None = None
    name_short: str | None = None


@dataclass(frozen=True)
class StandingsRecord:
    """A team's row in a standings table."""

    team: Team
    wins: int | None = None
    losses: int | None = None
    winning_percentage: str | None = None  # ".615"
    games_back: str | None = None  # "-" for the leader
    division_rank: str | None = None
    division: Division | None = None


@dataclass(frozen=True)
class ResolvedMedia:
    """Playable reference for a condensed game.

    Exactly one of video_url / embed_url is set.
    """

    video_url: str | None = None
    embed_url: str | None = None
    headline: str | None = None
    description: str | None = None


@dataclass
class GameDetails:
    """What the replay view renders for a selected day."""

    iso_date: str
    display_date: str
    opponent: str
    home_away: str  # "home" | "away"
    venue: str | None = None
    team_score: int | None = None
    opponent_score: int | None = None
    outcome: str | None = None  # "Win" | "Loss" | "Tie"
    status_text: str | None = None
    video_url: str | None = None
    embed_url: str | None = None
    headline: str | None = None
    description: str | None = None


@dataclass
class NextGameDetails:
    start_time: datetime
    display_date_time: str
    opponent: str
    home_away: str
    venue: str | None = None
    opponent_standing: str | None = None


@dataclass
class CalendarDay:
    """One cell of the 6-week month grid."""

    date: CivilDate
    iso: str
    in_current_month: bool
    games: list[ScheduledGame] = field(default_factory=list)
