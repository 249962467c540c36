"""Core types and errors for Replayarr.

All data structures are dataclasses with attribute access.
"""

from replayarr.core.errors import NetworkError, ReplayarrError
from replayarr.core.types import (
    CalendarDay,
    CivilDate,
    Division,
    GameDetails,
    GameStatus,
    GameTeam,
    MediaItem,
    NextGameDetails,
    Playback,
    ResolvedMedia,
    ScheduledGame,
    StandingsRecord,
    Team,
    Venue,
)

__all__ = [
    # Types
    "CalendarDay",
    "CivilDate",
    "Division",
    "GameDetails",
    "GameStatus",
    "GameTeam",
    "MediaItem",
    "NextGameDetails",
    "Playback",
    "ResolvedMedia",
    "ScheduledGame",
    "StandingsRecord",
    "Team",
    "Venue",
    # Errors
    "NetworkError",
    "ReplayarrError",
]
