"""Runtime configuration.

All settings are read from REPLAYARR_* environment variables with
defaults for the Los Angeles Dodgers. Getters are cached; call
reload_config() after changing the environment (tests do this).
"""

import os
from functools import lru_cache
from zoneinfo import ZoneInfo

__all__ = [
    "get_api_base_url",
    "get_division_id",
    "get_fallback_embed_url",
    "get_latest_lookback_months",
    "get_league_ids",
    "get_log_level",
    "get_next_game_window_days",
    "get_request_timeout",
    "get_team_id",
    "get_team_name",
    "get_timezone",
    "get_timezone_str",
    "reload_config",
]

DEFAULT_API_BASE_URL = "https://statsapi.mlb.com/api/v1"
DEFAULT_TEAM_ID = 119
DEFAULT_TEAM_NAME = "Dodgers"
DEFAULT_DIVISION_ID = 203  # NL West
DEFAULT_LEAGUE_ID = 104  # National League
DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_FALLBACK_EMBED_URL = (
    "https://streamable.com/m/condensed-game-lad-sf-9-14-25"
    "?partnerId=web_video-playback-page_video-share"
)


def _env(name: str, default: str) -> str:
    value = os.getenv(f"REPLAYARR_{name}", "").strip()
    return value or default


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_timezone_str() -> str:
    """Timezone the franchise's 'day' is anchored to."""
    return _env("TIMEZONE", DEFAULT_TIMEZONE)


@lru_cache(maxsize=1)
def get_timezone() -> ZoneInfo:
    return ZoneInfo(get_timezone_str())


@lru_cache(maxsize=1)
def get_team_id() -> int:
    return _env_int("TEAM_ID", DEFAULT_TEAM_ID)


@lru_cache(maxsize=1)
def get_team_name() -> str:
    return _env("TEAM_NAME", DEFAULT_TEAM_NAME)


@lru_cache(maxsize=1)
def get_division_id() -> int:
    return _env_int("DIVISION_ID", DEFAULT_DIVISION_ID)


@lru_cache(maxsize=1)
def get_league_ids() -> tuple[int, ...]:
    """League ids for the division standings table (comma separated)."""
    raw = _env("LEAGUE_IDS", str(DEFAULT_LEAGUE_ID))
    ids = []
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit():
            ids.append(int(part))
    return tuple(ids) or (DEFAULT_LEAGUE_ID,)


@lru_cache(maxsize=1)
def get_api_base_url() -> str:
    return _env("API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")


@lru_cache(maxsize=1)
def get_fallback_embed_url() -> str:
    return _env("FALLBACK_EMBED_URL", DEFAULT_FALLBACK_EMBED_URL)


@lru_cache(maxsize=1)
def get_request_timeout() -> float:
    raw = _env("REQUEST_TIMEOUT", "10")
    try:
        return float(raw)
    except ValueError:
        return 10.0


@lru_cache(maxsize=1)
def get_latest_lookback_months() -> int:
    return max(1, _env_int("LATEST_LOOKBACK_MONTHS", 12))


@lru_cache(maxsize=1)
def get_next_game_window_days() -> int:
    return max(1, _env_int("NEXT_GAME_WINDOW_DAYS", 14))


@lru_cache(maxsize=1)
def get_log_level() -> str:
    return _env("LOG_LEVEL", "INFO").upper()


def reload_config() -> None:
    """Clear cached settings so the next getter call re-reads the environment."""
    for getter in (
        get_timezone_str,
        get_timezone,
        get_team_id,
        get_team_name,
        get_division_id,
        get_league_ids,
        get_api_base_url,
        get_fallback_embed_url,
        get_request_timeout,
        get_latest_lookback_months,
        get_next_game_window_days,
        get_log_level,
    ):
        getter.cache_clear()
