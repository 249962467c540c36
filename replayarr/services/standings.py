"""Standings formatting and division filtering."""

import math
import re

from replayarr.core.types import StandingsRecord

_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}
_BARE_PERCENTAGE = re.compile(r"^\.\d+$")


def _as_number(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def format_ordinal(value: str | int | None) -> str | None:
    """1 -> '1st', 12 -> '12th', 22 -> '22nd'. None when not numeric."""
    number = _as_number(value)
    if number is None:
        return None
    if not number.is_integer():
        return f"{value}th"
    n = int(number)
    if 10 <= abs(n) % 100 <= 20:
        suffix = "th"
    else:
        suffix = _ORDINAL_SUFFIXES.get(abs(n) % 10, "th")
    return f"{n}{suffix}"


def _three_places(value: float) -> str:
    formatted = f"{value:.3f}"
    return formatted[1:] if formatted.startswith("0") else formatted


def format_winning_percentage(
    winning_percentage: str | None,
    wins: int | None = None,
    losses: int | None = None,
) -> str | None:
    """Baseball-style percentage ('.615'), from the API value or W/L."""
    trimmed = (winning_percentage or "").strip()
    if trimmed:
        number = _as_number(trimmed)
        if number is not None:
            return _three_places(number)
        if _BARE_PERCENTAGE.match(trimmed):
            return trimmed

    if wins is not None and losses is not None:
        total = wins + losses
        if total > 0:
            return _three_places(wins / total)

    return None


def team_display_name(record: StandingsRecord) -> str:
    team = record.team
    return team.team_name or team.name or team.short_name or team.abbreviation or "Team"


def format_opponent_standing(record: StandingsRecord | None) -> str | None:
    """Short standing annotation, e.g. '85-70, 2nd in NL West'."""
    if record is None:
        return None

    parts = []
    if record.wins is not None and record.losses is not None:
        parts.append(f"{record.wins}-{record.losses}")

    rank = format_ordinal(record.division_rank)
    division_name = None
    if record.division:
        division_name = record.division.name_short or record.division.name
    if rank and division_name:
        parts.append(f"{rank} in {division_name}")
    elif rank:
        parts.append(f"{rank} place")

    return ", ".join(parts) if parts else None


def filter_division(records: list[StandingsRecord], division_id: int) -> list[StandingsRecord]:
    """Rows belonging to a division.

    Rows without a division id fall back to a name match on 'west'.
    """
    matched = []
    for record in records:
        division = record.division
        if division and division.id is not None:
            if division.id == division_id:
                matched.append(record)
            continue
        name = ""
        if division:
            name = division.name_short or division.name or ""
        if "west" in name.lower():
            matched.append(record)
    return matched


def sort_by_rank(records: list[StandingsRecord]) -> list[StandingsRecord]:
    """Numeric division rank first, then unranked rows by team name."""

    def sort_key(record: StandingsRecord) -> tuple:
        rank = _as_number(record.division_rank)
        if rank is not None:
            return (0, rank, "")
        return (1, 0.0, team_display_name(record))

    return sorted(records, key=sort_key)


def find_team_record(records: list[StandingsRecord], team_id: int | None) -> StandingsRecord | None:
    if team_id is None:
        return None
    return next((r for r in records if r.team.id == team_id), None)
