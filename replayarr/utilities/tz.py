"""Timezone utilities.

Single source of truth for civil-date handling. The franchise's "day" is
always the configured timezone's day (Pacific by default), never the
host's local day. Nothing here calls datetime.now() without a zone or
uses naive datetimes.

Day arithmetic is done on calendar dates, so a DST transition can never
skip or repeat a day. Instants are only produced at the edges
(to_instant) using the zone's offset for that specific date.
"""

import calendar
import re
from datetime import UTC, date, datetime, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

from replayarr.config import get_timezone_str
from replayarr.core.types import CalendarDay, CivilDate

__all__ = [
    "add_months",
    "build_calendar_days",
    "day_of_week",
    "end_of_month",
    "format_date",
    "format_game_time",
    "get_timezone_abbrev",
    "month_bounds",
    "now_utc",
    "parse_iso_date",
    "parse_month",
    "previous_day",
    "resolve",
    "shift",
    "start_of_month",
    "to_instant",
    "to_local",
    "today",
    "utc_offset_minutes",
]

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")
# Three-letter US-style zone names with a standard/daylight marker: PST, EDT
_SEASONAL_ABBREV = re.compile(r"^[A-Z][SD]T$")

CALENDAR_CELLS = 42  # 6 weeks

DATE_STYLES = {
    "iso": "%Y-%m-%d",
    "full": "%A, %B %-d, %Y",
    "month": "%B %Y",
    "weekday": "%a",
}


def _zone(tz: str | None) -> ZoneInfo:
    return ZoneInfo(tz or get_timezone_str())


def now_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def to_local(dt: datetime, tz: str | None = None) -> datetime:
    """Convert an aware datetime to the target timezone.

    Raises:
        ValueError: dt is naive
    """
    if dt.tzinfo is None:
        raise ValueError("Cannot convert naive datetime - must be timezone-aware")
    return dt.astimezone(_zone(tz))


def resolve(instant: datetime, tz: str | None = None) -> CivilDate:
    """Civil date of an instant in the target timezone."""
    tz = tz or get_timezone_str()
    return CivilDate(to_local(instant, tz).date(), tz)


def today(tz: str | None = None) -> CivilDate:
    return resolve(now_utc(), tz)


def previous_day(now: datetime | None = None, tz: str | None = None) -> CivilDate:
    """Yesterday in the target timezone; the default replay date."""
    return shift(resolve(now or now_utc(), tz), -1)


@lru_cache(maxsize=1024)
def utc_offset_minutes(iso_date: str, tz: str) -> int:
    """UTC offset (minutes) of tz at local midnight on iso_date.

    Cached per (date, zone). -480 (PST) when the date is unparseable.
    """
    try:
        day = date.fromisoformat(iso_date)
    except ValueError:
        return -480
    local_midnight = datetime(day.year, day.month, day.day, tzinfo=ZoneInfo(tz))
    offset = local_midnight.utcoffset()
    if offset is None:
        return 0
    return int(offset.total_seconds() // 60)


def to_instant(civil: CivilDate) -> datetime:
    """UTC instant at which the civil date begins."""
    offset = utc_offset_minutes(civil.iso, civil.tz)
    utc_midnight = datetime(civil.day.year, civil.day.month, civil.day.day, tzinfo=UTC)
    return utc_midnight - timedelta(minutes=offset)


def shift(civil: CivilDate, days: int) -> CivilDate:
    return CivilDate(civil.day + timedelta(days=days), civil.tz)


def start_of_month(civil: CivilDate) -> CivilDate:
    return CivilDate(civil.day.replace(day=1), civil.tz)


def end_of_month(civil: CivilDate) -> CivilDate:
    last = calendar.monthrange(civil.day.year, civil.day.month)[1]
    return CivilDate(civil.day.replace(day=last), civil.tz)


def month_bounds(civil: CivilDate) -> tuple[CivilDate, CivilDate]:
    """First and last day of the civil date's month."""
    return start_of_month(civil), end_of_month(civil)


def add_months(civil: CivilDate, delta: int) -> CivilDate:
    """First day of the month `delta` months away."""
    index = civil.day.year * 12 + (civil.day.month - 1) + delta
    year, month_index = divmod(index, 12)
    return CivilDate(date(year, month_index + 1, 1), civil.tz)


def day_of_week(civil: CivilDate) -> int:
    """Day of week with Sunday = 0."""
    return civil.day.isoweekday() % 7


def format_date(civil: CivilDate, style: str = "iso") -> str:
    """Format a civil date.

    Styles: 'iso' (2025-09-14), 'full' (Sunday, September 14, 2025),
    'month' (September 2025), 'weekday' (Sun).
    """
    try:
        pattern = DATE_STYLES[style]
    except KeyError:
        raise ValueError(f"Unknown date style: {style}") from None
    return civil.day.strftime(pattern)


def get_timezone_abbrev(dt: datetime) -> str:
    """Season-neutral zone label for an aware datetime.

    'PDT' and 'PST' both become 'PT' (likewise ET, CT, MT). Labels that
    are not of that form ('UTC', '+09') are returned unchanged.
    """
    if dt.tzinfo is None:
        return ""
    abbrev = dt.strftime("%Z")
    if _SEASONAL_ABBREV.match(abbrev):
        return abbrev[0] + abbrev[2]
    return abbrev


def format_game_time(instant: datetime, tz: str | None = None) -> str:
    """Upcoming game display, e.g. 'Friday, October 17 at 7:10 PM PT'."""
    local_dt = to_local(instant, tz)
    return (
        f"{local_dt.strftime('%A, %B %-d')} at {local_dt.strftime('%-I:%M %p')} "
        f"{get_timezone_abbrev(local_dt)}"
    )


def parse_iso_date(text: str | None, tz: str | None = None) -> CivilDate | None:
    """Parse a strict YYYY-MM-DD string; None for anything else."""
    value = (text or "").strip()
    if not ISO_DATE_PATTERN.match(value):
        return None
    try:
        day = date.fromisoformat(value)
    except ValueError:
        return None
    return CivilDate(day, tz or get_timezone_str())


def parse_month(text: str | None, tz: str | None = None) -> CivilDate | None:
    """Parse YYYY-MM (or a full ISO date) to the first of that month."""
    value = (text or "").strip()
    if MONTH_PATTERN.match(value):
        value = f"{value}-01"
    civil = parse_iso_date(value, tz)
    return start_of_month(civil) if civil else None


def build_calendar_days(month: CivilDate) -> list[CalendarDay]:
    """42-cell grid starting on the Sunday on/before the first of the month."""
    first = start_of_month(month)
    first_visible = shift(first, -day_of_week(first))

    days = []
    for index in range(CALENDAR_CELLS):
        current = shift(first_visible, index)
        days.append(
            CalendarDay(
                date=current,
                iso=current.iso,
                in_current_month=(current.day.year, current.day.month)
                == (first.day.year, first.day.month),
            )
        )
    return days
