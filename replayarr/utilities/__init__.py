"""Utilities - civil dates, logging."""

from replayarr.utilities.logging import setup_logging
from replayarr.utilities.tz import format_date, resolve, shift

__all__ = [
    "format_date",
    "resolve",
    "setup_logging",
    "shift",
]
