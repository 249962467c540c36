"""Address-bar "selected date" state.

The session only needs a getter and a setter; where the value lives
(browser URL, query string, memory) is up to the implementation.
"""

import logging
from typing import Protocol

from replayarr.utilities.tz import ISO_DATE_PATTERN

logger = logging.getLogger(__name__)


class DateLocation(Protocol):
    """Externally synchronized 'selected date' field (YYYY-MM-DD)."""

    def get_date(self) -> str | None: ...

    def set_date(self, iso_date: str, replace: bool = False) -> None: ...


class MemoryLocation:
    """In-memory DateLocation with a push/replace history."""

    def __init__(self, iso_date: str | None = None):
        self.history: list[str | None] = [iso_date]

    def get_date(self) -> str | None:
        value = (self.history[-1] or "").strip()
        return value if ISO_DATE_PATTERN.match(value) else None

    def set_date(self, iso_date: str, replace: bool = False) -> None:
        if not ISO_DATE_PATTERN.match(iso_date or ""):
            logger.debug("Ignoring non-ISO date for location: %r", iso_date)
            return
        if replace:
            self.history[-1] = iso_date
        elif self.history[-1] != iso_date:
            self.history.append(iso_date)

    def back(self) -> str | None:
        """Pop one history entry (browser back) and return the new date."""
        if len(self.history) > 1:
            self.history.pop()
        return self.get_date()
