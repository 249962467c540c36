"""Replay session controller.

Holds the view state for one viewer and turns user intents (pick a
date, page the calendar, refresh, toggle spoilers, browser back) into
queries. Every query runs in its own QuerySlot, so a date change
cancels the previous game lookup and only the latest result is shown.

Selection flow:
1. Initial date: the address-bar date if valid, else yesterday (local tz)
2. The latest-game search runs alongside; if the viewer has not chosen a
   date themselves, the selection jumps to the latest completed game and
   the address bar is replaced (not pushed)
3. Any explicit pick marks the selection as user-chosen
"""

import logging
from collections.abc import Callable
from datetime import datetime

from replayarr.consumers.location import DateLocation, MemoryLocation
from replayarr.consumers.slots import QuerySlot, SlotState
from replayarr.core.types import (
    CalendarDay,
    CivilDate,
    GameDetails,
    NextGameDetails,
    ScheduledGame,
    StandingsRecord,
)
from replayarr.services.replay import (
    NO_COMPLETED_GAMES_MESSAGE,
    NO_STANDINGS_MESSAGE,
    ReplayService,
    redact_spoilers,
)
from replayarr.utilities.tz import (
    add_months,
    build_calendar_days,
    now_utc,
    parse_iso_date,
    previous_day,
    start_of_month,
)

logger = logging.getLogger(__name__)

# History modes for a selection change
PUSH = "push"
REPLACE = "replace"
SKIP = "skip"


class ReplaySession:
    """View state and user intents for the replay page.

    All intent methods must be called from within a running event loop;
    they return immediately and the queries complete in the background.
    Use wait_idle() to wait for everything in flight to settle.
    """

    def __init__(
        self,
        service: ReplayService,
        location: DateLocation | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._service = service
        self._location = location or MemoryLocation()
        self._clock = clock

        url_date = parse_iso_date(self._location.get_date(), service.tz)
        self.selected: CivilDate = url_date or previous_day(clock(), service.tz)
        self.calendar_month: CivilDate = start_of_month(self.selected)
        self.show_spoilers = False

        # True once the viewer picked a date (or arrived with one in the URL)
        self._user_selected = url_date is not None
        self._applied_latest_iso: str | None = None

        self.game: QuerySlot[GameDetails | None] = QuerySlot("game")
        self.month: QuerySlot[dict[str, list[ScheduledGame]]] = QuerySlot("month")
        self.standings: QuerySlot[list[StandingsRecord]] = QuerySlot("standings")
        self.next_game: QuerySlot[NextGameDetails | None] = QuerySlot("next_game")
        self.latest: QuerySlot[CivilDate | None] = QuerySlot("latest")

    @property
    def slots(self) -> tuple[QuerySlot, ...]:
        return (self.game, self.month, self.standings, self.next_game, self.latest)

    # =========================================================================
    # Derived view state
    # =========================================================================

    @property
    def visible_game(self) -> GameDetails | None:
        """Selected game, with the score hidden unless spoilers are on."""
        details = self.game.state.value
        if details is None or self.show_spoilers:
            return details
        return redact_spoilers(details)

    @property
    def no_game(self) -> bool:
        """The lookup succeeded but the selected day had no completed game."""
        state = self.game.state
        return not state.loading and state.error is None and state.value is None

    @property
    def calendar_days(self) -> list[CalendarDay]:
        games_by_date = self.month.state.value or {}
        days = build_calendar_days(self.calendar_month)
        for day in days:
            day.games = games_by_date.get(day.iso, [])
        return days

    # =========================================================================
    # Intents
    # =========================================================================

    def start(self) -> None:
        """Run every query for the initial view."""
        self.refresh()

    def refresh(self) -> None:
        """Re-run all queries; the manual retry for any failed slot."""
        logger.debug("Refreshing all queries (selected=%s)", self.selected.iso)
        self._load_game()
        self._load_month()
        self.standings.start(self._service.get_division_standings, self._on_standings)
        self.next_game.start(lambda: self._service.get_next_game(self._clock()))
        self.latest.start(
            lambda: self._service.find_latest_game_date(self._clock()), self._on_latest
        )

    def select_date(self, value: CivilDate | str) -> None:
        """Viewer picked a date from the calendar."""
        civil = self._coerce(value)
        self._user_selected = True
        self._applied_latest_iso = None
        self._apply_selection(civil, PUSH)

    def shift_month(self, delta: int) -> None:
        """Page the calendar without changing the selected date."""
        self.calendar_month = add_months(self.calendar_month, delta)
        self._load_month()

    def set_show_spoilers(self, show: bool) -> None:
        self.show_spoilers = show

    def jump_to_latest(self) -> None:
        """Select the latest completed game, if one was found."""
        latest = self.latest.state.value
        if latest is None:
            return
        self._user_selected = False
        self._applied_latest_iso = latest.iso
        self._apply_selection(latest, PUSH)

    def sync_from_location(self) -> None:
        """Follow an external address-bar change (e.g. browser back)."""
        url_date = parse_iso_date(self._location.get_date(), self._service.tz)
        if url_date:
            self._user_selected = True
            self._apply_selection(url_date, SKIP)
            return

        self._user_selected = False
        latest = self.latest.state.value
        if latest:
            self._applied_latest_iso = latest.iso
            self._apply_selection(latest, SKIP)
            return

        self._applied_latest_iso = None
        self._apply_selection(previous_day(self._clock(), self._service.tz), SKIP)

    async def wait_idle(self) -> None:
        """Wait until no slot has a request in flight."""
        while True:
            pending = [slot for slot in self.slots if slot.task and not slot.task.done()]
            if not pending:
                return
            for slot in pending:
                await slot.wait()

    async def close(self) -> None:
        for slot in self.slots:
            slot.cancel()
        await self.wait_idle()

    # =========================================================================
    # Internals
    # =========================================================================

    def _coerce(self, value: CivilDate | str) -> CivilDate:
        if isinstance(value, CivilDate):
            return value
        civil = parse_iso_date(value, self._service.tz)
        if civil is None:
            raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
        return civil

    def _apply_selection(self, civil: CivilDate, history_mode: str) -> None:
        if civil != self.selected:
            self.selected = civil
            self._load_game()

        month = start_of_month(civil)
        if month != self.calendar_month:
            self.calendar_month = month
            self._load_month()

        if history_mode == REPLACE:
            self._location.set_date(civil.iso, replace=True)
        elif history_mode == PUSH:
            self._location.set_date(civil.iso, replace=False)

    def _load_game(self) -> None:
        day = self.selected
        self.game.start(lambda: self._service.get_game(day))

    def _load_month(self) -> None:
        month = self.calendar_month
        self.month.start(lambda: self._service.get_month_games(month))

    def _on_standings(self, records: list[StandingsRecord]) -> None:
        if not records:
            self.standings.state = SlotState(error=NO_STANDINGS_MESSAGE)

    def _on_latest(self, latest: CivilDate | None) -> None:
        if latest is None:
            self.latest.state = SlotState(error=NO_COMPLETED_GAMES_MESSAGE)
            return
        if self._user_selected or self._applied_latest_iso == latest.iso:
            return
        logger.info("Auto-selecting latest completed game: %s", latest.iso)
        self._applied_latest_iso = latest.iso
        self._apply_selection(latest, REPLACE)
