"""Cancel-on-supersede query slots.

Each logical query (selected game, month calendar, standings, next
game, latest game) owns exactly one QuerySlot. Starting a new request
cancels the slot's previous task, and only the current task may commit
its result, so a late response from a superseded request can never
overwrite a fresher one.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from replayarr.core.errors import ReplayarrError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SlotState(Generic[T]):
    """What the view renders for one query."""

    loading: bool = False
    value: T | None = None
    error: str | None = None


class QuerySlot(Generic[T]):
    """One in-flight operation per slot; the newest request wins."""

    def __init__(self, name: str):
        self.name = name
        self.state: SlotState[T] = SlotState()
        self._task: asyncio.Task | None = None
        self._generation = 0

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    def start(
        self,
        factory: Callable[[], Awaitable[T]],
        on_commit: Callable[[T], None] | None = None,
    ) -> asyncio.Task:
        """Cancel any in-flight request and run a new one.

        Must be called from within a running event loop.

        Args:
            factory: Coroutine function producing the slot's value
            on_commit: Called with the value once it is committed
        """
        self.cancel()
        self._generation += 1
        generation = self._generation

        self.state = SlotState(loading=True)
        self._task = asyncio.create_task(
            self._run(generation, factory, on_commit), name=f"slot:{self.name}:{generation}"
        )
        return self._task

    def cancel(self) -> None:
        if self._task and not self._task.done():
            logger.debug("Cancelling superseded %s request", self.name)
            self._task.cancel()

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _run(
        self,
        generation: int,
        factory: Callable[[], Awaitable[T]],
        on_commit: Callable[[T], None] | None,
    ) -> None:
        try:
            value = await factory()
        except asyncio.CancelledError:
            # Superseded: discard silently, the newer request owns the state
            raise
        except ReplayarrError as e:
            if self.is_current(generation):
                logger.warning("%s request failed: %s", self.name, e)
                self.state = SlotState(error=str(e))
            return
        except Exception:
            if self.is_current(generation):
                logger.exception("Unexpected error in %s request", self.name)
                self.state = SlotState(error=f"Could not load {self.name.replace('_', ' ')}")
            return

        if not self.is_current(generation):
            logger.debug("Discarding stale %s result", self.name)
            return

        self.state = SlotState(value=value)
        if on_commit:
            on_commit(value)

    async def wait(self) -> None:
        """Wait for the current request (if any) to settle."""
        while self._task is not None:
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if task is self._task:
                return
