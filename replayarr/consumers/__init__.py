"""Consumers - per-viewer session state driven by user intents."""

from replayarr.consumers.location import DateLocation, MemoryLocation
from replayarr.consumers.session import ReplaySession
from replayarr.consumers.slots import QuerySlot, SlotState

__all__ = [
    "DateLocation",
    "MemoryLocation",
    "QuerySlot",
    "ReplaySession",
    "SlotState",
]
