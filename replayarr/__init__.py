"""Replayarr - yesterday's condensed game for one franchise."""

__version__ = "1.0.0"
