"""Service layer - selection, media, standings and the replay pipeline."""

from replayarr.services.replay import ReplayService, redact_spoilers

__all__ = ["ReplayService", "redact_spoilers"]
