"""API route modules."""

from replayarr.api.routes import health, replay

__all__ = ["health", "replay"]
