"""HTTP API."""

from replayarr.api.app import create_app

__all__ = ["create_app"]
