"""Error types.

Cancellation of a superseded query is asyncio.CancelledError and is
never wrapped. "No data" is a normal result, not an exception.
"""


class ReplayarrError(Exception):
    """Base class for Replayarr errors."""


class NetworkError(ReplayarrError):
    """Upstream call failed or returned a non-success status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
