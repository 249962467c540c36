"""MLB Stats API HTTP client.

Handles raw HTTP requests to statsapi.mlb.com endpoints.
No data transformation - just fetch and return JSON.

Requests are awaited on httpx.AsyncClient so the owning task can be
cancelled when a newer query supersedes it. There is no automatic
retry: failures raise NetworkError and the caller offers a manual retry.
"""

import logging

import httpx

from replayarr.config import get_api_base_url, get_request_timeout
from replayarr.core.errors import NetworkError

logger = logging.getLogger(__name__)

SPORT_ID_MLB = 1
STANDINGS_TYPE = "regularSeason"
DEFAULT_USER_AGENT = "replayarr/1.0"


class StatsAPIClient:
    """Low-level MLB Stats API client."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or get_api_base_url()).rstrip("/")
        self._timeout = timeout if timeout is not None else get_request_timeout()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        # Single event loop, so no lock is needed around lazy creation
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json"},
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
                transport=self._transport,
            )
        return self._client

    async def _request(self, path: str, params: dict | None = None) -> dict:
        """GET a JSON document.

        Raises:
            NetworkError: transport failure, non-2xx status or non-JSON body
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._get_client().get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("HTTP %s for %s", status, url)
            raise NetworkError(f"Request failed ({status})", url=url, status_code=status) from e
        except httpx.RequestError as e:
            logger.warning("Request failed for %s: %s", url, e)
            raise NetworkError(f"Request failed: {e}", url=url) from e
        except ValueError as e:
            logger.warning("Invalid JSON from %s: %s", url, e)
            raise NetworkError("Invalid response body", url=url) from e

        if not isinstance(data, dict):
            raise NetworkError("Unexpected response shape", url=url)
        return data

    async def get_schedule(self, team_id: int, start_date: str, end_date: str) -> dict:
        """Fetch a team's schedule for an inclusive date range.

        Args:
            team_id: MLB team id (119 = Dodgers)
            start_date: YYYY-MM-DD
            end_date: YYYY-MM-DD

        Returns:
            Raw schedule response ({"dates": [{"games": [...]}, ...]})
        """
        params = {
            "sportId": SPORT_ID_MLB,
            "teamId": team_id,
            "startDate": start_date,
            "endDate": end_date,
        }
        return await self._request("/schedule", params)

    async def get_game_content(self, game_pk: int) -> dict:
        """Fetch a game's content (media feed, highlights)."""
        return await self._request(f"/game/{game_pk}/content")

    async def get_standings(self, league_ids: tuple[int, ...] | list[int], season: int) -> dict:
        """Fetch regular season standings for one or more leagues.

        Args:
            league_ids: 103 (AL), 104 (NL)
            season: Season year
        """
        params = {
            "leagueId": ",".join(str(league_id) for league_id in league_ids),
            "season": season,
            "standingsTypes": STANDINGS_TYPE,
        }
        return await self._request("/standings", params)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
