"""Async client for the shot chart HTTP API."""

from typing import Any, List, Optional

import httpx

from .config import get_settings
from .errors import NotFoundError, TransportError
from .models.reference import Player, Team
from .models.shots import Shot, ShotFilters
from .models.stats import ShotStatsSummary
from .nba_logging import get_logger

logger = get_logger(__name__)


class ShotChartClient:
    """Thin wrapper over ``httpx.AsyncClient`` that unwraps response envelopes.

    Failed requests raise ``TransportError``; a 404 raises ``NotFoundError``.
    No retries are attempted.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = base_url or settings.API_BASE_URL
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.TIMEOUT_S,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "ShotChartClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_data(self, path: str, failure: str, params: Optional[dict] = None) -> Any:
        try:
            logger.debug("Making API request", path=path, params=params)
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = _error_message(e.response)
            logger.warning(
                "API error response", path=path, status_code=e.response.status_code, error=error
            )
            if e.response.status_code == 404:
                raise NotFoundError(error) from e
            raise TransportError(error) from e
        except httpx.RequestError as e:
            logger.warning("API request error", path=path, error=str(e))
            raise TransportError("No response from server") from e

        body = response.json()
        if not body.get("success") or body.get("data") is None:
            raise TransportError(body.get("error") or failure)
        return body["data"]

    async def fetch_players(self) -> List[Player]:
        data = await self._get_data("/players", "Failed to fetch players")
        return [Player.model_validate(p) for p in data]

    async def fetch_teams(self) -> List[Team]:
        data = await self._get_data("/teams", "Failed to fetch teams")
        return [Team.model_validate(t) for t in data]

    async def fetch_seasons(self) -> List[str]:
        return await self._get_data("/seasons", "Failed to fetch seasons")

    async def fetch_player_shots(
        self,
        player_id: str,
        season: str,
        filters: Optional[ShotFilters] = None,
    ) -> List[Shot]:
        data = await self._get_data(
            f"/shots/player/{player_id}/season/{season}",
            "Failed to fetch player shots",
            params=(filters or ShotFilters()).to_query_params(),
        )
        return [Shot.model_validate(s) for s in data]

    async def fetch_player_stats(
        self,
        player_id: str,
        season: str,
        filters: Optional[ShotFilters] = None,
    ) -> ShotStatsSummary:
        data = await self._get_data(
            f"/stats/player/{player_id}/season/{season}",
            "Failed to fetch player statistics",
            params=(filters or ShotFilters()).to_query_params(),
        )
        return ShotStatsSummary.model_validate(data)


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or "An error occurred"
    except ValueError:
        return "An error occurred"
