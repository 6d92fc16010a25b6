"""Shot queries and statistics over the shot record store."""

import asyncio
from typing import Dict, List, Optional, Sequence

from ..models.reference import Player, Team
from ..models.shots import Shot, ShotFilters
from ..models.stats import ComparisonOutcome, ShotStatsSummary
from ..nba_logging import get_logger
from ..store.shot_store import ShotStore
from ..transformers.aggregate import MAX_COMPARED_PLAYERS, aggregate

logger = get_logger(__name__)


class ShotService:
    """Orchestrates store fetches and aggregation for the API and CLI."""

    def __init__(self, store: ShotStore):
        self.store = store

    async def get_player_shots(
        self,
        player_id: str,
        season: str,
        filters: Optional[ShotFilters] = None,
    ) -> List[Shot]:
        return await self.store.fetch_shots(player_id, season, filters)

    async def get_player_shot_stats(
        self,
        player_id: str,
        season: str,
        filters: Optional[ShotFilters] = None,
    ) -> ShotStatsSummary:
        """Fetch a player's filtered shots and aggregate them.

        An unknown player or season yields zero-valued statistics for
        ``"Unknown Player"`` rather than an error.
        """
        shots = await self.store.fetch_shots(player_id, season, filters)
        player_name = await self.store.fetch_player_name(player_id)
        return aggregate(shots, player_name, season)

    async def get_players(self) -> List[Player]:
        return await self.store.list_players()

    async def get_teams(self) -> List[Team]:
        return await self.store.list_teams()

    async def get_seasons(self) -> List[str]:
        return await self.store.list_seasons()

    async def compare_players(
        self,
        player_ids: Sequence[str],
        season: str,
        filters: Optional[ShotFilters] = None,
    ) -> Dict[str, ComparisonOutcome]:
        """Fetch stats for up to three players concurrently.

        Each player's fetch succeeds or fails on its own; a failure is
        recorded in that player's outcome and does not affect the others.
        """
        player_ids = list(dict.fromkeys(player_ids))
        if not player_ids:
            raise ValueError("At least one player is required for a comparison")
        if len(player_ids) > MAX_COMPARED_PLAYERS:
            raise ValueError(f"Can compare at most {MAX_COMPARED_PLAYERS} players")

        results = await asyncio.gather(
            *(self.get_player_shot_stats(pid, season, filters) for pid in player_ids),
            return_exceptions=True,
        )

        outcomes: Dict[str, ComparisonOutcome] = {}
        for player_id, result in zip(player_ids, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Comparison fetch failed", player_id=player_id, season=season, error=str(result)
                )
                outcomes[player_id] = ComparisonOutcome(player_id=player_id, error=str(result))
            else:
                outcomes[player_id] = ComparisonOutcome(player_id=player_id, stats=result)
        return outcomes
