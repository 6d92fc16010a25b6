"""Async shot record store over SQLAlchemy."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio.session import async_sessionmaker

from ..errors import NotFoundError, TransportError
from ..models.enums import ShotType
from ..models.reference import Player, Team
from ..models.shots import Shot, ShotFilters
from ..nba_logging import get_logger
from .tables import PlayerRow, ShotRow, TeamRow

logger = get_logger(__name__)

UNKNOWN_PLAYER = "Unknown Player"


def _row_to_shot(row: ShotRow) -> Shot:
    return Shot(
        x=row.x,
        y=row.y,
        made=row.made,
        shot_type=ShotType(row.shot_type),
        distance=row.distance,
        game_date=row.game_date,
        opponent=row.opponent,
        period=row.period,
        player_id=row.player_id,
        player_name=row.player_name,
        season=row.season,
        game_id=row.game_id,
        team_id=row.team_id,
        team_name=row.team_name,
        minutes_remaining=row.minutes_remaining,
        seconds_remaining=row.seconds_remaining,
        description=row.description,
    )


class ShotStore:
    """Read-mostly access to shots, players and teams.

    Every database failure surfaces as ``TransportError``; missing records
    are either empty results or ``NotFoundError``, never a transport fault.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Shot store operation failed", action=action, error=str(e))
            raise TransportError(f"Failed to {action}") from e

    async def fetch_shots(
        self,
        player_id: str,
        season: str,
        filters: Optional[ShotFilters] = None,
    ) -> List[Shot]:
        """Shots for one player and season, narrowed by ``filters``."""
        filters = filters or ShotFilters()

        stmt = select(ShotRow).where(ShotRow.player_id == player_id, ShotRow.season == season)
        if filters.shot_types:
            stmt = stmt.where(ShotRow.shot_type.in_([t.value for t in filters.shot_types]))
        if filters.opponent:
            stmt = stmt.where(ShotRow.opponent == filters.opponent)
        if filters.date_range_start:
            stmt = stmt.where(ShotRow.game_date >= filters.date_range_start)
        if filters.date_range_end:
            stmt = stmt.where(ShotRow.game_date <= filters.date_range_end)
        stmt = stmt.order_by(ShotRow.game_date, ShotRow.period, ShotRow.id)

        async with self._session("fetch shot data") as session:
            rows = (await session.execute(stmt)).scalars().all()

        logger.debug("Fetched shots", player_id=player_id, season=season, count=len(rows))
        return [_row_to_shot(row) for row in rows]

    async def get_player(self, player_id: str) -> Player:
        async with self._session("fetch player") as session:
            row = await session.get(PlayerRow, player_id)
        if row is None:
            raise NotFoundError(f"Player {player_id} not found")
        return Player.model_validate(row, from_attributes=True)

    async def fetch_player_name(self, player_id: str) -> str:
        """Display name for a player, ``"Unknown Player"`` when absent."""
        try:
            player = await self.get_player(player_id)
        except NotFoundError:
            return UNKNOWN_PLAYER
        return player.name

    async def list_players(self) -> List[Player]:
        async with self._session("fetch players") as session:
            rows = (await session.execute(select(PlayerRow).order_by(PlayerRow.name))).scalars().all()
        return [Player.model_validate(row, from_attributes=True) for row in rows]

    async def list_teams(self) -> List[Team]:
        async with self._session("fetch teams") as session:
            rows = (await session.execute(select(TeamRow).order_by(TeamRow.name))).scalars().all()
        return [Team.model_validate(row, from_attributes=True) for row in rows]

    async def list_seasons(self) -> List[str]:
        """Distinct seasons, most recent first."""
        async with self._session("fetch seasons") as session:
            seasons = (await session.execute(select(ShotRow.season).distinct())).scalars().all()
        return sorted(seasons, reverse=True)

    async def add_shots(self, shots: Sequence[Shot], season: Optional[str] = None) -> int:
        """Insert shots; each shot's own season wins over ``season``."""
        rows = []
        for shot in shots:
            shot_season = shot.season or season
            if not shot_season:
                raise ValueError(f"Shot for player {shot.player_id} has no season")
            rows.append(
                ShotRow(
                    player_id=shot.player_id,
                    player_name=shot.player_name,
                    team_id=shot.team_id,
                    team_name=shot.team_name,
                    opponent=shot.opponent,
                    game_id=shot.game_id,
                    game_date=shot.game_date,
                    season=shot_season,
                    period=shot.period,
                    minutes_remaining=shot.minutes_remaining,
                    seconds_remaining=shot.seconds_remaining,
                    shot_type=shot.shot_type.value,
                    made=shot.made,
                    x=shot.x,
                    y=shot.y,
                    distance=shot.distance,
                    description=shot.description,
                )
            )

        async with self._session("store shot data") as session:
            session.add_all(rows)
            await session.commit()

        logger.info("Stored shots", count=len(rows))
        return len(rows)

    async def upsert_players(self, players: Sequence[Player]) -> int:
        async with self._session("store players") as session:
            for player in players:
                await session.merge(PlayerRow(**player.model_dump()))
            await session.commit()
        return len(players)

    async def upsert_teams(self, teams: Sequence[Team]) -> int:
        async with self._session("store teams") as session:
            for team in teams:
                await session.merge(TeamRow(**team.model_dump()))
            await session.commit()
        return len(teams)
