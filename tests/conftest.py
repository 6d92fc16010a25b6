"""Test configuration and fixtures for the shot chart test suite."""

import math
import os
import pathlib
import sys

# Force test-safe defaults before any other imports
os.environ.setdefault('ENV', 'TEST')
os.environ.setdefault('DB_URI', 'sqlite+aiosqlite:///:memory:')
os.environ.setdefault('LOG_FORMAT', 'text')

# Ensure tests can import from src/
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from datetime import date
from typing import Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio.session import async_sessionmaker

from nba_shotchart.db import create_engine_for_url, create_tables
from nba_shotchart.models import Player, Shot, ShotType, Team
from nba_shotchart.store import ShotStore


def _shot(
    x: float = 0.0,
    y: float = 0.0,
    made: bool = True,
    shot_type: str = "2PT",
    distance: Optional[float] = None,
    game_date: date = date(2024, 1, 15),
    opponent: str = "BOS",
    period: int = 1,
    player_id: str = "201939",
    player_name: str = "Stephen Curry",
    season: Optional[str] = "2023-24",
) -> Shot:
    if distance is None:
        distance = math.hypot(x, y)
    return Shot(
        x=x,
        y=y,
        made=made,
        shot_type=ShotType(shot_type),
        distance=distance,
        game_date=game_date,
        opponent=opponent,
        period=period,
        player_id=player_id,
        player_name=player_name,
        season=season,
    )


@pytest.fixture
def make_shot():
    """Factory for Shot instances with sensible defaults."""
    return _shot


@pytest.fixture
async def store():
    """Empty shot store on a private in-memory SQLite database."""
    engine = create_engine_for_url("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield ShotStore(factory)
    await engine.dispose()


@pytest.fixture
async def seeded_store(store):
    """Store holding two players, two teams and a handful of shots."""
    await store.upsert_players([
        Player(id="201939", name="Stephen Curry", team_id="GSW", seasons=["2023-24"]),
        Player(id="2544", name="LeBron James", team_id="LAL", seasons=["2022-23", "2023-24"]),
    ])
    await store.upsert_teams([
        Team(id="BOS", name="Celtics", abbreviation="BOS"),
        Team(id="LAL", name="Lakers", abbreviation="LAL"),
    ])
    await store.add_shots([
        _shot(x=0, y=2, made=True, distance=2, game_date=date(2024, 1, 10)),
        _shot(x=0, y=25, made=False, shot_type="3PT", game_date=date(2024, 1, 12), opponent="LAL"),
        _shot(x=23, y=3, made=True, shot_type="3PT", game_date=date(2024, 2, 1)),
        _shot(x=0, y=15, made=True, shot_type="FT", distance=15, game_date=date(2024, 2, 3)),
        _shot(x=5, y=5, made=False, player_id="2544", player_name="LeBron James"),
        _shot(x=0, y=20, made=True, player_id="2544", player_name="LeBron James", season="2022-23",
              game_date=date(2023, 3, 1)),
    ])
    return store
