"""Async engine and session factory for the shot record store."""

from typing import Optional

from sqlalchemy import MetaData, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.ext.asyncio.session import async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from .config import get_settings
from .nba_logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the store tables."""
    metadata = MetaData()


# Process-wide engine, created lazily from settings
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_engine_for_url(url: str, echo: bool = False) -> AsyncEngine:
    """Engine for ``url``.

    SQLite runs on a single shared connection so an in-memory database keeps
    its tables for the life of the engine. Server databases get a pool sized
    from settings.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    settings = get_settings()
    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.get_database_url()
        _engine = create_engine_for_url(url, echo=settings.DB_ECHO)
        logger.info("Shot store engine created", backend=make_url(url).get_backend_name())
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Sessions bound to the process-wide engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)
    return _session_factory


async def close_engine() -> None:
    """Dispose the process-wide engine; the next ``get_engine`` builds a new one."""
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Shot store engine closed")


async def check_connection(engine: Optional[AsyncEngine] = None) -> bool:
    """True when a trivial query succeeds; failures are logged, not raised."""
    try:
        async with (engine or get_engine()).connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Shot store unreachable", error=str(e))
        return False
    return True


async def create_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create the shots, players and teams tables when missing."""
    from .store import tables  # noqa: F401

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Shot store tables ready", tables=sorted(Base.metadata.tables))
