"""Shot record store backed by SQLAlchemy."""

from .shot_store import UNKNOWN_PLAYER, ShotStore

__all__ = ["UNKNOWN_PLAYER", "ShotStore"]
