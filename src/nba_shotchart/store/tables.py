"""Relational tables backing the shot record store."""

from datetime import date
from typing import Optional

from sqlalchemy import JSON, Boolean, Date, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base


class ShotRow(Base):
    __tablename__ = "shots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(32), index=True)
    player_name: Mapped[str] = mapped_column(String(128))
    team_id: Mapped[Optional[str]] = mapped_column(String(32), index=True, nullable=True)
    team_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    opponent: Mapped[str] = mapped_column(String(64), index=True)
    game_id: Mapped[Optional[str]] = mapped_column(String(32), index=True, nullable=True)
    game_date: Mapped[date] = mapped_column(Date, index=True)
    season: Mapped[str] = mapped_column(String(16), index=True)
    period: Mapped[int] = mapped_column(Integer)
    minutes_remaining: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    seconds_remaining: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    shot_type: Mapped[str] = mapped_column(String(3), index=True)
    made: Mapped[bool] = mapped_column(Boolean, index=True)
    x: Mapped[float] = mapped_column(Float)
    y: Mapped[float] = mapped_column(Float)
    distance: Mapped[float] = mapped_column(Float)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_shots_player_season", "player_id", "season"),
        Index("ix_shots_team_season", "team_id", "season"),
        Index("ix_shots_type_made", "shot_type", "made"),
    )


class PlayerRow(Base):
    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), index=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    position: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    team_id: Mapped[Optional[str]] = mapped_column(String(32), index=True, nullable=True)
    team_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    seasons: Mapped[list] = mapped_column(JSON, default=list)
    active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)


class TeamRow(Base):
    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), index=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    abbreviation: Mapped[Optional[str]] = mapped_column(String(8), index=True, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    conference: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    division: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
