"""Pydantic models and value types for shot chart data."""

from .bins import Bin, BinningConfig, Color, CourtBounds, LegendTick
from .enums import BinMethod, CellSize, ColorScaleKind, ComparisonKind, ShotType, ZoneName
from .reference import Player, Team
from .shots import Shot, ShotFilters
from .stats import (
    ComparisonOutcome,
    ComparisonRow,
    ShootingSplit,
    ShotStatsSummary,
    ZoneStat,
    make_percentage,
)

__all__ = [
    "Bin",
    "BinMethod",
    "BinningConfig",
    "CellSize",
    "Color",
    "ColorScaleKind",
    "ComparisonKind",
    "ComparisonOutcome",
    "ComparisonRow",
    "CourtBounds",
    "LegendTick",
    "Player",
    "ShootingSplit",
    "Shot",
    "ShotFilters",
    "ShotStatsSummary",
    "ShotType",
    "Team",
    "ZoneName",
    "ZoneStat",
    "make_percentage",
]
