"""Heatmap binning models: configuration, court geometry and bins."""

from dataclasses import dataclass
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from ..errors import ConfigError
from .enums import BinMethod, CellSize, ColorScaleKind
from .shots import Shot
from .stats import make_percentage

# Half-court size in court units (tenths of feet)
COURT_WIDTH_UNITS = 500.0
COURT_LENGTH_UNITS = 470.0
# Distance from the baseline to the centre of the basket
BASKET_FROM_BASELINE_UNITS = 52.5
UNITS_PER_FOOT = 10.0
# Space reserved under the court on the canvas
CANVAS_MARGIN_PX = 50.0


def _coerce(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Unknown {label} {value!r}; expected one of: {valid}") from None


@dataclass(frozen=True)
class BinningConfig:
    """How shots are grouped and colored for a heatmap."""

    method: BinMethod = BinMethod.HEXBIN
    cell_size: CellSize = CellSize.MEDIUM
    color_scale: ColorScaleKind = ColorScaleKind.RED_YELLOW_GREEN
    min_shots_in_bin: int = 1

    def __post_init__(self):
        object.__setattr__(self, "method", _coerce(BinMethod, self.method, "binning method"))
        object.__setattr__(self, "cell_size", _coerce(CellSize, self.cell_size, "cell size"))
        object.__setattr__(
            self, "color_scale", _coerce(ColorScaleKind, self.color_scale, "color scale")
        )
        if self.min_shots_in_bin < 1:
            raise ConfigError("min_shots_in_bin must be at least 1")

    @property
    def cell_pixels(self) -> int:
        return self.cell_size.pixels


@dataclass(frozen=True)
class CourtBounds:
    """Pixel canvas for a half court.

    Pixel space has its origin at the centre of the half-court line with the
    baseline at ``-COURT_LENGTH_UNITS * scale``.
    """

    width: float = 800.0
    height: float = 600.0

    @property
    def scale(self) -> float:
        return min(
            self.width / COURT_WIDTH_UNITS,
            (self.height - CANVAS_MARGIN_PX) / COURT_LENGTH_UNITS,
        )

    @property
    def x_min(self) -> float:
        return -COURT_WIDTH_UNITS * self.scale / 2

    @property
    def x_max(self) -> float:
        return COURT_WIDTH_UNITS * self.scale / 2

    @property
    def y_min(self) -> float:
        return -COURT_LENGTH_UNITS * self.scale

    @property
    def y_max(self) -> float:
        return 0.0

    @property
    def basket(self) -> Tuple[float, float]:
        return 0.0, -(COURT_LENGTH_UNITS - BASKET_FROM_BASELINE_UNITS) * self.scale

    def project(self, shot: Shot) -> Tuple[float, float]:
        """Map a shot's court coordinates in feet to pixel space."""
        basket_x, basket_y = self.basket
        return (
            basket_x + shot.x * UNITS_PER_FOOT * self.scale,
            basket_y + shot.y * UNITS_PER_FOOT * self.scale,
        )

    def contains(self, px: float, py: float) -> bool:
        """Half-open extent test: ``[x_min, x_max) x [y_min, y_max)``."""
        return self.x_min <= px < self.x_max and self.y_min <= py < self.y_max


class Bin(BaseModel):
    """One occupied hexagon or grid cell."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    center_x: float
    center_y: float
    shots_made: int = Field(..., ge=0)
    total: int = Field(..., ge=1)

    @computed_field
    @property
    def percentage(self) -> float:
        return make_percentage(self.shots_made, self.total)


@dataclass(frozen=True)
class Color:
    """An sRGB color with 8-bit channels."""

    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        value = value.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Expected #rrggbb color, got {value!r}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_unit_rgb(self) -> Tuple[float, float, float]:
        return self.r / 255, self.g / 255, self.b / 255


@dataclass(frozen=True)
class LegendTick:
    """Labelled legend stop."""

    value: int
    color: Color

    @property
    def label(self) -> str:
        return f"{self.value}%"
