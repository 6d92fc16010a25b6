"""Pure court scene construction.

``render(state)`` turns a chart state into plain drawing primitives in pixel
space (origin at the centre of the half-court line, ``y`` growing toward half
court, the baseline at the top). Arc angles are in degrees measured from +x
toward +y. Nothing here touches a drawing backend.
"""

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Sequence, Tuple, Union

from ..models.bins import Bin, BinningConfig, CourtBounds, LegendTick
from ..models.enums import BinMethod, ShotType
from ..models.shots import Shot
from ..transformers.binning import bin_shots, grid_size, hexagon_vertices
from ..transformers.colors import MAKE_COLOR, MISS_COLOR, color_for, legend_ticks

LINE_COLOR = "#000000"
COURT_FILL = "#f8f8f8"
CELL_STROKE = "#ffffff"

MARKER_RADIUS = 4.0
MARKER_OPACITY = 0.7

LEGEND_WIDTH = 200.0
LEGEND_HEIGHT = 20.0
LEGEND_INSET = 20.0
LEGEND_TITLE = "Shot Percentage"

THREE_POINT_RADIUS = 237.5
THREE_POINT_CORNER_X = 220.0
THREE_POINT_CORNER_LENGTH = 140.0


Point = Tuple[float, float]


@dataclass(frozen=True)
class RectShape:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[str] = None
    stroke: str = LINE_COLOR
    stroke_width: float = 2.0


@dataclass(frozen=True)
class CircleShape:
    cx: float
    cy: float
    r: float
    fill: Optional[str] = None
    stroke: str = LINE_COLOR
    stroke_width: float = 2.0
    opacity: float = 1.0
    tooltip: Optional[str] = None


@dataclass(frozen=True)
class LineShape:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = LINE_COLOR
    stroke_width: float = 2.0


@dataclass(frozen=True)
class ArcShape:
    cx: float
    cy: float
    r: float
    theta1: float
    theta2: float
    stroke: str = LINE_COLOR
    stroke_width: float = 2.0


@dataclass(frozen=True)
class PolygonShape:
    points: Tuple[Point, ...]
    fill: str
    stroke: str = CELL_STROKE
    stroke_width: float = 1.0
    tooltip: Optional[str] = None


Shape = Union[RectShape, CircleShape, LineShape, ArcShape, PolygonShape]


@dataclass(frozen=True)
class Legend:
    x: float
    y: float
    width: float
    height: float
    title: str
    start_color: str
    end_color: str
    ticks: Tuple[LegendTick, ...]

    def tick_x(self, tick: LegendTick) -> float:
        return self.x + tick.value / 100 * self.width


@dataclass(frozen=True)
class Scene:
    width: float
    height: float
    court: Tuple[Shape, ...]
    markers: Tuple[CircleShape, ...] = ()
    cells: Tuple[PolygonShape, ...] = ()
    bins: Tuple[Bin, ...] = ()
    legend: Optional[Legend] = None


@dataclass(frozen=True)
class ChartState:
    """Everything a court render depends on, passed explicitly."""

    shots: Tuple[Shot, ...] = ()
    show_makes: bool = True
    show_misses: bool = True
    shot_types: Optional[FrozenSet[ShotType]] = None
    heatmap: bool = False
    binning: BinningConfig = field(default_factory=BinningConfig)
    bounds: CourtBounds = field(default_factory=CourtBounds)


def _round_percent(percentage: float) -> int:
    return math.floor(percentage * 100 + 0.5)


def visible_shots(state: ChartState) -> Tuple[Shot, ...]:
    """Shots passing the make/miss toggles and the shot type selection."""
    return tuple(
        shot
        for shot in state.shots
        if ((shot.made and state.show_makes) or (not shot.made and state.show_misses))
        and (state.shot_types is None or shot.shot_type in state.shot_types)
    )


def court_shapes(bounds: CourtBounds) -> Tuple[Shape, ...]:
    s = bounds.scale
    baseline = bounds.y_min
    basket_x, basket_y = bounds.basket
    arc_rise = math.sqrt(THREE_POINT_RADIUS ** 2 - THREE_POINT_CORNER_X ** 2)
    arc_start = math.degrees(math.atan2(arc_rise, THREE_POINT_CORNER_X))

    return (
        RectShape(bounds.x_min, baseline, bounds.x_max - bounds.x_min, -baseline, fill=COURT_FILL),
        # Free throw circle and lane
        CircleShape(0.0, baseline + 190 * s, 60 * s),
        RectShape(-80 * s, baseline, 160 * s, 190 * s),
        # Backboard and rim
        LineShape(-30 * s, baseline + 40 * s, 30 * s, baseline + 40 * s),
        CircleShape(basket_x, basket_y, 9 * s),
        ArcShape(basket_x, basket_y, 40 * s, 0.0, 180.0),
        # Three-point line
        LineShape(-THREE_POINT_CORNER_X * s, baseline, -THREE_POINT_CORNER_X * s,
                  baseline + THREE_POINT_CORNER_LENGTH * s),
        LineShape(THREE_POINT_CORNER_X * s, baseline, THREE_POINT_CORNER_X * s,
                  baseline + THREE_POINT_CORNER_LENGTH * s),
        ArcShape(basket_x, basket_y, THREE_POINT_RADIUS * s, arc_start, 180.0 - arc_start),
        # Centre circle
        ArcShape(0.0, 0.0, 60 * s, 180.0, 360.0),
    )


def shot_markers(shots: Sequence[Shot], bounds: CourtBounds) -> Tuple[CircleShape, ...]:
    markers = []
    for shot in shots:
        cx, cy = bounds.project(shot)
        result = "Made" if shot.made else "Missed"
        markers.append(
            CircleShape(
                cx,
                cy,
                MARKER_RADIUS,
                fill=(MAKE_COLOR if shot.made else MISS_COLOR).hex,
                stroke="#ffffff",
                stroke_width=0.5,
                opacity=MARKER_OPACITY,
                tooltip=f"{shot.player_name}: {result} {shot.shot_type.value} ({shot.distance:g} ft)",
            )
        )
    return tuple(markers)


def _cell_outline(b: Bin, config: BinningConfig) -> Tuple[Point, ...]:
    if config.method == BinMethod.HEXBIN:
        return tuple((b.center_x + dx, b.center_y + dy) for dx, dy in hexagon_vertices(config.cell_pixels))
    half = grid_size(config) / 2
    return (
        (b.center_x - half, b.center_y - half),
        (b.center_x + half, b.center_y - half),
        (b.center_x + half, b.center_y + half),
        (b.center_x - half, b.center_y + half),
    )


def heat_cells(bins: Sequence[Bin], config: BinningConfig) -> Tuple[PolygonShape, ...]:
    stroke_width = 1.0 if config.method == BinMethod.HEXBIN else 0.5
    return tuple(
        PolygonShape(
            points=_cell_outline(b, config),
            fill=color_for(b.percentage, config.color_scale).hex,
            stroke_width=stroke_width,
            tooltip=f"{_round_percent(b.percentage)}% ({b.shots_made}/{b.total})",
        )
        for b in bins
    )


def build_legend(config: BinningConfig, bounds: CourtBounds) -> Legend:
    ticks = tuple(legend_ticks(config.color_scale))
    return Legend(
        x=bounds.x_max - LEGEND_WIDTH - LEGEND_INSET,
        y=bounds.y_min + LEGEND_INSET,
        width=LEGEND_WIDTH,
        height=LEGEND_HEIGHT,
        title=LEGEND_TITLE,
        start_color=ticks[0].color.hex,
        end_color=ticks[-1].color.hex,
        ticks=ticks,
    )


def render(state: ChartState) -> Scene:
    """Build the drawable scene for a chart state."""
    bounds = state.bounds
    shots = visible_shots(state)
    court = court_shapes(bounds)

    if not state.heatmap:
        return Scene(
            width=bounds.width,
            height=bounds.height,
            court=court,
            markers=shot_markers(shots, bounds),
        )

    bins = tuple(bin_shots(shots, state.binning, bounds))
    return Scene(
        width=bounds.width,
        height=bounds.height,
        court=court,
        cells=heat_cells(bins, state.binning),
        bins=bins,
        legend=build_legend(state.binning, bounds),
    )
