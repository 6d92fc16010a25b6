"""Spatial binning of shots for heatmaps - pure, synchronous.

Two tilings are supported, both in pixel space (see ``CourtBounds``):

* grid: square cells of side ``2 * cell_pixels`` anchored at the top-left
  corner of the court extent, half-open on both axes;
* hexbin: pointy-top hexagons of radius ``cell_pixels`` in the d3-hexbin
  axial layout anchored at the pixel origin. Odd rows are shifted right by
  half a column. Each point goes to the centre nearest in pixel distance;
  a point equidistant from two candidate centres stays with the primary
  (row-rounded) candidate.

Shots outside the court extent are dropped before binning.
"""

import math
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import ConfigError
from ..models.bins import Bin, BinningConfig, CourtBounds
from ..models.enums import BinMethod
from ..models.shots import Shot
from ..nba_logging import get_logger

logger = get_logger(__name__)

Point = Tuple[float, float, bool]
CellKey = Tuple[int, int]

_SIN_60 = math.sin(math.pi / 3)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def project_shots(shots: Iterable[Shot], bounds: CourtBounds) -> List[Point]:
    """Project shots to pixel space, keeping only those inside the extent."""
    points = []
    for shot in shots:
        px, py = bounds.project(shot)
        if bounds.contains(px, py):
            points.append((px, py, shot.made))
    return points


def grid_size(config: BinningConfig) -> float:
    return 2.0 * config.cell_pixels


def hex_spacing(radius: float) -> Tuple[float, float]:
    """Horizontal and vertical distance between neighbouring hex centres."""
    return radius * 2 * _SIN_60, radius * 1.5


def grid_cell(px: float, py: float, size: float, bounds: CourtBounds) -> CellKey:
    """Column and row of the square cell containing a pixel."""
    return (
        math.floor((px - bounds.x_min) / size),
        math.floor((py - bounds.y_min) / size),
    )


def grid_center(cell: CellKey, size: float, bounds: CourtBounds) -> Tuple[float, float]:
    col, row = cell
    return bounds.x_min + (col + 0.5) * size, bounds.y_min + (row + 0.5) * size


def hex_cell(px: float, py: float, radius: float) -> CellKey:
    """Axial column and row of the hexagon nearest to a pixel."""
    dx, dy = hex_spacing(radius)

    fy = py / dy
    row = _round_half_up(fy)
    fx = px / dx - (row & 1) / 2
    col = _round_half_up(fx)
    off_y = fy - row

    # Near the top/bottom corners the nearest centre may be in the adjacent row
    if abs(off_y) * 3 > 1:
        off_x = fx - col
        col2 = col + (-1 if fx < col else 1) / 2
        row2 = row + (-1 if fy < row else 1)
        off_x2 = fx - col2
        off_y2 = fy - row2
        # Offsets are in column/row units; compare in pixels
        if math.hypot(off_x * dx, off_y * dy) > math.hypot(off_x2 * dx, off_y2 * dy):
            col = int(col2 + (1 if row & 1 else -1) / 2)
            row = row2

    return col, row


def hex_center(cell: CellKey, radius: float) -> Tuple[float, float]:
    col, row = cell
    dx, dy = hex_spacing(radius)
    return (col + (row & 1) / 2) * dx, row * dy


def hexagon_vertices(radius: float) -> List[Tuple[float, float]]:
    """Vertex offsets of a pointy-top hexagon, clockwise from the top."""
    vertices = []
    for i in range(6):
        angle = i * math.pi / 3
        vertices.append((math.sin(angle) * radius, -math.cos(angle) * radius))
    return vertices


def _accumulate(points: Sequence[Point], key_fn) -> Dict[CellKey, List[int]]:
    cells: Dict[CellKey, List[int]] = OrderedDict()
    for px, py, made in points:
        counts = cells.setdefault(key_fn(px, py), [0, 0])
        counts[0] += 1
        if made:
            counts[1] += 1
    return cells


def bin_grid(points: Sequence[Point], config: BinningConfig, bounds: CourtBounds) -> List[Bin]:
    size = grid_size(config)
    cells = _accumulate(points, lambda px, py: grid_cell(px, py, size, bounds))
    bins = []
    for cell in sorted(cells):
        total, made = cells[cell]
        cx, cy = grid_center(cell, size, bounds)
        bins.append(Bin(center_x=cx, center_y=cy, shots_made=made, total=total))
    return bins


def bin_hex(points: Sequence[Point], config: BinningConfig, bounds: CourtBounds) -> List[Bin]:
    radius = float(config.cell_pixels)
    cells = _accumulate(points, lambda px, py: hex_cell(px, py, radius))
    bins = []
    for cell in sorted(cells, key=lambda c: (c[1], c[0])):
        total, made = cells[cell]
        cx, cy = hex_center(cell, radius)
        bins.append(Bin(center_x=cx, center_y=cy, shots_made=made, total=total))
    return bins


def bin_shots(
    shots: Sequence[Shot],
    config: BinningConfig,
    bounds: Optional[CourtBounds] = None,
) -> List[Bin]:
    """Group shots into occupied heatmap bins.

    Args:
        shots: Shots to bin
        config: Binning method, cell size and minimum shots per bin
        bounds: Court canvas; defaults to an 800x600 canvas

    Returns:
        Occupied bins with at least ``config.min_shots_in_bin`` shots

    Raises:
        ConfigError: If the binning method is not recognized
    """
    bounds = bounds or CourtBounds()

    if config.method == BinMethod.GRID:
        binner = bin_grid
    elif config.method == BinMethod.HEXBIN:
        binner = bin_hex
    else:
        raise ConfigError(f"Unknown binning method {config.method!r}")

    if not shots:
        return []

    points = project_shots(shots, bounds)
    bins = [b for b in binner(points, config, bounds) if b.total >= config.min_shots_in_bin]

    logger.debug(
        "Binned shots",
        method=config.method.value,
        cell_pixels=config.cell_pixels,
        shots=len(shots),
        in_bounds=len(points),
        bins=len(bins),
    )
    return bins
