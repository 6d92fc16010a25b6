"""Percentage to color mapping and legend ticks."""

import math
from typing import List

from matplotlib import colormaps

from ..errors import ConfigError
from ..models.bins import Color, LegendTick
from ..models.enums import ColorScaleKind

MISS_COLOR = Color.from_hex("#e94c4d")
MAKE_COLOR = Color.from_hex("#2bba64")

LEGEND_TICK_VALUES = (0, 25, 50, 75, 100)


def _resolve_scale(scale) -> ColorScaleKind:
    try:
        return ColorScaleKind(scale)
    except ValueError:
        raise ConfigError(f"Unknown color scale {scale!r}") from None


def _channel(start: int, end: int, t: float) -> int:
    return math.floor(start + (end - start) * t + 0.5)


def interpolate_rgb(start: Color, end: Color, t: float) -> Color:
    """Linear per-channel RGB interpolation, rounded half-up."""
    return Color(
        _channel(start.r, end.r, t),
        _channel(start.g, end.g, t),
        _channel(start.b, end.b, t),
    )


def viridis(t: float) -> Color:
    r, g, b, _ = colormaps["viridis"](t)
    return Color(round(r * 255), round(g * 255), round(b * 255))


def color_for(percentage: float, scale=ColorScaleKind.RED_YELLOW_GREEN) -> Color:
    """Map a make percentage in [0, 1] to a heatmap color.

    Raises:
        ValueError: If ``percentage`` is NaN or outside [0, 1]
        ConfigError: If ``scale`` is not a known color scale
    """
    scale = _resolve_scale(scale)
    if math.isnan(percentage) or not 0.0 <= percentage <= 1.0:
        raise ValueError(f"percentage must be within [0, 1], got {percentage}")

    if scale == ColorScaleKind.RED_YELLOW_GREEN:
        return interpolate_rgb(MISS_COLOR, MAKE_COLOR, percentage)
    return viridis(percentage)


def legend_ticks(scale=ColorScaleKind.RED_YELLOW_GREEN) -> List[LegendTick]:
    """Legend stops at 0, 25, 50, 75 and 100 percent."""
    return [LegendTick(value=v, color=color_for(v / 100, scale)) for v in LEGEND_TICK_VALUES]
