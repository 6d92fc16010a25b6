"""Pure transformations from shot lists to statistics, bins and colors."""

from .aggregate import aggregate, compare_summaries, zone_stats
from .binning import bin_shots, hexagon_vertices
from .colors import MAKE_COLOR, MISS_COLOR, color_for, legend_ticks
from .zones import ZONE_PREDICATES, classify, zones_for

__all__ = [
    "MAKE_COLOR",
    "MISS_COLOR",
    "ZONE_PREDICATES",
    "aggregate",
    "bin_shots",
    "classify",
    "color_for",
    "compare_summaries",
    "hexagon_vertices",
    "legend_ticks",
    "zone_stats",
    "zones_for",
]
