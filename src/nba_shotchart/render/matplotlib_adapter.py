"""Draw a court scene with matplotlib."""

from pathlib import Path
from typing import Optional, Union

import numpy as np
from matplotlib.axes import Axes
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure
from matplotlib.patches import Arc, Circle, Polygon, Rectangle

from ..models.bins import CANVAS_MARGIN_PX
from ..nba_logging import get_logger
from .scene import ArcShape, CircleShape, Legend, LineShape, PolygonShape, RectShape, Scene

logger = get_logger(__name__)

DPI = 100


def _draw_shape(ax: Axes, shape, zorder: float) -> None:
    if isinstance(shape, RectShape):
        ax.add_patch(Rectangle(
            (shape.x, shape.y), shape.width, shape.height,
            facecolor=shape.fill or "none", edgecolor=shape.stroke,
            linewidth=shape.stroke_width, zorder=zorder,
        ))
    elif isinstance(shape, CircleShape):
        ax.add_patch(Circle(
            (shape.cx, shape.cy), shape.r,
            facecolor=shape.fill or "none", edgecolor=shape.stroke,
            linewidth=shape.stroke_width, alpha=shape.opacity, zorder=zorder,
        ))
    elif isinstance(shape, LineShape):
        ax.plot([shape.x1, shape.x2], [shape.y1, shape.y2],
                color=shape.stroke, linewidth=shape.stroke_width, zorder=zorder)
    elif isinstance(shape, ArcShape):
        ax.add_patch(Arc(
            (shape.cx, shape.cy), 2 * shape.r, 2 * shape.r,
            theta1=shape.theta1, theta2=shape.theta2,
            edgecolor=shape.stroke, linewidth=shape.stroke_width, zorder=zorder,
        ))
    elif isinstance(shape, PolygonShape):
        ax.add_patch(Polygon(
            shape.points, closed=True, facecolor=shape.fill,
            edgecolor=shape.stroke, linewidth=shape.stroke_width, zorder=zorder,
        ))
    else:
        raise TypeError(f"Unsupported shape {type(shape).__name__}")


def _draw_legend(ax: Axes, legend: Legend) -> None:
    cmap = LinearSegmentedColormap.from_list("legend", [legend.start_color, legend.end_color])
    gradient = np.linspace(0.0, 1.0, 256).reshape(1, -1)
    ax.imshow(
        gradient,
        cmap=cmap,
        aspect="auto",
        extent=(legend.x, legend.x + legend.width, legend.y + legend.height, legend.y),
        zorder=5,
    )
    ax.text(legend.x + legend.width / 2, legend.y - 5, legend.title,
            ha="center", va="bottom", fontsize=9, zorder=6)
    for tick in legend.ticks:
        ax.text(legend.tick_x(tick), legend.y + legend.height + 4, tick.label,
                ha="center", va="top", fontsize=8, zorder=6)


def draw_scene(scene: Scene, ax: Optional[Axes] = None) -> Figure:
    """Paint a scene onto ``ax`` (or a new figure) and return the figure."""
    if ax is None:
        fig = Figure(figsize=(scene.width / DPI, scene.height / DPI), dpi=DPI)
        ax = fig.add_axes((0, 0, 1, 1))
    else:
        fig = ax.figure

    for shape in scene.court:
        _draw_shape(ax, shape, zorder=1)
    for cell in scene.cells:
        _draw_shape(ax, cell, zorder=2)
    for marker in scene.markers:
        _draw_shape(ax, marker, zorder=3)
    if scene.legend is not None:
        _draw_legend(ax, scene.legend)

    ax.set_xlim(-scene.width / 2, scene.width / 2)
    # Pixel space grows downward like a screen: baseline on top
    ax.set_ylim(CANVAS_MARGIN_PX, -(scene.height - CANVAS_MARGIN_PX))
    ax.set_aspect("equal")
    ax.axis("off")
    return fig


def save_scene(scene: Scene, path: Union[str, Path]) -> Path:
    """Render a scene to an image file; the format follows the suffix."""
    path = Path(path)
    fig = draw_scene(scene)
    fig.savefig(path, dpi=DPI)
    logger.info("Saved court scene", path=str(path), markers=len(scene.markers), cells=len(scene.cells))
    return path
