"""Court scene rendering: pure scene building plus a matplotlib adapter."""

from .matplotlib_adapter import draw_scene, save_scene
from .scene import ChartState, Legend, Scene, render, visible_shots

__all__ = ["ChartState", "Legend", "Scene", "draw_scene", "render", "save_scene", "visible_shots"]
