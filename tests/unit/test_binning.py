"""Tests for grid and hexagon heatmap binning."""

import math
import random

import pytest

from nba_shotchart.errors import ConfigError
from nba_shotchart.models import BinningConfig, CourtBounds
from nba_shotchart.transformers.binning import (
    bin_shots,
    grid_cell,
    grid_size,
    hex_cell,
    hex_center,
    hex_spacing,
    hexagon_vertices,
    project_shots,
)


@pytest.fixture
def bounds():
    return CourtBounds(width=800, height=600)


class TestCourtBounds:
    """Projection from feet to pixel space."""

    def test_scale_and_extent(self, bounds):
        assert bounds.scale == pytest.approx(550 / 470)
        assert bounds.x_min == pytest.approx(-250 * bounds.scale)
        assert bounds.y_min == pytest.approx(-470 * bounds.scale)
        assert bounds.y_max == 0

    def test_basket_projects_to_basket(self, bounds, make_shot):
        assert bounds.project(make_shot(x=0, y=0)) == pytest.approx(bounds.basket)

    def test_extent_is_half_open(self, bounds):
        assert bounds.contains(bounds.x_min, bounds.y_min)
        assert not bounds.contains(bounds.x_max, -10)
        assert not bounds.contains(0, 0)


class TestGridBinning:
    """Square cells anchored at the top-left corner of the court."""

    def test_identical_shots_share_one_bin(self, bounds, make_shot):
        config = BinningConfig(method="grid")
        shots = [make_shot(x=3, y=10, made=True), make_shot(x=3, y=10, made=False)]

        bins = bin_shots(shots, config, bounds)

        assert len(bins) == 1
        assert bins[0].total == 2
        assert bins[0].shots_made == 1
        assert bins[0].percentage == 0.5

    def test_cell_boundary_belongs_to_next_cell(self, make_shot):
        # One pixel per court unit keeps the grid lines exact
        unit_bounds = CourtBounds(width=500, height=520)
        config = BinningConfig(method="grid", cell_size="small")
        size = grid_size(config)
        assert size == 30
        assert grid_cell(-220, -470, size, unit_bounds) == (1, 0)

        on_line = make_shot(x=-22, y=0)
        bins = bin_shots([on_line], config, unit_bounds)

        assert len(bins) == 1
        assert bins[0].center_x == pytest.approx(-205)
        assert bins[0].center_y == pytest.approx(-425)

    def test_shots_outside_court_are_dropped(self, bounds, make_shot):
        config = BinningConfig(method="grid")
        shots = [
            make_shot(x=0, y=10),
            make_shot(x=30, y=10),   # beyond the sideline
            make_shot(x=0, y=45),    # beyond half court
            make_shot(x=0, y=-6),    # behind the baseline
        ]

        bins = bin_shots(shots, config, bounds)

        assert sum(b.total for b in bins) == len(project_shots(shots, bounds)) == 1

    def test_min_shots_in_bin(self, bounds, make_shot):
        config = BinningConfig(method="grid", min_shots_in_bin=2)
        shots = [make_shot(x=0, y=10), make_shot(x=0, y=10), make_shot(x=-20, y=20)]

        bins = bin_shots(shots, config, bounds)

        assert [b.total for b in bins] == [2]

    def test_bins_are_sorted_by_column_then_row(self, bounds, make_shot):
        config = BinningConfig(method="grid")
        shots = [make_shot(x=20, y=5), make_shot(x=-20, y=30), make_shot(x=-20, y=5)]

        bins = bin_shots(shots, config, bounds)

        keys = [(b.center_x, b.center_y) for b in bins]
        assert keys == sorted(keys)


class TestHexBinning:
    """Pointy-top hexagons anchored at the pixel origin."""

    def test_spacing(self):
        dx, dy = hex_spacing(25)
        assert dx == pytest.approx(50 * math.sin(math.pi / 3))
        assert dy == pytest.approx(37.5)

    def test_centres_map_to_themselves(self):
        for cell in [(0, 0), (1, 0), (0, 1), (-2, -3), (3, -5)]:
            cx, cy = hex_center(cell, 25)
            assert hex_cell(cx, cy, 25) == cell

    def test_odd_rows_are_offset(self):
        dx, dy = hex_spacing(25)
        assert hex_center((0, 1), 25) == pytest.approx((dx / 2, dy))
        assert hex_center((0, -1), 25) == pytest.approx((dx / 2, -dy))

    def test_tie_on_shared_edge_rounds_up(self):
        dx, _ = hex_spacing(25)
        assert hex_cell(dx / 2, 0, 25) == (1, 0)

    def test_point_near_corner_moves_to_adjacent_row(self):
        dx, dy = hex_spacing(25)
        # Rounds to row 0 but lies closer to the centre of hexagon (0, -1)
        assert hex_cell(dx / 2 - 1, -dy / 2 + 1, 25) == (0, -1)

    @pytest.mark.parametrize("seed", [7, 2024])
    def test_points_go_to_nearest_centre(self, seed):
        """Every pixel lands in the hexagon whose centre is nearest in Euclidean distance."""
        radius = 25
        rng = random.Random(seed)
        centres = [hex_center((c, r), radius) for c in range(-9, 10) for r in range(-17, 3)]
        for _ in range(3000):
            px, py = rng.uniform(-300, 300), rng.uniform(-550, 0)
            cx, cy = hex_center(hex_cell(px, py, radius), radius)
            nearest = min(math.hypot(px - x, py - y) for x, y in centres)
            assert math.hypot(px - cx, py - cy) == pytest.approx(nearest), (px, py)

    def test_corner_point_goes_to_adjacent_row(self):
        """Closer to the even row above than to its own row-rounded candidate."""
        cell = hex_cell(126.954, -322.632, 25)

        assert cell == (3, -8)
        assert hex_center(cell, 25) == pytest.approx((129.904, -300.0), abs=1e-3)

    def test_identical_shots_share_one_hexagon(self, bounds, make_shot):
        shots = [make_shot(x=1, y=8, made=True), make_shot(x=1, y=8, made=False)]

        bins = bin_shots(shots, BinningConfig(method="hexbin"), bounds)

        assert len(bins) == 1
        assert (bins[0].total, bins[0].shots_made, bins[0].percentage) == (2, 1, 0.5)

    def test_total_matches_shots_inside_extent(self, bounds, make_shot):
        shots = [make_shot(x=x, y=y, made=(x + y) % 2 == 0)
                 for x in range(-30, 31, 4) for y in range(-8, 48, 5)]

        bins = bin_shots(shots, BinningConfig(method="hexbin", cell_size="small"), bounds)

        assert sum(b.total for b in bins) == len(project_shots(shots, bounds))
        assert all(b.total > 0 for b in bins)

    def test_binning_is_deterministic(self, bounds, make_shot):
        shots = [make_shot(x=x / 3, y=y / 2, made=x % 3 == 0) for x in range(-60, 60, 7) for y in range(0, 60, 9)]
        config = BinningConfig(method="hexbin", cell_size="large")

        first = bin_shots(shots, config, bounds)
        second = bin_shots(list(reversed(shots)), config, bounds)

        assert first == second

    def test_hexagon_vertices(self):
        vertices = hexagon_vertices(10)
        assert len(vertices) == 6
        assert vertices[0] == pytest.approx((0, -10))
        assert vertices[3] == pytest.approx((0, 10))
        assert all(math.hypot(x, y) == pytest.approx(10) for x, y in vertices)


class TestBinningErrors:
    """Configuration and empty-input handling."""

    def test_empty_shots_give_no_bins(self):
        assert bin_shots([], BinningConfig(method="grid")) == []
        assert bin_shots([], BinningConfig(method="hexbin")) == []

    def test_unknown_method_raises_config_error(self):
        with pytest.raises(ConfigError):
            BinningConfig(method="triangles")

    def test_unknown_cell_size_raises_config_error(self):
        with pytest.raises(ConfigError):
            BinningConfig(cell_size="huge")

    def test_min_shots_must_be_positive(self):
        with pytest.raises(ConfigError):
            BinningConfig(min_shots_in_bin=0)
