"""Tests for the platform stamper."""

from __future__ import annotations

import numpy as np

from terrain_generator.heightfield import populate_heightfield
from terrain_generator.noise import create_permutation_table
from terrain_generator.platforms import Platform, draw_inclusive, stamp_platforms
from terrain_generator.tiles import TileGrid, TileType
from tests.helpers import RecordingRng, ScriptedRng, make_config


def _flat_grid(cfg):
    grid = TileGrid(cfg.grid_width, cfg.grid_height)
    populate_heightfield(grid, cfg, create_permutation_table(cfg.noise_seed))
    return grid


class TestDraws:
    def test_inclusive_range_hits_both_ends(self) -> None:
        rng = np.random.default_rng(0)
        values = {draw_inclusive(rng, 2, 4) for _ in range(200)}
        assert values == {2, 3, 4}

    def test_degenerate_range_collapses_to_low(self) -> None:
        rng = RecordingRng()
        assert draw_inclusive(rng, 5, 2) == 5
        assert rng.calls == ["integers"]

    def test_five_draws_per_placed_platform(self) -> None:
        cfg = make_config(number_of_platforms=2, min_platform_width=2, max_platform_width=3,
                          min_platform_length=2, max_platform_length=3, max_platform_height=2)
        rng = RecordingRng()
        stamp_platforms(_flat_grid(cfg), cfg, rng)
        assert rng.calls == ["integers"] * 10

    def test_oversized_platform_skips_anchor_draws(self) -> None:
        cfg = make_config(number_of_platforms=1, min_platform_width=20, max_platform_width=20,
                          min_platform_length=2, max_platform_length=2, max_platform_height=2)
        rng = RecordingRng()
        report = stamp_platforms(_flat_grid(cfg), cfg, rng)
        assert rng.calls == ["integers"] * 3
        assert report.platforms == []
        assert report.skipped == 1

    def test_non_positive_size_is_skipped(self) -> None:
        cfg = make_config(number_of_platforms=3, min_platform_width=0, max_platform_width=0,
                          max_platform_height=2)
        report = stamp_platforms(_flat_grid(cfg), cfg, np.random.default_rng(1))
        assert report.skipped == 3

    def test_height_never_below_pad(self) -> None:
        cfg = make_config(overall_map_radius=10, number_of_platforms=40, landing_pad_height=4,
                          min_platform_height=1, max_platform_height=6, min_platform_width=1,
                          max_platform_width=3, min_platform_length=1, max_platform_length=3)
        report = stamp_platforms(_flat_grid(cfg), cfg, np.random.default_rng(2))
        assert report.platforms
        assert all(4 <= p.height <= 6 for p in report.platforms)


class TestStamping:
    def test_footprint_is_raised(self) -> None:
        cfg = make_config(overall_map_radius=5, number_of_platforms=1, min_platform_width=1,
                          max_platform_width=4, min_platform_length=1, max_platform_length=4,
                          max_platform_height=5)
        grid = _flat_grid(cfg)
        # width 2, length 2, height 3, anchor (1, 4)
        report = stamp_platforms(grid, cfg, ScriptedRng([2, 2, 3, 1, 4]))
        assert report.platforms == [Platform(1, 4, 2, 2, 3)]
        for x, y in [(1, 4), (2, 4), (1, 5), (2, 5)]:
            assert grid.tile(x, y).height == 3
            assert grid.tile(x, y).type == TileType.GROUND
        assert grid.tile(3, 4).height == 0

    def test_pad_and_boundary_are_protected(self) -> None:
        cfg = make_config(overall_map_radius=3, center_flat_radius=1, landing_pad_height=0,
                          number_of_platforms=1, max_platform_width=6, max_platform_length=6,
                          max_platform_height=5)
        grid = _flat_grid(cfg)
        # A platform covering the whole 6x6 grid.
        stamp_platforms(grid, cfg, ScriptedRng([6, 6, 4, 0, 0]))
        for tile in grid.iter_tiles():
            d = grid.distance_to_center(tile.x, tile.y)
            if d <= cfg.center_flat_radius:
                assert tile.height == 0
            elif d > cfg.overall_map_radius:
                assert tile.type == TileType.EMPTY
                assert tile.height == 0
            else:
                assert tile.height == 4

    def test_later_platforms_win_overlaps(self) -> None:
        cfg = make_config(overall_map_radius=5, number_of_platforms=2, max_platform_width=4,
                          max_platform_length=4, max_platform_height=5)
        grid = _flat_grid(cfg)
        stamp_platforms(grid, cfg, ScriptedRng([3, 3, 5, 1, 1,
                                                3, 3, 2, 2, 2]))
        assert grid.tile(1, 1).height == 5
        assert grid.tile(2, 2).height == 2
        assert grid.tile(3, 3).height == 2
        assert grid.tile(4, 4).height == 2
