"""Shared builders and fake random sources for the terrain generator tests."""

from __future__ import annotations

import numpy as np

from terrain_generator.settings import GenerationConfig
from terrain_generator.tiles import TileGrid, TileType


class RecordingRng:
    """Wraps a numpy Generator and records the name of every draw."""

    def __init__(self, seed: int = 0) -> None:
        self._rng = np.random.default_rng(seed)
        self.calls: list[str] = []

    def integers(self, *args, **kwargs):
        self.calls.append("integers")
        return self._rng.integers(*args, **kwargs)

    def random(self, *args, **kwargs):
        self.calls.append("random")
        return self._rng.random(*args, **kwargs)

    def permutation(self, *args, **kwargs):
        self.calls.append("permutation")
        return self._rng.permutation(*args, **kwargs)


class ScriptedRng:
    """Returns pre-scripted values for integers(); random() always returns 0.0."""

    def __init__(self, integers: list[int]) -> None:
        self._integers = list(integers)

    def integers(self, low, high):
        value = self._integers.pop(0)
        assert low <= value < high, f"scripted value {value} outside [{low}, {high})"
        return value

    def random(self):
        return 0.0

    def permutation(self, n):
        return np.arange(n)


def make_config(**overrides) -> GenerationConfig:
    """A small, flat, platform-free config unless overridden."""
    params = dict(
        overall_map_radius=4,
        center_flat_radius=0,
        landing_pad_height=0,
        noise_amplitude=0,
        number_of_platforms=0,
        min_platform_height=0,
        max_platform_height=0,
        stair_probability=1.0,
        seed=0,
    )
    params.update(overrides)
    return GenerationConfig(**params)


def make_strip(length: int, heights: dict[int, int], base: int = 0) -> TileGrid:
    """
    A grid whose only non-EMPTY tiles form one row (y = 0), so every
    discontinuity can only be resolved along x.
    """
    grid = TileGrid(length, 3)
    for x in range(length):
        grid.set_tile(x, 0, heights.get(x, base), TileType.GROUND)
    return grid


