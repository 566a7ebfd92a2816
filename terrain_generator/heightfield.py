# terrain_generator/heightfield.py

"""
================================================================================
HEIGHTFIELD INITIALIZER
================================================================================
The first pipeline stage. Classifies every cell by its distance from the grid
center and assigns its base height.

Data Contract:
---------------
- Inputs:
    - grid: a freshly allocated TileGrid sized from the config.
    - config: the GenerationConfig for this run.
    - permutation_table: the noise permutation table.
- Outputs:
    - A HeightfieldSummary with the band sizes.
- Side Effects: Fully (re)populates the grid in place.
- Invariants:
    - d <= center_flat_radius: GROUND at landing_pad_height.
    - center_flat_radius < d <= overall_map_radius: GROUND at a noise offset.
    - d > overall_map_radius: EMPTY at height 0.
    - Draws nothing from the stochastic generator.
================================================================================
"""

from dataclasses import dataclass

import numpy as np

from .noise import sample_unit_noise
from .settings import GenerationConfig
from .tiles import StairDirection, TileGrid, TileType


@dataclass(frozen=True)
class HeightfieldSummary:
    pad_tiles: int
    noise_tiles: int
    empty_tiles: int
    min_noise_height: int
    max_noise_height: int


def sample_noise_heights(grid: TileGrid, config: GenerationConfig, permutation_table: np.ndarray) -> np.ndarray:
    """
    Returns the signed integer noise offset for every cell as a flat array,
    round((N(x, y) - 0.5) * 2 * amplitude).
    """
    ys, xs = np.divmod(np.arange(grid.width * grid.height), grid.width)
    sample_x = (xs * config.noise_scale + config.noise_offset_x).reshape(grid.height, grid.width)
    sample_y = (ys * config.noise_scale + config.noise_offset_y).reshape(grid.height, grid.width)

    unit_noise = sample_unit_noise(
        permutation_table, sample_x, sample_y,
        octaves=config.noise_octaves,
        persistence=config.noise_persistence,
        lacunarity=config.noise_lacunarity
    )
    # np.round rounds halves to even, matching a round-half-to-even integer cast.
    offsets = np.round((unit_noise - 0.5) * 2.0 * config.noise_amplitude)
    return offsets.astype(np.int32).ravel()


def populate_heightfield(grid: TileGrid, config: GenerationConfig, permutation_table: np.ndarray) -> HeightfieldSummary:
    """Classifies every cell into pad / noise band / out-of-bounds and sets its height."""
    # 1. Build the three band masks from the precomputed distances.
    pad_mask = grid.distances <= config.center_flat_radius
    in_bounds_mask = grid.distances <= config.overall_map_radius
    noise_mask = in_bounds_mask & ~pad_mask

    # 2. Start from a clean slate: everything empty.
    grid.heights[:] = 0
    grid.types[:] = TileType.EMPTY
    grid.directions[:] = StairDirection.NONE

    # 3. Noise band.
    noise_heights = sample_noise_heights(grid, config, permutation_table)
    grid.heights[noise_mask] = noise_heights[noise_mask]
    grid.types[noise_mask] = TileType.GROUND

    # 4. Landing pad.
    grid.heights[pad_mask] = config.landing_pad_height
    grid.types[pad_mask] = TileType.GROUND

    band = noise_heights[noise_mask]
    return HeightfieldSummary(
        pad_tiles=int(np.count_nonzero(pad_mask)),
        noise_tiles=int(np.count_nonzero(noise_mask)),
        empty_tiles=int(np.count_nonzero(~in_bounds_mask)),
        min_noise_height=int(band.min()) if band.size else 0,
        max_noise_height=int(band.max()) if band.size else 0,
    )
