# terrain_generator/platforms.py

"""
================================================================================
PLATFORM STAMPER
================================================================================
The second pipeline stage. Stamps rectangular raised platforms onto the grid.

Data Contract:
---------------
- Inputs:
    - grid: a TileGrid already populated by the heightfield stage.
    - config: the GenerationConfig for this run.
    - rng: the run's numpy.random.Generator.
- Outputs:
    - A PlatformReport listing every stamped footprint and the skip count.
- Side Effects: Mutates grid heights/types/directions in place.
- Draw order (per platform): width, length, height, then (only if the
  footprint is usable) start_x, start_y. Nothing else is drawn.
- Invariants:
    - Pad cells (d <= center_flat_radius), out-of-bounds cells
      (d > overall_map_radius) and EMPTY cells are never written.
    - Overlapping platforms resolve last-write-wins.
================================================================================
"""

from dataclasses import dataclass, field

import numpy as np

from .settings import GenerationConfig
from .tiles import StairDirection, TileGrid, TileType


@dataclass(frozen=True)
class Platform:
    x: int
    y: int
    width: int
    length: int
    height: int


@dataclass
class PlatformReport:
    platforms: list = field(default_factory=list)
    skipped: int = 0


def draw_inclusive(rng: np.random.Generator, low: int, high: int) -> int:
    """
    Draws uniformly from [low, high]. A degenerate range (high < low)
    collapses to `low` but still consumes one draw.
    """
    return int(rng.integers(low, max(low, high) + 1))


def stamp_platforms(grid: TileGrid, config: GenerationConfig, rng: np.random.Generator) -> PlatformReport:
    report = PlatformReport()
    min_height = max(config.landing_pad_height, config.min_platform_height)

    for _ in range(config.number_of_platforms):
        # 1. Draw the platform dimensions.
        width = draw_inclusive(rng, config.min_platform_width, config.max_platform_width)
        length = draw_inclusive(rng, config.min_platform_length, config.max_platform_length)
        height = draw_inclusive(rng, min_height, config.max_platform_height)

        # 2. Skip degenerate or oversized footprints without drawing an anchor.
        if width <= 0 or length <= 0:
            report.skipped += 1
            continue
        if grid.width - width < 0 or grid.height - length < 0:
            report.skipped += 1
            continue

        # 3. Anchor the top-left corner so the footprint stays on the grid.
        start_x = int(rng.integers(0, grid.width - width + 1))
        start_y = int(rng.integers(0, grid.height - length + 1))

        _stamp(grid, config, start_x, start_y, width, length, height)
        report.platforms.append(Platform(start_x, start_y, width, length, height))

    return report


def _stamp(grid: TileGrid, config: GenerationConfig, start_x: int, start_y: int,
           width: int, length: int, height: int):
    for y in range(start_y, start_y + length):
        for x in range(start_x, start_x + width):
            i = grid.index(x, y)
            distance = grid.distances[i]
            if distance <= config.center_flat_radius or distance > config.overall_map_radius:
                continue
            if grid.types[i] == TileType.EMPTY:
                continue
            grid.heights[i] = height
            grid.types[i] = TileType.GROUND
            grid.directions[i] = StairDirection.NONE
