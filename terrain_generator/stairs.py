# terrain_generator/stairs.py

"""
================================================================================
STAIR SYNTHESIZER
================================================================================
The final pipeline stage. An iterative local relaxation that turns height
discontinuities between adjacent tiles into 1-unit STAIR steps.

Data Contract:
---------------
- Inputs:
    - grid: a TileGrid after the heightfield and platform stages (or any grid
      that honors the tile invariants; the stage may be rerun on its output).
    - config: the GenerationConfig for this run.
    - rng: the run's numpy.random.Generator.
- Outputs:
    - A RelaxationReport (passes run, mutations per pass, cap).
- Side Effects: Mutates grid tiles in place.
- Draw order (per pass, row-major over the grid):
    1. For every non-EMPTY cell: one permutation of the four directions.
    2. For every neighbor that passes the eligibility gate, in that order:
       one uniform draw compared against stair_probability.
- Termination: stops after the first pass with zero mutations, or after
  config.max_relaxation_passes passes, whichever comes first.
- Invariants:
    - Pad cells are never modified. A stair base never sits inside the pad,
      and the only anchor inside the pad is the pad surface itself.
    - Every STAIR tile created here has a direction.
================================================================================
"""

from dataclasses import dataclass, field

import numpy as np

from .settings import GenerationConfig
from .tiles import (
    CARDINAL_DIRECTIONS,
    DIRECTION_OFFSETS,
    OPPOSITE_DIRECTION,
    StairDirection,
    TileGrid,
    TileType,
)

_GROUND = int(TileType.GROUND)
_STAIR = int(TileType.STAIR)
_EMPTY = int(TileType.EMPTY)


@dataclass
class RelaxationReport:
    max_passes: int
    mutations_per_pass: list = field(default_factory=list)

    @property
    def passes(self) -> int:
        return len(self.mutations_per_pass)

    @property
    def total_mutations(self) -> int:
        return sum(self.mutations_per_pass)

    @property
    def converged(self) -> bool:
        """True if the last pass made no changes, i.e. a fixed point was reached."""
        return bool(self.mutations_per_pass) and self.mutations_per_pass[-1] == 0


def synthesize_stairs(grid: TileGrid, config: GenerationConfig, rng: np.random.Generator) -> RelaxationReport:
    report = RelaxationReport(max_passes=config.max_relaxation_passes)

    while report.passes < report.max_passes:
        mutations = _relaxation_pass(grid, config, rng)
        report.mutations_per_pass.append(mutations)
        if mutations == 0:
            break

    return report


def _relaxation_pass(grid: TileGrid, config: GenerationConfig, rng: np.random.Generator) -> int:
    """Runs one row-major scan over the grid and returns the number of stairs made."""
    heights = grid.heights
    types = grid.types
    directions = grid.directions
    distances = grid.distances
    mutations = 0

    for y in range(grid.height):
        for x in range(grid.width):
            current = grid.index(x, y)
            if types[current] == _EMPTY:
                continue

            # Drawn fresh for every cell on every pass; the draw order is part
            # of the seed-determinism contract.
            order = rng.permutation(len(CARDINAL_DIRECTIONS))

            for k in order:
                direction = CARDINAL_DIRECTIONS[k]
                dx, dy = DIRECTION_OFFSETS[direction]
                nx, ny = x + dx, y + dy
                if not grid.in_bounds(nx, ny):
                    continue
                neighbor = grid.index(nx, ny)
                if types[neighbor] == _EMPTY:
                    continue
                if heights[current] == heights[neighbor]:
                    continue

                if heights[current] < heights[neighbor]:
                    low, high, ascent = current, neighbor, direction
                else:
                    low, high, ascent = neighbor, current, OPPOSITE_DIRECTION[direction]

                if not _is_eligible(low, high, heights, types, distances, config):
                    continue
                if rng.random() >= config.stair_probability:
                    continue

                # high is either outside the pad or is the pad surface, so
                # high - 1 equals landing_pad_height - 1 for a pad anchor.
                if heights[high] > heights[low] + 1:
                    heights[low] = heights[high] - 1
                types[low] = _STAIR
                directions[low] = ascent
                mutations += 1

                # A cell that has just become a stair is claimed for this
                # pass; a cell acting as anchor keeps scanning.
                if low == current:
                    break

    return mutations


def _is_eligible(low: int, high: int, heights, types, distances, config: GenerationConfig) -> bool:
    if types[low] != _GROUND:
        return False
    if types[high] != _GROUND and types[high] != _STAIR:
        return False
    if distances[low] <= config.center_flat_radius:
        return False
    if distances[high] <= config.center_flat_radius and heights[high] != config.landing_pad_height:
        return False
    if config.stair_height_floor is not None and heights[high] - 1 < config.stair_height_floor:
        return False
    return True


def count_stairs_without_direction(grid: TileGrid) -> int:
    """Number of STAIR tiles with no direction. Always 0 on a well-formed grid."""
    malformed = (grid.types == _STAIR) & (grid.directions == StairDirection.NONE)
    return int(np.count_nonzero(malformed))
