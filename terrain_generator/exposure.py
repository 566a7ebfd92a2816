# terrain_generator/exposure.py

"""
================================================================================
BLOCK EXPOSURE (RENDERER CONTRACT)
================================================================================
This module turns a finished TileGrid into the set of unit blocks a 3D
renderer has to instantiate. It holds no rendering code; it only answers
"which cells are solid", "which are exposed" and "how is each stair rotated".

Data Contract:
---------------
- Inputs:
    - A completed TileGrid.
- Outputs:
    - is_cell_solid / is_cell_exposed for single cells.
    - exposed_cells: a boolean volume indexed [h - min_height, y, x].
    - iter_blocks: Block records for every exposed cell.
- Rules:
    - (x, y, h) is solid iff the column is not EMPTY and h <= tile height.
      Anything outside the grid is air.
    - A solid cell is exposed iff at least one of its six axis-aligned
      neighbors is not solid.
    - A stair block is emitted only at the column's surface height; the
      rotation comes from STAIR_ROTATION_DEGREES.
- Side Effects: None.
================================================================================
"""

from typing import Iterator, NamedTuple, Optional

import numpy as np
from scipy.ndimage import binary_erosion, generate_binary_structure

from . import config as DEFAULTS
from .tiles import StairDirection, TileGrid, TileType

# Yaw in degrees for each ascent direction.
STAIR_ROTATION_DEGREES = {
    StairDirection.NORTH: 180.0,
    StairDirection.EAST: 90.0,
    StairDirection.SOUTH: 0.0,
    StairDirection.WEST: -90.0,
}

BLOCK_KIND_GROUND = "ground"
BLOCK_KIND_STAIR = "stair"


class Block(NamedTuple):
    x: int
    y: int
    h: int
    kind: str
    rotation_degrees: float
    position: tuple[float, float, float]


def is_cell_solid(grid: TileGrid, x: int, y: int, h: int) -> bool:
    if not grid.in_bounds(x, y):
        return False
    i = grid.index(x, y)
    if grid.types[i] == TileType.EMPTY:
        return False
    return h <= grid.heights[i]


def is_cell_exposed(grid: TileGrid, x: int, y: int, h: int) -> bool:
    """True for a solid cell with at least one non-solid face neighbor."""
    if not is_cell_solid(grid, x, y, h):
        return False
    neighbors = (
        (x + 1, y, h), (x - 1, y, h),
        (x, y + 1, h), (x, y - 1, h),
        (x, y, h + 1), (x, y, h - 1),
    )
    return any(not is_cell_solid(grid, nx, ny, nh) for nx, ny, nh in neighbors)


def surface_height_range(grid: TileGrid) -> Optional[tuple[int, int]]:
    """(min, max) surface height over non-EMPTY tiles, or None if there are none."""
    solid_heights = grid.heights[grid.types != TileType.EMPTY]
    if solid_heights.size == 0:
        return None
    return int(solid_heights.min()), int(solid_heights.max())


def solid_volume(grid: TileGrid, min_height: int, max_height: int) -> np.ndarray:
    """Boolean volume [level, y, x] for levels min_height..max_height inclusive."""
    levels = np.arange(min_height, max_height + 1).reshape(-1, 1, 1)
    heights = grid.height_map()[np.newaxis, :, :]
    occupied = (grid.type_map() != TileType.EMPTY)[np.newaxis, :, :]
    return occupied & (levels <= heights)


def exposed_cells(grid: TileGrid) -> Optional[tuple[int, np.ndarray]]:
    """
    Returns (min_height, volume) where volume[h - min_height, y, x] is True for
    every exposed block, or None when the grid has no solid tiles.
    """
    height_range = surface_height_range(grid)
    if height_range is None:
        return None
    min_height, max_height = height_range

    # Pad one level below (still solid under every column) and one above
    # (always air) so the erosion border only touches the discarded layers.
    solid = solid_volume(grid, min_height - 1, max_height + 1)

    # A cell survives 6-connected erosion only if all six neighbors are solid.
    structure = generate_binary_structure(3, 1)
    interior = binary_erosion(solid, structure=structure, border_value=0)
    exposed = solid & ~interior
    return min_height, exposed[1:-1]


def block_position(grid: TileGrid, x: int, y: int, h: int,
                   tile_spacing: float = DEFAULTS.TILE_SPACING,
                   height_step: float = DEFAULTS.HEIGHT_STEP) -> tuple[float, float, float]:
    """World position of a block, with the grid centered on the origin."""
    return (
        (x - grid.width / 2.0 + 0.5) * tile_spacing,
        h * height_step,
        (y - grid.height / 2.0 + 0.5) * tile_spacing,
    )


def iter_blocks(grid: TileGrid,
                tile_spacing: float = DEFAULTS.TILE_SPACING,
                height_step: float = DEFAULTS.HEIGHT_STEP) -> Iterator[Block]:
    """Yields a Block for every exposed cell, level by level, in row-major order."""
    result = exposed_cells(grid)
    if result is None:
        return
    min_height, exposed = result

    for level, y, x in np.argwhere(exposed):
        h = int(level) + min_height
        x, y = int(x), int(y)
        i = grid.index(x, y)
        kind = BLOCK_KIND_GROUND
        rotation = 0.0
        if h == grid.heights[i] and grid.types[i] == TileType.STAIR:
            kind = BLOCK_KIND_STAIR
            rotation = STAIR_ROTATION_DEGREES[StairDirection(int(grid.directions[i]))]
        yield Block(x, y, h, kind, rotation, block_position(grid, x, y, h, tile_spacing, height_step))
