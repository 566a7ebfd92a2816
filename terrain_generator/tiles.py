# terrain_generator/tiles.py

"""
================================================================================
TILE GRID
================================================================================
This module defines the tile enums and the TileGrid, the single mutable data
structure that every generation stage reads and writes.

Data Contract:
---------------
- Storage: three flat NumPy arrays (heights, types, directions) addressed by
  index = y * width + x. Tiles are values, never shared objects; all mutation
  goes through (x, y) coordinates.
- Coordinates: x grows East, y grows South. North is y - 1.
- Invariants:
    - A STAIR tile always carries a direction other than NONE.
    - EMPTY tiles have height 0 and direction NONE.
================================================================================
"""

import hashlib
from enum import IntEnum
from typing import Iterator, NamedTuple, Optional

import numpy as np


class TileType(IntEnum):
    GROUND = 0
    STAIR = 1
    EMPTY = 2


class StairDirection(IntEnum):
    """The compass direction a stair ascends toward."""
    NONE = 0
    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4


# Canonical neighbor order. Shuffles are applied to this list.
CARDINAL_DIRECTIONS = (
    StairDirection.NORTH,
    StairDirection.EAST,
    StairDirection.SOUTH,
    StairDirection.WEST,
)

DIRECTION_OFFSETS = {
    StairDirection.NORTH: (0, -1),
    StairDirection.EAST: (1, 0),
    StairDirection.SOUTH: (0, 1),
    StairDirection.WEST: (-1, 0),
}

OPPOSITE_DIRECTION = {
    StairDirection.NORTH: StairDirection.SOUTH,
    StairDirection.EAST: StairDirection.WEST,
    StairDirection.SOUTH: StairDirection.NORTH,
    StairDirection.WEST: StairDirection.EAST,
}


class Tile(NamedTuple):
    """A read-only snapshot of one grid cell."""
    x: int
    y: int
    height: int
    type: TileType
    direction: StairDirection


class TileGrid:
    """
    A fixed-size grid of tiles. All tiles start as EMPTY at height 0 and are
    populated by the heightfield stage.
    """
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        size = width * height

        self.heights = np.zeros(size, dtype=np.int32)
        self.types = np.full(size, TileType.EMPTY, dtype=np.int8)
        self.directions = np.full(size, StairDirection.NONE, dtype=np.int8)

        # The continuous center sits between cells for even sizes. It is only
        # ever used for distance tests.
        self.center_x = (width - 1) / 2.0
        self.center_y = (height - 1) / 2.0
        ys, xs = np.divmod(np.arange(size), width)
        self.distances = np.hypot(xs - self.center_x, ys - self.center_y)

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def distance_to_center(self, x: int, y: int) -> float:
        return float(self.distances[self.index(x, y)])

    def tile(self, x: int, y: int) -> Tile:
        i = self.index(x, y)
        return Tile(
            x, y,
            int(self.heights[i]),
            TileType(int(self.types[i])),
            StairDirection(int(self.directions[i])),
        )

    def set_tile(self, x: int, y: int, height: int, tile_type: TileType,
                 direction: StairDirection = StairDirection.NONE):
        i = self.index(x, y)
        self.heights[i] = height
        self.types[i] = tile_type
        self.directions[i] = direction

    def neighbor(self, x: int, y: int, direction: StairDirection) -> Optional[tuple[int, int]]:
        """Returns the coordinates one step toward `direction`, or None off-grid."""
        dx, dy = DIRECTION_OFFSETS[direction]
        nx, ny = x + dx, y + dy
        if not self.in_bounds(nx, ny):
            return None
        return nx, ny

    def iter_tiles(self) -> Iterator[Tile]:
        """Yields every tile in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield self.tile(x, y)

    def count(self, tile_type: TileType) -> int:
        return int(np.count_nonzero(self.types == tile_type))

    # --- 2D views (row = y, column = x) ---
    def height_map(self) -> np.ndarray:
        return self.heights.reshape(self.height, self.width)

    def type_map(self) -> np.ndarray:
        return self.types.reshape(self.height, self.width)

    def direction_map(self) -> np.ndarray:
        return self.directions.reshape(self.height, self.width)

    def copy(self) -> 'TileGrid':
        clone = TileGrid(self.width, self.height)
        clone.heights[:] = self.heights
        clone.types[:] = self.types
        clone.directions[:] = self.directions
        return clone

    def fingerprint(self) -> str:
        """An md5 digest of the raw tile arrays. Equal digests mean identical grids."""
        digest = hashlib.md5()
        digest.update(np.array([self.width, self.height], dtype=np.int64).tobytes())
        digest.update(self.heights.tobytes())
        digest.update(self.types.tobytes())
        digest.update(self.directions.tobytes())
        return digest.hexdigest()
