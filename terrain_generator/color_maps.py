# terrain_generator/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the color constants and functions for converting a
TileGrid into a top-down RGB preview.

It is a pure, stateless utility with no dependencies on Pygame, so it can be
used by both the interactive viewer and the command-line PNG export.
================================================================================
"""
import numpy as np

from .tiles import StairDirection, TileGrid, TileType

# --- Default Color Mappings ---
COLOR_MAP_HEIGHT = {
    "lowest": (40, 70, 40),
    "highest": (225, 215, 170),
}

COLOR_EMPTY = (10, 10, 20)
COLOR_LANDING_PAD = (90, 110, 150)
COLOR_STAIR = (200, 120, 40)

# Drawn on the tile edge a stair ascends toward.
STAIR_MARKER_COLOR = (255, 240, 200)

HEIGHT_STEPS = 256


def create_height_lut() -> np.ndarray:
    """Creates a 256-entry color LUT running from the lowest to the highest tile."""
    t = np.linspace(0.0, 1.0, HEIGHT_STEPS)[..., np.newaxis]
    colors = (1 - t) * np.array(COLOR_MAP_HEIGHT["lowest"]) + t * np.array(COLOR_MAP_HEIGHT["highest"])
    return colors.astype(np.uint8)


def get_tile_color_array(grid: TileGrid, center_flat_radius: float = None, height_lut: np.ndarray = None) -> np.ndarray:
    """
    Returns an (height, width, 3) uint8 array with one pixel per tile.
    Ground is shaded by height, stairs are highlighted, empty tiles are dark.
    If center_flat_radius is given the landing pad gets its own color.
    """
    if height_lut is None:
        height_lut = create_height_lut()

    heights = grid.height_map()
    types = grid.type_map()
    solid = types != TileType.EMPTY

    colors = np.empty((grid.height, grid.width, 3), dtype=np.uint8)
    colors[:] = COLOR_EMPTY
    if not solid.any():
        return colors

    low = heights[solid].min()
    high = heights[solid].max()
    span = max(int(high) - int(low), 1)
    normalized = (heights - low) / span
    indices = np.clip((normalized * (HEIGHT_STEPS - 1)).astype(int), 0, HEIGHT_STEPS - 1)

    colors[solid] = height_lut[indices[solid]]
    colors[types == TileType.STAIR] = COLOR_STAIR

    if center_flat_radius is not None:
        pad = grid.distances.reshape(grid.height, grid.width) <= center_flat_radius
        colors[pad & solid] = COLOR_LANDING_PAD

    return colors


def upscale_with_stair_markers(colors: np.ndarray, grid: TileGrid, tile_pixels: int) -> np.ndarray:
    """
    Scales the per-tile colors up to tile_pixels x tile_pixels blocks and
    draws a marker strip on the edge each stair ascends toward.
    """
    image = np.repeat(np.repeat(colors, tile_pixels, axis=0), tile_pixels, axis=1)
    strip = max(1, tile_pixels // 4)

    directions = grid.direction_map()
    stair_ys, stair_xs = np.nonzero(grid.type_map() == TileType.STAIR)
    for y, x in zip(stair_ys, stair_xs):
        top, left = y * tile_pixels, x * tile_pixels
        direction = directions[y, x]
        if direction == StairDirection.NORTH:
            image[top:top + strip, left:left + tile_pixels] = STAIR_MARKER_COLOR
        elif direction == StairDirection.SOUTH:
            image[top + tile_pixels - strip:top + tile_pixels, left:left + tile_pixels] = STAIR_MARKER_COLOR
        elif direction == StairDirection.EAST:
            image[top:top + tile_pixels, left + tile_pixels - strip:left + tile_pixels] = STAIR_MARKER_COLOR
        elif direction == StairDirection.WEST:
            image[top:top + tile_pixels, left:left + strip] = STAIR_MARKER_COLOR
    return image
