# terrain_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the terrain
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC MAP.
Instead, pass a configuration dictionary to GenerationConfig.from_dict().
================================================================================
"""

# --- Map Dimensions ---
# The circular boundary of the playable area, in tiles. The grid is a square
# of side 2 * OVERALL_MAP_RADIUS.
OVERALL_MAP_RADIUS = 20
# Radius of the flat landing pad at the center of the map.
CENTER_FLAT_RADIUS = 5
# Surface height of the landing pad. May be negative.
LANDING_PAD_HEIGHT = 1

# --- Platform Generation ---
NUMBER_OF_PLATFORMS = 15
MIN_PLATFORM_WIDTH = 3
MAX_PLATFORM_WIDTH = 8
MIN_PLATFORM_LENGTH = 3
MAX_PLATFORM_LENGTH = 8
MIN_PLATFORM_HEIGHT = 1
MAX_PLATFORM_HEIGHT = 5

# --- Terrain Noise ---
# Multiplier applied to tile coordinates before sampling the noise.
# Smaller values give broader hills.
NOISE_SCALE = 0.1
# Maximum height offset (in tiles) the noise can add or remove.
NOISE_AMPLITUDE = 2
NOISE_OFFSET_X = 100.0
NOISE_OFFSET_Y = 100.0
NOISE_OCTAVES = 1
NOISE_PERSISTENCE = 0.5
NOISE_LACUNARITY = 2.0
# Seeds the gradient permutation table. This is independent from the
# stochastic seed so the same offsets always give the same hills.
DEFAULT_NOISE_SEED = 1337
# Lower bound for NOISE_SCALE; zero would collapse the whole band to one sample.
NOISE_SCALE_EPSILON = 1e-4

# --- Stair Synthesis ---
STAIR_PROBABILITY = 0.75
# None means stairs may be created at any height, including below zero.
STAIR_HEIGHT_FLOOR = None
# Extra relaxation passes on top of the worst-case height range.
RELAXATION_PASS_BUFFER = 2
# The pass cap never drops below this, even for perfectly flat maps.
MIN_RELAXATION_PASSES = 3

# --- Randomness ---
# None means the stochastic stages are seeded from OS entropy.
DEFAULT_SEED = None

# --- Preview ---
PREVIEW_TILE_PIXELS = 12
TILE_SPACING = 1.0
HEIGHT_STEP = 0.5
