# terrain_generator/settings.py

"""
================================================================================
GENERATION SETTINGS
================================================================================
This module defines GenerationConfig, the immutable parameter set for a single
generation run.

Data Contract:
---------------
- Inputs:
    - A dictionary of user parameters (typically the
      'terrain_generation_parameters' section of a JSON config file).
- Outputs:
    - A frozen GenerationConfig whose fields are already sanitized.
- Side Effects: None. Invalid values are clamped, never rejected.
- Invariants:
    - overall_map_radius >= 1
    - 0 <= center_flat_radius <= overall_map_radius
    - noise_scale >= NOISE_SCALE_EPSILON, noise_amplitude >= 0
    - 0.0 <= stair_probability <= 1.0
================================================================================
"""

import logging
from dataclasses import asdict, dataclass, fields
from typing import Optional

from . import config as DEFAULTS


@dataclass(frozen=True)
class GenerationConfig:
    overall_map_radius: int = DEFAULTS.OVERALL_MAP_RADIUS
    center_flat_radius: int = DEFAULTS.CENTER_FLAT_RADIUS
    landing_pad_height: int = DEFAULTS.LANDING_PAD_HEIGHT

    noise_scale: float = DEFAULTS.NOISE_SCALE
    noise_amplitude: int = DEFAULTS.NOISE_AMPLITUDE
    noise_offset_x: float = DEFAULTS.NOISE_OFFSET_X
    noise_offset_y: float = DEFAULTS.NOISE_OFFSET_Y
    noise_octaves: int = DEFAULTS.NOISE_OCTAVES
    noise_persistence: float = DEFAULTS.NOISE_PERSISTENCE
    noise_lacunarity: float = DEFAULTS.NOISE_LACUNARITY
    noise_seed: int = DEFAULTS.DEFAULT_NOISE_SEED

    number_of_platforms: int = DEFAULTS.NUMBER_OF_PLATFORMS
    min_platform_width: int = DEFAULTS.MIN_PLATFORM_WIDTH
    max_platform_width: int = DEFAULTS.MAX_PLATFORM_WIDTH
    min_platform_length: int = DEFAULTS.MIN_PLATFORM_LENGTH
    max_platform_length: int = DEFAULTS.MAX_PLATFORM_LENGTH
    min_platform_height: int = DEFAULTS.MIN_PLATFORM_HEIGHT
    max_platform_height: int = DEFAULTS.MAX_PLATFORM_HEIGHT

    stair_probability: float = DEFAULTS.STAIR_PROBABILITY
    stair_height_floor: Optional[int] = DEFAULTS.STAIR_HEIGHT_FLOOR
    seed: Optional[int] = DEFAULTS.DEFAULT_SEED

    def __post_init__(self):
        # The dataclass is frozen, so sanitized values are written back
        # through object.__setattr__.
        radius = max(1, int(self.overall_map_radius))
        object.__setattr__(self, 'overall_map_radius', radius)
        object.__setattr__(self, 'center_flat_radius', min(max(0, int(self.center_flat_radius)), radius))
        object.__setattr__(self, 'landing_pad_height', int(self.landing_pad_height))

        object.__setattr__(self, 'noise_scale', max(float(self.noise_scale), DEFAULTS.NOISE_SCALE_EPSILON))
        object.__setattr__(self, 'noise_amplitude', max(0, int(self.noise_amplitude)))
        object.__setattr__(self, 'noise_octaves', max(1, int(self.noise_octaves)))

        object.__setattr__(self, 'number_of_platforms', max(0, int(self.number_of_platforms)))
        object.__setattr__(self, 'stair_probability', min(max(float(self.stair_probability), 0.0), 1.0))

    @classmethod
    def from_dict(cls, config: dict, logger: logging.Logger = None) -> 'GenerationConfig':
        """
        Builds a config from user parameters, falling back to the internal
        defaults for every missing key. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        if logger is not None:
            for key in sorted(set(config) - known):
                logger.debug(f"Ignoring unknown generation parameter '{key}'.")
        return cls(**{key: value for key, value in config.items() if key in known})

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def grid_width(self) -> int:
        return 2 * self.overall_map_radius

    @property
    def grid_height(self) -> int:
        return 2 * self.overall_map_radius

    @property
    def max_relaxation_passes(self) -> int:
        """
        Enough passes for the tallest possible staircase to unfold one step
        per pass, plus a small buffer.
        """
        worst_case_range = (
            self.max_platform_height
            + abs(self.landing_pad_height)
            + self.noise_amplitude
            + DEFAULTS.RELAXATION_PASS_BUFFER
        )
        return max(DEFAULTS.MIN_RELAXATION_PASSES, worst_case_range)
