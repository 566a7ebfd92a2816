# terrain_generator/generator.py

"""
================================================================================
CORE TERRAIN GENERATOR
================================================================================
This module contains the main TerrainGenerator class, which runs the three
generation stages in order and owns the resulting TileGrid.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict or GenerationConfig): parameters overriding the internal
      defaults. Expected keys include 'overall_map_radius', 'seed', etc.
    - logger: A configured Python logging object for runtime messages.
    - rng (optional): an injected numpy.random.Generator. If None, one is
      built from config.seed (OS entropy when the seed is None).
    - permutation_table (optional): an injected noise permutation table.
- Outputs (from generate()):
    - A new TileGrid. The stage reports stay available as attributes.
- Side Effects: Logs messages using the provided logger. Every call to
  generate() draws from the same sequential generator.
- Invariants: Given the same configuration and seed, the output grid is
  byte-identical across generator instances.
================================================================================
"""

import logging
import time
from typing import Union

import numpy as np

from . import noise
from .heightfield import populate_heightfield
from .platforms import stamp_platforms
from .settings import GenerationConfig
from .stairs import synthesize_stairs
from .tiles import TileGrid, TileType


class TerrainGenerator:
    """
    Generates the tile grid for one exploration map: heightfield, then
    platforms, then stairs. This class is backend-only and does not handle
    any visualization.
    """
    def __init__(self, config: Union[dict, GenerationConfig], logger: logging.Logger,
                 rng: np.random.Generator = None, permutation_table: np.ndarray = None):
        """
        Initializes the terrain generator.

        Args:
            config (dict | GenerationConfig): User-defined parameters.
            logger (logging.Logger): The logger instance for all output.
            rng (np.random.Generator, optional): The sequential random source
                for the platform and stair stages.
            permutation_table (np.ndarray, optional): A pre-computed noise
                permutation table. If None, one is generated from noise_seed.
        """
        self.logger = logger
        self.logger.info("TerrainGenerator initializing...")

        # --- Consolidate Configuration ---
        if isinstance(config, GenerationConfig):
            self.config = config
        else:
            self.config = GenerationConfig.from_dict(config, logger=self.logger)
        self.seed = self.config.seed

        # --- Initialize Randomness ---
        if rng is not None:
            self.rng = rng
            self.logger.debug("Initialized with injected random generator.")
        else:
            # default_rng(None) pulls fresh entropy from the OS.
            self.rng = np.random.default_rng(self.seed)

        if permutation_table is not None:
            self._p = permutation_table
            self.logger.debug("Initialized with injected permutation table.")
        else:
            self._p = noise.create_permutation_table(self.config.noise_seed)
        self.permutation_table = self._p

        # --- Results of the latest run ---
        self.grid = None
        self.heightfield_summary = None
        self.platform_report = None
        self.relaxation_report = None

        seed_text = self.seed if self.seed is not None else "entropy"
        self.logger.info(f"TerrainGenerator initialized with seed: {seed_text}")
        self.logger.info(
            f"Grid dimensions: {self.config.grid_width}x{self.config.grid_height} tiles "
            f"(map radius {self.config.overall_map_radius}, "
            f"flat radius {self.config.center_flat_radius}, "
            f"pad height {self.config.landing_pad_height})"
        )

    @property
    def platforms(self) -> list:
        return self.platform_report.platforms if self.platform_report else []

    def generate(self) -> TileGrid:
        """Builds a brand new grid and runs every stage on it."""
        start_time = time.perf_counter()
        grid = TileGrid(self.config.grid_width, self.config.grid_height)

        # 1. Heightfield: pad, noise band and out-of-bounds.
        self.heightfield_summary = populate_heightfield(grid, self.config, self._p)
        summary = self.heightfield_summary
        self.logger.debug(
            f"Heightfield: {summary.pad_tiles} pad, {summary.noise_tiles} noise "
            f"({summary.min_noise_height}..{summary.max_noise_height}), {summary.empty_tiles} empty."
        )

        # 2. Platforms.
        self.platform_report = stamp_platforms(grid, self.config, self.rng)
        self.logger.debug(
            f"Platforms: {len(self.platform_report.platforms)} stamped, "
            f"{self.platform_report.skipped} skipped."
        )

        # 3. Stairs.
        self.relaxation_report = synthesize_stairs(grid, self.config, self.rng)
        report = self.relaxation_report
        if report.converged:
            self.logger.debug(f"Stairs: fixed point reached after {report.passes} passes.")
        else:
            self.logger.warning(
                f"Stair relaxation hit its cap of {report.max_passes} passes "
                f"without reaching a fixed point ({report.mutations_per_pass[-1]} changes in the last pass)."
            )

        self.grid = grid
        elapsed = time.perf_counter() - start_time
        self.logger.info(
            f"Map generated in {elapsed:.3f}s: {grid.count(TileType.STAIR)} stairs, "
            f"{report.total_mutations} stair mutations over {report.passes} passes."
        )
        return grid
