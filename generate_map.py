# generate_map.py

"""
================================================================================
MAP GENERATION SCRIPT
================================================================================
A command-line tool that generates an exploration map from a JSON
configuration, logs a summary, and optionally writes a top-down PNG preview.
With --runs it instead surveys many consecutive seeds and reports how often
the stair relaxation converged.

Usage:
    python generate_map.py --config config.json --output preview.png
    python generate_map.py --config config.json --seed 7 --runs 200
================================================================================
"""
import argparse
import collections
import json
import logging
import sys
import time

import numpy as np
from PIL import Image
from tqdm import tqdm

from terrain_generator import color_maps
from terrain_generator import config as DEFAULTS
from terrain_generator.generator import TerrainGenerator
from terrain_generator.tiles import TileType


def load_config(config_path: str, logger: logging.Logger) -> dict:
    """Loads the JSON config file. Returns None if it cannot be read."""
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return None


def save_preview(generator: TerrainGenerator, output_path: str, tile_pixels: int, logger: logging.Logger):
    """Writes the latest grid as a PNG, one tile_pixels square per tile."""
    grid = generator.grid
    colors = color_maps.get_tile_color_array(grid, center_flat_radius=generator.config.center_flat_radius)
    image_data = color_maps.upscale_with_stair_markers(colors, grid, tile_pixels)
    Image.fromarray(image_data, 'RGB').save(output_path, 'PNG')
    logger.info(f"Preview saved to: {output_path}")


def survey_seeds(params: dict, first_seed: int, runs: int, logger: logging.Logger) -> dict:
    """
    Generates `runs` maps on consecutive seeds and collects relaxation stats.
    The per-map logging is silenced so the progress bar stays readable.
    """
    quiet_logger = logging.getLogger("Survey.Generator")
    quiet_logger.setLevel(logging.ERROR)

    outcomes = collections.Counter()
    stair_counts = []
    passes = []

    for offset in tqdm(range(runs), desc="Surveying seeds"):
        run_params = dict(params, seed=first_seed + offset)
        generator = TerrainGenerator(config=run_params, logger=quiet_logger)
        grid = generator.generate()
        report = generator.relaxation_report

        outcomes['converged' if report.converged else 'capped'] += 1
        stair_counts.append(grid.count(TileType.STAIR))
        passes.append(report.passes)

    stats = {
        'runs': runs,
        'converged': outcomes['converged'],
        'capped': outcomes['capped'],
        'mean_stairs': float(np.mean(stair_counts)) if stair_counts else 0.0,
        'mean_passes': float(np.mean(passes)) if passes else 0.0,
        'max_passes': int(max(passes)) if passes else 0,
    }
    logger.info(
        f"Survey of {runs} seeds from {first_seed}: {stats['converged']} converged, "
        f"{stats['capped']} capped, {stats['mean_stairs']:.1f} stairs and "
        f"{stats['mean_passes']:.2f} passes on average (max {stats['max_passes']})."
    )
    return stats


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Procedural exploration map generator.")
    parser.add_argument("--config", type=str, required=True,
                        help="Path to the JSON configuration file.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Overrides the seed from the configuration file.")
    parser.add_argument("--output", type=str, default=None,
                        help="Optional path for a PNG preview of the generated map.")
    parser.add_argument("--runs", type=int, default=0,
                        help="Survey this many consecutive seeds instead of generating one map.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("MapGenerator")

    config = load_config(args.config, logger)
    if config is None:
        return 1

    params = dict(config.get('terrain_generation_parameters', {}))
    preview = config.get('preview', {})
    if args.seed is not None:
        params['seed'] = args.seed

    if args.runs > 0:
        first_seed = params.get('seed')
        if first_seed is None:
            first_seed = 0
        survey_seeds(params, first_seed, args.runs, logger)
        return 0

    start_time = time.perf_counter()
    generator = TerrainGenerator(config=params, logger=logger)
    grid = generator.generate()
    effective = generator.config.to_dict()
    logger.debug(f"Effective configuration: {json.dumps(effective)}")
    logger.info(
        f"Tiles: {grid.count(TileType.GROUND)} ground, {grid.count(TileType.STAIR)} stair, "
        f"{grid.count(TileType.EMPTY)} empty. Fingerprint: {grid.fingerprint()}"
    )

    if args.output:
        tile_pixels = preview.get('tile_pixels', DEFAULTS.PREVIEW_TILE_PIXELS)
        save_preview(generator, args.output, tile_pixels, logger)

    logger.info(f"Done in {time.perf_counter() - start_time:.2f} seconds.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
