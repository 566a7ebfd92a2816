"""Tests for GenerationConfig sanitization and derived values."""

from __future__ import annotations

import dataclasses

import pytest

from terrain_generator import config as DEFAULTS
from terrain_generator.settings import GenerationConfig


class TestSanitization:
    """Invalid values are clamped, never rejected."""

    def test_defaults_match_internal_constants(self) -> None:
        cfg = GenerationConfig()
        assert cfg.overall_map_radius == DEFAULTS.OVERALL_MAP_RADIUS
        assert cfg.center_flat_radius == DEFAULTS.CENTER_FLAT_RADIUS
        assert cfg.stair_probability == DEFAULTS.STAIR_PROBABILITY
        assert cfg.seed is None

    def test_radius_is_floored_to_one(self) -> None:
        assert GenerationConfig(overall_map_radius=0).overall_map_radius == 1
        assert GenerationConfig(overall_map_radius=-7).overall_map_radius == 1

    def test_flat_radius_is_clamped_into_map(self) -> None:
        assert GenerationConfig(overall_map_radius=3, center_flat_radius=10).center_flat_radius == 3
        assert GenerationConfig(center_flat_radius=-2).center_flat_radius == 0

    def test_noise_scale_is_floored_to_epsilon(self) -> None:
        assert GenerationConfig(noise_scale=0.0).noise_scale == DEFAULTS.NOISE_SCALE_EPSILON
        assert GenerationConfig(noise_scale=-1.0).noise_scale == DEFAULTS.NOISE_SCALE_EPSILON

    def test_amplitude_and_counts_are_non_negative(self) -> None:
        cfg = GenerationConfig(noise_amplitude=-3, number_of_platforms=-1, noise_octaves=0)
        assert cfg.noise_amplitude == 0
        assert cfg.number_of_platforms == 0
        assert cfg.noise_octaves == 1

    def test_stair_probability_is_clamped(self) -> None:
        assert GenerationConfig(stair_probability=1.5).stair_probability == 1.0
        assert GenerationConfig(stair_probability=-0.2).stair_probability == 0.0

    def test_negative_pad_height_is_kept(self) -> None:
        assert GenerationConfig(landing_pad_height=-4).landing_pad_height == -4

    def test_config_is_immutable(self) -> None:
        cfg = GenerationConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.seed = 3  # type: ignore[misc]


class TestDerivedValues:
    def test_grid_is_twice_the_radius(self) -> None:
        cfg = GenerationConfig(overall_map_radius=6)
        assert (cfg.grid_width, cfg.grid_height) == (12, 12)

    def test_pass_cap_covers_worst_case_height_range(self) -> None:
        cfg = GenerationConfig(max_platform_height=5, landing_pad_height=-3, noise_amplitude=2)
        assert cfg.max_relaxation_passes == 5 + 3 + 2 + DEFAULTS.RELAXATION_PASS_BUFFER

    def test_pass_cap_has_a_minimum(self) -> None:
        cfg = GenerationConfig(max_platform_height=-10, landing_pad_height=0, noise_amplitude=0)
        assert cfg.max_relaxation_passes == DEFAULTS.MIN_RELAXATION_PASSES


class TestFromDict:
    def test_missing_keys_fall_back_to_defaults(self) -> None:
        cfg = GenerationConfig.from_dict({"overall_map_radius": 9})
        assert cfg.overall_map_radius == 9
        assert cfg.number_of_platforms == DEFAULTS.NUMBER_OF_PLATFORMS

    def test_unknown_keys_are_ignored(self, logger) -> None:
        cfg = GenerationConfig.from_dict({"seed": 4, "not_a_setting": True}, logger=logger)
        assert cfg.seed == 4
        assert "not_a_setting" not in cfg.to_dict()

    def test_round_trip_through_dict(self) -> None:
        cfg = GenerationConfig(seed=11, stair_height_floor=0)
        assert GenerationConfig.from_dict(cfg.to_dict()) == cfg
