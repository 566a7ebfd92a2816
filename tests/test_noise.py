"""Tests for the gradient noise utilities."""

from __future__ import annotations

import numpy as np

from terrain_generator import noise


def _coords(offset: float = 100.0, scale: float = 0.1, size: int = 16):
    xs, ys = np.meshgrid(np.arange(size) * scale + offset, np.arange(size) * scale + offset)
    return xs, ys


class TestPermutationTable:
    def test_table_is_a_doubled_permutation(self) -> None:
        p = noise.create_permutation_table(1337)
        assert p.shape == (512,)
        assert np.array_equal(p[:256], p[256:])
        assert np.array_equal(np.sort(p[:256]), np.arange(256))

    def test_table_depends_on_seed(self) -> None:
        a = noise.create_permutation_table(1)
        b = noise.create_permutation_table(1)
        c = noise.create_permutation_table(2)
        assert np.array_equal(a, b)
        assert not np.array_equal(a, c)


class TestUnitNoise:
    def test_values_stay_in_unit_range(self) -> None:
        p = noise.create_permutation_table(7)
        xs, ys = _coords()
        values = noise.sample_unit_noise(p, xs, ys, octaves=3)
        assert values.shape == xs.shape
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_lattice_points_are_neutral(self) -> None:
        p = noise.create_permutation_table(7)
        xs, ys = np.meshgrid(np.arange(4.0), np.arange(4.0))
        assert np.allclose(noise.sample_unit_noise(p, xs, ys), 0.5)

    def test_noise_is_deterministic(self) -> None:
        p = noise.create_permutation_table(3)
        xs, ys = _coords()
        assert np.array_equal(
            noise.sample_unit_noise(p, xs, ys),
            noise.sample_unit_noise(p, xs, ys),
        )

    def test_noise_varies_smoothly(self) -> None:
        p = noise.create_permutation_table(3)
        xs, ys = _coords(scale=0.05, size=32)
        values = noise.sample_unit_noise(p, xs, ys)
        assert values.std() > 0.0
        # Neighboring samples a twentieth of a lattice cell apart never jump far.
        assert np.abs(np.diff(values, axis=1)).max() < 0.2
