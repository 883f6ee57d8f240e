"""Tests for cluster centers, angle deltas and line lengths."""

import numpy as np
import pytest

from clugen import StrategyContractError, ValidationError, angle_deltas, cluster_centers, line_lengths


class TestAngleDeltas:

    @pytest.mark.parametrize("std", [0.0, np.pi / 32, np.pi / 4, np.pi, 10.0])
    def test_values_within_half_pi(self, rng, std):
        a = angle_deltas(200, std, rng)
        assert a.shape == (200,)
        assert np.all(a >= -np.pi / 2) and np.all(a <= np.pi / 2)

    def test_zero_std_gives_zeros(self, rng):
        np.testing.assert_allclose(angle_deltas(5, 0.0, rng), 0.0)

    def test_wraps_instead_of_clamping(self):
        from clugen.layout.lines import _wrap_half_pi

        raw = np.array([0.3, -1.2, np.pi / 2, 2.0, -2.0, 3.5, np.pi])
        wrapped = _wrap_half_pi(raw)
        expected = np.array([0.3, -1.2, np.pi / 2, 2.0 - np.pi, -2.0 + np.pi, 3.5 - np.pi, 0.0])
        np.testing.assert_allclose(wrapped, expected, atol=1e-12)

    def test_large_std_is_not_piled_at_bounds(self, rng):
        a = angle_deltas(2000, 5.0, rng)
        # Clamping would put a large fraction exactly on the bounds
        assert np.mean(np.isclose(np.abs(a), np.pi / 2)) < 0.01

    def test_reproducible_with_seed(self):
        np.testing.assert_array_equal(angle_deltas(4, 0.5, rng=9), angle_deltas(4, 0.5, rng=9))


class TestLineLengths:

    def test_non_negative(self, rng):
        lengths = line_lengths(500, 1.0, 5.0, rng)
        assert lengths.shape == (500,)
        assert np.all(lengths >= 0)
        # Clipped, not re-sampled: some exact zeros appear
        assert np.any(lengths == 0)

    def test_zero_std_gives_mean(self, rng):
        np.testing.assert_array_equal(line_lengths(3, 7.5, 0.0, rng), [7.5, 7.5, 7.5])


class TestClusterCenters:

    def test_shape_and_bounds(self, rng):
        sep = np.array([10.0, 5.0, 1.0])
        off = np.array([-3.0, 0.0, 100.0])
        k = 6
        c = cluster_centers(k, sep, off, rng=rng)
        assert c.shape == (k, 3)
        assert np.all(np.abs(c - off) <= k * sep / 2)

    def test_default_offset_is_zero(self):
        c = cluster_centers(4, [1.0, 1.0], center_distribution=lambda: np.zeros((4, 2)))
        np.testing.assert_array_equal(c, np.zeros((4, 2)))

    def test_formula_with_custom_distribution(self):
        sample = np.array([[0.5, -0.5], [0.0, 0.25]])
        c = cluster_centers(2, [10.0, 4.0], [1.0, 2.0], center_distribution=lambda: sample)
        np.testing.assert_allclose(c, [[11.0, -2.0], [1.0, 4.0]])

    def test_offset_mismatch_raises(self, rng):
        with pytest.raises(ValidationError):
            cluster_centers(3, [1.0, 1.0], [0.0, 0.0, 0.0], rng=rng)

    def test_bad_distribution_shape_raises(self):
        with pytest.raises(StrategyContractError):
            cluster_centers(3, [1.0, 1.0], center_distribution=lambda: np.zeros((2, 2)))
