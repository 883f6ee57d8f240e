"""Tests for projection distributions and lateral displacement strategies."""

import numpy as np
import pytest

from clugen import (
    StrategyContractError,
    ValidationError,
    displace_n,
    displace_n_minus_1,
    displace_template,
    points_on_line,
    random_unit_vector,
)
from clugen.placement import (
    DisplacementStrategy,
    ProjectionStrategy,
    project_norm,
    project_unif,
    resolve_displacement,
    resolve_projection,
)


@pytest.fixture
def line(rng):
    """Center, direction and projections of 100 points on a 5D line of length 10."""
    ctr = rng.uniform(-10, 10, size=5)
    d = random_unit_vector(5, rng)
    proj = points_on_line(ctr, d, 10 * rng.random(100) - 5)
    return ctr, d, proj


class TestProjection:

    def test_norm_within_line_extent(self, rng):
        dist = project_norm(1000, 12.0, rng)
        assert dist.shape == (1000,)
        assert np.all(np.abs(dist) <= 6.0)
        assert abs(np.std(dist) - 2.0) < 0.3

    def test_unif_within_line_extent(self, rng):
        dist = project_unif(1000, 4.0, rng)
        assert np.all(dist >= -2.0) and np.all(dist < 2.0)

    def test_zero_length_line(self, rng):
        np.testing.assert_array_equal(project_norm(5, 0.0, rng), np.zeros(5))
        np.testing.assert_array_equal(project_unif(5, 0.0, rng), np.zeros(5))

    def test_resolve_names(self):
        assert resolve_projection("norm").fn is project_norm
        assert resolve_projection("unif").fn is project_unif

    def test_resolve_custom_function(self, rng):
        def halfway(n, length, rng=None):
            return np.full(n, length / 4)

        strategy = resolve_projection(halfway)
        assert isinstance(strategy, ProjectionStrategy)
        assert strategy.name == "halfway"
        np.testing.assert_array_equal(strategy(3, 8.0, rng=rng), [2.0, 2.0, 2.0])

    def test_resolve_is_idempotent(self):
        s = resolve_projection("unif")
        assert resolve_projection(s) is s

    @pytest.mark.parametrize("bad", ["gauss", 3, None])
    def test_unknown_projection_raises(self, bad):
        with pytest.raises(ValidationError):
            resolve_projection(bad)


class TestDisplaceTemplate:

    def test_fixed_distance_and_orthogonality(self, rng, line):
        _, d, proj = line
        offset_fn = lambda n, std, g: g.choice([-10.0, 10.0], size=n)
        pts = displace_template(proj, 1.0, d, offset_fn, rng=rng)
        assert pts.shape == proj.shape
        for u in pts - proj:
            assert abs(np.dot(d, u)) < 1e-7
            assert np.linalg.norm(u) == pytest.approx(10.0)

    def test_single_axis_per_cluster(self, rng, line):
        _, d, proj = line
        pts = displace_template(proj, 2.0, d, lambda n, std, g: std * g.standard_normal(n), rng=rng)
        displ = pts - proj
        # All displacements are collinear: rank 1
        assert np.linalg.matrix_rank(displ, tol=1e-8) == 1

    def test_bad_offset_fn_raises(self, rng, line):
        _, d, proj = line
        with pytest.raises(StrategyContractError):
            displace_template(proj, 1.0, d, lambda n, std, g: np.zeros(n + 1), rng=rng)

    def test_one_dimension_is_identity(self, rng):
        proj = np.array([[1.0], [2.0], [3.0]])
        np.testing.assert_array_equal(
            displace_template(proj, 5.0, [1.0], lambda n, s, g: np.ones(n), rng=rng), proj
        )


@pytest.mark.parametrize("strategy", [displace_n_minus_1, displace_n])
class TestBuiltinDisplacement:

    def test_shape(self, rng, line, strategy):
        ctr, d, proj = line
        assert strategy(proj, 1.0, 10.0, d, ctr, rng=rng).shape == proj.shape

    def test_displacement_is_orthogonal(self, rng, line, strategy):
        ctr, d, proj = line
        pts = strategy(proj, 3.0, 10.0, d, ctr, rng=rng)
        np.testing.assert_allclose((pts - proj) @ d, 0.0, atol=1e-7)

    def test_zero_lateral_std(self, rng, line, strategy):
        ctr, d, proj = line
        np.testing.assert_allclose(strategy(proj, 0.0, 10.0, d, ctr, rng=rng), proj)

    def test_one_dimension_is_identity(self, rng, strategy):
        proj = np.array([[1.0], [2.0]])
        np.testing.assert_array_equal(strategy(proj, 1.0, 2.0, [1.0], [1.5], rng=rng), proj)

    def test_empty_cluster(self, rng, strategy):
        proj = np.empty((0, 3))
        assert strategy(proj, 1.0, 2.0, [0.0, 0.0, 1.0], [0.0, 0.0, 0.0], rng=rng).shape == (0, 3)


class TestDisplacementN:

    def test_spreads_over_the_orthogonal_complement(self, rng, line):
        ctr, d, proj = line
        displ = displace_n(proj, 1.0, 10.0, d, ctr, rng=rng) - proj
        # 5D with the line direction removed leaves a 4D subspace
        assert np.linalg.matrix_rank(displ, tol=1e-8) == 4


class TestResolveDisplacement:

    def test_resolve_names(self):
        assert resolve_displacement("n-1").fn is displace_n_minus_1
        assert resolve_displacement("n").fn is displace_n

    def test_resolve_custom(self):
        fn = lambda projs, std, length, d, c, rng=None: projs
        s = resolve_displacement(fn)
        assert isinstance(s, DisplacementStrategy)
        assert s.fn is fn

    @pytest.mark.parametrize("bad", ["d-1", "nd", 1.0])
    def test_unknown_displacement_raises(self, bad):
        with pytest.raises(ValidationError):
            resolve_displacement(bad)
