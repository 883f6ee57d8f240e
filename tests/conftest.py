# ---------------------------------------------------------------------------
# Tests configuration
# ---------------------------------------------------------------------------

import numpy as np
import pytest

from clugen import clugen


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded generator so every test is reproducible."""
    return np.random.default_rng(123)


@pytest.fixture(params=[1, 2, 3, 7])
def num_dims(request):
    return request.param


@pytest.fixture
def unit_vectors(rng):
    """A handful of random unit vectors per dimension, 2D to 10D."""
    vecs = []
    for nd in (2, 3, 5, 10):
        for _ in range(5):
            v = rng.standard_normal(nd)
            vecs.append(v / np.linalg.norm(v))
    return vecs


@pytest.fixture
def ds_three():
    """3 clusters, 50 points, 2D."""
    return clugen(2, 3, 50, [1, 0], 0.1, [10, 10], 5, 1, 0.5, rng=11)


@pytest.fixture
def ds_two():
    """2 clusters, 30 points, 2D."""
    return clugen(2, 2, 30, [0, 1], 0.1, [10, 10], 5, 1, 0.5, rng=22)
