"""
clugen.layout.lines — Centers, angles and lengths of the cluster-supporting lines.
"""
from __future__ import annotations
from typing import Callable, Optional
import numpy as np
from numpy.typing import ArrayLike
from clugen.core.rng import RandomSource, as_generator
from clugen.exceptions import StrategyContractError, ValidationError

CenterDistribution = Callable[[], ArrayLike]


def _wrap_half_pi(angles: np.ndarray) -> np.ndarray:
    # Support lines are undirected, so a rotation by pi gives the same line
    a = np.arctan2(np.sin(angles), np.cos(angles))
    a = np.where(a > np.pi / 2, a - np.pi, a)
    return np.where(a < -np.pi / 2, a + np.pi, a)


def angle_deltas(num_clusters: int, angle_std: float, rng: RandomSource = None) -> np.ndarray:
    """
    Angles between the main direction and each cluster-supporting line.

    Drawn from a normal distribution (mean 0, std ``angle_std``) wrapped
    into ``[-pi/2, pi/2]``: angles are first reduced to ``(-pi, pi]`` and
    then shifted by ``pi`` when they fall outside ``[-pi/2, pi/2]``. Values
    already inside the interval are untouched.
    """
    if num_clusters < 1: raise ValidationError(f"num_clusters must be > 0, got {num_clusters}")
    rng = as_generator(rng)
    return _wrap_half_pi(angle_std * rng.standard_normal(num_clusters))


def line_lengths(num_clusters: int, length_mean: float, length_std: float, rng: RandomSource = None) -> np.ndarray:
    """Line lengths from ``Normal(length_mean, length_std)``, clipped at zero."""
    if num_clusters < 1: raise ValidationError(f"num_clusters must be > 0, got {num_clusters}")
    rng = as_generator(rng)
    return np.maximum(0.0, length_mean + length_std * rng.standard_normal(num_clusters))


def cluster_centers(
    num_clusters: int,
    separation: ArrayLike,
    offset: Optional[ArrayLike] = None,
    center_distribution: Optional[CenterDistribution] = None,
    rng: RandomSource = None,
) -> np.ndarray:
    """
    Cluster centers, one per row.

    ``centers = offset + num_clusters * sample @ diag(separation)`` where
    ``sample`` is a ``(num_clusters, D)`` matrix from ``center_distribution``
    (zero-argument callable; uniform on ``[-0.5, 0.5]`` by default).

    Example
    -------
    >>> c = cluster_centers(3, [10, 5], offset=[1, 1], rng=1)
    >>> c.shape
    (3, 2)
    """
    if num_clusters < 1: raise ValidationError(f"num_clusters must be > 0, got {num_clusters}")
    separation = np.asarray(separation, dtype=float)
    if separation.ndim != 1 or separation.size == 0:
        raise ValidationError(f"separation must be a non-empty 1D vector, got shape {separation.shape}")
    num_dims = separation.size
    offset = np.zeros(num_dims) if offset is None else np.asarray(offset, dtype=float)
    if offset.shape != (num_dims,):
        raise ValidationError(
            f"Length of offset must be equal to length of separation ({offset.size} != {num_dims})"
        )

    if center_distribution is None:
        gen = as_generator(rng)
        center_distribution = lambda: gen.random((num_clusters, num_dims)) - 0.5
    try:
        sample = np.asarray(center_distribution(), dtype=float)
    except (TypeError, ValueError) as e:
        raise StrategyContractError("center_distribution", f"returned non-numeric values ({e})") from e
    if sample.shape != (num_clusters, num_dims):
        raise StrategyContractError(
            "center_distribution", f"expected shape ({num_clusters}, {num_dims}), got {sample.shape}"
        )

    return offset[np.newaxis, :] + num_clusters * sample * separation[np.newaxis, :]
