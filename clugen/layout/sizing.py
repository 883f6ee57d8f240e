"""
clugen.layout.sizing — Number of points in each cluster.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional
import numpy as np
from numpy.typing import ArrayLike
from clugen.core.rng import RandomSource, as_generator
from clugen.exceptions import StrategyContractError, ValidationError

logger = logging.getLogger(__name__)

SizeDistribution = Callable[[], ArrayLike]


def fix_empty(sizes: ArrayLike, allow_empty: bool = False) -> np.ndarray:
    """
    Return a copy of ``sizes`` in which no cluster is empty.

    Each empty cluster, visited in index order, takes one point from the
    currently largest cluster (first one on ties). When the largest cluster
    cannot spare a point (it holds a single one) the point is granted
    outright and the total is left for :func:`fix_num_points` to reconcile.
    With ``allow_empty`` the sizes are returned unchanged.
    """
    fixed = np.array(sizes, dtype=np.int64)
    if allow_empty: return fixed
    for i in np.flatnonzero(fixed == 0):
        imax = int(np.argmax(fixed))
        if fixed[imax] > 1: fixed[imax] -= 1
        fixed[i] += 1
    return fixed


def fix_num_points(sizes: ArrayLike, num_points: int) -> np.ndarray:
    """
    Return a copy of ``sizes`` adjusted to add up to exactly ``num_points``.

    While the total is short the smallest cluster grows by one; while it is
    over the largest cluster shrinks by one. Ties go to the first occurrence.
    """
    if num_points < 0: raise ValidationError(f"num_points must be >= 0, got {num_points}")
    fixed = np.array(sizes, dtype=np.int64)
    if fixed.size == 0:
        if num_points: raise ValidationError("Cannot distribute points among zero clusters")
        return fixed
    total = int(fixed.sum())
    while total < num_points:
        fixed[int(np.argmin(fixed))] += 1
        total += 1
    while total > num_points:
        fixed[int(np.argmax(fixed))] -= 1
        total -= 1
    return fixed


def _check_weights(weights: ArrayLike, num_clusters: int) -> np.ndarray:
    try:
        w = np.asarray(weights, dtype=float)
    except (TypeError, ValueError) as e:
        raise StrategyContractError("size_distribution", f"returned non-numeric weights ({e})") from e
    if w.shape != (num_clusters,):
        raise StrategyContractError("size_distribution", f"expected shape ({num_clusters},), got {w.shape}")
    if not np.all(np.isfinite(w)) or np.any(w < 0):
        raise StrategyContractError("size_distribution", "weights must be finite and non-negative")
    return w


def cluster_sizes(
    num_clusters: int,
    num_points: int,
    allow_empty: bool = False,
    size_distribution: Optional[SizeDistribution] = None,
    rng: RandomSource = None,
) -> np.ndarray:
    """
    Determine how many points each cluster receives.

    Raw weights come from ``size_distribution`` (a zero-argument callable
    returning ``num_clusters`` non-negative values; by default the
    half-folded standard normal), are scaled to ``num_points`` and rounded.
    Empty clusters are then fixed (unless ``allow_empty``) and the rounding
    drift is reconciled so the result sums to ``num_points`` exactly.

    Parameters
    ----------
    num_clusters : int
        Number of clusters, ``>= 1``.
    num_points : int
        Total number of points, ``>= 0``.
    allow_empty : bool
        Whether clusters without points are acceptable.
    size_distribution : callable, optional
        Zero-argument sampler of the raw cluster weights.
    rng : int or numpy.random.Generator, optional
        Random source for the default sampler.

    Returns
    -------
    np.ndarray
        ``(num_clusters,)`` int64 array summing to ``num_points``.

    Example
    -------
    >>> sizes = cluster_sizes(4, 100, rng=7)
    >>> int(sizes.sum()), bool((sizes > 0).all())
    (100, True)
    """
    if num_clusters < 1: raise ValidationError(f"num_clusters must be > 0, got {num_clusters}")
    if num_points < 0: raise ValidationError(f"num_points must be >= 0, got {num_points}")
    if not allow_empty and num_points < num_clusters:
        raise ValidationError(
            f"A total of {num_points} points is not enough for {num_clusters} non-empty clusters"
        )

    if size_distribution is None:
        gen = as_generator(rng)
        size_distribution = lambda: np.abs(gen.standard_normal(num_clusters))
    weights = _check_weights(size_distribution(), num_clusters)

    total = weights.sum()
    proportions = weights * (num_points / total) if total > 0 else np.zeros(num_clusters)
    sizes = np.rint(proportions).astype(np.int64)

    sizes = fix_empty(sizes, allow_empty)
    sizes = fix_num_points(sizes, num_points)
    logger.debug("Cluster sizes for %d clusters / %d points: %s", num_clusters, num_points, sizes.tolist())
    return sizes
