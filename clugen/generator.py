"""
clugen.generator — Generate clusters along randomly perturbed support lines.

This is the main entry point of the package: :func:`clugen` validates its
parameters, sizes and lays out the clusters, places the points of each one
and assembles everything into a :class:`GenerationResult`.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Iterator, Optional, Union
import numpy as np
import pandas as pd
import pyarrow as pa
from numpy.typing import ArrayLike
from clugen.config import EPS, RESULT_FIELDS
from clugen.core.geometry import points_on_line, random_vector_at_angle
from clugen.core.rng import RandomSource, as_generator
from clugen.exceptions import StrategyContractError, ValidationError
from clugen.layout.lines import angle_deltas, cluster_centers, line_lengths
from clugen.layout.sizing import cluster_sizes
from clugen.placement.displacement import (
    DisplacementFn,
    DisplacementStrategy,
    displace_identity,
    resolve_displacement,
)
from clugen.placement.projection import ProjectionFn, ProjectionStrategy, resolve_projection

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GenerationResult:
    """
    Output of :func:`clugen`.

    Point-level arrays (``points``, ``clusters``, ``projections``) have one
    row per point; cluster-level arrays (``sizes``, ``centers``,
    ``directions``, ``angles``, ``lengths``) have one row per cluster.
    ``clusters`` holds 1-based indices into the cluster-level arrays.
    """
    points: np.ndarray
    clusters: np.ndarray
    projections: np.ndarray
    sizes: np.ndarray
    centers: np.ndarray
    directions: np.ndarray
    angles: np.ndarray
    lengths: np.ndarray

    @property
    def num_points(self) -> int: return int(self.points.shape[0])
    @property
    def num_clusters(self) -> int: return int(self.sizes.shape[0])
    @property
    def num_dims(self) -> int: return int(self.centers.shape[1])

    def keys(self): return tuple(f.name for f in fields(self))
    def __getitem__(self, name: str) -> np.ndarray:
        if name not in RESULT_FIELDS: raise KeyError(name)
        return getattr(self, name)
    def __contains__(self, name: object) -> bool: return name in RESULT_FIELDS
    def __iter__(self) -> Iterator[str]: return iter(self.keys())

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {k: getattr(self, k) for k in self.keys()}

    def _columns(self) -> Dict[str, np.ndarray]:
        cols: Dict[str, np.ndarray] = {}
        for j in range(self.num_dims): cols[f"points_{j}"] = self.points[:, j]
        cols["clusters"] = self.clusters
        for j in range(self.num_dims): cols[f"projections_{j}"] = self.projections[:, j]
        return cols

    def to_pandas(self) -> pd.DataFrame:
        """Point-level data as a DataFrame (``points_*``, ``clusters``, ``projections_*``)."""
        return pd.DataFrame(self._columns())

    def to_arrow(self) -> pa.Table:
        return pa.table(self._columns())

    def __repr__(self) -> str:
        return f"GenerationResult(num_points={self.num_points}, num_clusters={self.num_clusters}, num_dims={self.num_dims})"


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _validate_direction(direction: ArrayLike, num_dims: int, num_clusters: int) -> np.ndarray:
    direction = np.asarray(direction, dtype=float)
    if direction.ndim == 1:
        direction = direction[np.newaxis, :]
    elif direction.ndim == 2:
        if direction.shape[0] != num_clusters:
            raise ValidationError(
                "Number of rows in `direction` must be the same as the number of clusters "
                f"({direction.shape[0]} != {num_clusters})"
            )
    else:
        raise ValidationError(f"`direction` must be a vector (1D array) or a matrix (2D array), but is {direction.ndim}D")
    if direction.shape[1] != num_dims:
        raise ValidationError(
            f"Length of directions in `direction` must be equal to `num_dims` ({direction.shape[1]} != {num_dims})"
        )
    norms = np.linalg.norm(direction, axis=1)
    if np.any(norms < EPS): raise ValidationError("Directions in `direction` must have magnitude > 0")
    direction = direction / norms[:, np.newaxis]
    return np.repeat(direction, num_clusters, axis=0) if direction.shape[0] == 1 else direction


def _validate_vector(value: ArrayLike, name: str, num_dims: int) -> np.ndarray:
    value = np.asarray(value, dtype=float)
    if value.ndim != 1 or value.size != num_dims:
        raise ValidationError(f"Length of `{name}` must be equal to `num_dims` ({value.size} != {num_dims})")
    return value


def _validate_scalars(angle_disp: float, llength_disp: float, lateral_disp: float):
    for name, value in (("angle_disp", angle_disp), ("llength_disp", llength_disp), ("lateral_disp", lateral_disp)):
        if value < 0: raise ValidationError(f"`{name}` must be >= 0, got {value}")


def _check_precomputed(name: str, value: Any, shape: tuple, integer: bool = False) -> np.ndarray:
    arr = np.asarray(value)
    if arr.shape != shape:
        raise ValidationError(f"`{name}` has to be either a function or an array of shape {shape}, got {arr.shape}")
    if integer:
        if not np.issubdtype(arr.dtype, np.integer): raise ValidationError(f"`{name}` must contain integers")
        if np.any(arr < 0): raise ValidationError(f"`{name}` must not contain negative sizes")
    return arr.astype(np.int64) if integer else arr.astype(float)


def _check_returned(slot: str, value: Any, shape: tuple, integer: bool = False) -> np.ndarray:
    arr = np.asarray(value)
    if arr.shape != shape:
        raise StrategyContractError(slot, f"expected shape {shape}, got {arr.shape}")
    if integer:
        if not np.issubdtype(arr.dtype, np.integer):
            raise StrategyContractError(slot, f"expected integer values, got dtype {arr.dtype}")
        if np.any(arr < 0): raise StrategyContractError(slot, "cluster sizes must be non-negative")
        return arr.astype(np.int64)
    if not np.issubdtype(arr.dtype, np.number) or np.issubdtype(arr.dtype, np.complexfloating):
        raise StrategyContractError(slot, f"expected real values, got dtype {arr.dtype}")
    return arr.astype(float)


def _from_slot(slot: str, spec: Any, call: Callable[[Callable], Any], shape: tuple, integer: bool = False) -> np.ndarray:
    if callable(spec): return _check_returned(slot, call(spec), shape, integer)
    return _check_precomputed(slot, spec, shape, integer)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def clugen(
    num_dims: int,
    num_clusters: int,
    num_points: int,
    direction: ArrayLike,
    angle_disp: float,
    cluster_sep: ArrayLike,
    llength: float,
    llength_disp: float,
    lateral_disp: float,
    *,
    allow_empty: bool = False,
    cluster_offset: Optional[ArrayLike] = None,
    proj_dist_fn: Union[str, ProjectionFn, ProjectionStrategy] = "norm",
    point_dist_fn: Union[str, DisplacementFn, DisplacementStrategy] = "n-1",
    clusizes_fn: Union[Callable[..., ArrayLike], ArrayLike] = cluster_sizes,
    clucenters_fn: Union[Callable[..., ArrayLike], ArrayLike] = cluster_centers,
    llengths_fn: Union[Callable[..., ArrayLike], ArrayLike] = line_lengths,
    angle_deltas_fn: Union[Callable[..., ArrayLike], ArrayLike] = angle_deltas,
    rng: RandomSource = None,
) -> GenerationResult:
    """
    Generate multidimensional clusters.

    Each cluster is built around a support line with a random center,
    a direction deviating from ``direction`` by a random angle, and a random
    length. Points are spread along the line and then displaced laterally.

    Parameters
    ----------
    num_dims : int
        Number of dimensions, ``>= 1``.
    num_clusters : int
        Number of clusters, ``>= 1``.
    num_points : int
        Total number of points.
    direction : array-like
        Main direction of the support lines: a ``(num_dims,)`` vector shared by
        all clusters or a ``(num_clusters, num_dims)`` matrix, one per cluster.
    angle_disp : float
        Standard deviation of the angle between each line and its main direction (radians).
    cluster_sep : array-like
        Average cluster separation in each dimension, ``(num_dims,)``.
    llength, llength_disp : float
        Mean and standard deviation of the line lengths.
    lateral_disp : float
        Standard deviation of the lateral displacement of points from their projection.
    allow_empty : bool
        Allow clusters without points.
    cluster_offset : array-like, optional
        Offset added to all cluster centers (zeros by default).
    proj_dist_fn : {"norm", "unif"} or callable
        Distribution of projections along the line; a callable has the
        signature ``fn(num_points, length, rng=...)``.
    point_dist_fn : {"n-1", "n"} or callable
        Lateral displacement strategy; a callable has the signature
        ``fn(projections, lateral_disp, length, direction, center, rng=...)``.
    clusizes_fn, clucenters_fn, llengths_fn, angle_deltas_fn : callable or array-like
        Replacements for :func:`cluster_sizes`, :func:`cluster_centers`,
        :func:`line_lengths` and :func:`angle_deltas` (same signatures), or
        precomputed arrays of the expected shape.
    rng : int or numpy.random.Generator, optional
        Seed or generator for reproducible runs.

    Returns
    -------
    GenerationResult
        If ``clusizes_fn`` does not honour ``num_points``, the number of
        generated points is the sum of the sizes it returned.

    Example
    -------
    >>> from clugen import clugen
    >>> res = clugen(2, 3, 300, [1, 0], 0.1, [10, 10], 5, 1, 0.5, rng=42)
    >>> res.points.shape
    (300, 2)
    """
    # Validate inputs
    if num_dims < 1: raise ValidationError(f"Number of dimensions, `num_dims`, must be > 0, got {num_dims}")
    if num_clusters < 1: raise ValidationError(f"Number of clusters, `num_clusters`, must be > 0, got {num_clusters}")
    if num_points < 0: raise ValidationError(f"Number of points, `num_points`, must be >= 0, got {num_points}")
    main_dirs = _validate_direction(direction, num_dims, num_clusters)
    cluster_sep = _validate_vector(cluster_sep, "cluster_sep", num_dims)
    cluster_offset = np.zeros(num_dims) if cluster_offset is None else _validate_vector(cluster_offset, "cluster_offset", num_dims)
    if not allow_empty and num_points < num_clusters:
        raise ValidationError(f"A total of {num_points} points is not enough for {num_clusters} non-empty clusters")
    _validate_scalars(angle_disp, llength_disp, lateral_disp)

    projection = resolve_projection(proj_dist_fn)
    displacement = resolve_displacement(point_dist_fn)
    # In 1D the points are their own projections
    if num_dims == 1: displacement = DisplacementStrategy("identity", displace_identity)
    rng = as_generator(rng)
    logger.debug(
        "Generating %d clusters in %dD (projection=%s, displacement=%s)",
        num_clusters, num_dims, projection.name, displacement.name,
    )

    # Cluster properties
    sizes = _from_slot(
        "clusizes_fn", clusizes_fn,
        lambda fn: fn(num_clusters, num_points, allow_empty, rng=rng),
        (num_clusters,), integer=True,
    )
    # Custom sizing functions are not bound to num_points
    num_points = int(sizes.sum())

    centers = _from_slot(
        "clucenters_fn", clucenters_fn,
        lambda fn: fn(num_clusters, cluster_sep, cluster_offset, rng=rng),
        (num_clusters, num_dims),
    )
    lengths = _from_slot(
        "llengths_fn", llengths_fn,
        lambda fn: fn(num_clusters, llength, llength_disp, rng=rng),
        (num_clusters,),
    )
    angles = _from_slot(
        "angle_deltas_fn", angle_deltas_fn,
        lambda fn: fn(num_clusters, angle_disp, rng=rng),
        (num_clusters,),
    )
    directions = np.vstack([random_vector_at_angle(main_dirs[i], angles[i], rng=rng) for i in range(num_clusters)])

    # Points for each cluster
    bounds = np.concatenate(([0], np.cumsum(sizes)))
    points = np.empty((num_points, num_dims))
    projections = np.empty((num_points, num_dims))
    for i in range(num_clusters):
        start, end = int(bounds[i]), int(bounds[i + 1])
        n = end - start
        dist = _check_returned("proj_dist_fn", projection(n, lengths[i], rng=rng), (n,))
        projections[start:end] = points_on_line(centers[i], directions[i], dist)
        points[start:end] = _check_returned(
            "point_dist_fn",
            displacement(projections[start:end], lateral_disp, lengths[i], directions[i], centers[i], rng=rng),
            (n, num_dims),
        )

    clusters = np.repeat(np.arange(1, num_clusters + 1, dtype=np.int64), sizes)
    logger.debug("Generated %d points, sizes=%s", num_points, sizes.tolist())

    return GenerationResult(
        points=points,
        clusters=clusters,
        projections=projections,
        sizes=sizes,
        centers=centers,
        directions=directions,
        angles=angles,
        lengths=lengths,
    )


generate = clugen
