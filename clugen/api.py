from __future__ import annotations
from typing import Any, Optional, Union
import numpy as np
from numpy.typing import ArrayLike
from clugen.config import DEFAULT_DISPLACEMENT, DEFAULT_PROJECTION
from clugen.core.rng import RandomSource, as_generator
from clugen.generator import GenerationResult, clugen
from clugen.layout.lines import angle_deltas, cluster_centers, line_lengths
from clugen.layout.sizing import cluster_sizes
from clugen.merging.clumerge import clumerge
from clugen.placement.displacement import resolve_displacement
from clugen.placement.projection import resolve_projection


class ClusterGenerator:
    """Reusable generator bound to one random source and a set of default strategies."""

    def __init__(
        self,
        seed: RandomSource = None,
        *,
        proj_dist_fn: Any = DEFAULT_PROJECTION,
        point_dist_fn: Any = DEFAULT_DISPLACEMENT,
        allow_empty: bool = False,
    ) -> None:
        self.rng = as_generator(seed)
        # Resolved eagerly so bad names fail at construction time
        self.projection = resolve_projection(proj_dist_fn)
        self.displacement = resolve_displacement(point_dist_fn)
        self.allow_empty = allow_empty

    def generate(
        self,
        num_dims: int,
        num_clusters: int,
        num_points: int,
        direction: ArrayLike,
        angle_disp: float,
        cluster_sep: ArrayLike,
        llength: float,
        llength_disp: float,
        lateral_disp: float,
        **kwargs,
    ) -> GenerationResult:
        kwargs.setdefault("allow_empty", self.allow_empty)
        kwargs.setdefault("proj_dist_fn", self.projection)
        kwargs.setdefault("point_dist_fn", self.displacement)
        kwargs["rng"] = self.rng
        return clugen(
            num_dims, num_clusters, num_points, direction, angle_disp,
            cluster_sep, llength, llength_disp, lateral_disp, **kwargs,
        )

    def merge(self, *data: Any, **kwargs) -> Union[dict, tuple]:
        return clumerge(*data, **kwargs)

    def sizes(self, num_clusters: int, num_points: int, allow_empty: Optional[bool] = None) -> np.ndarray:
        ae = self.allow_empty if allow_empty is None else allow_empty
        return cluster_sizes(num_clusters, num_points, ae, rng=self.rng)

    def centers(self, num_clusters: int, separation: ArrayLike, offset: Optional[ArrayLike] = None) -> np.ndarray:
        return cluster_centers(num_clusters, separation, offset, rng=self.rng)

    def angles(self, num_clusters: int, angle_std: float) -> np.ndarray:
        return angle_deltas(num_clusters, angle_std, rng=self.rng)

    def lengths(self, num_clusters: int, length_mean: float, length_std: float) -> np.ndarray:
        return line_lengths(num_clusters, length_mean, length_std, rng=self.rng)

    def __repr__(self) -> str:
        return (
            f"ClusterGenerator(projection={self.projection.name!r}, "
            f"displacement={self.displacement.name!r}, allow_empty={self.allow_empty})"
        )
