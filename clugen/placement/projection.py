"""
clugen.placement.projection — Distances of point projections from the line center.

Every distribution shares the signature ``fn(num_points, length, rng=...)``
and returns a ``(num_points,)`` array of signed distances.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Union
import numpy as np
from clugen.config import NORM_LENGTH_DIVISOR, PROJECTION_NAMES
from clugen.core.rng import RandomSource, as_generator
from clugen.exceptions import ValidationError

ProjectionFn = Callable[..., np.ndarray]


def project_norm(num_points: int, length: float, rng: RandomSource = None) -> np.ndarray:
    """Normal around the line center (sigma = length/6), clipped to the line extent."""
    rng = as_generator(rng)
    half = length / 2
    return np.clip((length / NORM_LENGTH_DIVISOR) * rng.standard_normal(num_points), -half, half)


def project_unif(num_points: int, length: float, rng: RandomSource = None) -> np.ndarray:
    rng = as_generator(rng)
    return length * rng.random(num_points) - length / 2


_BUILTIN = {"norm": project_norm, "unif": project_unif}


@dataclass(frozen=True)
class ProjectionStrategy:
    name: str
    fn: ProjectionFn

    def __call__(self, num_points: int, length: float, rng: RandomSource = None) -> np.ndarray:
        return self.fn(num_points, length, rng=rng)


def resolve_projection(spec: Union[str, ProjectionFn, ProjectionStrategy]) -> ProjectionStrategy:
    if isinstance(spec, ProjectionStrategy): return spec
    if isinstance(spec, str):
        if spec not in _BUILTIN:
            raise ValidationError(f"proj_dist_fn must be one of {PROJECTION_NAMES} or a function, got {spec!r}")
        return ProjectionStrategy(spec, _BUILTIN[spec])
    if callable(spec): return ProjectionStrategy(getattr(spec, "__name__", "custom"), spec)
    raise ValidationError(f"proj_dist_fn must be one of {PROJECTION_NAMES} or a function")
