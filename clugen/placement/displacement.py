"""
clugen.placement.displacement — Lateral displacement of points from their projections.

Strategies share the signature
``fn(projections, lateral_std, length, direction, center, rng=...)`` and
return an array shaped like ``projections``. ``length`` and ``center`` are
unused by the built-ins but available to custom strategies.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Union
import numpy as np
from numpy.typing import ArrayLike
from clugen.config import DISPLACEMENT_NAMES
from clugen.core.geometry import random_orthogonal_vector
from clugen.core.rng import RandomSource, as_generator
from clugen.exceptions import StrategyContractError, ValidationError

DisplacementFn = Callable[..., np.ndarray]
OffsetFn = Callable[[int, float, np.random.Generator], ArrayLike]


def displace_template(
    projections: ArrayLike,
    lateral_std: float,
    direction: ArrayLike,
    offset_fn: OffsetFn,
    rng: RandomSource = None,
) -> np.ndarray:
    """
    Place points on the line orthogonal to the support line.

    One random vector orthogonal to ``direction`` is drawn for the cluster,
    and every point moves along it by the signed ``offset_fn(n, lateral_std, rng)[i]``
    from its projection. Custom "n-1"-style strategies only need to supply
    ``offset_fn``. In one dimension the projections are returned unchanged.
    """
    projections = np.asarray(projections, dtype=float)
    direction = np.asarray(direction, dtype=float)
    if direction.size == 1 or projections.shape[0] == 0: return projections.copy()
    rng = as_generator(rng)

    n = projections.shape[0]
    offsets = np.asarray(offset_fn(n, lateral_std, rng), dtype=float).reshape(-1)
    if offsets.shape != (n,):
        raise StrategyContractError("offset_fn", f"expected {n} offsets, got shape {offsets.shape}")
    ortho = random_orthogonal_vector(direction, rng)
    return projections + offsets[:, np.newaxis] * ortho[np.newaxis, :]


def displace_n_minus_1(
    projections: ArrayLike,
    lateral_std: float,
    length: float,
    direction: ArrayLike,
    center: ArrayLike,
    rng: RandomSource = None,
) -> np.ndarray:
    """Default ``"n-1"`` strategy: normal offsets (sigma = ``lateral_std``) along one orthogonal axis."""
    return displace_template(
        projections, lateral_std, direction, lambda n, std, g: std * g.standard_normal(n), rng=rng
    )


def displace_n(
    projections: ArrayLike,
    lateral_std: float,
    length: float,
    direction: ArrayLike,
    center: ArrayLike,
    rng: RandomSource = None,
) -> np.ndarray:
    """
    ``"n"`` strategy: a full D-dimensional normal displacement per point,
    with its component along ``direction`` projected out.
    """
    projections = np.asarray(projections, dtype=float)
    direction = np.asarray(direction, dtype=float)
    if direction.size == 1: return projections.copy()
    rng = as_generator(rng)
    unit = direction / np.linalg.norm(direction)
    displ = lateral_std * rng.standard_normal(projections.shape)
    displ -= np.outer(displ @ unit, unit)
    return projections + displ


def displace_identity(projections, lateral_std, length, direction, center, rng=None) -> np.ndarray:
    return np.array(projections, dtype=float)


_BUILTIN = {"n-1": displace_n_minus_1, "n": displace_n}


@dataclass(frozen=True)
class DisplacementStrategy:
    name: str
    fn: DisplacementFn

    def __call__(self, projections, lateral_std, length, direction, center, rng: RandomSource = None) -> np.ndarray:
        return self.fn(projections, lateral_std, length, direction, center, rng=rng)


def resolve_displacement(spec: Union[str, DisplacementFn, DisplacementStrategy]) -> DisplacementStrategy:
    if isinstance(spec, DisplacementStrategy): return spec
    if isinstance(spec, str):
        if spec not in _BUILTIN:
            raise ValidationError(f"point_dist_fn must be one of {DISPLACEMENT_NAMES} or a function, got {spec!r}")
        return DisplacementStrategy(spec, _BUILTIN[spec])
    if callable(spec): return DisplacementStrategy(getattr(spec, "__name__", "custom"), spec)
    raise ValidationError(f"point_dist_fn must be one of {DISPLACEMENT_NAMES} or a function")
