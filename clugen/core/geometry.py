"""
clugen.core.geometry — Random vectors with prescribed angular relationships.

All functions draw their randomness from an explicit ``rng`` (see
:func:`clugen.core.rng.as_generator`) and return new arrays; inputs are
never modified.
"""
from __future__ import annotations
import numpy as np
from numpy.typing import ArrayLike
from clugen.config import EPS, PARALLEL_TOL
from clugen.core.rng import RandomSource, as_generator
from clugen.exceptions import NumericalError, ValidationError


def _as_vector(u: ArrayLike, name: str = "u") -> np.ndarray:
    u = np.asarray(u, dtype=float)
    if u.ndim != 1 or u.size == 0:
        raise ValidationError(f"`{name}` must be a non-empty 1D vector, got shape {u.shape}")
    return u


def _normalize(u: np.ndarray, name: str = "u") -> np.ndarray:
    norm = np.linalg.norm(u)
    if norm < EPS: raise NumericalError(f"`{name}` has zero magnitude and cannot be normalized")
    return u / norm


def random_unit_vector(num_dims: int, rng: RandomSource = None) -> np.ndarray:
    """
    Get a uniformly oriented random unit vector with ``num_dims`` dimensions.

    Components are i.i.d. standard normal, so the direction is uniform on the
    unit sphere. A (practically impossible) zero-norm draw is re-sampled.

    Example
    -------
    >>> v = random_unit_vector(3, rng=42)
    >>> round(float(np.linalg.norm(v)), 12)
    1.0
    """
    if num_dims < 1: raise ValidationError(f"num_dims must be > 0, got {num_dims}")
    rng = as_generator(rng)
    while True:
        r = rng.standard_normal(num_dims)
        norm = np.linalg.norm(r)
        if norm >= EPS: return r / norm


def random_orthogonal_vector(u: ArrayLike, rng: RandomSource = None) -> np.ndarray:
    """
    Get a random unit vector orthogonal to ``u``.

    In one dimension there is no orthogonal complement, so a random unit
    vector (i.e. ``[1.0]`` or ``[-1.0]``) is returned.
    """
    u = _as_vector(u)
    rng = as_generator(rng)
    if u.size == 1: return random_unit_vector(1, rng)
    u = _normalize(u)

    # Near-parallel candidates leave almost nothing after projection
    while True:
        r = random_unit_vector(u.size, rng)
        if abs(abs(np.dot(u, r)) - 1.0) > PARALLEL_TOL: break

    # Gram-Schmidt, with a second pass to clean up cancellation error
    v = r - np.dot(u, r) * u
    v = v - np.dot(u, v) * u
    return _normalize(v, "v")


def random_vector_at_angle(u: ArrayLike, angle: float, rng: RandomSource = None) -> np.ndarray:
    """
    Get a random unit vector at ``angle`` radians from ``u``.

    ``u`` does not need to be a unit vector. In one dimension the only
    options are ``u`` itself or its opposite, chosen by the sign of
    ``cos(angle)`` (``|angle| <= pi/2`` keeps ``u``).
    """
    u = _normalize(_as_vector(u))
    if u.size == 1:
        return u.copy() if abs(angle) <= np.pi / 2 else -u
    v = random_orthogonal_vector(u, rng)
    return _normalize(np.cos(angle) * u + np.sin(angle) * v, "result")


def points_on_line(center: ArrayLike, direction: ArrayLike, distances: ArrayLike) -> np.ndarray:
    """Points at signed ``distances`` from ``center`` along unit ``direction``, one per row."""
    center = _as_vector(center, "center")
    direction = _as_vector(direction, "direction")
    distances = np.asarray(distances, dtype=float).reshape(-1)
    if center.size != direction.size:
        raise ValidationError(f"center and direction differ in length ({center.size} != {direction.size})")
    return center[np.newaxis, :] + distances[:, np.newaxis] * direction[np.newaxis, :]


def angle_between(v1: ArrayLike, v2: ArrayLike) -> float:
    """
    Angle between two vectors, in ``[0, pi]``.

    Uses Kahan's formulation ``2 * atan(|u1 - u2| / |u1 + u2|)`` on the
    normalized vectors, which stays accurate for nearly (anti)parallel
    inputs where ``acos`` of the dot product loses precision.
    """
    u1 = _normalize(_as_vector(v1, "v1"), "v1")
    u2 = _normalize(_as_vector(v2, "v2"), "v2")
    a = 2.0 * np.arctan2(np.linalg.norm(u1 - u2), np.linalg.norm(u1 + u2))
    return float(min(max(a, 0.0), np.pi))
