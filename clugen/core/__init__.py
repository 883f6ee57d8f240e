from .rng import as_generator
from .geometry import (
    random_unit_vector,
    random_orthogonal_vector,
    random_vector_at_angle,
    points_on_line,
    angle_between,
)

__all__ = [
    "as_generator",
    "random_unit_vector",
    "random_orthogonal_vector",
    "random_vector_at_angle",
    "points_on_line",
    "angle_between",
]
