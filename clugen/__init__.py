from .api import ClusterGenerator
from .generator import GenerationResult, clugen, generate
from .merging import clumerge, merge
from .core import (
    as_generator,
    random_unit_vector,
    random_orthogonal_vector,
    random_vector_at_angle,
    points_on_line,
    angle_between,
)
from .layout import (
    cluster_sizes,
    fix_empty,
    fix_num_points,
    cluster_centers,
    angle_deltas,
    line_lengths,
)
from .placement import displace_template, displace_n_minus_1, displace_n
from .exceptions import ClugenError, ValidationError, StrategyContractError, NumericalError
from .logging_config import setup_logging

__version__ = "0.1.0"


__all__ = [
    "ClusterGenerator",
    "GenerationResult",
    "clugen",
    "generate",
    "clumerge",
    "merge",
    # Geometry
    "as_generator",
    "random_unit_vector",
    "random_orthogonal_vector",
    "random_vector_at_angle",
    "points_on_line",
    "angle_between",
    # Layout
    "cluster_sizes",
    "fix_empty",
    "fix_num_points",
    "cluster_centers",
    "angle_deltas",
    "line_lengths",
    # Placement
    "displace_template",
    "displace_n_minus_1",
    "displace_n",
    # Errors
    "ClugenError",
    "ValidationError",
    "StrategyContractError",
    "NumericalError",
    "setup_logging",
]
