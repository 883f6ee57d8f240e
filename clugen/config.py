"""
clugen.config — Package-wide defaults and numerical constants.

Nothing here is read from the environment; the generator is purely
computational and every value can be overridden per call.
"""
from __future__ import annotations
import numpy as np

# Numerical tolerances
EPS: float = float(np.finfo(float).eps)
PARALLEL_TOL: float = 1e-10

# Projection-distance distributions along the support line
PROJECTION_NAMES = ("norm", "unif")
DEFAULT_PROJECTION = "norm"
# "norm" uses sigma = length / 6 so that ~99.7% of projections fall on the line
NORM_LENGTH_DIVISOR: float = 6.0

# Lateral displacement strategies
DISPLACEMENT_NAMES = ("n-1", "n")
DEFAULT_DISPLACEMENT = "n-1"

# Dataset fields
DEFAULT_CLUSTERS_FIELD = "clusters"
DEFAULT_FIELDS = ("points", "clusters")
POINT_FIELDS = ("points", "clusters", "projections")
CLUSTER_FIELDS = ("sizes", "centers", "directions", "angles", "lengths")
RESULT_FIELDS = POINT_FIELDS + CLUSTER_FIELDS

OUTPUT_TYPES = ("dict", "namedtuple")
