"""
clugen.layout — Size and place the cluster-supporting lines.

- **sizing**: exact per-cluster point counts
- **lines**: centers, angular deviations and lengths of the support lines
"""

from .sizing import cluster_sizes, fix_empty, fix_num_points
from .lines import cluster_centers, angle_deltas, line_lengths

__all__ = [
    "cluster_sizes",
    "fix_empty",
    "fix_num_points",
    "cluster_centers",
    "angle_deltas",
    "line_lengths",
]
