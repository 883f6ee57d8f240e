"""
clugen.placement — Turn a cluster-supporting line into points.

Placement happens in two steps: projections are spread along the line
(:mod:`~clugen.placement.projection`), then each point is displaced away
from its projection (:mod:`~clugen.placement.displacement`).
"""

from .projection import ProjectionStrategy, resolve_projection, project_norm, project_unif
from .displacement import (
    DisplacementStrategy,
    resolve_displacement,
    displace_template,
    displace_n_minus_1,
    displace_n,
    displace_identity,
)

__all__ = [
    "ProjectionStrategy",
    "resolve_projection",
    "project_norm",
    "project_unif",
    "DisplacementStrategy",
    "resolve_displacement",
    "displace_template",
    "displace_n_minus_1",
    "displace_n",
    "displace_identity",
]
