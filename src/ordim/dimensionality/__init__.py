"""
Ordinal intrinsic dimension estimation for ordim.

This module estimates the intrinsic dimensionality of point sets from
neighbor rankings alone, via the growth of two-hop k-NN balls (doubling
property) and the minimal overlap of neighboring k-NN balls (capacity).
"""

from .errors import PreconditionError, ConvergenceError, NumericDomainError
from .neighbors import distance, knn, knn_graph, sample_anchors
from .doubling import ball_volume_2, doubling_ratios, doubling_dimension
from .capacity import (
    intersection_count,
    min_intersection,
    capacity_ratios,
    capacity_dimension,
)
from .utils import ir_beta, invert_ir_beta
from .ordinal import ordinal_dimension

__all__ = [
    # Errors
    "PreconditionError",
    "ConvergenceError",
    "NumericDomainError",
    # Neighbor ranking
    "distance",
    "knn",
    "knn_graph",
    "sample_anchors",
    # Doubling property
    "ball_volume_2",
    "doubling_ratios",
    "doubling_dimension",
    # Capacity
    "intersection_count",
    "min_intersection",
    "capacity_ratios",
    "capacity_dimension",
    # Special function
    "ir_beta",
    "invert_ir_beta",
    # Dispatcher
    "ordinal_dimension",
]
