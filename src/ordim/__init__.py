"""
ordim - Ordinal Intrinsic Dimension estimation

Estimates the intrinsic dimension of point sets using only relative-ordering
information (which points are nearer to which), through a doubling-property
estimator and a capacity estimator built on shared k-NN rankings.
"""

__version__ = "0.1.0"

# Backend used by ordim.utils.parallel.parallel_executor
PARALLEL_BACKEND = "loky"

_VALID_BACKENDS = ("loky", "threading", "multiprocessing")


def set_parallel_backend(backend):
    """Set the joblib backend used for parallel k-NN sweeps.

    Parameters
    ----------
    backend : {'loky', 'threading', 'multiprocessing'}
        Backend name.
    """
    global PARALLEL_BACKEND
    if backend not in _VALID_BACKENDS:
        raise ValueError(
            f"Unknown parallel backend: {backend}. Choose from {_VALID_BACKENDS}"
        )
    PARALLEL_BACKEND = backend


# Core modules
from . import utils
from . import dimensionality

# Dimensionality estimation
from .dimensionality import (
    doubling_dimension,
    capacity_dimension,
    ordinal_dimension,
    knn,
    knn_graph,
    PreconditionError,
    ConvergenceError,
    NumericDomainError,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "PARALLEL_BACKEND",
    "set_parallel_backend",
    # Modules
    "utils",
    "dimensionality",
    # Estimators
    "doubling_dimension",
    "capacity_dimension",
    "ordinal_dimension",
    "knn",
    "knn_graph",
    # Errors
    "PreconditionError",
    "ConvergenceError",
    "NumericDomainError",
]
