"""
Utility functions for ordim.

This module provides input validation, JIT compilation and parallel
execution helpers shared by the estimators.
"""

# Data validation
from .data import (
    to_numpy_array,
    check_positive,
)

# JIT compilation
from .jit import (
    conditional_njit,
    is_jit_enabled,
)

# Parallel execution
from .parallel import (
    parallel_executor,
    get_parallel_backend,
)

__all__ = [
    # Data validation
    "to_numpy_array",
    "check_positive",
    # JIT
    "conditional_njit",
    "is_jit_enabled",
    # Parallel
    "parallel_executor",
    "get_parallel_backend",
]
