"""
Single entry point for the ordinal dimension estimators.
"""

import logging

from .capacity import capacity_dimension
from .doubling import doubling_dimension
from .errors import PreconditionError

ESTIMATORS = {
    "doubling": doubling_dimension,
    "capacity": capacity_dimension,
}


def ordinal_dimension(data=None, method="doubling", logger=None, **kwargs):
    """
    Estimate intrinsic dimension with one of the ordinal estimators.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features), optional
        The input data. May be omitted when ``precomputed_graph`` is passed.
    method : {'doubling', 'capacity'}, default='doubling'
        - 'doubling': growth of two-hop k-NN balls
          (:func:`~ordim.dimensionality.doubling.doubling_dimension`)
        - 'capacity': minimal overlap of neighboring k-NN balls
          (:func:`~ordim.dimensionality.capacity.capacity_dimension`)
    logger : logging.Logger, optional
        Logger for messages. If None, creates a default logger.
    **kwargs
        Passed to the chosen estimator (k, dim, precomputed_graph, ...).

    Returns
    -------
    float
        The estimated intrinsic dimension.

    Raises
    ------
    PreconditionError
        If `method` is unknown or the estimator's inputs are invalid.

    Examples
    --------
    >>> import numpy as np
    >>> from ordim.dimensionality import knn_graph, ordinal_dimension
    >>> rng = np.random.default_rng(1)
    >>> X = rng.normal(size=(300, 3))
    >>> graph = knn_graph(X, k=15)
    >>> dims = {m: ordinal_dimension(method=m, k=15, precomputed_graph=graph)
    ...         for m in ("doubling", "capacity")}  # doctest: +SKIP
    """
    if logger is None:
        logger = logging.getLogger(f"{__name__}.ordinal_dimension")

    if method not in ESTIMATORS:
        raise PreconditionError(
            f"Unknown method: {method}. Choose from {sorted(ESTIMATORS)}"
        )

    logger.debug(f"Computing intrinsic dimension using {method} method")
    dimension = ESTIMATORS[method](data, logger=logger, **kwargs)
    logger.debug(f"Estimated intrinsic dimension: {dimension:.3f}")

    return dimension
