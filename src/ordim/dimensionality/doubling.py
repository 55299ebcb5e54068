"""
Doubling-property dimension estimation.

Under a doubling growth model the number of points in a ball multiplies by
2^d when its radius doubles. Here radius is counted in k-NN hops: the
radius-1 ball is the k-NN set (k+1 points) and the radius-2 ball is the
union of the k-NN sets of its members.
"""

import logging

import numpy as np

from .balls_jit import two_hop_volume, two_hop_volumes
from .errors import NumericDomainError
from .neighbors import MIN_SAMPLES, check_element, resolve_graph, sample_anchors


def ball_volume_2(
    element, data=None, k=15, dim=None, precomputed_graph=None, metric="euclidean"
):
    """
    Count the points in the radius-2 k-NN ball around one point.

    Parameters
    ----------
    element : int
        Row index of the ball center.
    data : array-like of shape (n_samples, n_features), optional
        The dataset. Either data or precomputed_graph must be provided.
    k : int, default=15
        Number of nearest neighbors.
    dim : int, optional
        Number of leading coordinates used by the distance. All if None.
    precomputed_graph : tuple of (indices, distances), optional
        Output of :func:`~ordim.dimensionality.neighbors.knn_graph`.
    metric : str or callable, default='euclidean'
        Distance used to rank neighbors.

    Returns
    -------
    int
        Size of the radius-2 ball, between k+1 and n_samples.

    Examples
    --------
    >>> data = np.arange(12, dtype=float).reshape(-1, 1)
    >>> ball_volume_2(5, data, k=1)
    3
    """
    indices, _ = resolve_graph(data, k, dim, precomputed_graph, metric)
    element = check_element(element, indices.shape[0])
    return int(two_hop_volume(indices, element))


def doubling_ratios(
    data=None, k=15, dim=None, precomputed_graph=None, metric="euclidean", n_jobs=1
):
    """
    Ratio (k+1) / |radius-2 ball| at every sample anchor.

    Parameters are those of :func:`doubling_dimension`.

    Returns
    -------
    ndarray of shape (n_anchors,)
        Ratios in (0, 1], ordered as :func:`~ordim.dimensionality.neighbors.sample_anchors`.

    Raises
    ------
    PreconditionError
        If the dataset has fewer than 11 points or k+1 exceeds its size.
    NumericDomainError
        If a ball volume is zero.
    """
    indices, _ = resolve_graph(
        data, k, dim, precomputed_graph, metric, n_jobs, min_samples=MIN_SAMPLES
    )
    anchors = sample_anchors(indices.shape[0])
    volumes = two_hop_volumes(indices, anchors)

    if np.any(volumes <= 0):
        raise NumericDomainError("Radius-2 ball volume of zero encountered")

    return (k + 1) / volumes


def doubling_dimension(
    data=None,
    k=15,
    dim=None,
    precomputed_graph=None,
    metric="euclidean",
    n_jobs=1,
    logger=None,
):
    """
    Estimate intrinsic dimension from the growth of two-hop k-NN balls.

    The algorithm works by:
    1. For each sample anchor a (indices 9, 19, 29, ...), computing
       ratio_a = (k+1) / |B_2(a)|, where B_2(a) is the radius-2 ball
    2. Averaging the ratios over all anchors
    3. Returning -log2 of the average

    Only the neighbor ordering is used, so any monotone transform of the
    distance gives the same estimate.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features), optional
        The input data matrix where rows are samples and columns are features.
        Either data or precomputed_graph must be provided.
    k : int, default=15
        Number of nearest neighbors defining the radius-1 ball.
    dim : int, optional
        Ambient dimension: number of leading coordinates used by the distance.
        All coordinates if None.
    precomputed_graph : tuple of (indices, distances), optional
        Precomputed k-NN graph, as returned by
        :func:`~ordim.dimensionality.neighbors.knn_graph`.
    metric : str or callable, default='euclidean'
        Distance used to rank neighbors.
    n_jobs : int, default=1
        Parallel jobs for the k-NN sweep.
    logger : logging.Logger, optional
        Logger for debug messages. Defaults to the module logger.

    Returns
    -------
    float
        The estimated intrinsic dimension.

    Raises
    ------
    PreconditionError
        If the dataset has fewer than 11 points or k+1 exceeds its size.
    NumericDomainError
        If a ball volume is zero.

    Notes
    -----
    The estimate is biased low at small sample sizes: for 100 points on the
    2-sphere with k=15 it typically lies around 1.3-1.7.

    Examples
    --------
    >>> rng = np.random.default_rng(0)
    >>> X = rng.normal(size=(500, 3))
    >>> X /= np.linalg.norm(X, axis=1, keepdims=True)
    >>> d_est = doubling_dimension(X, k=15)  # doctest: +SKIP
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    ratios = doubling_ratios(data, k, dim, precomputed_graph, metric, n_jobs)
    average = np.sum(ratios) / len(ratios)
    logger.debug(f"Averaged doubling ratio over {len(ratios)} anchors: {average:.6f}")

    if not average > 0:
        raise NumericDomainError(f"Average doubling ratio must be positive, got {average}")

    dimension = float(-np.log2(average))
    logger.debug(f"Doubling dimension estimate (k={k}): {dimension:.3f}")
    return dimension
