"""
Capacity dimension estimation.

For a point and a neighbor at the edge of its k-NN ball, the fraction of the
ball shared by the neighbor's own ball depends on the dimension. The expected
minimal overlap fraction is modelled by the regularized incomplete beta
function I_0.75((d+1)/2, 1/2), which is inverted to recover d.
"""

import logging

import numpy as np

from .balls_jit import min_overlaps, neighborhood_overlap
from .neighbors import MIN_SAMPLES, check_element, resolve_graph, sample_anchors
from .utils import DEFAULT_BRACKET, check_solver_params, invert_ir_beta


def intersection_count(
    e1, e2, data=None, k=15, dim=None, precomputed_graph=None, metric="euclidean"
):
    """
    Count the points shared by the k-NN sets of two points.

    Parameters
    ----------
    e1, e2 : int
        Row indices of the two points.
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
        Intersection size, between 0 and k+1. A point fully intersects
        itself: ``intersection_count(e, e) == k + 1``.
    """
    indices, _ = resolve_graph(data, k, dim, precomputed_graph, metric)
    n_samples = indices.shape[0]
    e1 = check_element(e1, n_samples)
    e2 = check_element(e2, n_samples)
    return int(neighborhood_overlap(indices, e1, e2))


def min_intersection(
    element, data=None, k=15, dim=None, precomputed_graph=None, metric="euclidean"
):
    """
    Smallest k-NN set overlap between a point and any of its k-NN members.

    The point itself is part of the candidate pool; its self-overlap is
    k+1, so it only decides the result when every neighbor overlaps fully.

    Returns
    -------
    int
        Minimal intersection size, between 0 and k+1.
    """
    indices, _ = resolve_graph(data, k, dim, precomputed_graph, metric)
    element = check_element(element, indices.shape[0])
    return int(min_overlaps(indices, np.array([element], dtype=np.int64))[0])


def capacity_ratios(
    data=None, k=15, dim=None, precomputed_graph=None, metric="euclidean", n_jobs=1
):
    """
    Minimal intersection divided by k+1 at every sample anchor.

    Parameters are those of :func:`capacity_dimension`.

    Returns
    -------
    ndarray of shape (n_anchors,)
        Ratios in [0, 1], ordered as :func:`~ordim.dimensionality.neighbors.sample_anchors`.
    """
    indices, _ = resolve_graph(
        data, k, dim, precomputed_graph, metric, n_jobs, min_samples=MIN_SAMPLES
    )
    anchors = sample_anchors(indices.shape[0])
    return min_overlaps(indices, anchors) / (k + 1)


def capacity_dimension(
    data=None,
    k=15,
    dim=None,
    precomputed_graph=None,
    metric="euclidean",
    n_jobs=1,
    bracket=DEFAULT_BRACKET,
    xtol=2e-12,
    rtol=1e-6,
    maxiter=100,
    logger=None,
):
    """
    Estimate intrinsic dimension from minimal k-NN ball overlaps.

    The algorithm works by:
    1. For each sample anchor (indices 9, 19, 29, ...), finding the minimal
       overlap between its k-NN set and the k-NN sets of its members,
       divided by k+1
    2. Averaging these ratios into L_CAP
    3. Solving I_0.75((d+1)/2, 1/2) = L_CAP for d on `bracket`

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features), optional
        The input data matrix where rows are samples and columns are features.
        Either data or precomputed_graph must be provided.
    k : int, default=15
        Number of nearest neighbors.
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
    bracket : tuple of float, default=(0.0, 10.0)
        Dimension interval searched by the root finder.
    xtol, rtol : float
        Absolute and relative tolerances of the root finder.
    maxiter : int, default=100
        Iteration cap of the root finder.
    logger : logging.Logger, optional
        Logger for debug messages. Defaults to the module logger.

    Returns
    -------
    float
        The estimated intrinsic dimension.

    Raises
    ------
    PreconditionError
        If the dataset has fewer than 11 points, k+1 exceeds its size or the
        solver settings are invalid. All of these are checked before the
        k-NN sweep.
    ConvergenceError
        If L_CAP is outside the range of the beta relation on `bracket`.
        The error's ``target`` attribute holds L_CAP.

    Notes
    -----
    The estimate is noisy at small sample sizes. For 100 points on the
    2-sphere with k=15 it averages close to 2 across random draws, but single
    draws spread from roughly 1.5 to 2.9.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    check_solver_params(bracket, xtol, rtol, maxiter)
    ratios = capacity_ratios(data, k, dim, precomputed_graph, metric, n_jobs)
    l_cap = float(np.sum(ratios) / len(ratios))
    logger.debug(f"Averaged capacity ratio L_CAP over {len(ratios)} anchors: {l_cap:.6f}")

    dimension = invert_ir_beta(
        l_cap, bracket=bracket, xtol=xtol, rtol=rtol, maxiter=maxiter
    )
    logger.debug(f"Capacity dimension estimate (k={k}): {dimension:.3f}")
    return dimension
