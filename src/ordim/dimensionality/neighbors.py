"""
Neighbor ranking primitives shared by the ordinal dimension estimators.

Only the ordering induced by the distance matters downstream: every
estimator works on neighbor *indices*, never on raw distance values.
"""

import numbers
import warnings

import numpy as np
from scipy.spatial.distance import cdist, euclidean
from sklearn.utils import check_array

from .errors import PreconditionError
from ..utils.data import to_numpy_array
from ..utils.parallel import parallel_executor, delayed

# Anchors used for averaging: every 10th point starting at index 9
ANCHOR_START = 9
ANCHOR_STEP = 10
MIN_SAMPLES = 11

# Rows per cdist call in knn_graph
KNN_CHUNK_SIZE = 128


def distance(p, q, dim=None):
    """Euclidean distance restricted to the first `dim` coordinates.

    Parameters
    ----------
    p, q : array-like of shape (n_features,)
        The two points.
    dim : int, optional
        Number of leading coordinates to use. If None, all coordinates are
        used and both points must have the same length.

    Returns
    -------
    float
        Non-negative distance.

    Raises
    ------
    PreconditionError
        If `dim` exceeds the length of either point or is not positive.

    Examples
    --------
    >>> distance([0.0, 0.0, 5.0], [3.0, 4.0, -5.0], dim=2)
    5.0
    """
    p = np.asarray(p, dtype=np.float64).ravel()
    q = np.asarray(q, dtype=np.float64).ravel()

    if dim is None:
        if len(p) != len(q):
            raise PreconditionError(
                f"Points have different lengths ({len(p)} and {len(q)}); pass dim explicitly"
            )
        dim = len(p)

    if dim < 1 or dim > min(len(p), len(q)):
        raise PreconditionError(
            f"dim must be between 1 and {min(len(p), len(q))}, got {dim}"
        )

    return float(euclidean(p[:dim], q[:dim]))


def sample_anchors(n_samples):
    """Indices of the points used for averaging: 9, 19, 29, ... below `n_samples`.

    Examples
    --------
    >>> sample_anchors(35)
    array([ 9, 19, 29])
    """
    return np.arange(ANCHOR_START, max(int(n_samples), 0), ANCHOR_STEP, dtype=np.int64)


def check_k(k, n_samples):
    """Validate the neighbor count against the dataset size."""
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise PreconditionError(f"k must be an integer, got {type(k).__name__}")
    if k < 0:
        raise PreconditionError(f"k must be non-negative, got {k}")
    if k + 1 > n_samples:
        raise PreconditionError(
            f"k+1={k + 1} neighbors requested but the dataset has only {n_samples} points"
        )


def check_element(element, n_samples):
    """Validate a point index and return it as a plain int."""
    if isinstance(element, bool) or not isinstance(element, numbers.Integral):
        raise PreconditionError(
            f"Points are referenced by their row index, got {type(element).__name__}"
        )
    if not 0 <= element < n_samples:
        raise PreconditionError(
            f"Point index {element} is out of range for {n_samples} points"
        )
    return int(element)


def prepare_data(data, dim=None):
    """Convert `data` to a float array restricted to its first `dim` columns.

    Raises
    ------
    PreconditionError
        If the data is not a finite 2-D array or `dim` is out of range.
    """
    try:
        X = check_array(to_numpy_array(data), dtype=np.float64, ensure_2d=True)
    except ValueError as e:
        raise PreconditionError(str(e)) from e

    n_features = X.shape[1]
    if dim is None:
        return X

    if isinstance(dim, bool) or not isinstance(dim, numbers.Integral):
        raise PreconditionError(f"dim must be an integer, got {type(dim).__name__}")
    if not 1 <= dim <= n_features:
        raise PreconditionError(
            f"dim must be between 1 and {n_features}, got {dim}"
        )
    return X[:, :dim]


def _rank_row(dists, query):
    # Sort key: (distance, not-the-query, index). The query wins every
    # zero-distance tie, remaining ties keep dataset order.
    idx = np.arange(len(dists))
    return np.lexsort((idx, idx != query, dists))


def _knn_rows(X, rows, k, metric):
    D = cdist(X[rows], X, metric=metric)
    indices = np.empty((len(rows), k + 1), dtype=np.int64)
    distances = np.empty((len(rows), k + 1), dtype=np.float64)

    for i, row in enumerate(rows):
        order = _rank_row(D[i], row)[: k + 1]
        indices[i] = order
        distances[i] = D[i, order]

    return indices, distances


def knn(element, data, dim=None, k=15, metric="euclidean"):
    """
    Rank the k nearest neighbors of one point.

    Parameters
    ----------
    element : int
        Row index of the query point in `data`.
    data : array-like of shape (n_samples, n_features)
        The dataset.
    dim : int, optional
        Number of leading coordinates used by the distance. All if None.
    k : int, default=15
        Number of neighbors besides the query itself.
    metric : str or callable, default='euclidean'
        Any metric accepted by :func:`scipy.spatial.distance.cdist`. Only the
        ordering it induces is used.

    Returns
    -------
    indices : ndarray of shape (k+1,)
        Neighbor indices in ascending distance order; ``indices[0] == element``.
    distances : ndarray of shape (k+1,)
        The matching distances.

    Raises
    ------
    PreconditionError
        If ``k + 1`` exceeds the number of points or `element` is not a
        valid row index.

    Examples
    --------
    >>> data = np.array([[0.0], [1.0], [3.0], [0.5]])
    >>> indices, distances = knn(0, data, k=2)
    >>> indices
    array([0, 3, 1])
    """
    X = prepare_data(data, dim)
    n_samples = len(X)
    check_k(k, n_samples)
    element = check_element(element, n_samples)

    indices, distances = _knn_rows(X, np.array([element]), k, metric)
    return indices[0], distances[0]


def knn_graph(data, k=15, dim=None, metric="euclidean", n_jobs=1):
    """
    Rank the k nearest neighbors of every point.

    Row ``i`` of the result is exactly ``knn(i, data, dim, k, metric)``.
    Rows are computed in chunks of ``KNN_CHUNK_SIZE``; with ``n_jobs != 1``
    chunks are dispatched through :func:`~ordim.utils.parallel.parallel_executor`
    and reassembled in row order, so the result does not depend on `n_jobs`.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features)
        The dataset.
    k : int, default=15
        Number of neighbors besides the point itself.
    dim : int, optional
        Number of leading coordinates used by the distance. All if None.
    metric : str or callable, default='euclidean'
        Any metric accepted by :func:`scipy.spatial.distance.cdist`.
    n_jobs : int, default=1
        Number of parallel jobs (-1 for all cores).

    Returns
    -------
    indices : ndarray of shape (n_samples, k+1)
        Neighbor indices; ``indices[:, 0]`` are the points themselves.
    distances : ndarray of shape (n_samples, k+1)
        Neighbor distances.

    Warns
    -----
    RuntimeWarning
        If some point has a zero-distance neighbor other than itself.
    """
    X = prepare_data(data, dim)
    n_samples = len(X)
    check_k(k, n_samples)
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, numbers.Integral) or n_jobs == 0:
        raise PreconditionError(f"n_jobs must be a non-zero integer, got {n_jobs}")

    chunks = [
        np.arange(start, min(start + KNN_CHUNK_SIZE, n_samples))
        for start in range(0, n_samples, KNN_CHUNK_SIZE)
    ]

    if n_jobs == 1 or len(chunks) == 1:
        results = [_knn_rows(X, rows, k, metric) for rows in chunks]
    else:
        with parallel_executor(n_jobs) as parallel:
            results = parallel(
                delayed(_knn_rows)(X, rows, k, metric) for rows in chunks
            )

    indices = np.vstack([r[0] for r in results])
    distances = np.vstack([r[1] for r in results])

    if k > 0 and np.any(distances[:, 1] == 0):
        n_zero = int(np.sum(distances[:, 1] == 0))
        warnings.warn(
            f"Found {n_zero} points with a zero-distance neighbor. "
            "Ties are broken by dataset order, which may bias the estimates.",
            RuntimeWarning,
        )

    return indices, distances


def resolve_graph(
    data=None,
    k=15,
    dim=None,
    precomputed_graph=None,
    metric="euclidean",
    n_jobs=1,
    min_samples=1,
):
    """
    Return the k-NN graph of `data`, or validate a precomputed one.

    Exactly one of `data` and `precomputed_graph` must be given. All input
    checks run before any distance is computed.

    Parameters
    ----------
    precomputed_graph : tuple of (indices, distances), optional
        Output of :func:`knn_graph` (possibly with more than k+1 columns,
        which are truncated). ``indices[:, 0]`` must be the row indices.
        Cannot be combined with `data` or `dim`.
    min_samples : int, default=1
        Minimum dataset size accepted.

    Returns
    -------
    indices : ndarray of shape (n_samples, k+1), dtype int64
    distances : ndarray of shape (n_samples, k+1)
    """
    if data is None and precomputed_graph is None:
        raise PreconditionError("Either data or precomputed_graph must be provided")

    if data is not None and precomputed_graph is not None:
        raise PreconditionError("Provide either data or precomputed_graph, not both")

    if dim is not None and precomputed_graph is not None:
        raise PreconditionError(
            "dim only applies to data; a precomputed graph already fixes the distance"
        )

    if precomputed_graph is None:
        X = prepare_data(data, dim)
        n_samples = len(X)
        if n_samples < min_samples:
            raise PreconditionError(
                f"Need at least {min_samples} points, got {n_samples}"
            )
        check_k(k, n_samples)
        return knn_graph(X, k=k, metric=metric, n_jobs=n_jobs)

    indices, distances = precomputed_graph
    indices = np.asarray(indices)
    distances = np.asarray(distances)

    if indices.ndim != 2 or indices.shape != distances.shape:
        raise PreconditionError(
            "Indices and distances must be 2-D arrays of the same shape"
        )

    n_samples = indices.shape[0]
    if n_samples < min_samples:
        raise PreconditionError(f"Need at least {min_samples} points, got {n_samples}")
    check_k(k, n_samples)

    if indices.shape[1] < k + 1:
        raise PreconditionError(
            f"Precomputed graph must have at least k+1={k + 1} neighbors, "
            f"but has {indices.shape[1]}"
        )

    indices = np.ascontiguousarray(indices[:, : k + 1], dtype=np.int64)
    distances = distances[:, : k + 1]

    if np.any(indices < 0) or np.any(indices >= n_samples):
        raise PreconditionError("Precomputed graph contains out-of-range indices")
    if not np.array_equal(indices[:, 0], np.arange(n_samples)):
        raise PreconditionError(
            "The first column of a precomputed graph must hold self-references"
        )

    return indices, distances
