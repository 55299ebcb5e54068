"""JIT-compiled neighborhood kernels.

All kernels take the k-NN index table of shape (n_samples, k+1) produced by
:func:`~ordim.dimensionality.neighbors.knn_graph` and key membership on row
indices through a boolean bitmap of length n_samples.
"""

import numpy as np
from ..utils.jit import conditional_njit


@conditional_njit
def two_hop_volume(indices, element):
    """
    Size of the radius-2 ball around `element`.

    The bitmap is seeded with the k-NN set of `element` (the radius-1 ball),
    then every index in the k-NN set of each radius-1 member is added.
    Only newly seen indices increase the count.

    Parameters
    ----------
    indices : np.ndarray
        k-NN index table of shape (n_samples, k+1), dtype int64.
    element : int
        Row index of the ball center.

    Returns
    -------
    volume : int
        Number of distinct indices in the radius-2 ball.
    """
    n_samples, width = indices.shape
    seen = np.zeros(n_samples, dtype=np.bool_)
    volume = 0

    for j in range(width):
        member = indices[element, j]
        if not seen[member]:
            seen[member] = True
            volume += 1

    for j in range(width):
        member = indices[element, j]
        for l in range(width):
            candidate = indices[member, l]
            if not seen[candidate]:
                seen[candidate] = True
                volume += 1

    return volume


@conditional_njit
def neighborhood_overlap(indices, a, b):
    """
    Number of indices shared by the k-NN sets of rows `a` and `b`.

    Parameters
    ----------
    indices : np.ndarray
        k-NN index table of shape (n_samples, k+1), dtype int64.
    a, b : int
        Row indices of the two points.

    Returns
    -------
    overlap : int
        Size of the intersection, between 0 and k+1.
    """
    n_samples, width = indices.shape
    in_a = np.zeros(n_samples, dtype=np.bool_)
    for j in range(width):
        in_a[indices[a, j]] = True

    overlap = 0
    for j in range(width):
        if in_a[indices[b, j]]:
            overlap += 1

    return overlap


@conditional_njit
def two_hop_volumes(indices, anchors):
    """Radius-2 ball volume of each anchor row."""
    volumes = np.empty(len(anchors), dtype=np.int64)
    for i in range(len(anchors)):
        volumes[i] = two_hop_volume(indices, anchors[i])
    return volumes


@conditional_njit
def min_overlaps(indices, anchors):
    """
    Minimal overlap between each anchor's k-NN set and those of its members.

    For anchor ``a`` this is the minimum of ``neighborhood_overlap(indices, a, m)``
    over every ``m`` in the k-NN set of ``a``, ``a`` itself included. The
    anchor's bitmap is built once and reused for all its members.

    Parameters
    ----------
    indices : np.ndarray
        k-NN index table of shape (n_samples, k+1), dtype int64.
    anchors : np.ndarray
        Row indices, dtype int64.

    Returns
    -------
    minima : np.ndarray
        Array of shape (len(anchors),), dtype int64.
    """
    n_samples, width = indices.shape
    minima = np.empty(len(anchors), dtype=np.int64)

    for i in range(len(anchors)):
        a = anchors[i]
        in_a = np.zeros(n_samples, dtype=np.bool_)
        for j in range(width):
            in_a[indices[a, j]] = True

        best = width
        for j in range(width):
            member = indices[a, j]
            overlap = 0
            for l in range(width):
                if in_a[indices[member, l]]:
                    overlap += 1
            if overlap < best:
                best = overlap
        minima[i] = best

    return minima
