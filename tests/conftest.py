"""Configuration for tests.

This module provides shared fixtures for the ordim test suite. Point sets
are generated here rather than in the library: sampling is an external
collaborator of the estimators.
"""

import pytest
import numpy as np


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


def sample_sphere(manifold_dim, n, seed=42):
    """Sample `n` points uniformly on the unit sphere S^manifold_dim.

    Returns
    -------
    ndarray of shape (n, manifold_dim + 1)
    """
    rng = np.random.default_rng(seed)
    points = rng.normal(size=(n, manifold_dim + 1))
    return points / np.linalg.norm(points, axis=1, keepdims=True)


@pytest.fixture
def sphere_sampler():
    """The uniform sphere sampler, for tests that need several datasets."""
    return sample_sphere


@pytest.fixture
def sphere_2d_100():
    """100 points on the 2-sphere in R^3."""
    return sample_sphere(2, 100, seed=42)


@pytest.fixture
def sphere_2d_175():
    """175 points on the 2-sphere in R^3."""
    return sample_sphere(2, 175, seed=42)


@pytest.fixture
def line_data():
    """12 evenly spaced points on a line, shape (12, 1).

    Neighbor ties (equal distance left and right) make it a good probe
    of the dataset-order tie-breaking rule.
    """
    return np.arange(12, dtype=float).reshape(-1, 1)


@pytest.fixture
def random_cloud():
    """200 Gaussian points in R^4."""
    rng = np.random.default_rng(0)
    return rng.normal(size=(200, 4))
