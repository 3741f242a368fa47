"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def exact_system():
    """
    Two samples, bias column plus one feature, exactly determined.
    
    The least-squares solution is theta = [0, 1].
    """
    X = [[1.0, 0.0], [1.0, 4.0]]
    y = [0.0, 4.0]
    return X, y, np.array([0.0, 1.0])


@pytest.fixture
def noisy_regression_data(rng):
    """Overdetermined dataset with an intercept column and small noise."""
    n = 60
    X = np.column_stack([
        np.ones(n),
        rng.standard_normal(n),
        rng.standard_normal(n),
    ])
    theta_true = np.array([0.5, 2.0, -1.0])
    y = X @ theta_true + rng.standard_normal(n) * 0.1
    return X, y, theta_true
