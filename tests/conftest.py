"""
Test configuration and fixtures for the mcmc package.

Samplers never use numpy's global random state, so every fixture hands
out explicitly seeded Generators.
"""

from pathlib import Path
import sys

import numpy as np
import pytest

# Add the repository root to the path so the package imports without installation
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(scope="session")
def test_seed():
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(test_seed):
    """Freshly seeded generator for a single test."""
    return np.random.default_rng(test_seed)


@pytest.fixture
def gaussian_target():
    """1D Gaussian posterior split evenly between likelihood and prior."""
    mu, sigma = 3.5, 1.0

    def log_sqrt_gauss(x):
        dx = (x - mu) / sigma
        return -dx * dx / 4.0

    return {'mu': mu, 'sigma': sigma,
            'log_likelihood': log_sqrt_gauss, 'log_prior': log_sqrt_gauss}


@pytest.fixture
def gaussian_2d_target():
    """Independent 2D Gaussian posterior for ensemble tests."""
    mu = np.array([1.0, -2.0])
    sigma = np.array([1.0, 2.0])

    def log_likelihood(x):
        dx = (x - mu) / sigma
        return -0.5 * float(np.dot(dx, dx))

    def log_prior(x):
        return 0.0

    return {'mu': mu, 'sigma': sigma,
            'log_likelihood': log_likelihood, 'log_prior': log_prior}


@pytest.fixture
def tolerance_config():
    """Standard tolerance configuration for numerical tests."""
    return {
        'rtol': 1e-10,          # Relative tolerance
        'atol': 1e-12,          # Absolute tolerance
        'mean_band': 6.0,       # Mean tolerance in units of sigma / sqrt(N)
        'std_band': 12.0,       # Std tolerance in units of sigma / sqrt(N)
    }


@pytest.fixture
def statistical_config():
    """Configuration for statistical tests."""
    return {
        'n_samples': 10000,      # Number of samples for single-chain tests
        'n_walkers': 20,         # Ensemble size
        'n_iterations': 1000,    # Ensemble iterations kept
        'burn_in': 200,          # Ensemble iterations discarded
    }


class CallCounter:
    """Wraps a function and counts its invocations."""

    def __init__(self, fn):
        self.fn = fn
        self.calls = 0

    def __call__(self, *args):
        self.calls += 1
        return self.fn(*args)


@pytest.fixture
def call_counter():
    """Factory for call-counting wrappers."""
    return CallCounter


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual functions/methods"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for module interactions"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds"
    )
    config.addinivalue_line(
        "markers", "statistical: Tests that verify statistical properties"
    )
    config.addinivalue_line(
        "markers", "edge_case: Tests for edge cases and error conditions"
    )
    config.addinivalue_line(
        "markers", "reproducibility: Tests for deterministic behavior"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names and paths."""
    for item in items:
        # Add unit marker to unit test files
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add integration marker to integration test files
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        # Add statistical marker to statistical tests
        if any(keyword in item.name.lower() for keyword in ['statistical', 'distribution', 'convergence']):
            item.add_marker(pytest.mark.statistical)

        # Add edge_case marker to edge case tests
        if any(keyword in item.name.lower() for keyword in ['edge', 'degenerate', 'insufficient']):
            item.add_marker(pytest.mark.edge_case)
