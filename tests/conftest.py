"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest


@pytest.fixture
def example_prices():
    """Ten-point history used throughout the worked examples."""
    return [100, 102, 101, 105, 103, 108, 110, 107, 112, 115]


@pytest.fixture
def realistic_prices():
    """Generate 100 points of realistic commodity prices."""
    rng = np.random.default_rng(42)
    daily_returns = rng.normal(0.002, 0.03, 99)
    prices = [8500.0]
    for r in daily_returns:
        prices.append(prices[-1] * (1 + r))
    return prices


@pytest.fixture
def flat_prices():
    """Constant prices: every return is zero."""
    return [250.0] * 40
