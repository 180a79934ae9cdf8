import pytest
import numpy as np

from numdist import NumericalDistribution, interpolated


def truncated_gaussian(x):
    return np.exp(-x ** 2 / 2) * (abs(x) < 2)


def skewed_density(x):
    return (1.2 - x ** 2) * np.exp(-x / 2)


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def truncated_normal():
    return NumericalDistribution(truncated_gaussian, (-2, 2))

@pytest.fixture
def standard_normal():
    return NumericalDistribution(lambda x: np.exp(-x ** 2 / 2))

@pytest.fixture
def skewed_grid():
    return np.linspace(-0.5, 1.0, 11)

@pytest.fixture
def skewed_constant(skewed_grid):
    return interpolated(skewed_density, skewed_grid, scheme="constant")

@pytest.fixture
def skewed_linear(skewed_grid):
    return interpolated(skewed_density, skewed_grid, scheme="linear")
