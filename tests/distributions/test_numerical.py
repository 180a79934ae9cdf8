import unittest

import numpy as np
import pytest
from scipy import stats
from scipy.integrate import quad

from numdist import DomainError, NumericalDistribution, Scheme


def truncated_gaussian(x):
    return np.exp(-x ** 2 / 2) * (abs(x) < 2)


class TestTruncatedNormal(unittest.TestCase):

    def setUp(self):
        self.dist = NumericalDistribution(truncated_gaussian, (-2, 2),
                                          rng=np.random.default_rng(123))

    def test_normalization(self):
        expected = np.sqrt(2 * np.pi) * (stats.norm.cdf(2) - stats.norm.cdf(-2))
        np.testing.assert_allclose(self.dist.normalization, expected, rtol=1e-8)
        self.assertEqual(self.dist.kind, "quadrature")
        self.assertIsNone(self.dist.interpolant)

    def test_density(self):
        self.assertEqual(self.dist.density(-3.0), 0.0)
        self.assertEqual(self.dist.density(3.0), 0.0)
        self.assertGreater(self.dist.density(0.0), self.dist.density(0.001))
        self.assertGreater(self.dist.density(0.0), 1 / np.sqrt(2 * np.pi))
        self.assertIsInstance(self.dist.density(0.5), float)

    def test_density_integrates_to_one(self):
        total, _ = quad(self.dist.density, -2, 2)
        np.testing.assert_allclose(total, 1.0, rtol=1e-8)

    def test_cdf(self):
        self.assertEqual(self.dist.cdf(-3.0), 0.0)
        self.assertEqual(self.dist.cdf(-2.0), 0.0)
        self.assertEqual(self.dist.cdf(2.0), 1.0)
        self.assertEqual(self.dist.cdf(3.0), 1.0)
        np.testing.assert_allclose(self.dist.cdf(0.0), 0.5, atol=1e-10)
        self.assertGreater(self.dist.cdf(1.0), self.dist.cdf(0.0))

    def test_cdf_propagates_nan(self):
        self.assertTrue(np.isnan(self.dist.cdf(np.nan)))
        out = self.dist.cdf(np.array([np.nan, 0.0, 3.0]))
        self.assertTrue(np.isnan(out[0]))
        np.testing.assert_allclose(out[1:], [0.5, 1.0], atol=1e-10)

    def test_array_inputs_keep_shape(self):
        x = np.linspace(-3, 3, 7)
        for fn in (self.dist.density, self.dist.log_density, self.dist.cdf):
            self.assertEqual(fn(x).shape, (7,))
            self.assertEqual(fn(x.reshape(7, 1)).shape, (7, 1))

    def test_log_density_consistency(self):
        x = np.array([-1.0, 0.0, 1.5])
        np.testing.assert_allclose(np.exp(self.dist.log_density(x)), self.dist.density(x), rtol=1e-12)
        self.assertEqual(self.dist.log_density(5.0), -np.inf)

    def test_support_accessors(self):
        self.assertEqual(self.dist.support, (-2.0, 2.0))
        self.assertEqual(self.dist.minimum(), -2.0)
        self.assertEqual(self.dist.maximum(), 2.0)
        self.assertEqual(self.dist.n_sampling_bins, 300)


@pytest.mark.parametrize("support", [(1, 1), (2, 1), (np.nan, 1), (0, np.nan), (1,)])
def test_invalid_support(support):
    with pytest.raises(DomainError):
        NumericalDistribution(lambda x: 1.0, support)


def test_vanishing_density_is_rejected():
    with pytest.raises(DomainError):
        NumericalDistribution(lambda x: 0.0, (0, 1))


def test_invalid_sampling_bins():
    with pytest.raises(DomainError):
        NumericalDistribution(lambda x: 1.0, (0, 1), n_sampling_bins=0)


def test_infinite_support_defaults(standard_normal):
    assert standard_normal.support == (-np.inf, np.inf)
    assert standard_normal.normalization == pytest.approx(np.sqrt(2 * np.pi))
    assert standard_normal.cdf(0.0) == pytest.approx(0.5)
    assert standard_normal.cdf(1.0) == pytest.approx(stats.norm.cdf(1.0), rel=1e-8)
    assert standard_normal.density(1.0) == pytest.approx(stats.norm.pdf(1.0), rel=1e-8)


def test_half_infinite_support():
    d = NumericalDistribution(lambda x: np.exp(-x), (0, np.inf))
    assert d.normalization == pytest.approx(1.0)
    assert d.cdf(1.0) == pytest.approx(1 - np.exp(-1.0))
    assert d.density(-1.0) == 0.0


def test_from_scipy_distribution():
    d = NumericalDistribution.from_distribution(stats.beta(2, 3), gridsize=401)
    assert d.kind == "linear"
    assert d.support == (0.0, 1.0)
    x = np.linspace(0.05, 0.95, 7)
    np.testing.assert_allclose(d.cdf(x), stats.beta(2, 3).cdf(x), atol=1e-4)


def test_from_numerical_distribution_with_grid(truncated_normal):
    grid = np.linspace(-2, 2, 201)
    d = NumericalDistribution.from_distribution(truncated_normal, grid=grid, scheme=Scheme.CONSTANT)
    assert d.kind == "constant"
    assert d.n_sampling_bins == 201
    np.testing.assert_allclose(d.density(0.0), truncated_normal.density(0.0), rtol=1e-3)


def test_from_distribution_needs_grid_for_infinite_support(standard_normal):
    with pytest.raises(DomainError):
        NumericalDistribution.from_distribution(standard_normal)
    with pytest.raises(TypeError):
        NumericalDistribution.from_distribution(object())
