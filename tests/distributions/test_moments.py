import numpy as np
import pytest

from numdist import NumericalDistribution, interpolated
from numdist.distributions.moments import numerical_moment


TOL = 1e-7


def test_standard_normal_moments(standard_normal):
    assert standard_normal.mean() == pytest.approx(0.0, abs=TOL)
    assert standard_normal.var() == pytest.approx(1.0, abs=TOL)
    assert standard_normal.std() == pytest.approx(1.0, abs=TOL)
    assert standard_normal.skewness() == pytest.approx(0.0, abs=TOL)
    assert standard_normal.kurtosis() == pytest.approx(0.0, abs=TOL)


def test_uniform_moments():
    d = NumericalDistribution(lambda x: 1.0, (0, 2))
    assert d.mean() == pytest.approx(1.0, abs=TOL)
    assert d.var() == pytest.approx(1 / 3, abs=TOL)
    assert d.skewness() == pytest.approx(0.0, abs=TOL)
    assert d.kurtosis() == pytest.approx(-1.2, abs=TOL)


def test_grid_moments_are_exact():
    flat = interpolated(lambda x: 1.0, np.linspace(0, 2, 11))
    assert flat.mean() == pytest.approx(1.0, abs=1e-12)
    assert flat.var() == pytest.approx(1 / 3, abs=1e-12)
    assert flat.kurtosis() == pytest.approx(-1.2, abs=1e-12)

    # p(x) = 2x on [0, 1]
    ramp = interpolated(lambda x: x, [0.0, 1.0])
    assert ramp.mean() == pytest.approx(2 / 3, abs=1e-12)
    assert ramp.var() == pytest.approx(1 / 18, abs=1e-12)


@pytest.mark.parametrize("name", ["skewed_constant", "skewed_linear"])
def test_grid_moments_match_quadrature(name, request):
    d = request.getfixturevalue(name)
    generic = NumericalDistribution(d.interpolant.__call__, d.support)
    for n in (1, 2, 3, 4):
        assert numerical_moment(d, n, 0.0) == pytest.approx(numerical_moment(generic, n, 0.0), abs=1e-6)
    # higher orders go through the integrator for both
    assert numerical_moment(d, 5) == pytest.approx(numerical_moment(generic, 5), abs=1e-6)
