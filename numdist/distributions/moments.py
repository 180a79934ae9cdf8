# distributions/moments.py
"""
Moments of numerically defined distributions.

Moments are integrals of ``(x - mu)**n * p(x)`` over the support. For a
distribution with a grid interpolant the integrand is a polynomial of degree
at most ``n + 1`` on every bin, so a three point Gauss-Legendre rule per bin is
exact for ``n <= 4``. All other densities go through :func:`numdist.integrate.integral`.
"""
from __future__ import annotations

import numpy as np

from ..integrate import integral
from ..interpolation import GridInterpolant, Scheme, half_bin_edges

__all__ = [
    "numerical_moment",
    "mean",
    "var",
    "std",
    "skewness",
    "kurtosis",
]

_GL_NODES, _GL_WEIGHTS = np.polynomial.legendre.leggauss(3)


def _grid_moment(interpolant: GridInterpolant, lo: float, hi: float, normalization: float,
                 n: int, mu: float) -> float:
    grid = interpolant.grid
    # pieces on which the interpolant is a polynomial
    breaks = half_bin_edges(grid) if interpolant.scheme is Scheme.CONSTANT else grid
    breaks = np.unique(np.clip(breaks, lo, hi))
    left, right = breaks[:-1], breaks[1:]
    half, mid = 0.5 * (right - left), 0.5 * (right + left)
    x = mid[:, None] + half[:, None] * _GL_NODES[None, :]
    p = interpolant(x) / normalization
    return float(np.sum(half[:, None] * _GL_WEIGHTS[None, :] * (x - mu) ** n * p))


def numerical_moment(d, n: int, mu: float | None = None) -> float:
    """
    ``E[(X - mu)**n]`` for a :class:`~numdist.distributions.numerical.NumericalDistribution`.

    ``mu`` defaults to the mean of ``d`` (central moments); pass ``mu=0`` for raw moments.
    """
    if mu is None:
        mu = mean(d)
    lo, hi = d.support
    if d.interpolant is not None and n <= 4:
        return _grid_moment(d.interpolant, lo, hi, d.normalization, n, mu)
    return integral(lambda x: (x - mu) ** n * d.density(x), lo, hi)


def mean(d) -> float:
    """First raw moment."""
    return numerical_moment(d, 1, 0.0)


def var(d) -> float:
    """Second central moment."""
    return numerical_moment(d, 2)


def std(d) -> float:
    return float(np.sqrt(var(d)))


def skewness(d) -> float:
    """Third central moment over the cubed standard deviation."""
    m = mean(d)
    sigma = np.sqrt(numerical_moment(d, 2, m))
    return float(numerical_moment(d, 3, m) / sigma ** 3)


def kurtosis(d) -> float:
    """Excess kurtosis: fourth central moment over ``sigma**4``, minus 3."""
    m = mean(d)
    sigma2 = numerical_moment(d, 2, m)
    return float(numerical_moment(d, 4, m) / sigma2 ** 2 - 3)
