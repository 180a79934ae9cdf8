# distributions/quantile.py
"""
Inverse CDFs.

Grid-backed distributions are inverted in closed form. The CDF is tabulated
once per call at the bin boundaries, the bin holding each probability is found
by binary search, and the position inside the bin is solved analytically:

- constant scheme: the CDF is linear inside a bin, so the position follows by
  linear interpolation;
- linear scheme: the CDF is quadratic inside a bin. With ``s`` the offset from
  the left knot ``x0`` and ``h`` the bin width,

  .. math::

      \\tfrac{1}{2} a s^2 + b s + c = 0, \\quad
      a = \\frac{v_1 - v_0}{h Z}, \\quad b = \\frac{v_0}{Z}, \\quad c = F(x_0) - u,

  where ``Z`` is the normalization. The root inside ``[0, h]`` is taken; if both
  roots are inside, the one closer to the bin center wins.

Densities without an interpolant are inverted numerically with
:func:`scipy.optimize.brentq`.
"""
from __future__ import annotations

from typing import Callable, Tuple

import numpy as np
from scipy.optimize import brentq

from ..custom_types import Array, ArrayLike
from ..array_backend.utils import _as_array, locate_bin
from ..integrate import cumulative_integral
from ..interpolation import GridInterpolant, half_bin_edges
from ..logging import warn_numerical
from .binned import inverse_tangent_map, tangent_map

__all__ = [
    "DEGENERATE_SLOPE_TOL",
    "quantile_constant",
    "quantile_linear",
    "quantile_numeric",
    "select_root",
]

DEGENERATE_SLOPE_TOL = 1e-14
# relative size of a negative discriminant still attributed to round-off
_DISCRIMINANT_RTOL = 1e-9


def _finish(u: Array, x: Array, lo: float, hi: float) -> float | Array:
    x = np.where(u <= 0, lo, np.where(u >= 1, hi, x))
    if x.ndim == 0:
        return float(x)
    return x


def quantile_constant(interpolant: GridInterpolant, normalization: float, u: ArrayLike) -> float | Array:
    """
    Inverse CDF of a distribution with a constant (nearest-knot) interpolated density.

    ``u <= 0`` maps to the first knot, ``u >= 1`` to the last one. A bin without
    mass maps to its left edge.
    """
    u = _as_array(u).astype(float)
    grid, values = interpolant.grid, interpolant.values
    edges = half_bin_edges(grid)
    cum = cumulative_integral(interpolant, edges) / normalization
    weights = values * np.diff(edges) / normalization

    idx = locate_bin(cum, u, side="left")
    left, width, w = edges[idx], edges[idx + 1] - edges[idx], weights[idx]
    frac = np.divide(u - cum[idx], w, out=np.zeros(np.broadcast(u, w).shape), where=w > 0)
    x = left + np.clip(frac, 0.0, 1.0) * width
    return _finish(u, x, grid[0], grid[-1])


def select_root(s1: Array, s2: Array, h: Array) -> Array:
    """
    Pick the in-bin offset among two candidate roots.

    A root inside ``[0, h]`` is preferred; when both are inside, the one closer
    to ``h / 2`` is taken. When neither is (round-off at the bin boundaries),
    the root closer to the interval is used. The result is clipped to ``[0, h]``.
    NaN candidates never win.
    """
    eps = 1e-12 * h
    in1 = (s1 >= -eps) & (s1 <= h + eps)
    in2 = (s2 >= -eps) & (s2 <= h + eps)

    with np.errstate(invalid="ignore"):
        center_1 = np.abs(s1 - 0.5 * h)
        center_2 = np.abs(s2 - 0.5 * h)
        out_1 = np.maximum(-s1, s1 - h)
        out_2 = np.maximum(-s2, s2 - h)

    both = in1 & in2
    s = np.where(
        both,
        np.where(center_2 < center_1, s2, s1),
        np.where(in1, s1, np.where(in2, s2, np.where(np.nan_to_num(out_2, nan=np.inf) < out_1, s2, s1))),
    )
    return np.clip(s, 0.0, h)


def quantile_linear(interpolant: GridInterpolant, normalization: float, u: ArrayLike) -> float | Array:
    """
    Inverse CDF of a distribution with a piecewise linear interpolated density.

    ``u <= 0`` maps to the first knot, ``u >= 1`` to the last one. Bins whose
    relative change in density, ``|a| h / b``, is at most
    :data:`DEGENERATE_SLOPE_TOL` are treated as flat and solved linearly.
    """
    u = _as_array(u).astype(float)
    grid, values = interpolant.grid, interpolant.values
    cdf_grid = cumulative_integral(interpolant, grid) / normalization

    idx = locate_bin(cdf_grid, u, side="left")
    x0, h = grid[idx], grid[idx + 1] - grid[idx]
    v0, v1 = values[idx], values[idx + 1]
    a = (v1 - v0) / h / normalization
    b = v0 / normalization
    c = cdf_grid[idx] - u

    disc = b ** 2 - 2 * a * c
    scale = b ** 2 + np.abs(2 * a * c)
    if np.any(disc < -_DISCRIMINANT_RTOL * scale):
        worst = float(np.min(disc / np.where(scale > 0, scale, 1.0)))
        warn_numerical("Clamped a negative discriminant (relative size %.3g) while inverting a linear CDF.", worst)
    root = np.sqrt(np.maximum(disc, 0.0))

    # q = b + sqrt(disc) gives both roots without cancellation:
    # s1 = (-b + sqrt(disc)) / a = -2c / q and s2 = (-b - sqrt(disc)) / a = -q / a
    q = b + root
    shape = np.broadcast(u, q).shape
    s1 = np.divide(-2 * c, q, out=np.zeros(shape), where=q > 0)
    # relative slope over the bin
    degenerate = np.abs(a) * h <= DEGENERATE_SLOPE_TOL * b
    s2 = np.divide(-q, a, out=np.full(shape, np.nan), where=~degenerate)

    s_flat = np.divide(-c, b, out=np.zeros(shape), where=b > 0)
    s = np.where(degenerate, np.clip(s_flat, 0.0, h), select_root(s1, s2, h))
    return _finish(u, x0 + s, grid[0], grid[-1])


def quantile_numeric(cdf: Callable[[float], float], support: Tuple[float, float], u: ArrayLike,
                     *, xtol: float = 1e-12) -> float | Array:
    """
    Invert a monotone CDF by root bracketing.

    The root is searched in the tangent-mapped coordinate ``z`` over
    ``[z(lower), z(upper)]`` so that infinite supports need no bracketing guess.
    """
    lo, hi = support
    z_lo, z_hi = float(inverse_tangent_map(lo)), float(inverse_tangent_map(hi))
    finite = np.isfinite(lo) and np.isfinite(hi)

    def _solve(p: float) -> float:
        if p <= 0:
            return lo
        if p >= 1:
            return hi
        if finite:
            return brentq(lambda x: cdf(x) - p, lo, hi, xtol=xtol)

        def f(z: float) -> float:
            if z <= z_lo:
                return -p
            if z >= z_hi:
                return 1.0 - p
            return cdf(float(tangent_map(z))) - p

        z = brentq(f, z_lo, z_hi, xtol=xtol)
        return float(tangent_map(z))

    arr = _as_array(u).astype(float)
    if arr.ndim == 0:
        return float(_solve(float(arr)))
    return np.fromiter((_solve(p) for p in arr.ravel()), dtype=float, count=arr.size).reshape(arr.shape)
