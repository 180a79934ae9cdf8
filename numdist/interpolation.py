# interpolation.py
"""
Piecewise interpolants over a one dimensional grid.

A :class:`GridInterpolant` holds raw density samples ``values`` at strictly
increasing knots ``grid`` together with an interpolation :class:`Scheme`:

- ``Scheme.CONSTANT``: nearest-knot interpolation. Knot ``i`` owns the bin
  between the midpoints to its neighbours; the first and last knots own half
  bins that end at the grid boundaries. A point exactly on a midpoint belongs
  to the right-hand knot.
- ``Scheme.LINEAR``: piecewise linear interpolation between knots.
"""
from __future__ import annotations

from enum import Enum
from typing import Tuple

import numpy as np

from .custom_types import Array, ArrayLike
from .array_backend.utils import _as_array, _ensure_vector, locate_bin
from .exceptions import BoundsError, DomainError

__all__ = [
    "Scheme",
    "GridInterpolant",
    "half_bin_edges",
]


class Scheme(Enum):
    """Interpolation scheme of a :class:`GridInterpolant`."""
    CONSTANT = "constant"
    LINEAR = "linear"


def half_bin_edges(grid: ArrayLike) -> Array:
    """
    Bin edges of the constant scheme: ``[grid[0], midpoints..., grid[-1]]``.

    Returns an array of length ``len(grid) + 1``.
    """
    g = _ensure_vector(grid)
    edges = np.empty(g.size + 1, dtype=float)
    edges[0] = g[0]
    edges[1:-1] = 0.5 * (g[1:] + g[:-1])
    edges[-1] = g[-1]
    return edges


class GridInterpolant:
    """
    Function sampled on an ordered grid, evaluable anywhere inside the grid.

    Args:
        grid: strictly increasing knot positions, at least two of them.
        values: function values at the knots, same length as ``grid``.
        scheme: ``"constant"`` / ``"linear"`` or a :class:`Scheme`.

    Raises:
        DomainError: for fewer than two knots, mismatched lengths or a grid that
            is not strictly increasing.
    """

    def __init__(self, grid: ArrayLike, values: ArrayLike, scheme: Scheme | str = Scheme.LINEAR):
        g = _ensure_vector(grid)
        v = _ensure_vector(values)
        if g.size < 2:
            raise DomainError(f"GridInterpolant requires at least two knots. Got {g.size}.")
        if v.size != g.size:
            raise DomainError(f"grid and values must have equal length. Got {g.size} and {v.size}.")
        if not np.all(np.isfinite(g)):
            raise DomainError("grid must contain finite values only.")
        if not np.all(np.diff(g) > 0):
            raise DomainError("grid must be strictly increasing.")

        self._grid = g
        self._values = v
        self._scheme = Scheme(scheme)
        self._grid.setflags(write=False)
        self._values.setflags(write=False)

    @property
    def grid(self) -> Array:
        """Knot positions (read-only view), shape (n,)."""
        return self._grid

    @property
    def values(self) -> Array:
        """Raw values at the knots (read-only view), shape (n,)."""
        return self._values

    @property
    def scheme(self) -> Scheme:
        return self._scheme

    @property
    def extent(self) -> Tuple[float, float]:
        """(first knot, last knot)."""
        return float(self._grid[0]), float(self._grid[-1])

    def __len__(self) -> int:
        return self._grid.size

    def __repr__(self) -> str:
        lo, hi = self.extent
        return f"GridInterpolant(n={len(self)}, extent=({lo:g}, {hi:g}), scheme={self._scheme.value!r})"

    def __call__(self, x: ArrayLike) -> float | Array:
        """
        Evaluate the interpolant at a scalar or an array of points.

        Raises:
            BoundsError: if any point lies outside ``[grid[0], grid[-1]]``.
        """
        arr = _as_array(x).astype(float)
        lo, hi = self.extent
        if np.any(arr < lo) or np.any(arr > hi) or np.any(np.isnan(arr)):
            raise BoundsError(f"GridInterpolant evaluated outside of its grid [{lo}, {hi}].")

        if self._scheme is Scheme.LINEAR:
            out = np.interp(arr, self._grid, self._values)
        else:
            edges = half_bin_edges(self._grid)
            out = self._values[locate_bin(edges, arr, side="right")]

        if np.ndim(out) == 0:
            return float(out)
        return out
