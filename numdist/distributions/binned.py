# distributions/binned.py
"""
Binned approximation of a density, used for sampling densities that are not
backed by a grid interpolant.

A :class:`BinnedDensity` evaluates the density at the centers of ``n_bins``
equal-width bins, normalizes the weights and keeps their running sum. A draw
picks a bin by inverse transform on that running sum and places the sample
uniformly inside the bin.

Infinite supports are handled with the tangent map ``x = tan(z * pi / 2)``,
which sends ``z`` in ``(-1, 1)`` to the real line. The density is binned in
``z`` including the Jacobian ``1 / cos(z * pi / 2)**2`` and the draws are
mapped back to ``x``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np

from ..custom_types import Array, ArrayLike, PRNG
from ..array_backend.utils import _apply_elementwise, locate_bin
from ..exceptions import DomainError
from ..logging import mylog

__all__ = [
    "BinnedDensity",
    "tangent_map",
    "inverse_tangent_map",
    "sample_binned",
]


def tangent_map(z: ArrayLike) -> float | Array:
    """``x(z) = tan(z * pi / 2)``: maps ``(-1, 1)`` onto the real line."""
    return np.tan(np.asarray(z, dtype=float) * np.pi / 2)


def inverse_tangent_map(x: ArrayLike) -> float | Array:
    """``z(x) = atan(x) * 2 / pi``: maps the real line (and +-inf) onto ``[-1, 1]``."""
    return np.arctan(np.asarray(x, dtype=float)) * 2 / np.pi


@dataclass(frozen=True, eq=False)
class BinnedDensity:
    """
    Piecewise constant approximation of a density on equal-width bins.

    Attributes:
        edges: bin boundaries, shape (n_bins + 1,).
        cumulative: normalized cumulative bin masses at the edges, shape
            (n_bins + 1,), starting at 0 and ending at 1.
    """
    edges: Array
    cumulative: Array

    @property
    def n_bins(self) -> int:
        return self.edges.size - 1

    @classmethod
    def build(cls, g: Callable[[float], float], lims: Tuple[float, float], n_bins: int) -> BinnedDensity:
        """
        Bin the function ``g`` over ``lims`` using ``n_bins`` bins.

        ``g`` is evaluated at the bin midpoints; the resulting weights are
        normalized to one.

        Raises:
            DomainError: for ``n_bins < 1``, invalid limits or a function that
                vanishes at every bin midpoint.
        """
        n_bins = int(n_bins)
        if n_bins < 1:
            raise DomainError(f"BinnedDensity requires at least one bin. Got {n_bins}.")
        lo, hi = float(lims[0]), float(lims[1])
        if not (np.isfinite(lo) and np.isfinite(hi)) or lo >= hi:
            raise DomainError(f"BinnedDensity requires finite limits with lower < upper. Got ({lo}, {hi}).")

        edges = np.linspace(lo, hi, n_bins + 1)
        centers = 0.5 * (edges[1:] + edges[:-1])
        weights = np.asarray(_apply_elementwise(g, centers), dtype=float)
        total = weights.sum()
        if not np.isfinite(total) or total <= 0:
            raise DomainError("Cannot bin a function whose bin weights do not sum to a positive finite value.")

        cumulative = np.concatenate(([0.0], np.cumsum(weights / total)))
        # pin the last entry against round-off
        cumulative[-1] = 1.0
        mylog.debug("Built BinnedDensity with %d bins on [%g, %g].", n_bins, lo, hi)
        return cls(edges, cumulative)

    def draw(self, rng: PRNG, n: int | None = None) -> float | Array:
        """
        Draw from the binned density.

        The bin is the one ending at the first cumulative entry strictly above a
        uniform draw; the sample is placed uniformly inside it with a second draw.
        Returns a float for ``n=None``, otherwise an array of shape (n,).
        """
        size = 1 if n is None else int(n)
        u = rng.random(size)
        idx = locate_bin(self.cumulative, u, side="right")
        left, right = self.edges[idx], self.edges[idx + 1]
        out = left + rng.random(size) * (right - left)
        if n is None:
            return float(out[0])
        return out


def sample_binned(
    density: Callable[[float], float],
    support: Tuple[float, float],
    n_bins: int,
    rng: PRNG,
    n: int,
) -> Array:
    """
    Sample ``n`` values from an unnormalized density through a fresh :class:`BinnedDensity`.

    Finite supports are binned directly. Otherwise the density is binned in the
    tangent-mapped coordinate over ``(z(lower), z(upper))`` (``z(+-inf) = +-1``)
    and the draws are mapped back.
    """
    lo, hi = support
    if np.isfinite(lo) and np.isfinite(hi):
        return BinnedDensity.build(density, (lo, hi), n_bins).draw(rng, n)

    def g(z: float) -> float:
        return density(float(tangent_map(z))) / np.cos(z * np.pi / 2) ** 2

    z_lims = (float(inverse_tangent_map(lo)), float(inverse_tangent_map(hi)))
    binned = BinnedDensity.build(g, z_lims, n_bins)
    return tangent_map(binned.draw(rng, n))
