# convolution.py
"""
Density of the sum of two independent random variables by FFT convolution.

Both densities are sampled on grids with a common step ``Δ``. The continuous
convolution is approximated by the Riemann sum

.. math::

    h(t_0 + k Δ) \\approx Δ \\sum_j y_1[j] \\, y_2[k - j],

computed as a product in frequency space. The result lives on a grid of
``M + N - 1`` points starting at the sum of the two grid origins.
"""
from __future__ import annotations

from typing import Any, Tuple

import numpy as np
from scipy import fft

from .custom_types import Array, ArrayLike, PRNG
from .array_backend.utils import _ensure_vector, next_pow2
from .distributions.numerical import NumericalDistribution, as_density
from .exceptions import DomainError, UnsupportedOperationError
from .interpolation import GridInterpolant, Scheme
from .logging import mylog, warn_numerical

__all__ = [
    "DEFAULT_GRIDSIZE",
    "MAX_CONVOLUTION_LENGTH",
    "fft_convolve_values",
    "convolve_vectors",
    "convolve",
]

DEFAULT_GRIDSIZE = 1000
MAX_CONVOLUTION_LENGTH = 2 ** 16


def fft_convolve_values(
    y1: ArrayLike,
    y2: ArrayLike,
    *,
    step: float,
    t0_1: float = 0.0,
    t0_2: float = 0.0,
    pad_to_pow2: bool = True,
) -> Tuple[Array, Array]:
    """
    Convolve two sampled functions sharing the grid step ``step``.

    Args:
        y1, y2: function values on ``t0_1 + step * arange(M)`` and
            ``t0_2 + step * arange(N)``.
        step: grid step, also the Riemann-sum weight.
        t0_1, t0_2: grid origins.
        pad_to_pow2: zero-pad to the next power of two instead of exactly
            ``M + N - 1`` points.

    Returns:
        ``(t, h)``: the grid ``t0_1 + t0_2 + step * arange(M + N - 1)`` and the
        convolution values on it.
    """
    y1 = _ensure_vector(y1)
    y2 = _ensure_vector(y2)
    step = float(step)
    if not np.isfinite(step) or step <= 0:
        raise DomainError(f"step must be a positive finite number. Got {step}.")
    if y1.size == 0 or y2.size == 0:
        raise DomainError("Cannot convolve empty vectors.")

    M, N = y1.size, y2.size
    n_out = M + N - 1
    n_fft = next_pow2(n_out) if pad_to_pow2 else n_out
    mylog.debug("FFT convolution of %d and %d samples, working length %d.", M, N, n_fft)

    F = fft.fft(y1, n=n_fft)
    G = fft.fft(y2, n=n_fft)
    h = np.real(fft.ifft(F * G))[:n_out] * step
    t = (t0_1 + t0_2) + step * np.arange(n_out)
    return t, h


def convolve_vectors(
    y1: ArrayLike,
    y2: ArrayLike,
    *,
    step: float,
    t0_1: float = 0.0,
    t0_2: float = 0.0,
    pad_to_pow2: bool = True,
    scheme: Scheme | str = Scheme.LINEAR,
    rng: PRNG | None = None,
) -> NumericalDistribution:
    """
    Convolve two sampled densities and wrap the result as a grid-backed distribution.

    See :func:`fft_convolve_values` for the arguments. The result is interpolated
    with ``scheme`` over the extended grid and uses one sampling bin per grid point.
    """
    t, h = fft_convolve_values(y1, y2, step=step, t0_1=t0_1, t0_2=t0_2, pad_to_pow2=pad_to_pow2)
    return NumericalDistribution(GridInterpolant(t, h, scheme), n_sampling_bins=t.size, rng=rng)


def _sampling_grid(lo: float, hi: float, step: float) -> Array:
    # points lo, lo + step, ... not beyond hi
    n = int(np.floor((hi - lo) / step * (1 + 1e-12))) + 1
    return np.minimum(lo + step * np.arange(n), hi)


def convolve(
    d1: Any,
    d2: Any,
    *,
    gridsize: int = DEFAULT_GRIDSIZE,
    pad_to_pow2: bool = True,
    scheme: Scheme | str = Scheme.LINEAR,
    rng: PRNG | None = None,
) -> NumericalDistribution:
    """
    Distribution of ``X1 + X2`` for independent ``X1 ~ d1`` and ``X2 ~ d2``.

    ``d1`` and ``d2`` are numdist distributions or frozen ``scipy.stats``
    continuous distributions, and must be normalized densities with finite
    support. Each support is covered with about ``gridsize`` points; the finer of
    the two steps is used for both.

    Raises:
        UnsupportedOperationError: if either support is not finite.
        DomainError: for ``gridsize < 2``.

    Warns:
        NumericalInstabilityWarning: if the result grid has more than ``2**16`` points.
    """
    (a1, b1), pdf1 = as_density(d1)
    (a2, b2), pdf2 = as_density(d2)
    if not all(np.isfinite([a1, b1, a2, b2])):
        raise UnsupportedOperationError(
            "convolve: both distributions must have finite support. Consider truncating the "
            "support to a suitable interval, e.g. scipy.stats.truncnorm for a normal distribution."
        )
    gridsize = int(gridsize)
    if gridsize < 2:
        raise DomainError(f"gridsize must be >= 2. Got {gridsize}.")

    step_1 = (b1 - a1) / (gridsize - 1)
    step_2 = (b2 - a2) / (gridsize - 1)
    step = min(step_1, step_2)
    t1 = _sampling_grid(a1, b1, step)
    t2 = _sampling_grid(a2, b2, step)

    total = t1.size + t2.size - 1
    if total > MAX_CONVOLUTION_LENGTH:
        warn_numerical(
            "The convolution grid has %d points (step %g, from steps %g and %g). "
            "Consider reducing gridsize or restricting the supports.",
            total, step, step_1, step_2,
        )

    return convolve_vectors(
        pdf1(t1), pdf2(t2),
        step=step, t0_1=a1, t0_2=a2, pad_to_pow2=pad_to_pow2, scheme=scheme, rng=rng,
    )
