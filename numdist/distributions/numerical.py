# distributions/numerical.py
from __future__ import annotations

from typing import Any, Callable, Protocol, Tuple

import numpy as np

from ..custom_types import Array, ArrayLike, Density, PRNG, Support
from ..array_backend.utils import _apply_elementwise, _as_array, _ensure_real_scalar, _ensure_vector
from ..exceptions import DomainError
from ..integrate import cumulative_integral, integral
from ..interpolation import GridInterpolant, Scheme
from ..logging import mylog
from . import moments
from .binned import sample_binned
from .distribution import Distribution
from .quantile import quantile_constant, quantile_linear, quantile_numeric

__all__ = [
    "DEFAULT_SAMPLING_BINS",
    "NumericalDistribution",
    "interpolated",
    "as_density",
]

DEFAULT_SAMPLING_BINS = 300


# ------------------------------ backends ------------------------------
# A backend supplies the support-restricted CDF integral, the quantile and the
# sampler for one kind of density. The backend is picked once, at construction.


class DensityBackend(Protocol):
    kind: str

    def cdf(self, x: Array) -> Array:
        """CDF for points strictly inside the support."""

    def quantile(self, u: ArrayLike) -> float | Array:
        ...

    def sample(self, rng: PRNG, n: int, n_bins: int) -> Array:
        ...


class QuadratureBackend:
    """Arbitrary callable: CDF by :func:`~numdist.integrate.integral`, sampling by binning."""
    kind = "quadrature"

    def __init__(self, density: Density, support: Support, normalization: float):
        self._density = density
        self._support = support
        self._normalization = normalization

    def _masked(self, x: float) -> float:
        lo, hi = self._support
        return self._density(x) if lo <= x <= hi else 0.0

    def _cdf_scalar(self, x: float) -> float:
        lo, hi = self._support
        if x <= lo:
            return 0.0
        if x >= hi:
            return 1.0
        return integral(self._density, lo, x) / self._normalization

    def cdf(self, x: Array) -> Array:
        return np.asarray(_apply_elementwise(self._cdf_scalar, x), dtype=float)

    def quantile(self, u: ArrayLike) -> float | Array:
        return quantile_numeric(self._cdf_scalar, self._support, u)

    def sample(self, rng: PRNG, n: int, n_bins: int) -> Array:
        return sample_binned(self._masked, self._support, n_bins, rng, n)


class GridBackend:
    """Grid interpolant: analytic CDF, closed form quantile, inverse transform sampling."""

    def __init__(self, interpolant: GridInterpolant, support: Support, normalization: float):
        self._interpolant = interpolant
        self._support = support
        self._normalization = normalization
        self._offset = cumulative_integral(interpolant, support[0])
        if interpolant.scheme is Scheme.CONSTANT:
            self.kind = "constant"
            self._quantile = quantile_constant
        else:
            self.kind = "linear"
            self._quantile = quantile_linear

    def cdf(self, x: Array) -> Array:
        return (cumulative_integral(self._interpolant, x) - self._offset) / self._normalization

    def quantile(self, u: ArrayLike) -> float | Array:
        lo, hi = self._support
        if self._offset == 0.0 and (lo, hi) == self._interpolant.extent:
            return self._quantile(self._interpolant, self._normalization, u)
        # support narrower than the grid: shift u to probabilities over the whole grid
        total = integral(self._interpolant, *self._interpolant.extent)
        u = _as_array(u).astype(float)
        shifted = (self._offset + np.clip(u, 0.0, 1.0) * self._normalization) / total
        x = np.clip(self._quantile(self._interpolant, total, shifted), lo, hi)
        x = np.where(u <= 0, lo, np.where(u >= 1, hi, x))
        return float(x) if np.ndim(x) == 0 else x

    def sample(self, rng: PRNG, n: int, n_bins: int) -> Array:
        return np.atleast_1d(self.quantile(rng.random(n)))


def _check_support(support: Any) -> Support:
    try:
        lo, hi = support
    except (TypeError, ValueError) as e:
        raise DomainError(f"support must be a (lower, upper) pair. Got {support!r}.") from e
    lo, hi = _ensure_real_scalar(lo), _ensure_real_scalar(hi)
    if np.isnan(lo) or np.isnan(hi):
        raise DomainError(f"support bounds must not be NaN. Got ({lo}, {hi}).")
    if lo >= hi:
        raise DomainError(f"support requires lower < upper. Got ({lo}, {hi}).")
    return lo, hi


# ------------------------------ distribution ------------------------------


class NumericalDistribution(Distribution):
    """
    Continuous univariate distribution given by an unnormalized density.

    The normalization constant is computed once, at construction, by
    :func:`~numdist.integrate.integral`: adaptive quadrature for plain callables,
    a closed form for :class:`~numdist.interpolation.GridInterpolant` densities and
    for any density type registered with the integral dispatcher.

    Args:
        density: callable mapping a real number to a non-negative number, or a
            :class:`~numdist.interpolation.GridInterpolant`.
        support: (lower, upper) with lower < upper; bounds may be infinite.
            Defaults to the grid extent for interpolants and to the real line
            otherwise.
        n_sampling_bins: number of bins of the binned sampler used for plain
            callables. Defaults to 300 for callables, and to the number of grid
            bins (``n`` for constant, ``n - 1`` for linear) for interpolants.
        rng: np.random.Generator, optional
            Random number generator for sampling.

    Raises:
        DomainError: for an invalid support, a support reaching beyond the grid of
            an interpolant, or a normalization that is not finite and positive.

    Notes
    -----
    The density is not checked for non-negativity; a density that is negative
    somewhere gives meaningless CDFs and samples.
    """

    def __init__(
        self,
        density: Density | GridInterpolant,
        support: Support | None = None,
        n_sampling_bins: int | None = None,
        *,
        rng: PRNG | None = None,
    ):
        is_grid = isinstance(density, GridInterpolant)
        if support is None:
            support = density.extent if is_grid else (-np.inf, np.inf)
        lo, hi = _check_support(support)

        if is_grid:
            glo, ghi = density.extent
            if lo < glo or hi > ghi:
                raise DomainError(f"support ({lo}, {hi}) reaches outside of the interpolation grid ({glo}, {ghi}).")
            if n_sampling_bins is None:
                n_sampling_bins = len(density) if density.scheme is Scheme.CONSTANT else len(density) - 1
        elif n_sampling_bins is None:
            n_sampling_bins = DEFAULT_SAMPLING_BINS
        n_sampling_bins = int(n_sampling_bins)
        if n_sampling_bins < 1:
            raise DomainError(f"n_sampling_bins must be >= 1. Got {n_sampling_bins}.")

        normalization = float(integral(density, lo, hi))
        if not np.isfinite(normalization) or normalization <= 0:
            raise DomainError(f"The density must integrate to a positive finite value over the support. Got {normalization}.")

        self._density = density
        self._support = (lo, hi)
        self._normalization = normalization
        self._n_sampling_bins = n_sampling_bins
        self._rng = rng or np.random.default_rng()
        if is_grid:
            self._backend: DensityBackend = GridBackend(density, self._support, normalization)
        else:
            self._backend = QuadratureBackend(density, self._support, normalization)

        mylog.debug(
            "NumericalDistribution on (%g, %g): normalization=%g, backend=%s, n_sampling_bins=%d.",
            lo, hi, normalization, self._backend.kind, n_sampling_bins,
        )

    # ------------------------------ properties ------------------------------

    @property
    def unnormalized_density(self) -> Density | GridInterpolant:
        return self._density

    @property
    def normalization(self) -> float:
        """Integral of the unnormalized density over the support."""
        return self._normalization

    @property
    def support(self) -> Support:
        return self._support

    @property
    def n_sampling_bins(self) -> int:
        return self._n_sampling_bins

    @property
    def interpolant(self) -> GridInterpolant | None:
        """The grid interpolant behind the density, or None for a plain callable."""
        return self._density if isinstance(self._density, GridInterpolant) else None

    @property
    def kind(self) -> str:
        """``"quadrature"``, ``"constant"`` or ``"linear"``."""
        return self._backend.kind

    def __repr__(self) -> str:
        lo, hi = self._support
        return f"NumericalDistribution(support=({lo:g}, {hi:g}), kind={self.kind!r}, normalization={self._normalization:g})"

    # ------------------------------ evaluation ------------------------------

    def density(self, x: ArrayLike) -> float | Array:
        """Normalized density; zero outside of ``[lower, upper]``."""
        lo, hi = self._support
        if self.interpolant is not None:
            arr = _as_array(x).astype(float)
            flat = np.atleast_1d(arr)
            inside = (flat >= lo) & (flat <= hi)
            out = np.zeros(flat.shape)
            out[inside] = self._density(flat[inside]) / self._normalization
            return float(out[0]) if arr.ndim == 0 else out

        def pdf(xi: float) -> float:
            return self._density(xi) / self._normalization if lo <= xi <= hi else 0.0

        return _apply_elementwise(pdf, x)

    def cdf(self, x: ArrayLike) -> float | Array:
        """
        F(x): 0 at and below the lower bound, 1 at and above the upper bound.
        """
        lo, hi = self._support
        arr = _as_array(x).astype(float)
        flat = np.atleast_1d(arr)
        out = np.where(flat >= hi, 1.0, 0.0)
        inside = (flat > lo) & (flat < hi)
        if np.any(inside):
            out[inside] = self._backend.cdf(flat[inside])
        out = np.where(np.isnan(flat), np.nan, out)
        return float(out[0]) if arr.ndim == 0 else out

    def quantile(self, u: ArrayLike) -> float | Array:
        """
        Inverse CDF: closed form for interpolated densities, root finding otherwise.
        ``u <= 0`` maps to the lower bound and ``u >= 1`` to the upper bound.
        """
        return self._backend.quantile(u)

    def sample(self, n_samples: int = 1, *, rng: PRNG | None = None) -> Array:
        """
        Draw ``n_samples`` values, shape (n_samples,).

        Interpolated densities map uniforms through the closed form quantile.
        Other densities are binned afresh on every call with ``n_sampling_bins``
        bins (in tangent-mapped coordinates for an infinite support).
        """
        n_samples = int(n_samples)
        rng = rng or self._rng
        return self._backend.sample(rng, n_samples, self._n_sampling_bins)

    # ------------------------------ moments ------------------------------

    def mean(self) -> float:
        return moments.mean(self)

    def var(self) -> float:
        return moments.var(self)

    def std(self) -> float:
        return moments.std(self)

    def skewness(self) -> float:
        return moments.skewness(self)

    def kurtosis(self) -> float:
        return moments.kurtosis(self)

    # ------------------------------ conversion ------------------------------

    @classmethod
    def from_distribution(
        cls,
        other: Any,
        *,
        grid: ArrayLike | None = None,
        gridsize: int = 1000,
        scheme: Scheme | str = Scheme.LINEAR,
        rng: PRNG | None = None,
    ) -> NumericalDistribution:
        """
        Resample the density of ``other`` onto a grid.

        ``other`` is a :class:`~numdist.distributions.distribution.Distribution`
        or a frozen continuous ``scipy.stats`` distribution. Without an explicit
        ``grid``, ``gridsize`` equally spaced knots over the support are used,
        which requires a finite support.
        """
        (lo, hi), pdf = as_density(other)
        if grid is None:
            if not (np.isfinite(lo) and np.isfinite(hi)):
                raise DomainError(f"from_distribution needs an explicit grid for the infinite support ({lo}, {hi}).")
            grid = np.linspace(lo, hi, int(gridsize))
        g = _ensure_vector(grid)
        return cls(GridInterpolant(g, pdf(g), scheme), rng=rng)


def as_density(d: Any) -> Tuple[Support, Callable[[Array], Array]]:
    """
    Return ``((lower, upper), pdf)`` for a numdist or frozen ``scipy.stats`` distribution.

    The returned ``pdf`` accepts arrays.
    """
    if isinstance(d, Distribution):
        lo, hi = d.support
        return (float(lo), float(hi)), lambda x: np.asarray(d.density(x), dtype=float)
    if hasattr(d, "pdf") and hasattr(d, "support"):
        lo, hi = d.support()
        return (float(lo), float(hi)), lambda x: np.asarray(d.pdf(x), dtype=float)
    raise TypeError(f"Expected a Distribution or a frozen scipy.stats distribution. Got {type(d).__name__}.")


def interpolated(
    f: Callable[[Any], Any],
    grid: ArrayLike,
    scheme: Scheme | str = Scheme.LINEAR,
    *,
    rng: PRNG | None = None,
) -> NumericalDistribution:
    """
    Build a grid-backed distribution by evaluating ``f`` on ``grid``.

    Args:
        f: unnormalized density, evaluated once per knot.
        grid: strictly increasing knots; their extent is the support.
        scheme: ``"linear"`` (smoother density) or ``"constant"`` (nearest knot).

    Returns:
        NumericalDistribution with an analytic CDF and a closed form quantile.
    """
    g = _ensure_vector(grid)
    values = _apply_elementwise(f, g)
    return NumericalDistribution(GridInterpolant(g, values, scheme), rng=rng)
