# distributions/distribution.py
from __future__ import annotations

from typing import Any, Tuple
from abc import ABC, abstractmethod

import numpy as np

from ..custom_types import Array, ArrayLike, PRNG

__all__ = [
    "Distribution",
]

# -------------------------- Abstract Classes ----------------------------


class Distribution(ABC):
    """
    Abstract base class for continuous univariate distributions.

    Scalar inputs give back Python floats, array inputs give back arrays of
    the same shape.
    """

    @abstractmethod
    def density(self, x: ArrayLike) -> float | Array:
        """
        Compute the normalized density p(x). Zero outside of the support.
        """
        raise NotImplementedError

    def log_density(self, x: ArrayLike) -> float | Array:
        """
        Compute log p(x); ``-inf`` where the density vanishes.
        """
        with np.errstate(divide="ignore"):
            return np.log(self.density(x))

    @abstractmethod
    def cdf(self, x: ArrayLike) -> float | Array:
        """
        Cumulative distribution function F(x) = P[X <= x].
        """
        raise NotImplementedError

    def quantile(self, u: ArrayLike) -> float | Array:
        """
        Optional. Inverse CDF mapping u in [0, 1] to x with F(x) = u.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def inv_cdf(self, u: ArrayLike) -> float | Array:
        """Alias of :meth:`quantile`."""
        return self.quantile(u)

    def sample(self, n_samples: int = 1, *, rng: PRNG | None = None) -> Array:
        """
        Optional. If a subclass can't sample, it may leave this unimplemented.

        Sample n_samples values from the distribution, returned as shape (n_samples,).
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def rvs(self, n_samples: int = 1, *, rng: PRNG | None = None) -> Array:
        """Alias of :meth:`sample`."""
        return self.sample(n_samples, rng=rng)

    @property
    @abstractmethod
    def support(self) -> Tuple[float, float]:
        """(lower, upper) bounds of the support; either may be infinite."""
        raise NotImplementedError

    def minimum(self) -> float:
        return self.support[0]

    def maximum(self) -> float:
        return self.support[1]

    # ------------------------------ moments ------------------------------

    def mean(self) -> float:
        """
        Return the mean. If the mean does not exist (e.g., Cauchy), raise NotImplementedError.
        """
        raise NotImplementedError

    def var(self) -> float:
        raise NotImplementedError

    def std(self) -> float:
        return float(np.sqrt(self.var()))

    def skewness(self) -> float:
        raise NotImplementedError

    def kurtosis(self) -> float:
        """Excess kurtosis (zero for the normal distribution)."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def from_distribution(cls, other: Any, **fit_kwargs: Any) -> Distribution:
        """
        Convert the distribution `other` into a distribution of type `cls`. This will
        typically be an approximation, e.g. resampling a density on a grid.
        """
        raise NotImplementedError("This method should be implemented by subclasses")
