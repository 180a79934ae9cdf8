"""
numdist: continuous univariate distributions defined by a numerical density.

The normalization is computed by integration, the CDF analytically or by
quadrature, sampling goes through binned or closed form inverse CDFs, and
sums of independent variables are obtained by FFT convolution.
"""
from numdist.exceptions import (
    NumDistError,
    DomainError,
    BoundsError,
    UnsupportedOperationError,
    NumericalInstabilityWarning,
)
from numdist.interpolation import GridInterpolant, Scheme
from numdist.integrate import integral
from numdist.distributions import (
    Distribution,
    NumericalDistribution,
    BinnedDensity,
    interpolated,
)
from numdist.convolution import convolve, convolve_vectors, fft_convolve_values

__version__ = "0.1.0"

__all__ = [
    "NumDistError",
    "DomainError",
    "BoundsError",
    "UnsupportedOperationError",
    "NumericalInstabilityWarning",
    "GridInterpolant",
    "Scheme",
    "integral",
    "Distribution",
    "NumericalDistribution",
    "BinnedDensity",
    "interpolated",
    "convolve",
    "convolve_vectors",
    "fft_convolve_values",
]
