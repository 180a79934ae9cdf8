"""Error and warning classes for :py:mod:`numdist`."""


class NumDistError(Exception):
    r"""Base exception class for numdist errors."""

    pass


class DomainError(NumDistError, ValueError):
    r"""Raised for an invalid support, grid or normalization."""

    pass


class BoundsError(NumDistError, ValueError):
    r"""Raised when an interpolant or its analytic integral is evaluated outside of its grid."""

    pass


class UnsupportedOperationError(NumDistError, ValueError):
    r"""Raised when an operation is not available for the given input, e.g. FFT convolution of an infinite support."""

    pass


class NumericalInstabilityWarning(UserWarning):
    r"""Non-fatal warning for numerically questionable situations (huge grids, clamped discriminants)."""

    pass
