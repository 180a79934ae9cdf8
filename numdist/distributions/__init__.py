from .distribution import Distribution
from .numerical import NumericalDistribution, interpolated, as_density
from .binned import BinnedDensity, sample_binned, tangent_map, inverse_tangent_map
from .quantile import quantile_constant, quantile_linear, quantile_numeric
from .moments import numerical_moment

__all__ = [
    "Distribution",
    "NumericalDistribution",
    "interpolated",
    "as_density",
    "BinnedDensity",
    "sample_binned",
    "tangent_map",
    "inverse_tangent_map",
    "quantile_constant",
    "quantile_linear",
    "quantile_numeric",
    "numerical_moment",
]
