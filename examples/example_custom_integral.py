import numpy as np

from numdist import NumericalDistribution, integral


class SinSquared:
    def __call__(self, x):
        return np.sin(x) ** 2


# closed form over whole periods; used for the normalization and the CDF
@integral.register(SinSquared)
def _(f, a, b, **kwargs):
    return (b - a) / 2


d = NumericalDistribution(SinSquared(), (0, 2 * np.pi))
print(d.normalization)              # pi
print(d.cdf(np.pi))                 # 0.5
print(d.sample(3, rng=np.random.default_rng(1)))
