import numpy as np
from scipy import stats

from numdist import convolve, interpolated

# X1 ~ U(-0.5, 3.5), X2 ~ N(0, 0.3**2) truncated at 2
d1 = stats.uniform(loc=-0.5, scale=4)
d2 = stats.truncnorm(-2 / 0.3, 2 / 0.3, loc=0, scale=0.3)

total = convolve(d1, d2, gridsize=1000)
print(total)
print("P[X1 + X2 <= 0] =", total.cdf(0.0))
print("median =", total.quantile(0.5))
print("mean, std =", total.mean(), total.std())

samples = total.sample(5, rng=np.random.default_rng(0))
print(samples)

# a grid-backed density with a closed form quantile
skewed = interpolated(lambda x: (1.2 - x ** 2) * np.exp(-x / 2), np.linspace(-0.5, 1, 11))
print(skewed.quantile([0.1, 0.5, 0.9]))
