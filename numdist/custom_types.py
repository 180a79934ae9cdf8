# custom_types.py
"""
Type definitions and aliases shared across numdist.

We generally following the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
"""
from __future__ import annotations
from typing import Callable, Tuple

from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

Array = NumpyArray
ArrayLike = NumpyArrayLike
PRNG = NumpyRNG

# An (unnormalized) density maps a real number to a non-negative real number.
Density = Callable[[float], float]
Support = Tuple[float, float]
