# array_backend/utils.py
"""
Utility functions for array canonicalization and bin lookup used by numdist.

Notes
-----
Densities supplied by users are plain Python callables of a single real
number. They are not assumed to broadcast over arrays, so evaluation on
arrays goes through :func:`_apply_elementwise`. Interpolants and the closed
form routines, on the other hand, are written against numpy arrays directly.

The `_ensure_*` helpers that return arrays accept `copy: bool = True`. When
`copy=True` the returned array is guaranteed to be a different object from the
input.
"""

from __future__ import annotations

import numpy as np
from typing import Any, Callable

from ..custom_types import Array, ArrayLike


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x)
    except Exception as e:
        raise TypeError(
            f"Could not convert input to array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e

def _is_numpy_scalar(x: Any) -> bool:
    """Return true if object is a numpy generic or Python scalar"""
    return np.isscalar(x) or isinstance(x, np.generic)


def _ensure_real_scalar(x: Any) -> float:
    """
    Return a Python float for inputs that contain a single real value.

    Accepts:
      - Python scalars (int, float)
      - numpy scalar types (np.float64(...), np.int32(...))
      - arrays holding exactly one element

    Raises:
      ValueError if input contains more than one element or is complex.
    """
    # fast path for Python/numpy scalar
    if _is_numpy_scalar(x):
        if np.iscomplexobj(x):
            raise ValueError(f"_ensure_real_scalar: input is complex-valued: {x!r}")
        return float(x)

    arr = _as_array(x)
    if arr.size != 1:
        raise ValueError(f"_ensure_real_scalar: input must contain exactly one element; got size={arr.size}, shape={arr.shape}")
    if np.iscomplexobj(arr):
        raise ValueError(f"_ensure_real_scalar: input is complex-valued (shape={arr.shape}).")
    return float(arr.item())


def _ensure_vector(x: ArrayLike, *, length: int | None = None,
                   dtype: Any = float, copy: bool = True) -> Array:
    """
    Ensure input is returned as a 1-D float vector (canonical shape (n,)).

    Accepts:
      - 1D arrays -> (n,)
      - 2D arrays shaped (n,1) or (1,n) -> raveled
      - 0D scalar -> treated as length-1 vector (1,)

    Raises:
      ValueError for incompatible shapes (ndim > 2 or 2D with both dims >1)
    """
    arr = _as_array(x)

    if arr.ndim == 0:
        out = arr.reshape((1,))
    elif arr.ndim == 1:
        out = arr
    elif arr.ndim == 2:
        num_rows, num_cols = arr.shape
        if num_rows == 1 or num_cols == 1:
            out = np.ravel(arr)
        else:
            raise ValueError(f"_ensure_vector: 2D input has shape {arr.shape}, which is not a vector (expected (n,1) or (1,n)).")
    else:
        raise ValueError(f"_ensure_vector: input has too many dimensions (ndim={arr.ndim}).")

    # validate vector length
    if length is not None and out.size != length:
        raise ValueError(f"_ensure_vector: required length {length}. Got {out.size}.")

    out = out.astype(dtype, copy=False)
    return out.copy() if copy else out


def _apply_elementwise(func: Callable[[float], Any], x: ArrayLike) -> float | Array:
    """
    Evaluate a scalar function on a scalar or on every element of an array.

    Scalars (Python, numpy or 0-D arrays) give back a Python float; array
    inputs give back a float array of the same shape.
    """
    arr = _as_array(x)
    if arr.ndim == 0:
        return float(func(float(arr)))
    flat = np.fromiter((func(float(xi)) for xi in arr.ravel()), dtype=float, count=arr.size)
    return flat.reshape(arr.shape)


def locate_bin(boundaries: Array, keys: ArrayLike, side: str = "right") -> Array:
    """
    Locate the bin of each key in a nondecreasing array of bin boundaries.

    Bin ``i`` is the interval ``boundaries[i] .. boundaries[i+1]``; the returned
    indices are clipped to ``[0, len(boundaries) - 2]``.

    Args:
        boundaries: nondecreasing 1-D array with at least two entries
            (bin edges, or a cumulative array over those edges).
        keys: scalar or array of search keys.
        side: ``"right"`` selects the bin ending at the first boundary strictly
            greater than the key; ``"left"`` the bin ending at the first boundary
            greater than or equal to the key.

    Returns:
        Integer array with the shape of ``keys``.
    """
    if side not in ("left", "right"):
        raise ValueError(f"locate_bin: side must be 'left' or 'right'. Got {side!r}.")
    idx = np.searchsorted(boundaries, keys, side=side) - 1
    return np.clip(idx, 0, len(boundaries) - 2)


def next_pow2(n: int) -> int:
    """Smallest power of two greater than or equal to ``n`` (``n >= 1``)."""
    n = int(n)
    if n < 1:
        raise ValueError(f"next_pow2: n must be >= 1. Got {n}.")
    return 1 << (n - 1).bit_length()
