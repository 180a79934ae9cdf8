# tests/array_backend/test_array_backend_utils.py
import numpy as np
import pytest

from numdist.array_backend import utils as U


def test_ensure_real_scalar_from_python_scalar():
    assert U._ensure_real_scalar(3) == 3.0
    assert isinstance(U._ensure_real_scalar(3), float)
    assert U._ensure_real_scalar(-np.inf) == -np.inf


def test_ensure_real_scalar_from_numpy_scalar_and_0d():
    a = np.float32(2.0)
    assert isinstance(U._ensure_real_scalar(a), float)
    assert U._ensure_real_scalar(np.array(4.0)) == 4.0
    assert U._ensure_real_scalar(np.array([5.0])) == 5.0


@pytest.mark.parametrize(
    "non_scalar_input",
    [[1, 2], np.arange(2), np.identity(2)]
)
def test_ensure_real_scalar_rejects_multiple_elements(non_scalar_input):
    with pytest.raises(ValueError):
        U._ensure_real_scalar(non_scalar_input)


def test_ensure_real_scalar_rejects_complex():
    with pytest.raises(ValueError):
        U._ensure_real_scalar(1 + 2j)
    with pytest.raises(ValueError):
        U._ensure_real_scalar(np.array(1 + 0j))


def test_ensure_vector_scalar_and_1d_and_2d():
    v0 = U._ensure_vector(5)
    assert v0.shape == (1,)
    assert v0.dtype == float
    v1 = U._ensure_vector([1, 2, 3])
    assert v1.shape == (3,)
    v2 = U._ensure_vector(np.array([[1, 2, 3]]), length=3)
    assert v2.shape == (3,)
    v3 = U._ensure_vector(np.array([[1], [2]]))
    assert v3.shape == (2,)


def test_ensure_vector_copy_semantics():
    x = np.array([1.0, 2.0])
    assert U._ensure_vector(x) is not x
    assert U._ensure_vector(x, copy=False) is x


@pytest.mark.parametrize("bad", [np.ones((2, 2)), np.ones((1, 2, 3))])
def test_ensure_vector_rejects_non_vectors(bad):
    with pytest.raises(ValueError):
        U._ensure_vector(bad)


def test_ensure_vector_length_check():
    with pytest.raises(ValueError):
        U._ensure_vector([1, 2, 3], length=2)


def test_apply_elementwise_scalar_and_array():
    assert U._apply_elementwise(lambda x: 2 * x, 1.5) == 3.0
    assert isinstance(U._apply_elementwise(lambda x: 2 * x, np.float64(1.5)), float)

    out = U._apply_elementwise(lambda x: x if x > 0 else 0.0, np.array([[-1.0, 2.0], [3.0, -4.0]]))
    assert out.shape == (2, 2)
    np.testing.assert_array_equal(out, [[0.0, 2.0], [3.0, 0.0]])


def test_locate_bin_sides():
    boundaries = np.array([0.0, 0.5, 0.5, 1.0])
    # a key equal to a boundary
    assert U.locate_bin(boundaries, 0.5, side="right") == 2
    assert U.locate_bin(boundaries, 0.5, side="left") == 0
    # interior keys agree for both sides
    np.testing.assert_array_equal(U.locate_bin(boundaries, [0.1, 0.7], side="left"), [0, 2])
    np.testing.assert_array_equal(U.locate_bin(boundaries, [0.1, 0.7], side="right"), [0, 2])


def test_locate_bin_clips_to_valid_bins():
    boundaries = np.array([1.0, 2.0, 3.0])
    np.testing.assert_array_equal(U.locate_bin(boundaries, [-5.0, 1.0, 3.0, 9.0]), [0, 0, 1, 1])


def test_locate_bin_rejects_unknown_side():
    with pytest.raises(ValueError):
        U.locate_bin(np.array([0.0, 1.0]), 0.5, side="middle")


@pytest.mark.parametrize("n, expected", [(1, 1), (2, 2), (3, 4), (1024, 1024), (1025, 2048)])
def test_next_pow2(n, expected):
    assert U.next_pow2(n) == expected


def test_next_pow2_rejects_zero():
    with pytest.raises(ValueError):
        U.next_pow2(0)
