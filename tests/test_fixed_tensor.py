import numpy as np
import pytest

from stokesflow.core import (
    FixedArray,
    FixedTensor,
    Index,
    OutOfRangeError,
    ShapeMismatchError,
)


def test_access():
    t = FixedTensor([[0, 1], [2, 3]])

    t[1, 1] = 409

    assert t[1, 1] == 409
    assert t[0, 0] == 0
    assert t[1][0] == 2
    assert t.at(Index(1, 1)) == 409


def test_row_major_storage():
    t = FixedTensor.from_flat([0, 1, 2, 3, 4, 5], 2, 3)

    assert t.shape == (2, 3)
    assert t.index(1, 2) == 5
    assert t[1, 0] == 3
    assert t.to_flat().tolist() == [0, 1, 2, 3, 4, 5]
    assert t.to_nested() == [[0, 1, 2], [3, 4, 5]]


def test_row_handle_writes_through():
    t = FixedTensor.zeros(2, 3, dtype=int)

    t[1][2] = 7
    row = t.row(1)
    row[0] = -1

    assert t.to_nested() == [[0, 0, 0], [-1, 0, 7]]
    assert list(row) == [-1, 0, 7]
    assert row.to_array().tolist() == [-1, 0, 7]
    assert len(row) == 3


def test_checked_access():
    t = FixedTensor.zeros(2, 3)

    with pytest.raises(OutOfRangeError):
        t.at(2, 0)
    with pytest.raises(OutOfRangeError):
        t.at(0, 3)
    with pytest.raises(OutOfRangeError):
        t.row(5)
    with pytest.raises(OutOfRangeError):
        t.row(0).at(3)
    with pytest.raises(IndexError):
        t.set_at(-1, 0, 1.0)

    assert t.set_at(1, 2, 4.5) is t
    assert t.at(1, 2) == 4.5


def test_row_checked_write():
    t = FixedTensor.zeros(2, 3)
    row = t.row(1)

    assert row.set_at(2, 9.0) is row
    assert t[1, 2] == 9.0
    with pytest.raises(OutOfRangeError):
        row.set_at(3, 1.0)
    with pytest.raises(OutOfRangeError):
        row.set_at(-1, 1.0)
    assert t.to_nested() == [[0.0, 0.0, 0.0], [0.0, 0.0, 9.0]]


def test_construction_errors():
    with pytest.raises(ShapeMismatchError):
        FixedTensor([1, 2, 3])
    with pytest.raises(ShapeMismatchError):
        FixedTensor([1, 2, 3], shape=(2, 2))
    with pytest.raises(ShapeMismatchError):
        FixedTensor([[1, 2], [3, 4]], shape=(4, 1))


def test_matmul():
    a = FixedTensor([[1, 2], [3, 4], [5, 6]])
    b = FixedTensor([[1, 0, 2, 1], [0, 1, 1, -1]])

    product = a @ b

    assert product.shape == (3, 4)
    assert product.to_nested() == [[1, 2, 4, -1], [3, 4, 10, -1], [5, 6, 16, -1]]

    with pytest.raises(ShapeMismatchError):
        b @ b


def test_matvec():
    t = FixedTensor([[1.0, 2.0, 0.0], [0.0, 1.0, -1.0]])
    v = FixedArray([1.0, 1.0, 2.0])

    result = t @ v

    assert isinstance(result, FixedArray)
    assert result.tolist() == [3.0, -1.0]

    with pytest.raises(ShapeMismatchError):
        t @ FixedArray([1.0, 2.0])


def test_identity_is_neutral():
    t = FixedTensor([[2.0, -1.0, 0.5], [0.0, 3.0, 1.0], [4.0, 4.0, 4.0]])
    identity = FixedTensor.identity(3)

    assert (identity @ t == t).all()
    assert (t @ identity == t).all()
    assert (identity @ FixedArray([1.0, 2.0, 3.0]) == FixedArray([1.0, 2.0, 3.0])).all()


def test_elementwise_algebra():
    a = FixedTensor([[1, 2], [3, 4]])
    b = FixedTensor([[10, 20], [30, 40]])

    assert (a + b).to_nested() == [[11, 22], [33, 44]]
    assert (b - a).to_nested() == [[9, 18], [27, 36]]
    assert (2 * a).to_nested() == [[2, 4], [6, 8]]
    assert (a * 2).to_nested() == [[2, 4], [6, 8]]
    assert (-a).to_nested() == [[-1, -2], [-3, -4]]

    with pytest.raises(ShapeMismatchError):
        a + FixedTensor.zeros(2, 3, dtype=int)


def test_transpose():
    t = FixedTensor([[1, 2, 3], [4, 5, 6]])

    flipped = t.transpose()

    assert flipped.shape == (3, 2)
    assert flipped.to_nested() == [[1, 4], [2, 5], [3, 6]]
    assert flipped[2, 0] == 3


def test_contains_nan():
    t = FixedTensor.zeros(2, 2)
    assert not t.contains_nan()

    t[0, 1] = np.nan
    assert t.contains_nan()
    assert not FixedTensor([[1, 2], [3, 4]]).contains_nan()


def test_copy_is_independent():
    t = FixedTensor([[1, 2], [3, 4]])
    c = t.copy()
    c[0, 0] = 100

    assert t[0, 0] == 1
    np.testing.assert_array_equal(t.to_numpy(), [[1, 2], [3, 4]])
    np.testing.assert_array_equal(np.asarray(c), [[100, 2], [3, 4]])


def test_not_equal_is_elementwise():
    a = FixedTensor([[1.0, 2.0], [3.0, 4.0]])
    b = FixedTensor([[1.0, 0.0], [3.0, 4.0]])

    assert (a != b).to_nested() == [[False, True], [False, False]]
    assert not (a != a.copy()).any()
    with pytest.raises(ShapeMismatchError):
        a != FixedTensor.zeros(1, 4)
