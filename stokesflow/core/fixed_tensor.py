"""
Fixed-shape 2D tensors stored row-major in a flat buffer
"""

import numpy as np
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

from .errors import OutOfRangeError, ShapeMismatchError
from .fixed_array import FixedArray, Scalar


class Index(NamedTuple):
    """Row/column pair addressing one tensor element"""
    i: int
    j: int


class TensorRow:
    """
    Borrowed view onto one row of a FixedTensor

    Holds only the owning tensor and the row number; every read and write goes
    through to the tensor's storage. Do not keep one around after the tensor is
    discarded.
    """

    __slots__ = ('_tensor', '_row')
    __hash__ = None

    def __init__(self, tensor: 'FixedTensor', row: int):
        self._tensor = tensor
        self._row = row

    def __len__(self) -> int:
        return self._tensor.cols

    def __iter__(self) -> Iterator:
        start = self._row * self._tensor.cols
        return iter(self._tensor._data[start:start + self._tensor.cols])

    def __getitem__(self, j: int):
        return self._tensor._data[self._row * self._tensor.cols + j]

    def __setitem__(self, j: int, value):
        self._tensor._data[self._row * self._tensor.cols + j] = value

    def at(self, j: int):
        """Range-checked read of column j"""
        if j < 0 or j >= self._tensor.cols:
            raise OutOfRangeError(j, self._tensor.cols)
        return self[j]

    def set_at(self, j: int, value) -> 'TensorRow':
        """Range-checked write of column j; returns the row"""
        if j < 0 or j >= self._tensor.cols:
            raise OutOfRangeError(j, self._tensor.cols)
        self[j] = value
        return self

    def to_array(self) -> FixedArray:
        """Copy of the row as a FixedArray"""
        start = self._row * self._tensor.cols
        return FixedArray(self._tensor._data[start:start + self._tensor.cols])

    def __repr__(self):
        return f"TensorRow({self._row}, {self.to_array().tolist()})"


class FixedTensor:
    """
    N x M matrix with a fixed shape

    The backing store is a flat array of N*M elements with
    ``index(i, j) = i*M + j``. ``t[i, j]`` and ``t[i][j]`` are unchecked;
    ``t.at(i, j)`` and ``t.row(i)`` reject indices outside the shape.
    """

    __slots__ = ('_data', '_rows', '_cols')
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, values, shape: Optional[Tuple[int, int]] = None, dtype=None):
        """
        Args:
            values: Nested N x M sequence, or a flat sequence of N*M elements with ``shape``
            shape: (N, M); required for flat input, inferred from nested input
            dtype: Element type; inferred from values when omitted
        """
        if isinstance(values, FixedTensor):
            shape = shape or values.shape
            values = values._data
        data = np.array(values, dtype=dtype)

        if data.ndim == 2:
            if shape is not None and tuple(shape) != data.shape:
                raise ShapeMismatchError(data.shape, tuple(shape))
            rows, cols = data.shape
        elif data.ndim == 1 and shape is not None:
            rows, cols = shape
            if rows * cols != data.shape[0]:
                raise ShapeMismatchError(data.shape[0], rows * cols)
        else:
            raise ShapeMismatchError(data.shape, '(N, M)')

        self._data = data.reshape(-1)
        self._rows = int(rows)
        self._cols = int(cols)

    @classmethod
    def _wrap(cls, flat: np.ndarray, rows: int, cols: int) -> 'FixedTensor':
        out = cls.__new__(cls)
        out._data = flat
        out._rows = rows
        out._cols = cols
        return out

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype=float) -> 'FixedTensor':
        return cls._wrap(np.zeros(rows * cols, dtype=dtype), rows, cols)

    @classmethod
    def identity(cls, size: int, dtype=float) -> 'FixedTensor':
        return cls._wrap(np.eye(size, dtype=dtype).reshape(-1), size, size)

    @classmethod
    def from_flat(cls, values, rows: int, cols: int, dtype=None) -> 'FixedTensor':
        """Build from a flat row-major sequence of rows*cols elements"""
        return cls(values, shape=(rows, cols), dtype=dtype)

    # ------------------------------------------------------------------ access

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def index(self, i: int, j: int) -> int:
        """Flat position of element (i, j)"""
        return i * self._cols + j

    def __len__(self) -> int:
        return self._rows

    def __iter__(self) -> Iterator[TensorRow]:
        return (TensorRow(self, i) for i in range(self._rows))

    def __getitem__(self, key):
        if isinstance(key, tuple):
            i, j = key
            return self._data[i * self._cols + j]
        return TensorRow(self, key)

    def __setitem__(self, key, value):
        i, j = key
        self._data[i * self._cols + j] = value

    def _check(self, i: int, j: int):
        if i < 0 or i >= self._rows:
            raise OutOfRangeError(i, self._rows)
        if j < 0 or j >= self._cols:
            raise OutOfRangeError(j, self._cols)

    def at(self, i: Union[int, Index, Tuple[int, int]], j: Optional[int] = None):
        """
        Range-checked element read

        Accepts ``at(i, j)`` or ``at(Index(i, j))``.
        """
        if j is None:
            i, j = i
        self._check(i, j)
        return self._data[i * self._cols + j]

    def set_at(self, i: int, j: int, value) -> 'FixedTensor':
        """Range-checked element write; returns self"""
        self._check(i, j)
        self._data[i * self._cols + j] = value
        return self

    def row(self, i: int) -> TensorRow:
        """Range-checked row view"""
        if i < 0 or i >= self._rows:
            raise OutOfRangeError(i, self._rows)
        return TensorRow(self, i)

    def copy(self) -> 'FixedTensor':
        return FixedTensor._wrap(self._data.copy(), self._rows, self._cols)

    def astype(self, dtype) -> 'FixedTensor':
        return FixedTensor._wrap(self._data.astype(dtype), self._rows, self._cols)

    def transpose(self) -> 'FixedTensor':
        flipped = self._data.reshape(self._rows, self._cols).T
        return FixedTensor._wrap(np.ascontiguousarray(flipped).reshape(-1), self._cols, self._rows)

    def contains_nan(self) -> bool:
        """True if any element is NaN; always False for non-float dtypes"""
        if not np.issubdtype(self._data.dtype, np.inexact):
            return False
        return bool(np.isnan(self._data).any())

    def to_flat(self) -> FixedArray:
        """Copy of the row-major storage as a FixedArray of N*M elements"""
        return FixedArray(self._data)

    def to_nested(self) -> List[list]:
        return self._data.reshape(self._rows, self._cols).tolist()

    def to_numpy(self) -> np.ndarray:
        """Copy as an N x M numpy array"""
        return self._data.reshape(self._rows, self._cols).copy()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data.reshape(self._rows, self._cols), dtype=dtype)

    def __repr__(self):
        return f"FixedTensor({self.to_nested()}, dtype={self._data.dtype})"

    def __bool__(self):
        raise ValueError("The truth value of a FixedTensor is ambiguous. Use t.all() or t.any()")

    def all(self) -> bool:
        return bool(np.all(self._data))

    def any(self) -> bool:
        return bool(np.any(self._data))

    # ---------------------------------------------------------- algebra

    def _same_shape(self, other: 'FixedTensor') -> np.ndarray:
        if other.shape != self.shape:
            raise ShapeMismatchError(self.shape, other.shape)
        return other._data

    def __add__(self, other):
        if not isinstance(other, FixedTensor):
            return NotImplemented
        return FixedTensor._wrap(self._data + self._same_shape(other), self._rows, self._cols)

    def __sub__(self, other):
        if not isinstance(other, FixedTensor):
            return NotImplemented
        return FixedTensor._wrap(self._data - self._same_shape(other), self._rows, self._cols)

    def __mul__(self, scalar: Scalar):
        if np.ndim(scalar) != 0 or isinstance(scalar, (FixedTensor, FixedArray)):
            return NotImplemented
        return FixedTensor._wrap(self._data * scalar, self._rows, self._cols)

    __rmul__ = __mul__

    def __neg__(self):
        return FixedTensor._wrap(-self._data, self._rows, self._cols)

    def __eq__(self, other):
        if not isinstance(other, FixedTensor):
            return NotImplemented
        return FixedTensor._wrap(self._data == self._same_shape(other), self._rows, self._cols)

    def __ne__(self, other):
        if not isinstance(other, FixedTensor):
            return NotImplemented
        return FixedTensor._wrap(self._data != self._same_shape(other), self._rows, self._cols)

    def __matmul__(self, other):
        """
        (I x K) @ (K x J) -> (I x J), or (I x K) @ vector[K] -> vector[I]

        out[i][j] = sum_k a[i][k] * b[k][j]
        """
        left = self._data.reshape(self._rows, self._cols)

        if isinstance(other, FixedArray):
            if other.size != self._cols:
                raise ShapeMismatchError(self.shape, other.size)
            return FixedArray(left @ other.to_numpy())

        if isinstance(other, FixedTensor):
            if other.rows != self._cols:
                raise ShapeMismatchError(self.shape, other.shape)
            right = other._data.reshape(other.rows, other.cols)
            return FixedTensor._wrap((left @ right).reshape(-1), self._rows, other.cols)

        return NotImplemented
