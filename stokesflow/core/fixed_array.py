"""
Fixed-length numeric arrays with elementwise algebra

A FixedArray owns a one-dimensional numpy buffer whose length and dtype are
set once at construction. Arithmetic and comparisons act elementwise, either
between two arrays of the same length or between an array and a scalar (in
both operand orders). Combining arrays of different length raises
ShapeMismatchError instead of broadcasting. A scalar operand of arithmetic is
first converted to the element type, so the dtype never changes: an integer
array times 0.5 is an integer array, in place or not.
"""

import numpy as np
from typing import Iterator, Sequence, Union

from .errors import OutOfRangeError, ShapeMismatchError
from .mathutils import LEVI_CIVITA


Scalar = Union[int, float, bool, np.number, np.bool_]


def _truncating_divide(a, b):
    """Integer division rounding toward zero"""
    quotient = np.floor_divide(a, b)
    remainder = a - quotient * b
    return quotient + ((remainder != 0) & ((np.asarray(a) < 0) != (np.asarray(b) < 0)))


def _divide(a, b):
    if np.issubdtype(np.result_type(a, b), np.integer):
        return _truncating_divide(a, b)
    return np.true_divide(a, b)


def _reflected(ufunc):
    return lambda a, b: ufunc(b, a)


class FixedArray:
    """
    Fixed-length, fixed-dtype numeric container

    Indexing with ``a[i]`` is the fast path and is not range checked beyond what
    numpy does; ``a.at(i)`` raises OutOfRangeError for ``i >= len(a)``.
    """

    __slots__ = ('_data',)

    # Make numpy scalars defer to our reflected operators
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, values, dtype=None):
        """
        Args:
            values: Sequence of elements (or another FixedArray, which is copied)
            dtype: Element type; inferred from values when omitted
        """
        if isinstance(values, FixedArray):
            values = values._data
        data = np.array(values, dtype=dtype)
        if data.ndim != 1:
            raise ShapeMismatchError(data.shape, '(N,)')
        self._data = data

    @classmethod
    def _wrap(cls, data: np.ndarray) -> 'FixedArray':
        out = cls.__new__(cls)
        out._data = data
        return out

    @classmethod
    def zeros(cls, size: int, dtype=float) -> 'FixedArray':
        """Array of ``size`` zeros"""
        return cls._wrap(np.zeros(size, dtype=dtype))

    # ------------------------------------------------------------------ access

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __getitem__(self, index):
        return self._data[index]

    def __setitem__(self, index, value):
        self._data[index] = value

    def at(self, index: int):
        """Range-checked element access"""
        if index < 0 or index >= self._data.shape[0]:
            raise OutOfRangeError(index, self._data.shape[0])
        return self._data[index]

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def contains(self, value) -> bool:
        """Linear membership test using equality"""
        return bool(np.any(self._data == value))

    def copy(self) -> 'FixedArray':
        return FixedArray._wrap(self._data.copy())

    def to_numpy(self) -> np.ndarray:
        """Copy of the elements as a numpy array"""
        return self._data.copy()

    def tolist(self) -> list:
        return self._data.tolist()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype)

    def __repr__(self):
        return f"FixedArray({self._data.tolist()}, dtype={self._data.dtype})"

    def __str__(self):
        return "(" + ", ".join(str(v) for v in self._data.tolist()) + ")"

    def __bool__(self):
        raise ValueError("The truth value of a FixedArray is ambiguous. Use a.any() or a.all()")

    # ---------------------------------------------------------- mutation

    def set(self, index: int, value) -> 'FixedArray':
        """Overwrite one element in place; returns self for chaining"""
        self._data[index] = value
        return self

    def add_index(self, index: int, value) -> 'FixedArray':
        """Add to one element in place; returns self for chaining"""
        self._data[index] += value
        return self

    def copy_set(self, index: int, value) -> 'FixedArray':
        """Copy with one element overwritten, receiver untouched"""
        return self.copy().set(index, value)

    def copy_add_index(self, index: int, value) -> 'FixedArray':
        """Copy with one element incremented, receiver untouched"""
        return self.copy().add_index(index, value)

    def astype(self, dtype) -> 'FixedArray':
        """Elementwise cast to a new dtype"""
        return FixedArray._wrap(self._data.astype(dtype))

    # ---------------------------------------------------------- reductions

    def _accumulator_dtype(self):
        return None if self._data.dtype == np.bool_ else self._data.dtype

    def sum(self):
        return self._data.sum(dtype=self._accumulator_dtype())

    def prod(self):
        return self._data.prod(dtype=self._accumulator_dtype())

    def cumsum(self) -> 'FixedArray':
        """Running sum: element i is the sum of elements 0..i"""
        return FixedArray._wrap(np.cumsum(self._data, dtype=self._accumulator_dtype()))

    def cumprod(self) -> 'FixedArray':
        """Running product: element i is the product of elements 0..i"""
        return FixedArray._wrap(np.cumprod(self._data, dtype=self._accumulator_dtype()))

    def all(self) -> bool:
        return bool(np.all(self._data))

    def any(self) -> bool:
        return bool(np.any(self._data))

    def dot(self, other: 'FixedArray'):
        """Sum of the elementwise product"""
        return (self * other).sum()

    def cross(self, other: 'FixedArray') -> 'FixedArray':
        """
        Cross product, defined for three-element arrays only

        cross[i] = sum_jk epsilon(i, j, k) a[j] b[k]
        """
        operand = self._operand(other)
        if self.size != 3:
            raise ShapeMismatchError(self.size, 3)
        if operand is NotImplemented or np.ndim(operand) == 0:
            raise TypeError("cross product needs another FixedArray")
        return FixedArray._wrap(np.einsum('ijk,j,k->i', LEVI_CIVITA, self._data, operand))

    # ---------------------------------------------------------- elementwise ops

    def _operand(self, other):
        if isinstance(other, FixedArray):
            if other._data.shape != self._data.shape:
                raise ShapeMismatchError(self.size, other.size)
            return other._data
        if np.ndim(other) == 0:
            return other
        return NotImplemented

    def _arithmetic_operand(self, other):
        # Scalars take the element type, so int arrays stay int arrays
        operand = self._operand(other)
        if operand is NotImplemented or isinstance(operand, np.ndarray):
            return operand
        return self._data.dtype.type(operand)

    def _binary(self, other, ufunc, arithmetic=False) -> 'FixedArray':
        operand = self._arithmetic_operand(other) if arithmetic else self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore'):
            result = ufunc(self._data, operand)
        return FixedArray._wrap(np.asarray(result))

    def _inplace(self, other, ufunc) -> 'FixedArray':
        operand = self._arithmetic_operand(other)
        if operand is NotImplemented:
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore'):
            result = ufunc(self._data, operand)
        np.copyto(self._data, result, casting='same_kind')
        return self

    def __add__(self, other):
        return self._binary(other, np.add, arithmetic=True)

    def __radd__(self, other):
        return self._binary(other, _reflected(np.add), arithmetic=True)

    def __sub__(self, other):
        return self._binary(other, np.subtract, arithmetic=True)

    def __rsub__(self, other):
        return self._binary(other, _reflected(np.subtract), arithmetic=True)

    def __mul__(self, other):
        return self._binary(other, np.multiply, arithmetic=True)

    def __rmul__(self, other):
        return self._binary(other, _reflected(np.multiply), arithmetic=True)

    def __truediv__(self, other):
        return self._binary(other, _divide, arithmetic=True)

    def __rtruediv__(self, other):
        return self._binary(other, _reflected(_divide), arithmetic=True)

    def __iadd__(self, other):
        return self._inplace(other, np.add)

    def __isub__(self, other):
        return self._inplace(other, np.subtract)

    def __imul__(self, other):
        return self._inplace(other, np.multiply)

    def __itruediv__(self, other):
        return self._inplace(other, _divide)

    def __neg__(self):
        return FixedArray._wrap(-self._data)

    def __pos__(self):
        return self.copy()

    def __abs__(self):
        return FixedArray._wrap(np.abs(self._data))

    def __pow__(self, exponent):
        operand = self._operand(exponent)
        if operand is NotImplemented:
            return NotImplemented
        if np.issubdtype(self._data.dtype, np.integer):
            # Evaluate in double, then cast back to the element type
            with np.errstate(divide='ignore', invalid='ignore'):
                result = np.power(self._data.astype(np.float64), operand)
            return FixedArray._wrap(result.astype(self._data.dtype))
        with np.errstate(divide='ignore', invalid='ignore'):
            return FixedArray._wrap(np.power(self._data, operand))

    # ---------------------------------------------------------- comparisons

    def __lt__(self, other):
        return self._binary(other, np.less)

    def __le__(self, other):
        return self._binary(other, np.less_equal)

    def __gt__(self, other):
        return self._binary(other, np.greater)

    def __ge__(self, other):
        return self._binary(other, np.greater_equal)

    def __eq__(self, other):
        return self._binary(other, np.equal)

    def __ne__(self, other):
        return self._binary(other, np.not_equal)

    # ---------------------------------------------------------- boolean ops

    def __and__(self, other):
        return self._binary(other, np.logical_and)

    def __rand__(self, other):
        return self._binary(other, np.logical_and)

    def __or__(self, other):
        return self._binary(other, np.logical_or)

    def __ror__(self, other):
        return self._binary(other, np.logical_or)

    def __invert__(self):
        return FixedArray._wrap(np.logical_not(self._data))


ArrayLike = Union[FixedArray, Sequence[float], np.ndarray]


def as_fixed_array(values: ArrayLike, dtype=None) -> FixedArray:
    """Return values unchanged if already a FixedArray (and dtype matches), else build one"""
    if isinstance(values, FixedArray) and (dtype is None or values.dtype == np.dtype(dtype)):
        return values
    return FixedArray(values, dtype=dtype)


def logical_and(a1: FixedArray, a2: FixedArray) -> FixedArray:
    return a1 & a2


def logical_or(a1: FixedArray, a2: FixedArray) -> FixedArray:
    return a1 | a2


def logical_not(a1: FixedArray) -> FixedArray:
    return ~a1


def all_of(a1: FixedArray) -> bool:
    """True if every element is true"""
    return a1.all()


def any_of(a1: FixedArray) -> bool:
    """True if at least one element is true"""
    return a1.any()


def magnitude_sq(v: ArrayLike) -> float:
    """Squared Euclidean norm, accumulated in double precision"""
    data = np.asarray(v, dtype=np.float64)
    return float(np.sum(data * data))


def magnitude(v: ArrayLike) -> float:
    """Euclidean norm, accumulated in double precision"""
    return float(np.sqrt(magnitude_sq(v)))


def distance_between_sq(a1: FixedArray, a2: FixedArray) -> float:
    return magnitude_sq(a1 - a2)


def distance_between(a1: FixedArray, a2: FixedArray) -> float:
    return magnitude(a1 - a2)


def elementwise_min(a1: ArrayLike, a2: ArrayLike) -> FixedArray:
    """Per-index minimum of two arrays"""
    a1, a2 = as_fixed_array(a1), as_fixed_array(a2)
    return FixedArray._wrap(np.minimum(a1._data, a1._operand(a2)))


def elementwise_max(a1: ArrayLike, a2: ArrayLike) -> FixedArray:
    """Per-index maximum of two arrays"""
    a1, a2 = as_fixed_array(a1), as_fixed_array(a2)
    return FixedArray._wrap(np.maximum(a1._data, a1._operand(a2)))
