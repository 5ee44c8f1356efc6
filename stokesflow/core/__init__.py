"""Fixed-size array and tensor core"""

from .errors import FixedSizeError, OutOfRangeError, ShapeMismatchError
from .mathutils import levi_civita, delta, flatten_bin_index, unflatten_bin_index
from .fixed_array import (
    FixedArray,
    as_fixed_array,
    logical_and,
    logical_or,
    logical_not,
    all_of,
    any_of,
    magnitude,
    magnitude_sq,
    distance_between,
    distance_between_sq,
    elementwise_min,
    elementwise_max
)
from .fixed_tensor import FixedTensor, TensorRow, Index

__all__ = [
    'FixedSizeError',
    'OutOfRangeError',
    'ShapeMismatchError',
    'levi_civita',
    'delta',
    'flatten_bin_index',
    'unflatten_bin_index',
    'FixedArray',
    'as_fixed_array',
    'logical_and',
    'logical_or',
    'logical_not',
    'all_of',
    'any_of',
    'magnitude',
    'magnitude_sq',
    'distance_between',
    'distance_between_sq',
    'elementwise_min',
    'elementwise_max',
    'FixedTensor',
    'TensorRow',
    'Index'
]
