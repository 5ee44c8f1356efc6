"""
Exception types for the fixed-size containers
"""


class FixedSizeError(Exception):
    """Base class for errors raised by FixedArray and FixedTensor."""


class OutOfRangeError(FixedSizeError, IndexError):
    """Raised by checked accessors when an index lies outside the container."""

    def __init__(self, index, limit):
        self.index = index
        self.limit = limit
        super().__init__(f"index {index} out of range for size {limit}")


class ShapeMismatchError(FixedSizeError, ValueError):
    """Raised when an elementwise operation combines containers of different shape."""

    def __init__(self, left, right):
        self.left = left
        self.right = right
        super().__init__(f"shape mismatch: {left} vs {right}")
