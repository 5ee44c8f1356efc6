"""
Index-notation helpers: Levi-Civita symbol, Kronecker delta, bin flattening
"""

import numpy as np
import sympy
from typing import Tuple


def levi_civita(i: int, j: int, k: int) -> int:
    """
    Levi-Civita symbol: +1 for even permutations, -1 for odd, 0 on repeats

    Works for any integer labelling, e.g. (0, 1, 2) or (1, 2, 3).
    """
    return int(sympy.LeviCivita(i, j, k))


def delta(i: int, j: int) -> int:
    """Kronecker delta"""
    return int(i == j)


# epsilon_ijk over 0-based indices, contracted by FixedArray.cross
LEVI_CIVITA = np.array(
    [[[levi_civita(i, j, k) for k in range(3)] for j in range(3)] for i in range(3)],
    dtype=np.int8
)


def flatten_bin_index(index_x: int, index_y: int, bins_x: int, bins_y: int) -> int:
    """
    Row-major flat index of a 2D bin

    Args:
        index_x: Bin index along x
        index_y: Bin index along y
        bins_x: Number of bins along x
        bins_y: Number of bins along y

    Returns:
        index_x * bins_y + index_y
    """
    return index_x * bins_y + index_y


def unflatten_bin_index(index: int, bins_x: int, bins_y: int) -> Tuple[int, int]:
    """Inverse of flatten_bin_index"""
    return index // bins_y, index % bins_y
