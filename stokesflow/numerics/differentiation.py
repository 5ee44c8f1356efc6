"""
Finite-difference operators on vector fields
"""

import numpy as np
from typing import Callable

from ..core.fixed_array import FixedArray, ArrayLike, as_fixed_array


def calculate_divergence(f: Callable[[FixedArray], FixedArray],
                         position: ArrayLike,
                         dx: float = 1e-10) -> float:
    """
    Central-difference divergence of a vector field

    div f = sum_i (f(x + dx/2 e_i)[i] - f(x - dx/2 e_i)[i]) / dx

    Args:
        f: Field mapping a position to a vector of the same length
        position: Point at which to evaluate
        dx: Full stencil width. The default suits fields of order one near
            unit distances; widen it for noisier fields.

    Returns:
        Scalar divergence
    """
    position = as_fixed_array(position, dtype=np.float64)
    half_step = dx / 2.0

    divergence = 0.0
    for i in range(len(position)):
        forward = f(position.copy_add_index(i, half_step))
        backward = f(position.copy_add_index(i, -half_step))
        divergence += (forward[i] - backward[i]) / dx

    return float(divergence)
