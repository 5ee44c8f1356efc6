"""Sampling and finite-difference numerics"""

from .random_sampling import (
    choice,
    cumsum,
    find_first_element_greater_than,
    weighted_index,
    weighted_index_cdf
)
from .differentiation import calculate_divergence

__all__ = [
    'choice',
    'cumsum',
    'find_first_element_greater_than',
    'weighted_index',
    'weighted_index_cdf',
    'calculate_divergence'
]
