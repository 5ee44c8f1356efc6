"""
Discrete sampling helpers driven by a caller-owned random generator

The generator is advanced as a side effect; share one between threads only
behind a lock. Anything with numpy.random.Generator-style ``uniform(low, high)``
and ``integers(low, high)`` methods can stand in for it.
"""

import numpy as np
from typing import List, Sequence, TypeVar

T = TypeVar('T')


def choice(values: Sequence[T], rng: np.random.Generator) -> T:
    """Pick one element uniformly at random"""
    return values[int(rng.integers(0, len(values)))]


def cumsum(values: Sequence[float]) -> List[float]:
    """
    Running total of a sequence

    Args:
        values: Non-empty sequence of numbers

    Returns:
        List whose element i is values[0] + ... + values[i]
    """
    output = [values[0]]
    for value in values[1:]:
        output.append(output[-1] + value)
    return output


def find_first_element_greater_than(values: Sequence[float], search: float) -> int:
    """
    Index of the first element strictly greater than ``search``

    Linear scan, no ordering assumed. Returns len(values) if nothing qualifies.
    """
    hits = np.flatnonzero(np.asarray(values) > search)
    return int(hits[0]) if hits.size else len(values)


def weighted_index(weights: Sequence[float], rng: np.random.Generator) -> int:
    """
    Pick an index with probability proportional to its weight

    With weights [1, 2, 0] index 0 comes up a third of the time, index 1 two
    thirds, and index 2 never. Draws u in [0, total] and returns the first index
    whose cumulative weight exceeds u.
    """
    cdf = cumsum(list(weights))
    draw = rng.uniform(0, cdf[-1])
    return find_first_element_greater_than(cdf, draw)


def weighted_index_cdf(cdf: Sequence[float], rng: np.random.Generator) -> int:
    """Same draw as weighted_index on an already accumulated, sorted CDF"""
    draw = rng.uniform(0, cdf[-1])
    return int(np.searchsorted(np.asarray(cdf), draw, side='right'))
