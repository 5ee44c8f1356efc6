import numpy as np
import pytest

from stokesflow.numerics import (
    choice,
    cumsum,
    find_first_element_greater_than,
    weighted_index,
    weighted_index_cdf,
)


class ScriptedRng:
    """Replays fixed draws in place of a numpy Generator"""

    def __init__(self, uniforms=(), integers=()):
        self._uniforms = list(uniforms)
        self._integers = list(integers)

    def uniform(self, low, high):
        return self._uniforms.pop(0)

    def integers(self, low, high):
        return self._integers.pop(0)


def test_cumsum():
    assert cumsum([1, 2, 3, 5, 7, 11, 13]) == [1, 3, 6, 11, 18, 29, 42]
    assert cumsum([2.5]) == [2.5]


def test_find_first_element_greater_than():
    values = [1, 3, 3, 7]

    assert find_first_element_greater_than(values, 0) == 0
    assert find_first_element_greater_than(values, 1) == 1
    assert find_first_element_greater_than(values, 3) == 3
    assert find_first_element_greater_than(values, 7) == len(values)


def test_weighted_index_decodes_draw():
    rng = ScriptedRng(uniforms=[0.5, 1.0, 2.99, 0.0])

    assert weighted_index([1, 2, 0], rng) == 0
    assert weighted_index([1, 2, 0], rng) == 1
    assert weighted_index([1, 2, 0], rng) == 1
    assert weighted_index([0, 2, 1], rng) == 1


def test_weighted_index_cdf_matches_weighted_index():
    weights = [1.0, 0.0, 4.0, 2.0]
    draws = [0.0, 0.99, 1.0, 3.5, 5.0, 6.9]

    expected = [weighted_index(weights, ScriptedRng(uniforms=[d])) for d in draws]
    actual = [weighted_index_cdf(cumsum(weights), ScriptedRng(uniforms=[d])) for d in draws]

    assert actual == expected == [0, 0, 2, 2, 3, 3]


def test_weighted_index_frequencies(rng):
    weights = [1.0, 2.0, 0.0, 1.0]
    n = 40000

    counts = np.bincount([weighted_index(weights, rng) for _ in range(n)], minlength=4)

    assert counts[2] == 0
    np.testing.assert_allclose(counts / n, [0.25, 0.5, 0.0, 0.25], atol=0.02)


def test_choice():
    values = ['a', 'b', 'c']

    assert choice(values, ScriptedRng(integers=[2])) == 'c'
    assert choice(values, ScriptedRng(integers=[0])) == 'a'


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_choice_stays_in_range(seed):
    rng = np.random.default_rng(seed)
    values = [10, 20, 30]

    assert {choice(values, rng) for _ in range(200)} == set(values)
