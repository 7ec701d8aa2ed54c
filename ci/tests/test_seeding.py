import random

import numpy as np

from knapsack_pso.utils.seeding import NumpyRandomSource, set_global_seed


def test_numpy_source_is_uniform_and_seedable():
    a = NumpyRandomSource(5)
    b = NumpyRandomSource(5)
    xs = [a.next_uniform() for _ in range(200)]
    assert xs == [b.next_uniform() for _ in range(200)]
    assert all(0.0 <= x < 1.0 for x in xs)
    assert all(isinstance(x, float) for x in xs)


def test_set_global_seed():
    set_global_seed(10)
    first = (random.random(), np.random.rand())
    set_global_seed(10)
    assert (random.random(), np.random.rand()) == first
    # None leaves the global state alone
    set_global_seed(None)
