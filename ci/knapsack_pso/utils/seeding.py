# ci\knapsack_pso\utils\seeding.py

from __future__ import annotations
import random
from typing import Optional, Protocol

import numpy as np


def set_global_seed(seed: Optional[int]) -> None:
    if seed is None:
        return
    random.seed(seed)
    np.random.seed(seed)


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def next_uniform(self) -> float:
        ...


class NumpyRandomSource:
    """
    RandomSource backed by numpy's Generator.
    seed=None -> fresh OS entropy on every construction (non-reproducible runs).
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def next_uniform(self) -> float:
        return float(self.rng.random())
