import pytest

from knapsack_pso.problems.knapsack import Item, KnapsackProblem


class ScriptedRandomSource:
    """Replays a fixed list of uniforms; fails loudly when it runs dry."""

    def __init__(self, values):
        self.values = list(values)
        self.used = 0

    def next_uniform(self):
        if self.used >= len(self.values):
            raise AssertionError(f"random source exhausted after {self.used} draws")
        v = self.values[self.used]
        self.used += 1
        return v

    @property
    def remaining(self):
        return len(self.values) - self.used


@pytest.fixture
def scripted():
    return ScriptedRandomSource


@pytest.fixture
def three_items():
    return [
        Item(1, "Laptop", 3, 1500),
        Item(2, "Phone", 0.5, 800),
        Item(3, "Headphones", 0.3, 200),
    ]


@pytest.fixture
def three_item_problem(three_items):
    return KnapsackProblem(items=three_items, capacity=3.5)
