# ci\knapsack_pso\problems\knapsack.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from .base import BaseProblem, ProblemInfo

# infeasible selections lose this much value per unit of excess weight
PENALTY_COEFFICIENT = 1000.0


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    weight: float
    value: float


DEFAULT_ITEMS: Tuple[Item, ...] = (
    Item(1, "Laptop", 3, 1500),
    Item(2, "Phone", 0.5, 800),
    Item(3, "Headphones", 0.3, 200),
    Item(4, "Camera", 1, 1200),
    Item(5, "Tablet", 0.8, 600),
    Item(6, "Watch", 0.1, 400),
    Item(7, "Power Bank", 0.4, 100),
    Item(8, "Book", 0.5, 50),
)
DEFAULT_CAPACITY = 5.0


@dataclass
class KnapsackProblem(BaseProblem):
    """
    0/1 knapsack.
    Representation: binary vector, bit d selects items[d].
    Objective: maximize total value; overweight selections are penalized
    linearly by PENALTY_COEFFICIENT per unit of excess weight.
    """
    items: List[Item] = field(default_factory=list)
    capacity: float = DEFAULT_CAPACITY
    name_: str = "knapsack"

    def __post_init__(self):
        self.items = list(self.items)
        if not math.isfinite(self.capacity) or self.capacity < 0:
            raise ValueError(f"capacity must be a finite number >= 0, got {self.capacity}")
        for it in self.items:
            self._check_item(it)

    @staticmethod
    def _check_item(item: Item) -> None:
        for attr in ("weight", "value"):
            v = getattr(item, attr)
            if not math.isfinite(v) or v < 0:
                raise ValueError(f"Item {item.id} ({item.name}): {attr} must be finite and >= 0, got {v}")

    @classmethod
    def default(cls) -> "KnapsackProblem":
        return cls(items=list(DEFAULT_ITEMS), capacity=DEFAULT_CAPACITY, name_="knapsack_default")

    @property
    def n(self) -> int:
        return len(self.items)

    @property
    def total_weight(self) -> float:
        return sum(it.weight for it in self.items)

    @property
    def total_value(self) -> float:
        return sum(it.value for it in self.items)

    # ---- item editing (between runs only)
    def add_item(self, name: str, weight: float, value: float) -> Item:
        next_id = max((it.id for it in self.items), default=0) + 1
        item = Item(id=next_id, name=name, weight=weight, value=value)
        self._check_item(item)
        self.items.append(item)
        return item

    def remove_item(self, item_id: int) -> Item:
        for idx, it in enumerate(self.items):
            if it.id == item_id:
                return self.items.pop(idx)
        raise ValueError(f"No item with id {item_id}")

    # ---- solution helpers
    def _as_bits(self, solution: Any) -> np.ndarray:
        x = np.asarray(solution, dtype=int).reshape(-1)
        if x.size != self.n:
            raise ValueError(f"Solution dim mismatch: expected {self.n}, got {x.size}")
        return x

    def selected_items(self, solution: Any) -> Tuple[Item, ...]:
        x = self._as_bits(solution)
        return tuple(it for it, bit in zip(self.items, x) if bit == 1)

    def totals(self, solution: Any) -> Tuple[float, float]:
        chosen = self.selected_items(solution)
        return sum(it.weight for it in chosen), sum(it.value for it in chosen)

    def is_feasible(self, solution: Any) -> bool:
        weight, _ = self.totals(solution)
        return weight <= self.capacity

    def evaluate(self, solution: Any) -> float:
        weight, value = self.totals(solution)
        if weight > self.capacity:
            return float(value - (weight - self.capacity) * PENALTY_COEFFICIENT)
        return float(value)

    def info(self) -> ProblemInfo:
        return ProblemInfo(
            name=self.name_,
            problem_type="knapsack",
            objective="maximize",
            dimension=self.n,
            extra={"representation": "binary", "capacity": self.capacity, "n_items": self.n},
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "problem_type": "knapsack",
            "task": "0/1 knapsack",
            "objective": "maximize",
            "representation": "binary",
            "capacity": self.capacity,
            "n_items": self.n,
            "items": [
                {"id": it.id, "name": it.name, "weight": it.weight, "value": it.value}
                for it in self.items
            ],
            "inventory_weight": self.total_weight,
            "inventory_value": self.total_value,
            "penalty_coefficient": PENALTY_COEFFICIENT,
        }


def knapsack_from_records(records: Sequence[Dict[str, Any]], capacity: float) -> KnapsackProblem:
    """Build a problem from plain dicts (id/name/weight/value), e.g. rows read from JSON."""
    items = [
        Item(
            id=int(r.get("id", i + 1)),
            name=str(r.get("name", f"item_{i + 1}")),
            weight=float(r["weight"]),
            value=float(r["value"]),
        )
        for i, r in enumerate(records)
    ]
    return KnapsackProblem(items=items, capacity=float(capacity))
