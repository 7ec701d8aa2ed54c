from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from knapsack_pso.problems.knapsack import Item


@dataclass(frozen=True)
class OptimizationResult:
    best_position: Tuple[int, ...]
    best_fitness: float
    selected_items: Tuple[Item, ...]
    total_weight: float
    total_value: float

    # global best after each iteration
    convergence_history: Tuple[float, ...] = ()

    @property
    def selected_ids(self) -> List[int]:
        return [it.id for it in self.selected_items]

    def utilization(self, capacity: float) -> float:
        """Percent of capacity taken by the selection."""
        if capacity <= 0:
            return 0.0 if self.total_weight == 0 else float("inf")
        return 100.0 * self.total_weight / capacity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "best_position": list(self.best_position),
            "best_fitness": float(self.best_fitness),
            "selected_items": [
                {"id": it.id, "name": it.name, "weight": it.weight, "value": it.value}
                for it in self.selected_items
            ],
            "total_weight": float(self.total_weight),
            "total_value": float(self.total_value),
            "convergence_history": [float(x) for x in self.convergence_history],
        }


@dataclass
class MethodResult:
    method_name: str
    best_solution: Any
    best_fitness: float

    # for convergence plots (best value per iteration)
    history: List[float] = field(default_factory=list)

    # extra metrics (total_weight, total_value, feasible, ...)
    metrics: Dict[str, Any] = field(default_factory=dict)

    # run bookkeeping
    time_sec: float = 0.0
    iterations: int = 0
    status: str = "ok"  # ok / failed
    params_used: Dict[str, Any] = field(default_factory=dict)

    # optional debug message
    message: Optional[str] = None
