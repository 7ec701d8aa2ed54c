# ci\knapsack_pso\problems\base.py

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ProblemInfo:
    name: str
    problem_type: str  # "knapsack"
    objective: str     # "minimize" | "maximize"
    dimension: Optional[int] = None
    extra: Dict[str, Any] = None


class BaseProblem(ABC):
    @abstractmethod
    def info(self) -> ProblemInfo:
        raise NotImplementedError

    @abstractmethod
    def evaluate(self, solution: Any) -> float:
        """
        Return one fitness number for a candidate solution
        (higher is better when objective=maximize).
        """
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """
        Plain-dict summary of the problem, stored next to exported results.
        """
        raise NotImplementedError
