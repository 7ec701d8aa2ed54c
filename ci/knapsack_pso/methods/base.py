from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from .result import MethodResult
from knapsack_pso.utils.logging import get_logger
from knapsack_pso.utils.seeding import set_global_seed

ProgressCallback = Callable[[int, float, Dict[str, Any]], None]

Number = (int, float)


def _type_name(t: Any) -> str:
    if isinstance(t, tuple):
        return " or ".join(x.__name__ for x in t)
    return t.__name__


class BaseMethod(ABC):
    """
    Common contract for every method:
    - standard API (run/solve)
    - parameter validation
    - logging
    - progress callback
    """

    name: str = "BaseMethod"

    def __init__(self, logger_name: str = "knapsack_pso"):
        self.logger = get_logger(logger_name)

    @classmethod
    @abstractmethod
    def default_params(cls) -> Dict[str, Any]:
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def param_schema(cls) -> Dict[str, Any]:
        """
        example schema:
        {
          "max_iterations": {"type": int, "min": 0, "max": 10000},
          "w": {"type": Number, "min": 0.0, "max": 2.0},
          "mode": {"type": str, "choices": ["a", "b"]},
        }
        """
        raise NotImplementedError

    @classmethod
    def validate_params(cls, params: Dict[str, Any]) -> Dict[str, Any]:
        schema = cls.param_schema()
        out = dict(cls.default_params())
        out.update(params or {})

        for k, rules in schema.items():
            if k not in out:
                raise ValueError(f"Missing parameter: {k}")

            v = out[k]
            t = rules.get("type")

            if t is not None:
                # bool is an int subclass; only accept it where bool is asked for
                bad_bool = isinstance(v, bool) and t is not bool
                if bad_bool or not isinstance(v, t):
                    raise TypeError(f"Param '{k}' must be {_type_name(t)}, got {type(v).__name__}")

            if "min" in rules and v < rules["min"]:
                raise ValueError(f"Param '{k}' must be >= {rules['min']}, got {v}")

            if "max" in rules and v > rules["max"]:
                raise ValueError(f"Param '{k}' must be <= {rules['max']}, got {v}")

            if "choices" in rules and v not in rules["choices"]:
                raise ValueError(f"Param '{k}' must be one of {rules['choices']}, got {v}")

        # extra keys pass through untouched; schema keys are always checked
        return out

    def run(
        self,
        problem: Any,
        params: Optional[Dict[str, Any]] = None,
        progress_cb: Optional[ProgressCallback] = None,
        seed: Optional[int] = None,
    ) -> MethodResult:
        set_global_seed(seed)

        validated = self.validate_params(params or {})

        self.logger.info(f"START {self.name} | params={validated} | seed={seed}")

        t0 = time.time()
        try:
            res = self.solve(problem, validated, progress_cb=progress_cb, seed=seed)
            res.status = res.status or "ok"
        except Exception as e:
            self.logger.exception(f"FAILED {self.name} | error={e}")
            return MethodResult(
                method_name=self.name,
                best_solution=None,
                best_fitness=float("-inf"),
                history=[],
                metrics={},
                time_sec=time.time() - t0,
                iterations=0,
                status="failed",
                params_used=validated,
                message=str(e),
            )

        res.time_sec = time.time() - t0
        res.params_used = validated
        res.method_name = self.name

        if res.iterations == 0 and res.history:
            res.iterations = len(res.history)

        self.logger.info(f"END {self.name} | best={res.best_fitness} | iters={res.iterations} | time={res.time_sec:.3f}s")
        return res

    @abstractmethod
    def solve(
        self,
        problem: Any,
        params: Dict[str, Any],
        progress_cb: Optional[ProgressCallback] = None,
        seed: Optional[int] = None,
    ) -> MethodResult:
        raise NotImplementedError
