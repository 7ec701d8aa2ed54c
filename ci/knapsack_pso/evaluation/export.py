# ci\knapsack_pso\evaluation\export.py

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict

import numpy as np

from knapsack_pso.methods.result import MethodResult, OptimizationResult


def _solution_payload(solution: Any) -> Any:
    if solution is None:
        return None
    if isinstance(solution, OptimizationResult):
        return solution.to_dict()
    return np.asarray(solution).tolist()


def save_result_json(path: str, result: MethodResult, extra: Dict[str, Any] | None = None) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "method_name": result.method_name,
        "best_fitness": float(result.best_fitness),
        "best_solution": _solution_payload(result.best_solution),
        "history": [float(x) for x in result.history],
        "metrics": result.metrics,
        "time_sec": float(result.time_sec),
        "iterations": int(result.iterations),
        "status": result.status,
        "params_used": result.params_used,
        "message": result.message,
    }
    if extra:
        payload["extra"] = extra

    p.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def load_result_json(path: str) -> Dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))
