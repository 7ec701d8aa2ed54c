# ci\knapsack_pso\evaluation\statistics.py
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional

import pandas as pd
from scipy.stats import wilcoxon

from knapsack_pso.methods.base import BaseMethod
from knapsack_pso.methods.pso import BinaryPSO
from knapsack_pso.methods.result import MethodResult
from knapsack_pso.problems.knapsack import KnapsackProblem


def run_trials(
    problem: KnapsackProblem,
    params: Dict[str, Any],
    seeds: Iterable[int],
    method: Optional[BaseMethod] = None,
    label: Optional[str] = None,
    on_result: Optional[Callable[[int, MethodResult], None]] = None,
) -> pd.DataFrame:
    """
    One seeded run per seed; one row per run.
    Columns: method, seed, best_fitness, total_value, total_weight, feasible,
    time_sec, iterations, status.
    on_result(seed, result) sees every full MethodResult (history included).
    """
    method = method or BinaryPSO()
    label = label or method.name

    rows = []
    for seed in seeds:
        res = method.run(problem=problem, params=params, seed=seed)
        if on_result:
            on_result(seed, res)
        rows.append({
            "method": label,
            "seed": seed,
            "best_fitness": res.best_fitness,
            "total_value": res.metrics.get("total_value", 0.0),
            "total_weight": res.metrics.get("total_weight", 0.0),
            "feasible": bool(res.metrics.get("feasible", False)),
            "time_sec": res.time_sec,
            "iterations": res.iterations,
            "status": res.status,
        })

    return pd.DataFrame(rows, columns=[
        "method", "seed", "best_fitness", "total_value", "total_weight",
        "feasible", "time_sec", "iterations", "status",
    ])


def success_rate(df: pd.DataFrame, threshold: float, metric: str = "total_value") -> float:
    """Fraction of runs whose metric reached the threshold."""
    if metric not in df.columns:
        raise ValueError(f"Unknown metric column: {metric}. Found: {list(df.columns)}")
    if len(df) == 0:
        return 0.0
    return float((df[metric] >= threshold).mean())


def summarize_trials(df: pd.DataFrame) -> pd.DataFrame:
    summary = df.groupby("method")[["best_fitness", "time_sec"]].agg(["mean", "std", "min", "max"])
    summary.columns = [f"{col}_{stat}" for col, stat in summary.columns]
    summary["feasible_rate"] = df.groupby("method")["feasible"].mean()
    return summary


def wilcoxon_compare(
    df: pd.DataFrame,
    metric: str,
    method_a: str,
    method_b: str,
    alternative: str = "greater",   # maximize: "greater" means A > B
) -> Dict[str, Any]:
    """
    Wilcoxon signed-rank test on paired runs (same seeds) of two configurations.

    df needs the columns: method, seed, <metric> (e.g. best_fitness).

    alternative:
      - "greater":   method_a > method_b
      - "less":      method_a < method_b
      - "two-sided": any difference
    """
    required = {"method", "seed", metric}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Results missing columns: {missing}. Found: {list(df.columns)}")

    a = df[df["method"] == method_a].sort_values("seed")
    b = df[df["method"] == method_b].sort_values("seed")

    if len(a) == 0 or len(b) == 0:
        raise ValueError(f"Methods not found in results. Have: {df['method'].unique().tolist()}")

    if len(a) != len(b):
        raise ValueError(f"Sample size mismatch: {method_a}={len(a)} vs {method_b}={len(b)}")

    if not (a["seed"].to_numpy() == b["seed"].to_numpy()).all():
        raise ValueError("Seeds are not aligned between methods. Ensure paired runs by same seeds.")

    da = a[metric].to_numpy(dtype=float)
    db = b[metric].to_numpy(dtype=float)

    # zsplit copes with the many ties a converged knapsack run produces
    stat, p = wilcoxon(da, db, alternative=alternative, zero_method="zsplit")

    return {
        "metric": metric,
        "method_a": method_a,
        "method_b": method_b,
        "alternative": alternative,
        "n": int(len(da)),
        "a_values": da.tolist(),
        "b_values": db.tolist(),
        "statistic": float(stat),
        "p_value": float(p),
    }


def wilcoxon_compare_csv(
    csv_path: str,
    metric: str,
    method_a: str,
    method_b: str,
    alternative: str = "greater",
) -> Dict[str, Any]:
    df = pd.read_csv(csv_path)
    out = wilcoxon_compare(df, metric, method_a, method_b, alternative=alternative)
    out["csv_path"] = csv_path
    return out
