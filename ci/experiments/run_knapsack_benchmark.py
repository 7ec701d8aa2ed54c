import os

import pandas as pd

from knapsack_pso.problems.knapsack import KnapsackProblem
from knapsack_pso.evaluation.export import save_result_json
from knapsack_pso.evaluation.plots import Plotter
from knapsack_pso.evaluation.statistics import run_trials, summarize_trials, success_rate, wilcoxon_compare
from knapsack_pso.utils.logging import print_experiment_header, print_results_table


CONFIGS = [
    ("pso_30x100", {"n_particles": 30, "max_iterations": 100, "w": 0.7, "c1": 1.5, "c2": 1.5}),
    ("pso_10x30", {"n_particles": 10, "max_iterations": 30, "w": 0.7, "c1": 1.5, "c2": 1.5}),
]


def run_benchmark(seeds=range(1, 21)):
    problem = KnapsackProblem.default()
    desc = problem.describe()
    seeds = list(seeds)

    os.makedirs("results/raw", exist_ok=True)
    os.makedirs("results/processed", exist_ok=True)

    frames = []
    histories = {}
    for idx, (label, params) in enumerate(CONFIGS, start=1):
        print_experiment_header(f"{problem.name_} / {label}", idx, len(CONFIGS))
        histories[label] = []

        def keep(seed, res, label=label):
            save_result_json(f"results/raw/{label}_default_seed{seed}.json", res, extra=desc)
            histories[label].append(res.history)
            print(f"{label} seed={seed} best={res.best_fitness:.1f} time={res.time_sec:.3f}s status={res.status}")

        frames.append(run_trials(problem, params, seeds, label=label, on_result=keep))

    df = pd.concat(frames, ignore_index=True)
    csv_path = "results/processed/benchmark_knapsack_default.csv"
    df.to_csv(csv_path, index=False)
    print(f"\nSaved summary -> {csv_path}")
    print(summarize_trials(df))

    top = df["total_value"].max()
    rows = []
    for label, _ in CONFIGS:
        sub = df[df["method"] == label]
        rows.append({
            "method": label,
            "best_fitness": sub["best_fitness"].mean(),
            "feasible": bool(sub["feasible"].all()),
            "time_sec": sub["time_sec"].mean(),
            "hit_rate": success_rate(sub, threshold=top),
        })
    print_results_table(rows, title="KNAPSACK BENCHMARK")

    test = wilcoxon_compare(df, "best_fitness", CONFIGS[0][0], CONFIGS[1][0], alternative="greater")
    print(f"Wilcoxon {test['method_a']} > {test['method_b']}: statistic={test['statistic']:.3f} p={test['p_value']:.4f}")

    fig = Plotter().plot_trials_convergence(histories, title="Default items: convergence over seeds")
    print(f"Plot -> {fig}")


if __name__ == "__main__":
    run_benchmark()
