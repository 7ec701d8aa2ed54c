from knapsack_pso.evaluation.statistics import wilcoxon_compare_csv

if __name__ == "__main__":
    res = wilcoxon_compare_csv(
        csv_path="results/processed/benchmark_knapsack_default.csv",
        metric="best_fitness",
        method_a="pso_30x100",
        method_b="pso_10x30",
        alternative="greater",  # larger swarm / longer run should reach higher value
    )

    print("Wilcoxon signed-rank test (knapsack, default items)")
    print("statistic:", res["statistic"])
    print("p_value:", res["p_value"])
    print("A values:", res["a_values"])
    print("B values:", res["b_values"])
