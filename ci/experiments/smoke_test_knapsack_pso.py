from knapsack_pso.problems.knapsack import KnapsackProblem
from knapsack_pso.methods.pso import BinaryPSO
from knapsack_pso.evaluation.export import save_result_json
from knapsack_pso.evaluation.plots import Plotter


def cb(it, best, extra):
    if it % 10 == 0 or it == 1:
        print(f"iter={it} best={best:.2f} feasible={extra.get('feasible')}")


if __name__ == "__main__":
    p = KnapsackProblem.default()
    print(p.info())

    m = BinaryPSO()
    res = m.run(
        problem=p,
        params={
            "n_particles": 30,
            "max_iterations": 100,
            "w": 0.7,
            "c1": 1.5,
            "c2": 1.5,
        },
        progress_cb=cb,
        seed=42,
    )

    out = res.best_solution
    print("\nFINAL:", res.best_fitness, "status=", res.status, "iters=", res.iterations)
    print("selected:", [it.name for it in out.selected_items])
    print(f"weight={out.total_weight:.2f}/{p.capacity} ({out.utilization(p.capacity):.1f}%) value={out.total_value:.0f}")

    save_result_json(
        "results/raw/binarypso_default_items_seed42.json",
        res,
        extra=p.describe(),
    )
    print("Saved -> results/raw/binarypso_default_items_seed42.json")

    fig = Plotter().plot_convergence(res.history, title="BinaryPSO default items", filename="binarypso_default_seed42.png")
    print(f"Plot -> {fig}")
