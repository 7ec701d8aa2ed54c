import numpy as np
import pytest

from knapsack_pso.methods.pso import VELOCITY_LIMIT, PSOKnapsackSolver, PSOParameters, sigmoid
from knapsack_pso.problems.knapsack import Item, KnapsackProblem
from knapsack_pso.utils.seeding import NumpyRandomSource


def test_sigmoid():
    assert sigmoid(0.0) == pytest.approx(0.5)
    assert sigmoid(VELOCITY_LIMIT) == pytest.approx(1 / (1 + np.exp(-4)))
    assert sigmoid(-VELOCITY_LIMIT) < 0.02


def test_initialization_draws_positions_then_velocities(scripted):
    items = [Item(1, "a", 1, 10), Item(2, "b", 1, 5)]
    # particle 1: bits (0.9 -> 1, 0.2 -> 0), velocities (0.75 -> 0.5, 0.0 -> -1.0)
    # particle 2: bits (0.6 -> 1, 0.7 -> 1), velocities (0.5 -> 0.0, 0.25 -> -0.5)
    rng = scripted([0.9, 0.2, 0.75, 0.0, 0.6, 0.7, 0.5, 0.25])
    solver = PSOKnapsackSolver(items, 3, PSOParameters(num_particles=2, max_iterations=0), rng=rng)

    p1, p2 = solver.particles
    assert p1.position.tolist() == [1, 0]
    assert p1.velocity.tolist() == pytest.approx([0.5, -1.0])
    assert p2.position.tolist() == [1, 1]
    assert p2.velocity.tolist() == pytest.approx([0.0, -0.5])
    assert p1.best_fitness == 10 and p2.best_fitness == 15
    assert solver.global_best_fitness == 15
    assert solver.global_best_position.tolist() == [1, 1]
    assert rng.remaining == 0


def test_initial_tie_keeps_first_particle(scripted):
    items = [Item(1, "a", 1, 10), Item(2, "b", 1, 10)]
    rng = scripted([0.9, 0.1, 0.5, 0.5, 0.1, 0.9, 0.5, 0.5])
    solver = PSOKnapsackSolver(items, 3, PSOParameters(num_particles=2, max_iterations=0), rng=rng)
    assert solver.global_best_position.tolist() == [1, 0]


def test_personal_best_is_a_copy(scripted):
    rng = scripted([0.9, 0.75])
    solver = PSOKnapsackSolver([Item(1, "a", 1, 10)], 2, PSOParameters(num_particles=1, max_iterations=0), rng=rng)
    p = solver.particles[0]
    p.position[0] = 0
    assert p.best_position.tolist() == [1]
    assert solver.global_best_position.tolist() == [1]


def test_single_update_follows_velocity_rule(scripted):
    # init: bit 0.9 -> 1, velocity 0.75 -> 0.5 ; update: r1, r2, u
    rng = scripted([0.9, 0.75, 0.5, 0.5, 0.9])
    params = PSOParameters(num_particles=1, max_iterations=1, w=0.5, c1=1.0, c2=1.0)
    solver = PSOKnapsackSolver([Item(1, "a", 1, 10)], 2, params, rng=rng)
    result = solver.optimize()

    p = solver.particles[0]
    # v = 0.5 * 0.5 + 0 + 0 ; sigmoid(0.25) ~ 0.562 <= 0.9 -> bit drops to 0
    assert p.velocity[0] == pytest.approx(0.25)
    assert p.position.tolist() == [0]
    assert p.fitness == 0
    assert p.best_fitness == 10
    assert p.best_position.tolist() == [1]
    assert result.best_position == (1,)
    assert result.convergence_history == (10.0,)
    assert rng.remaining == 0


def test_velocity_is_clamped(scripted):
    rng = scripted([0.9, 0.75, 0.0, 0.0, 0.0])
    params = PSOParameters(num_particles=1, max_iterations=1, w=10.0, c1=1.0, c2=1.0)
    solver = PSOKnapsackSolver([Item(1, "a", 1, 10)], 2, params, rng=rng)
    solver.optimize()
    assert solver.particles[0].velocity[0] == VELOCITY_LIMIT

    rng = scripted([0.9, 0.25, 0.0, 0.0, 0.99])
    solver = PSOKnapsackSolver([Item(1, "a", 1, 10)], 2, params, rng=rng)
    solver.optimize()
    assert solver.particles[0].velocity[0] == -VELOCITY_LIMIT


def test_later_particle_sees_global_best_from_same_iteration(scripted):
    # both particles start empty with zero velocity; gbest = [0], fitness 0
    init = [0.1, 0.5, 0.1, 0.5]
    # particle A: v = 0 -> p = 0.5, u = 0.2 -> bit 1, new gbest [1]
    step_a = [0.0, 0.0, 0.2]
    # particle B: v = c2 * 0.5 * (1 - 0) = 1.0 -> p ~ 0.731, u = 0.7 -> bit 1
    step_b = [0.0, 0.5, 0.7]
    rng = scripted(init + step_a + step_b)
    params = PSOParameters(num_particles=2, max_iterations=1, w=1.0, c1=1.0, c2=2.0)
    solver = PSOKnapsackSolver([Item(1, "a", 1, 10)], 2, params, rng=rng)

    solver.optimize()
    a, b = solver.particles
    assert a.position.tolist() == [1]
    assert b.velocity[0] == pytest.approx(1.0)
    assert b.position.tolist() == [1]
    assert solver.convergence_history == [10.0]


def test_zero_items_is_degenerate_but_safe(scripted):
    rng = scripted([])
    solver = PSOKnapsackSolver([], 0, PSOParameters(num_particles=5, max_iterations=4), rng=rng)
    assert solver.global_best_fitness == 0
    result = solver.optimize()
    assert result.best_fitness == 0
    assert result.best_position == ()
    assert result.selected_items == ()
    assert result.total_weight == 0 and result.total_value == 0
    assert result.convergence_history == (0.0, 0.0, 0.0, 0.0)


def test_zero_iterations_returns_initial_best():
    items = [Item(1, "a", 2, 3), Item(2, "b", 1, 4), Item(3, "c", 4, 9)]
    solver = PSOKnapsackSolver(items, 4, PSOParameters(num_particles=6, max_iterations=0), rng=NumpyRandomSource(3))
    before_fitness = solver.global_best_fitness
    before_position = solver.global_best_position.tolist()

    result = solver.optimize()
    assert result.convergence_history == ()
    assert result.best_fitness == before_fitness
    assert list(result.best_position) == before_position


@pytest.mark.parametrize("iters", [0, 1, 7, 25])
def test_history_length_matches_iterations(three_items, iters):
    solver = PSOKnapsackSolver(three_items, 3.5, PSOParameters(num_particles=4, max_iterations=iters), rng=NumpyRandomSource(0))
    assert len(solver.optimize().convergence_history) == iters


def test_personal_and_global_bests_never_decrease():
    p = KnapsackProblem.default()
    solver = PSOKnapsackSolver.from_problem(p, PSOParameters(num_particles=15, max_iterations=0), rng=NumpyRandomSource(11))

    gbest = solver.global_best_fitness
    for _ in range(40):
        for particle in solver.particles:
            before = particle.best_fitness
            solver.update_particle(particle)
            assert particle.best_fitness >= before
            assert particle.best_fitness >= particle.fitness
            assert particle.best_fitness == solver.evaluate_fitness(particle.best_position)
            assert solver.global_best_fitness >= gbest
            gbest = solver.global_best_fitness

    assert all(solver.global_best_fitness >= q.best_fitness for q in solver.particles)


def test_convergence_history_is_non_decreasing():
    solver = PSOKnapsackSolver.from_problem(
        KnapsackProblem.default(), PSOParameters(num_particles=10, max_iterations=60), rng=NumpyRandomSource(5)
    )
    hist = solver.optimize().convergence_history
    assert all(b >= a for a, b in zip(hist, hist[1:]))


def test_result_is_consistent_with_fitness():
    problem = KnapsackProblem.default()
    solver = PSOKnapsackSolver.from_problem(problem, PSOParameters(num_particles=20, max_iterations=50), rng=NumpyRandomSource(9))
    result = solver.optimize()

    assert result.total_value == sum(it.value for it in result.selected_items)
    assert result.total_weight == sum(it.weight for it in result.selected_items)
    assert result.best_fitness == problem.evaluate(result.best_position)
    assert result.selected_ids == [it.id for it, bit in zip(problem.items, result.best_position) if bit == 1]
    assert result.convergence_history[-1] == result.best_fitness


def test_result_is_frozen(three_items):
    result = PSOKnapsackSolver(three_items, 3.5, PSOParameters(num_particles=3, max_iterations=2), rng=NumpyRandomSource(1)).optimize()
    with pytest.raises(AttributeError):
        result.best_fitness = 0


def test_solver_does_not_follow_later_problem_edits():
    problem = KnapsackProblem.default()
    solver = PSOKnapsackSolver.from_problem(problem, PSOParameters(num_particles=5, max_iterations=3), rng=NumpyRandomSource(2))
    problem.add_item("Extra", 0.1, 10)
    result = solver.optimize()
    assert len(result.best_position) == 8


def test_progress_callback_sees_every_iteration(three_items):
    seen = []
    solver = PSOKnapsackSolver(three_items, 3.5, PSOParameters(num_particles=5, max_iterations=12), rng=NumpyRandomSource(4))
    result = solver.optimize(progress_cb=lambda it, best, extra: seen.append((it, best, extra["feasible"])))
    assert [s[0] for s in seen] == list(range(1, 13))
    assert tuple(s[1] for s in seen) == result.convergence_history


def test_needs_at_least_one_particle(three_items):
    with pytest.raises(ValueError, match="num_particles"):
        PSOKnapsackSolver(three_items, 3.5, PSOParameters(num_particles=0))


def test_same_seed_same_run(three_items):
    params = PSOParameters(num_particles=8, max_iterations=20)
    a = PSOKnapsackSolver(three_items, 3.5, params, rng=NumpyRandomSource(123)).optimize()
    b = PSOKnapsackSolver(three_items, 3.5, params, rng=NumpyRandomSource(123)).optimize()
    assert a == b


def test_three_item_scenario_finds_good_solutions(three_items):
    params = PSOParameters(num_particles=20, max_iterations=50, w=0.7, c1=1.5, c2=1.5)
    values = []
    for seed in range(100):
        res = PSOKnapsackSolver(three_items, 3.5, params, rng=NumpyRandomSource(seed)).optimize()
        values.append(res.total_value)

    # at least as good as the phone alone
    assert sum(v >= 800 for v in values) >= 95
    # laptop + phone fills capacity 3.5 exactly and is the best feasible pick
    assert sum(v == 2300 for v in values) >= 80
