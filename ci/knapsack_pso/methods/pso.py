from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .base import BaseMethod, Number, ProgressCallback
from .result import MethodResult, OptimizationResult
from knapsack_pso.problems.knapsack import Item, KnapsackProblem
from knapsack_pso.utils.logging import get_logger
from knapsack_pso.utils.seeding import NumpyRandomSource, RandomSource, set_global_seed

VELOCITY_LIMIT = 4.0


def sigmoid(v: float) -> float:
    return float(1.0 / (1.0 + np.exp(-v)))


@dataclass(frozen=True)
class PSOParameters:
    num_particles: int = 30
    max_iterations: int = 100
    w: float = 0.7   # inertia
    c1: float = 1.5  # cognitive
    c2: float = 1.5  # social

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "PSOParameters":
        return cls(
            num_particles=int(params["n_particles"]),
            max_iterations=int(params["max_iterations"]),
            w=float(params["w"]),
            c1=float(params["c1"]),
            c2=float(params["c2"]),
        )


@dataclass
class Particle:
    position: np.ndarray       # 0/1 per item
    velocity: np.ndarray
    best_position: np.ndarray  # personal best, own copy
    best_fitness: float
    fitness: float


class PSOKnapsackSolver:
    """
    Binary PSO for the 0/1 knapsack problem.

    Positions are bit vectors; velocities are real, clamped to
    [-VELOCITY_LIMIT, VELOCITY_LIMIT], and each bit is resampled with
    probability sigmoid(velocity) of being 1.

    The swarm is built in the constructor, so global_best_* is already a
    valid candidate before optimize() runs. Particles read the global best
    as it stands when they are updated: a particle later in the swarm sees
    improvements made earlier in the same iteration.
    """

    def __init__(
        self,
        items: Sequence[Item],
        capacity: float,
        params: PSOParameters,
        rng: Optional[RandomSource] = None,
    ):
        if params.num_particles < 1:
            raise ValueError(f"num_particles must be >= 1, got {params.num_particles}")

        self.problem = KnapsackProblem(items=list(items), capacity=capacity)
        self.items = self.problem.items
        self.capacity = self.problem.capacity
        self.params = params
        self.rng = rng if rng is not None else NumpyRandomSource()
        self.logger = get_logger("knapsack_pso")

        self.particles: List[Particle] = []
        self.global_best_position = np.zeros(0, dtype=int)
        self.global_best_fitness = float("-inf")
        self.convergence_history: List[float] = []

        self._initialize_swarm()

    @classmethod
    def from_problem(
        cls,
        problem: KnapsackProblem,
        params: PSOParameters,
        rng: Optional[RandomSource] = None,
    ) -> "PSOKnapsackSolver":
        return cls(problem.items, problem.capacity, params, rng=rng)

    def evaluate_fitness(self, position: Any) -> float:
        return self.problem.evaluate(position)

    def _initialize_swarm(self) -> None:
        n = len(self.items)
        for _ in range(self.params.num_particles):
            position = np.array([1 if self.rng.next_uniform() > 0.5 else 0 for _ in range(n)], dtype=int)
            velocity = np.array([self.rng.next_uniform() * 2.0 - 1.0 for _ in range(n)], dtype=float)
            fitness = self.evaluate_fitness(position)

            self.particles.append(Particle(
                position=position,
                velocity=velocity,
                best_position=position.copy(),
                best_fitness=fitness,
                fitness=fitness,
            ))

            if fitness > self.global_best_fitness:
                self.global_best_fitness = fitness
                self.global_best_position = position.copy()

        self.logger.debug(
            f"swarm ready | particles={len(self.particles)} items={n} gbest={self.global_best_fitness}"
        )

    def update_particle(self, particle: Particle) -> None:
        w, c1, c2 = self.params.w, self.params.c1, self.params.c2
        gbest = self.global_best_position

        for d in range(len(self.items)):
            r1 = self.rng.next_uniform()
            r2 = self.rng.next_uniform()

            v = (
                w * particle.velocity[d]
                + c1 * r1 * (particle.best_position[d] - particle.position[d])
                + c2 * r2 * (gbest[d] - particle.position[d])
            )
            v = max(-VELOCITY_LIMIT, min(VELOCITY_LIMIT, v))
            particle.velocity[d] = v

            particle.position[d] = 1 if self.rng.next_uniform() < sigmoid(v) else 0

        particle.fitness = self.evaluate_fitness(particle.position)

        if particle.fitness > particle.best_fitness:
            particle.best_position = particle.position.copy()
            particle.best_fitness = particle.fitness

        if particle.fitness > self.global_best_fitness:
            self.global_best_fitness = particle.fitness
            self.global_best_position = particle.position.copy()

    def optimize(self, progress_cb: Optional[ProgressCallback] = None) -> OptimizationResult:
        # a second call keeps evolving the same swarm; the result only carries this call's history
        start = len(self.convergence_history)

        for t in range(1, self.params.max_iterations + 1):
            for particle in self.particles:
                self.update_particle(particle)

            self.convergence_history.append(self.global_best_fitness)

            if progress_cb:
                progress_cb(t, self.global_best_fitness, {
                    "gbest": self.global_best_fitness,
                    "feasible": self.problem.is_feasible(self.global_best_position),
                })

        best_position = tuple(int(b) for b in self.global_best_position)
        selected = self.problem.selected_items(best_position)
        result = OptimizationResult(
            best_position=best_position,
            best_fitness=self.global_best_fitness,
            selected_items=selected,
            total_weight=sum(it.weight for it in selected),
            total_value=sum(it.value for it in selected),
            convergence_history=tuple(self.convergence_history[start:]),
        )
        self.logger.debug(
            f"optimize done | best={result.best_fitness} selected={result.selected_ids} weight={result.total_weight}"
        )
        return result


class BinaryPSO(BaseMethod):
    name = "BinaryPSO"

    @classmethod
    def default_params(cls) -> Dict[str, Any]:
        return {
            "n_particles": 30,       # 1-500
            "max_iterations": 100,   # 1-10000, 0 returns the initial swarm's best
            "w": 0.7,                # 0-2
            "c1": 1.5,               # 0-4
            "c2": 1.5,               # 0-4
        }

    @classmethod
    def param_schema(cls) -> Dict[str, Any]:
        return {
            "n_particles": {"type": int, "min": 1, "max": 500},
            "max_iterations": {"type": int, "min": 0, "max": 10000},
            "w": {"type": Number, "min": 0.0, "max": 2.0},
            "c1": {"type": Number, "min": 0.0, "max": 4.0},
            "c2": {"type": Number, "min": 0.0, "max": 4.0},
        }

    def solve(
        self,
        problem: Any,
        params: Dict[str, Any],
        progress_cb: Optional[ProgressCallback] = None,
        seed: Optional[int] = None,
    ) -> MethodResult:
        set_global_seed(seed)

        if not isinstance(problem, KnapsackProblem):
            rep = None
            if callable(getattr(problem, "info", None)):
                pinfo = problem.info()
                rep = pinfo.extra.get("representation") if pinfo.extra else None
            raise ValueError(f"BinaryPSO needs a KnapsackProblem (binary representation), got {rep or type(problem).__name__}")

        pso_params = PSOParameters.from_dict(params)
        solver = PSOKnapsackSolver.from_problem(problem, pso_params, rng=NumpyRandomSource(seed))
        out = solver.optimize(progress_cb=progress_cb)

        return MethodResult(
            method_name=self.name,
            best_solution=out,
            best_fitness=out.best_fitness,
            history=list(out.convergence_history),
            iterations=pso_params.max_iterations,
            status="ok",
            metrics={
                "total_weight": out.total_weight,
                "total_value": out.total_value,
                "n_selected": len(out.selected_items),
                "feasible": out.total_weight <= problem.capacity,
                "utilization": out.utilization(problem.capacity),
            },
        )
