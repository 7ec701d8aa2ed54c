# ci/knapsack_pso/methods/__init__.py
from .base import BaseMethod, ProgressCallback
from .result import MethodResult, OptimizationResult

from .pso import BinaryPSO, Particle, PSOKnapsackSolver, PSOParameters

__all__ = [
    "BaseMethod",
    "MethodResult",
    "OptimizationResult",
    "ProgressCallback",
    "BinaryPSO",
    "Particle",
    "PSOKnapsackSolver",
    "PSOParameters",
]
