"""Shared test fixtures for tinynsga2 tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- simple_population: Small population snapshot with rank/crowding computed
- Problem fixtures bundling init, evaluate, crossover and mutate
"""

import numpy as np
import pytest

from tinynsga2 import Population, crowding_distance, non_dominated_sort, polynomial_mutation, sbx_crossover


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_population() -> Population:
    """Create a simple population with objectives, rank, and crowding distance.

    This population has 4 individuals forming a single Pareto front.
    """
    objectives = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])

    ranks = non_dominated_sort(objectives)
    cd = np.zeros(len(objectives), dtype=np.float64)
    for r in range(int(ranks.max()) + 1):
        mask = ranks == r
        cd[mask] = crowding_distance(objectives[mask])

    return Population(candidates=["a", "b", "c", "d"], objectives=objectives, rank=ranks, crowding_distance=cd)


def _scalar_evaluate(x: np.ndarray) -> np.ndarray:
    return np.array([x[0], (x[0] - 5.0) ** 2])


@pytest.fixture
def scalar_problem():
    """Single real variable in [0, 10] with f1 = x and f2 = (x - 5)^2.

    The Pareto set is x in [0, 5]. Candidates are 1-element arrays.

    Returns:
        Dict with init, evaluate, crossover and mutate functions.
    """

    def init(rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(0.0, 10.0, size=1)

    return {
        "init": init,
        "evaluate": _scalar_evaluate,
        "crossover": sbx_crossover(eta=15.0, bounds=(0.0, 10.0)),
        "mutate": polynomial_mutation(eta=20.0, prob=1.0, bounds=(0.0, 10.0)),
    }


@pytest.fixture
def zdt1_problem():
    """ZDT1 multi-objective test problem.

    ZDT1 is a standard benchmark for multi-objective optimization with:
    - n_vars decision variables in [0, 1]
    - 2 objectives (minimize both)
    - Convex Pareto front

    Returns:
        Dict with init, evaluate, crossover, and mutate functions.
    """
    n_vars = 5

    def init(rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(0, 1, size=n_vars)

    def evaluate(x: np.ndarray) -> np.ndarray:
        f1 = x[0]
        g = 1 + 9 * np.mean(x[1:])
        f2 = g * (1 - np.sqrt(f1 / g))
        return np.array([f1, f2])

    return {
        "init": init,
        "evaluate": evaluate,
        "crossover": sbx_crossover(bounds=(0.0, 1.0)),
        "mutate": polynomial_mutation(bounds=(0.0, 1.0)),
    }


@pytest.fixture
def tracking_problem():
    """Problem whose collaborators record every call.

    Candidates are plain floats; crossover returns the parents' midpoint twice
    and mutate is the identity.

    Returns:
        Tuple of (problem dict, call log dict).
    """
    calls: dict[str, list] = {"init": [], "evaluate": [], "crossover": [], "mutate": []}

    def init(rng: np.random.Generator) -> float:
        value = float(rng.uniform(0.0, 10.0))
        calls["init"].append(value)
        return value

    def evaluate(x: float) -> list[float]:
        calls["evaluate"].append(x)
        return [x, (x - 5.0) ** 2]

    def crossover(a: float, b: float, rng: np.random.Generator) -> tuple[float, float]:
        calls["crossover"].append((a, b))
        mid = (a + b) / 2
        return mid, mid

    def mutate(x: float, rng: np.random.Generator) -> float:
        calls["mutate"].append(x)
        return x

    problem = {"init": init, "evaluate": evaluate, "crossover": crossover, "mutate": mutate}
    return problem, calls
