"""One-shot NSGA-II entry point.

``nsga2()`` wraps an Evolver in a single call: seed a generator, build and
evaluate the initial population, run the requested number of generations and
return an NSGA2Result. An optional callback sees the state at the start of
every generation and may stop the run early.

Example:
    >>> def init(rng):
    ...     return rng.uniform(0, 10, size=1)
    >>>
    >>> def evaluate(x):
    ...     return np.array([x[0], (x[0] - 5) ** 2])
    >>>
    >>> result = nsga2(
    ...     init=init,
    ...     evaluate=evaluate,
    ...     crossover=sbx_crossover(bounds=(0.0, 10.0)),
    ...     mutate=polynomial_mutation(bounds=(0.0, 10.0)),
    ...     pop_size=20,
    ...     n_generations=50,
    ...     n_objectives=2,
    ...     seed=42,
    ... )
    >>> len(result.population)
    20
"""

from collections.abc import Callable
from typing import TypeVar

import numpy as np

from tinynsga2.evolver import Evolver
from tinynsga2.exceptions import ConfigurationError
from tinynsga2.protocols import Crossover, Evaluator, Initializer, Mutator
from tinynsga2.results import NSGA2Result

T = TypeVar("T")


def nsga2(
    init: Initializer[T],
    evaluate: Evaluator[T],
    crossover: Crossover[T],
    mutate: Mutator[T],
    pop_size: int,
    n_generations: int,
    n_objectives: int,
    seed: int | None = None,
    callback: Callable[[NSGA2Result[T], int], bool] | None = None,
    n_workers: int = 1,
) -> NSGA2Result[T]:
    """Run NSGA-II multi-objective optimization.

    Args:
        init: Initialize one candidate.
            Signature: (rng,) -> candidate
        evaluate: Evaluate one candidate.
            Signature: (candidate,) -> (n_objectives,)
        crossover: Cross two parents to produce two children.
            Signature: (candidate, candidate, rng) -> (candidate, candidate)
        mutate: Mutate one child.
            Signature: (candidate, rng) -> candidate
        pop_size: Population size. Must be positive and divisible by 4.
        n_generations: Number of generations to run.
        n_objectives: Number of objectives returned by evaluate.
        seed: Random seed for reproducibility. If None, uses system entropy.
        callback: Optional callback called at the start of each generation.
            Signature: (result: NSGA2Result, generation: int) -> bool
            If callback returns True, optimization stops early.
        n_workers: Number of parallel workers for evaluation. Use 1 for sequential
            execution (default), -1 for all CPU cores, or any positive integer.
            Note: evaluate function must be picklable for parallel execution.

    Returns:
        NSGA2Result with the final population in rank order, the number of
        generations completed and the number of evaluations performed.

    Raises:
        ConfigurationError: If any setting is invalid. Raised before the
            first evaluation.
        ContractViolation: If a collaborator breaks its contract.
    """
    if n_generations < 0:
        raise ConfigurationError(f"n_generations must be non-negative, got {n_generations}")

    rng = np.random.default_rng(seed)
    evolver: Evolver[T] = Evolver(init, evaluate, crossover, mutate, n_objectives, rng, n_workers=n_workers)
    evolver.initialize(pop_size)

    for gen in range(n_generations):
        if callback is not None and callback(evolver.result(), gen):
            break
        evolver.evolve(1)

    return evolver.result()
