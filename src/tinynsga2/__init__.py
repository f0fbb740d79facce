"""tinynsga2: A small, generic NSGA-II multi-objective optimizer.

Candidates can be any Python object; the caller supplies how to create,
evaluate, recombine and mutate them. The library provides Pareto dominance,
non-dominated sorting, crowding distance, binary tournament selection and the
generational loop.

Example (step by step with an Evolver):
    >>> import numpy as np
    >>> from tinynsga2 import Evolver, polynomial_mutation, sbx_crossover
    >>> def init(rng): return rng.uniform(0, 10, size=1)
    >>> def evaluate(x): return np.array([x[0], (x[0] - 5) ** 2])
    >>> evolver = Evolver(
    ...     init, evaluate,
    ...     sbx_crossover(bounds=(0.0, 10.0)),
    ...     polynomial_mutation(bounds=(0.0, 10.0)),
    ...     n_objectives=2,
    ...     rng=np.random.default_rng(42),
    ... )
    >>> evolver.initialize(20)
    >>> evolver.evolve(50)
    >>> evolver.population_size
    20

Example (one call):
    >>> from tinynsga2 import nsga2
    >>> result = nsga2(init, evaluate, sbx_crossover(bounds=(0.0, 10.0)),
    ...                polynomial_mutation(bounds=(0.0, 10.0)),
    ...                pop_size=20, n_generations=50, n_objectives=2, seed=42)
    >>> len(result.population)
    20
"""

from tinynsga2.algorithms import nsga2
from tinynsga2.evaluation import lift, lift_parallel
from tinynsga2.evolver import Evolver
from tinynsga2.exceptions import ConfigurationError, ContractViolation, NSGA2Error
from tinynsga2.operators import polynomial_mutation, sbx_crossover
from tinynsga2.population import IndividualView, Population
from tinynsga2.primitives import (
    Dominance,
    compare,
    crowding_distance,
    dominates,
    non_dominated_sort,
    pareto_fronts,
    partition_front,
)
from tinynsga2.protocols import Crossover, Evaluator, Initializer, Mutator
from tinynsga2.results import NSGA2Result
from tinynsga2.selection import binary_tournament
from tinynsga2.survival import crowded_truncation

__all__ = [
    # Algorithm
    "nsga2",
    "Evolver",
    # Primitives
    "Dominance",
    "compare",
    "dominates",
    "partition_front",
    "pareto_fronts",
    "non_dominated_sort",
    "crowding_distance",
    # Selection and survival
    "binary_tournament",
    "crowded_truncation",
    # Evaluation
    "lift",
    "lift_parallel",
    # Genetic operators
    "sbx_crossover",
    "polynomial_mutation",
    # Collaborator protocols
    "Initializer",
    "Evaluator",
    "Crossover",
    "Mutator",
    # Data structures
    "Population",
    "IndividualView",
    "NSGA2Result",
    # Errors
    "NSGA2Error",
    "ConfigurationError",
    "ContractViolation",
]
