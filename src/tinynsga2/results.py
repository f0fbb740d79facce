"""Result type for NSGA-II runs.

NSGA2Result bundles the final population snapshot with run counters. It is
immutable (frozen dataclass); the population it holds already copies its
arrays on construction.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from tinynsga2.population import Population

T = TypeVar("T")


@dataclass(frozen=True)
class NSGA2Result(Generic[T]):
    """Results from an NSGA-II multi-objective optimization run.

    Attributes:
        population: The population in rank order, with rank and crowding
            distance set for every individual.
        generations: Number of generations completed.
        evaluations: Total number of objective function evaluations performed.

    Example:
        >>> obj = np.array([[0.5, 0.5], [0.3, 0.7], [0.4, 0.8]])
        >>> pop = Population(
        ...     candidates=["a", "b", "c"],
        ...     objectives=obj,
        ...     rank=np.array([0, 0, 1]),
        ...     crowding_distance=np.array([np.inf, np.inf, np.inf]),
        ... )
        >>> result = NSGA2Result(population=pop, generations=100, evaluations=5000)
        >>> len(result.pareto_front)
        2
    """

    population: Population[T]
    generations: int
    evaluations: int

    def __post_init__(self) -> None:
        """Validate that the population carries rank and crowding distance.

        Raises:
            ValueError: If rank or crowding distance is missing, or a counter
                is negative.
        """
        if self.population.rank is None:
            raise ValueError("population must have rank computed")
        if self.population.crowding_distance is None:
            raise ValueError("population must have crowding_distance computed")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if self.evaluations < 0:
            raise ValueError(f"evaluations must be non-negative, got {self.evaluations}")

    @property
    def rank(self) -> np.ndarray:
        """Pareto rank for each individual, shape (n,). Rank 0 is the Pareto front."""
        assert self.population.rank is not None  # Guaranteed by __post_init__
        return self.population.rank

    @property
    def crowding_distance(self) -> np.ndarray:
        """Crowding distance for each individual within its front, shape (n,)."""
        assert self.population.crowding_distance is not None  # Guaranteed by __post_init__
        return self.population.crowding_distance

    @property
    def pareto_front(self) -> Population[T]:
        """Extract the Pareto front (rank-0 individuals) as a new Population."""
        return self.population.select(np.flatnonzero(self.rank == 0))
