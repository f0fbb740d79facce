"""Generational NSGA-II driver.

The Evolver owns all mutable state of a run in a fixed arena of 2P slots
(P = population size): a list of candidates, an objective table, a rank table
and a crowding distance table, all addressed through one integer permutation
``order``. Positions ``order[:P]`` address the current population in rank
order; positions ``order[P:]`` address free slots that receive the offspring
of the next generation. The arena is allocated once by ``initialize`` and
reused by every generation.

One generation:
    1. Two passes; each shuffles the population and, for every group of four,
       runs two binary tournaments and recombines the winners into two
       children, so every group of four parents yields four offspring.
    2. Every child is mutated.
    3. Every child is evaluated.
    4. Parents and offspring together form the combined pool of 2P slots.
    5. Fronts are extracted from the pool, best first, until P is reached.
    6. The front straddling P is ordered by crowding distance.
    7. ``order[:P]`` is the next population.

Offspring are only ever written into free slots, so a collaborator failure
part-way through a generation leaves the current population untouched.

Example:
    >>> rng = np.random.default_rng(42)
    >>> evolver = Evolver(init, evaluate, crossover, mutate, n_objectives=2, rng=rng)
    >>> evolver.initialize(20)
    >>> evolver.evolve(50)
    >>> front = evolver.pareto_front()
"""

import logging
from typing import Any, Generic, TypeVar

import numpy as np

from tinynsga2.evaluation import lift, lift_parallel
from tinynsga2.exceptions import ConfigurationError, ContractViolation
from tinynsga2.population import Population
from tinynsga2.protocols import Crossover, Evaluator, Initializer, Mutator
from tinynsga2.results import NSGA2Result
from tinynsga2.selection import binary_tournament
from tinynsga2.survival import crowded_truncation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Evolver(Generic[T]):
    """NSGA-II population evolver.

    Args:
        init: Creates one candidate. Signature: (rng,) -> candidate
        evaluate: Scores one candidate. Signature: (candidate,) -> (n_objectives,)
        crossover: Recombines two parents. Signature: (a, b, rng) -> (child_a, child_b)
            The children must be new objects. A returned parent is not detected;
            an in-place mutate would then change a current member without
            re-evaluating it.
        mutate: Perturbs one child. Signature: (candidate, rng) -> candidate
        n_objectives: Number of objectives N, fixed for the lifetime of the run.
        rng: The single random source of the run. Shuffles, tournament
            tie-breaks and every collaborator that needs randomness draw from
            it in a fixed order, so a seeded generator reproduces a run exactly.
        n_workers: Number of parallel workers for evaluation. Use 1 for
            sequential execution (default), -1 for all CPU cores. The evaluator
            must be picklable for parallel execution.

    Raises:
        ConfigurationError: If n_objectives < 1, n_workers is invalid or rng is
            not a numpy Generator.
    """

    def __init__(
        self,
        init: Initializer[T],
        evaluate: Evaluator[T],
        crossover: Crossover[T],
        mutate: Mutator[T],
        n_objectives: int,
        rng: np.random.Generator,
        n_workers: int = 1,
    ) -> None:
        if n_objectives < 1:
            raise ConfigurationError(f"n_objectives must be at least 1, got {n_objectives}")
        if n_workers < 1 and n_workers != -1:
            raise ConfigurationError(f"n_workers must be positive or -1 (all cores), got {n_workers}")
        if not isinstance(rng, np.random.Generator):
            raise ConfigurationError(f"rng must be a numpy Generator, got {type(rng).__name__}")

        self._init = init
        self._crossover = crossover
        self._mutate = mutate
        self._n_objectives = n_objectives
        self._rng = rng
        self._evaluate_batch = (
            lift_parallel(evaluate, n_objectives, n_workers) if n_workers != 1 else lift(evaluate, n_objectives)
        )

        self._population_size = 0
        self._candidates: list[Any] = []
        self._objectives = np.empty((0, n_objectives), dtype=np.float64)
        self._rank = np.empty(0, dtype=np.int64)
        self._crowding = np.empty(0, dtype=np.float64)
        self._order = np.empty(0, dtype=np.intp)
        self._shuffle = np.empty(0, dtype=np.intp)
        self._offspring: list[Any] = []
        self._generation = 0
        self._evaluations = 0

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def initialize(self, population_size: int) -> None:
        """Create, evaluate and rank a fresh population.

        Any previous run state is discarded. The new state only replaces the
        old one once every initial candidate has been evaluated.

        Args:
            population_size: Population size P. Must be positive and divisible
                by 4, since parents are recombined in groups of four.

        Raises:
            ConfigurationError: If population_size is invalid.
            ContractViolation: If the evaluator breaks its contract.
        """
        if population_size <= 0:
            raise ConfigurationError(
                f"population_size must be positive, got {population_size}", {"population_size": population_size}
            )
        if population_size % 4 != 0:
            raise ConfigurationError(
                f"population_size must be divisible by 4, got {population_size}", {"population_size": population_size}
            )

        n_slots = 2 * population_size
        candidates: list[Any] = [None] * n_slots
        objectives = np.zeros((n_slots, self._n_objectives), dtype=np.float64)
        rank = np.zeros(n_slots, dtype=np.int64)
        crowding = np.zeros(n_slots, dtype=np.float64)
        order = np.arange(n_slots, dtype=np.intp)

        for i in range(population_size):
            candidates[i] = self._init(self._rng)
        objectives[:population_size] = self._evaluate_batch(candidates[:population_size])

        # A view, so the ranking permutes the first half of order in place
        n_fronts = crowded_truncation(objectives, order[:population_size], population_size, rank, crowding)

        self._population_size = population_size
        self._candidates = candidates
        self._objectives = objectives
        self._rank = rank
        self._crowding = crowding
        self._order = order
        self._shuffle = np.empty(population_size, dtype=np.intp)
        self._offspring = [None] * population_size
        self._generation = 0
        self._evaluations = population_size

        logger.info(
            "Initialized population of %d with %d objectives (%d fronts)",
            population_size,
            self._n_objectives,
            n_fronts,
        )

    # ------------------------------------------------------------------
    # Evolution
    # ------------------------------------------------------------------

    def evolve(self, generations: int = 1) -> None:
        """Run a number of generations.

        Args:
            generations: Number of generations to run. 0 leaves every table
                untouched.

        Raises:
            ConfigurationError: If generations is negative or initialize() has
                not been called.
            ContractViolation: If a collaborator breaks its contract. The
                population from the last completed generation is kept.
        """
        if generations < 0:
            raise ConfigurationError(f"generations must be non-negative, got {generations}")
        if self._population_size == 0:
            raise ConfigurationError("initialize() must be called before evolve()")

        for _ in range(generations):
            self._step()

    def _step(self) -> None:
        n = self._population_size
        order = self._order
        shuffle = self._shuffle
        offspring = self._offspring

        for p in range(2):
            np.copyto(shuffle, order[:n])
            self._rng.shuffle(shuffle)

            for q in range(n // 4):
                a = binary_tournament(shuffle[4 * q], shuffle[4 * q + 1], self._objectives, self._crowding, self._rng)
                b = binary_tournament(shuffle[4 * q + 2], shuffle[4 * q + 3], self._objectives, self._crowding, self._rng)
                children = self._crossover(self._candidates[a], self._candidates[b], self._rng)
                offspring[4 * q + 2 * p], offspring[4 * q + 2 * p + 1] = self._unpack_children(children)

        for k in range(n):
            mutated = self._mutate(offspring[k], self._rng)
            if mutated is None:
                logger.error("Mutation returned None for offspring %d", k)
                raise ContractViolation("mutate must return the mutated candidate, got None", {"offspring": k})
            offspring[k] = mutated

        offspring_objectives = self._evaluate_batch(offspring)

        # Evaluation is complete for every child before any slot is written
        free_slots = order[n:]
        for k, slot in enumerate(free_slots):
            self._candidates[slot] = offspring[k]
        self._objectives[free_slots] = offspring_objectives

        crowded_truncation(self._objectives, order, n, self._rank, self._crowding)

        self._generation += 1
        self._evaluations += n

        logger.debug(
            "Generation %d: %d on first front, %d evaluations",
            self._generation,
            len(self.front_indices()),
            self._evaluations,
        )

    @staticmethod
    def _unpack_children(children: Any) -> tuple[Any, Any]:
        try:
            child_a, child_b = children
        except (TypeError, ValueError) as e:
            logger.error("Crossover returned %r instead of two children", children)
            raise ContractViolation(f"crossover must return two children, got {children!r}") from e
        return child_a, child_b

    # ------------------------------------------------------------------
    # Accessors (positions are rank indices into the current population)
    # ------------------------------------------------------------------

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def n_objectives(self) -> int:
        return self._n_objectives

    @property
    def generation(self) -> int:
        """Number of generations completed since initialize()."""
        return self._generation

    @property
    def evaluations(self) -> int:
        """Total number of evaluator calls since initialize()."""
        return self._evaluations

    def individual(self, i: int) -> T:
        """Candidate at rank index i (0 is on the first front)."""
        return self._candidates[self._slot(i)]

    def evaluation(self, i: int) -> np.ndarray:
        """Read-only copy of the objective vector of the candidate at rank index i."""
        values = self._objectives[self._slot(i)].copy()
        values.flags.writeable = False
        return values

    def rank(self, i: int) -> int:
        """Pareto front rank of the candidate at rank index i."""
        return int(self._rank[self._slot(i)])

    def crowding(self, i: int) -> float:
        """Crowding distance of the candidate at rank index i within its front."""
        return float(self._crowding[self._slot(i)])

    def front_indices(self) -> np.ndarray:
        """Rank indices of the current first front (the Pareto set)."""
        return np.flatnonzero(self._rank[self._order[: self._population_size]] == 0)

    def population(self) -> Population[T]:
        """Snapshot of the current population in rank order."""
        slots = self._order[: self._population_size]
        return Population(
            candidates=[self._candidates[s] for s in slots],
            objectives=self._objectives[slots],
            rank=self._rank[slots],
            crowding_distance=self._crowding[slots],
        )

    def pareto_front(self) -> Population[T]:
        """Snapshot of the current first front."""
        return self.population().select(self.front_indices())

    def result(self) -> NSGA2Result[T]:
        """Snapshot of the run so far."""
        return NSGA2Result(
            population=self.population(),
            generations=self._generation,
            evaluations=self._evaluations,
        )

    def _slot(self, i: int) -> int:
        if not 0 <= i < self._population_size:
            raise IndexError(f"index {i} is out of bounds for population with {self._population_size} individuals")
        return int(self._order[i])
