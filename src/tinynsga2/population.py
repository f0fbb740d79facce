"""Population snapshots handed out to callers.

This module provides the read-only data structures through which callers see
the state of an optimization run:

- Population: A struct-of-arrays snapshot of multiple individuals
- IndividualView: A read-only view of a single individual

Candidates are opaque caller-defined objects and are held by reference; all
numpy arrays are copied on construction so that later generations never
change a snapshot.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import numpy as np

T = TypeVar("T")


@dataclass(frozen=True)
class IndividualView(Generic[T]):
    """Read-only view of a single individual in a population.

    Attributes:
        candidate: The caller's candidate object.
        objectives: Objective values for this individual, shape (n_obj,).
        rank: Pareto front rank (0 = first front).
        crowding_distance: Crowding distance within its front.

    Example:
        >>> pop = Population(candidates=("a", "b"), objectives=np.array([[1.0], [2.0]]))
        >>> pop[0].candidate
        'a'
    """

    candidate: T
    objectives: np.ndarray
    rank: int | None
    crowding_distance: float | None


@dataclass(frozen=True)
class Population(Generic[T]):
    """Immutable struct-of-arrays snapshot of a population.

    Attributes:
        candidates: The caller's candidate objects, one per individual.
        objectives: Objective values, shape (n, n_obj).
        rank: Pareto front ranks, shape (n,), or None if not sorted.
        crowding_distance: Crowding distances, shape (n,), or None if not computed.

    Example:
        >>> obj = np.array([[0.5, 0.5], [0.3, 0.7], [0.4, 0.6]])
        >>> pop = Population(candidates=[1.0, 2.0, 3.0], objectives=obj)
        >>> len(pop)
        3
        >>> pop.n_obj
        2
    """

    candidates: Sequence[T]
    objectives: np.ndarray
    rank: np.ndarray | None = None
    crowding_distance: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If an array field is not a numpy array.
            ValueError: If array shapes are inconsistent or invalid.
        """
        candidates = tuple(self.candidates)
        n = len(candidates)
        object.__setattr__(self, "candidates", candidates)

        if not isinstance(self.objectives, np.ndarray):
            raise TypeError(f"objectives must be a numpy array, got {type(self.objectives).__name__}")
        if self.objectives.ndim != 2:
            raise ValueError(f"objectives must be 2D, got shape {self.objectives.shape}")
        if self.objectives.shape[0] != n:
            raise ValueError(f"objectives has {self.objectives.shape[0]} rows, expected {n} to match candidates")
        object.__setattr__(self, "objectives", self.objectives.copy())

        if self.rank is not None:
            _check_column("rank", self.rank, n)
            if not np.issubdtype(self.rank.dtype, np.integer):
                raise ValueError(f"rank must have integer dtype, got {self.rank.dtype}")
            object.__setattr__(self, "rank", self.rank.copy())

        if self.crowding_distance is not None:
            _check_column("crowding_distance", self.crowding_distance, n)
            if not np.issubdtype(self.crowding_distance.dtype, np.floating):
                raise ValueError(f"crowding_distance must have float dtype, got {self.crowding_distance.dtype}")
            object.__setattr__(self, "crowding_distance", self.crowding_distance.copy())

    def __len__(self) -> int:
        return len(self.candidates)

    def __getitem__(self, idx: int) -> IndividualView[T]:
        """Get a read-only view of a single individual.

        Args:
            idx: Index of the individual (supports negative indexing).

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")

        objectives = self.objectives[idx]
        objectives.flags.writeable = False
        return IndividualView(
            candidate=self.candidates[idx],
            objectives=objectives,
            rank=int(self.rank[idx]) if self.rank is not None else None,
            crowding_distance=float(self.crowding_distance[idx]) if self.crowding_distance is not None else None,
        )

    @property
    def n_obj(self) -> int:
        """Number of objectives per individual."""
        return self.objectives.shape[1]

    def select(self, indices: Any) -> "Population[T]":
        """Return a new Population containing only the given individuals.

        Args:
            indices: Integer index array (or list) into this population.
        """
        idx = np.asarray(indices, dtype=np.intp)
        return Population(
            candidates=[self.candidates[i] for i in idx],
            objectives=self.objectives[idx],
            rank=self.rank[idx] if self.rank is not None else None,
            crowding_distance=self.crowding_distance[idx] if self.crowding_distance is not None else None,
        )


def _check_column(name: str, values: Any, n: int) -> None:
    if not isinstance(values, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(values).__name__}")
    if values.ndim != 1:
        raise ValueError(f"{name} must be 1D, got shape {values.shape}")
    if values.shape[0] != n:
        raise ValueError(f"{name} has {values.shape[0]} elements, expected {n} to match candidates")
