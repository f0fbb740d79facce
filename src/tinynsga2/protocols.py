"""Protocol definitions for the caller-supplied collaborators of NSGA-II.

The optimizer never inspects a candidate. Everything it needs to know about
the problem comes from four callables supplied by the caller:

1. **Initializer**: creates a starting candidate.
2. **Evaluator**: scores a candidate on every objective (minimization).
3. **Crossover**: recombines two parents into two children.
4. **Mutator**: perturbs a child.

Every collaborator that may need randomness receives the optimizer's single
``np.random.Generator``; drawing from it (and from no other source) keeps a
seeded run reproducible.

Example:
    ```python
    def init(rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(0, 10, size=1)

    def evaluate(x: np.ndarray) -> np.ndarray:
        return np.array([x[0], (x[0] - 5) ** 2])

    def crossover(p1, p2, rng):
        w = rng.random()
        return w * p1 + (1 - w) * p2, (1 - w) * p1 + w * p2

    def mutate(x, rng):
        return np.clip(x + rng.normal(0, 0.1, size=x.shape), 0, 10)

    assert isinstance(crossover, Crossover)
    ```
"""

from typing import Protocol, TypeVar, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike

T = TypeVar("T")


@runtime_checkable
class Initializer(Protocol[T]):
    """Create a fresh candidate.

    Parameters:
        rng: The optimizer's random number generator.

    Returns:
        A new candidate object.
    """

    def __call__(self, rng: np.random.Generator, /) -> T: ...


@runtime_checkable
class Evaluator(Protocol[T]):
    """Score a candidate on every objective.

    Must be deterministic for a given candidate and must always return exactly
    n_objectives finite values; anything else aborts the run with a
    ContractViolation. For parallel evaluation the evaluator must be
    picklable.

    Parameters:
        candidate: The candidate to score. Must not be modified.

    Returns:
        Array-like of shape (n_objectives,). Lower is better.
    """

    def __call__(self, candidate: T, /) -> ArrayLike: ...


@runtime_checkable
class Crossover(Protocol[T]):
    """Recombine two parents into two children.

    The children must be new objects: returning either parent itself would let
    a later in-place mutation corrupt the current population.

    Parameters:
        parent_a: First parent (read-only).
        parent_b: Second parent (read-only).
        rng: The optimizer's random number generator.

    Returns:
        Tuple (child_a, child_b).
    """

    def __call__(self, parent_a: T, parent_b: T, rng: np.random.Generator, /) -> tuple[T, T]: ...


@runtime_checkable
class Mutator(Protocol[T]):
    """Perturb a freshly created child.

    The child may be modified in place; either way the mutated candidate must
    be returned.

    Parameters:
        candidate: The child to perturb.
        rng: The optimizer's random number generator.

    Returns:
        The mutated candidate.
    """

    def __call__(self, candidate: T, rng: np.random.Generator, /) -> T: ...
