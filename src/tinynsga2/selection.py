"""Binary tournament selection for NSGA-II."""

import numpy as np

from tinynsga2.primitives import Dominance, compare


def binary_tournament(
    a: int,
    b: int,
    objectives: np.ndarray,
    crowding_distance: np.ndarray,
    rng: np.random.Generator,
) -> int:
    """Pick the winner of a tournament between two individuals.

    Individuals are compared by:
    1. Pareto dominance (the dominating individual wins)
    2. If neither dominates, crowding distance (higher wins, for diversity)
    3. If distances are equal too, a fair coin flip drawn from rng

    The random source is only consumed in the third case.

    Args:
        a: Index of the first contestant.
        b: Index of the second contestant.
        objectives: Objective table indexed by a and b. Shape (n, n_obj).
        crowding_distance: Crowding distances indexed by a and b, computed for
            the fronts both contestants belong to. Shape (n,).
        rng: Random number generator for the final tie-break.

    Returns:
        The index of the winner (either a or b).

    Example:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0]])
        >>> binary_tournament(0, 1, objs, np.zeros(2), np.random.default_rng(0))
        0
    """
    outcome = compare(objectives[a], objectives[b])
    if outcome is not Dominance.NON_DOMINATED:
        return a if outcome is Dominance.A_DOMINATES else b

    if crowding_distance[a] != crowding_distance[b]:
        return a if crowding_distance[a] > crowding_distance[b] else b

    return a if rng.random() < 0.5 else b
