"""NSGA-II primitives for Pareto-based ranking and diversity.

This module provides the core pure functions for NSGA-II:
- compare: three-way Pareto dominance comparison
- dominates: boolean dominance shortcut
- partition_front: in-place extraction of one Pareto front from an index pool
- pareto_fronts: all fronts of a pool, best first
- non_dominated_sort: front rank for every individual
- crowding_distance: diversity metric for solutions in a Pareto front

All functions follow the minimization convention (lower is better).
"""

from enum import IntEnum

import numpy as np


class Dominance(IntEnum):
    """Outcome of a Pareto dominance comparison between two vectors a and b."""

    B_DOMINATES = -1
    NON_DOMINATED = 0
    A_DOMINATES = 1


def compare(a: np.ndarray, b: np.ndarray) -> Dominance:
    """Compare two objective vectors under Pareto dominance (minimization).

    Two flags are computed over all objectives: ``less`` (a is strictly better
    somewhere) and ``greater`` (a is strictly worse somewhere). When exactly one
    flag is set the comparison is strict; when both flags are equal the vectors
    are mutually non-dominated, which covers both identical vectors and
    trade-offs.

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).

    Returns:
        Dominance.A_DOMINATES, Dominance.B_DOMINATES or Dominance.NON_DOMINATED.

    Raises:
        ValueError: If a and b have different shapes.

    Examples:
        >>> compare(np.array([1.0, 2.0]), np.array([2.0, 3.0]))
        <Dominance.A_DOMINATES: 1>
        >>> compare(np.array([1.0, 3.0]), np.array([2.0, 2.0]))
        <Dominance.NON_DOMINATED: 0>
    """
    if a.shape != b.shape:
        raise ValueError(f"objective vectors must have the same shape, got {a.shape} and {b.shape}")

    less = bool(np.any(a < b))
    greater = bool(np.any(a > b))

    if less == greater:
        return Dominance.NON_DOMINATED
    return Dominance.A_DOMINATES if less else Dominance.B_DOMINATES


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Check if solution a Pareto-dominates solution b (minimization).

    A solution a dominates b if and only if:
      - a[i] <= b[i] for ALL objectives (a is at least as good everywhere)
      - a[i] < b[i] for AT LEAST ONE objective (a is strictly better somewhere)

    Examples:
        >>> dominates(np.array([1.0, 2.0]), np.array([2.0, 3.0]))
        True
        >>> dominates(np.array([1.0, 3.0]), np.array([2.0, 2.0]))
        False
    """
    return compare(a, b) is Dominance.A_DOMINATES


def partition_front(objectives: np.ndarray, order: np.ndarray, start: int = 0, stop: int | None = None) -> int:
    """Move the first Pareto front of a pool to the front of its index range.

    The pool is ``order[start:stop]``, a slice of row indices into
    ``objectives``. After the call ``order[start:front_end]`` holds exactly the
    members not dominated by any other pool member, and ``order[front_end:stop]``
    holds the rest. Only ``order`` is modified, by swapping entries.

    The pool is scanned once. Each member is compared against the accepted
    front so far: accepted members it dominates are evicted back into the
    remainder, and it is itself accepted unless an accepted member dominates
    it. Worst case O(M^2) comparisons for a pool of size M.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        order: Integer index array into ``objectives``; rearranged in place.
        start: First position of the pool in ``order``.
        stop: One past the last position of the pool. Defaults to len(order).

    Returns:
        Position ``front_end`` such that ``order[start:front_end]`` is the front.
        Equals ``start`` only for an empty pool.

    Examples:
        >>> objs = np.array([[3.0, 3.0], [1.0, 2.0], [2.0, 1.0]])
        >>> order = np.arange(3)
        >>> end = partition_front(objs, order)
        >>> sorted(order[:end].tolist())
        [1, 2]
    """
    if stop is None:
        stop = len(order)

    front_end = start

    for i in range(start, stop):
        candidate = objectives[order[i]]
        dominated = False

        # Positions [start, front_end) hold the front, [front_end, i) the
        # processed remainder and [i, stop) the unprocessed pool.
        j = start
        while j < front_end:
            outcome = compare(candidate, objectives[order[j]])

            if outcome is Dominance.A_DOMINATES:
                front_end -= 1
                order[j], order[front_end] = order[front_end], order[j]
                # order[j] now holds a front member not yet compared
            elif outcome is Dominance.B_DOMINATES:
                dominated = True
                break
            else:
                j += 1

        if not dominated:
            order[i], order[front_end] = order[front_end], order[i]
            front_end += 1

    return front_end


def pareto_fronts(objectives: np.ndarray) -> list[np.ndarray]:
    """Split a pool into successive Pareto fronts.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        List of integer index arrays, front 0 (Pareto optimal) first. The fronts
        are disjoint and together cover every row of ``objectives``.

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [1.0, 3.0]])
        >>> [sorted(f.tolist()) for f in pareto_fronts(objs)]
        [[0], [1, 2]]
    """
    n = objectives.shape[0]
    order = np.arange(n, dtype=np.intp)
    fronts: list[np.ndarray] = []

    start = 0
    while start < n:
        front_end = partition_front(objectives, order, start, n)
        fronts.append(order[start:front_end].copy())
        start = front_end

    return fronts


def non_dominated_sort(objectives: np.ndarray) -> np.ndarray:
    """Assign each individual to a Pareto front.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Integer array of shape (n,) where rank[i] is the front index for
        individual i. Rank 0 = Pareto optimal (first front), rank 1 = second
        front, etc.

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        >>> non_dominated_sort(objs)
        array([0, 1, 2])
    """
    ranks = np.full(objectives.shape[0], -1, dtype=np.int64)
    for rank, front in enumerate(pareto_fronts(objectives)):
        ranks[front] = rank
    return ranks


def crowding_distance(front_objectives: np.ndarray) -> np.ndarray:
    """Compute crowding distance for individuals in a single Pareto front.

    Crowding distance measures how isolated a solution is in objective space.
    Higher values indicate more isolated solutions (preferred for diversity).
    Values are only comparable within the front they were computed for.

    For every objective the front is sorted ascending; the two boundary
    members receive infinite distance and every interior member adds the gap
    between its two neighbours, normalized by the objective's range over the
    front. An objective on which all members are tied has zero range and
    contributes exactly zero to every member: it has no boundary members, so
    it neither hands out infinities nor produces NaN.

    Args:
        front_objectives: Objective values for individuals in ONE front only.
            Shape (n_front, n_obj).

    Returns:
        Array of shape (n_front,) containing crowding distances.

    Examples:
        >>> objs = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> cd = crowding_distance(objs)
        >>> np.isinf(cd[0]) and np.isinf(cd[-1])  # Boundary points
        True
    """
    n_front = front_objectives.shape[0]

    if n_front == 0:
        return np.array([], dtype=np.float64)

    if n_front <= 2:
        # Every member is a boundary point
        return np.full(n_front, np.inf)

    n_obj = front_objectives.shape[1]
    distances = np.zeros(n_front, dtype=np.float64)

    for m in range(n_obj):
        sorted_indices = np.argsort(front_objectives[:, m], kind="stable")
        values = front_objectives[sorted_indices, m]

        obj_range = values[-1] - values[0]
        if obj_range == 0:
            continue

        distances[sorted_indices[0]] = np.inf
        distances[sorted_indices[-1]] = np.inf

        # values[2:] - values[:-2] is the neighbour gap of each interior member
        distances[sorted_indices[1:-1]] += (values[2:] - values[:-2]) / obj_range

    return distances
