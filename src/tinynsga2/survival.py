"""NSGA-II survivor selection.

This module implements the truncation step of NSGA-II: the combined
parent + offspring pool is split into Pareto fronts which are admitted
whole, best first, until the next front would overflow the survivor
count. That critical front is ordered by crowding distance so its most
isolated members survive.

The function works on an index permutation rather than on copies of the
population, so the caller's candidate and objective storage is never moved.
"""

import numpy as np

from tinynsga2.primitives import crowding_distance as front_crowding_distance
from tinynsga2.primitives import partition_front


def crowded_truncation(
    objectives: np.ndarray,
    order: np.ndarray,
    n_survivors: int,
    rank: np.ndarray,
    crowding_distance: np.ndarray,
) -> int:
    """Rearrange an index pool so that its first n_survivors entries survive.

    Fronts are extracted from ``order`` one at a time. Every extracted front
    gets fresh rank and crowding distance values, written into ``rank`` and
    ``crowding_distance`` at the front members' indices. Extraction stops as
    soon as the survivor count is reached; the front that straddles the cut is
    sorted by crowding distance descending (stable), so the boundary members of
    that front, which have infinite distance, are always kept.

    Args:
        objectives: Objective table. Shape (n, n_obj).
        order: Integer indices into ``objectives`` forming the pool; rearranged
            in place. After the call ``order[:n_survivors]`` are the survivors
            in rank order.
        n_survivors: Number of survivors to keep.
        rank: Rank table indexed like ``objectives``; updated in place for
            every member of an extracted front.
        crowding_distance: Crowding distance table indexed like
            ``objectives``; updated in place for every member of an extracted
            front.

    Returns:
        Number of fronts extracted.

    Raises:
        ValueError: If n_survivors is not positive or exceeds the pool size.

    Example:
        >>> objs = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 3.0], [4.0, 1.0]])
        >>> order = np.arange(4)
        >>> rank, cd = np.zeros(4, dtype=np.int64), np.zeros(4)
        >>> crowded_truncation(objs, order, 3, rank, cd)
        1
        >>> sorted(order[:3].tolist())
        [0, 1, 3]
    """
    n_pool = len(order)
    if n_survivors <= 0:
        raise ValueError(f"n_survivors must be positive, got {n_survivors}")
    if n_survivors > n_pool:
        raise ValueError(f"n_survivors ({n_survivors}) cannot exceed pool size ({n_pool})")

    start = 0
    current_rank = 0

    while start < n_survivors:
        front_end = partition_front(objectives, order, start, n_pool)
        front = order[start:front_end]

        rank[front] = current_rank
        crowding_distance[front] = front_crowding_distance(objectives[front])

        if front_end > n_survivors:
            # Critical front - most isolated members first
            by_distance = np.argsort(-crowding_distance[front], kind="stable")
            order[start:front_end] = front[by_distance]

        start = front_end
        current_rank += 1

    return current_rank
