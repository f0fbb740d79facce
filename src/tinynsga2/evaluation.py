"""Batch evaluation of candidates.

This module provides:
- lift: apply a per-candidate evaluator to a batch of candidates
- lift_parallel: same, spread over joblib workers
- validate_objectives: enforce the evaluator contract on one result

Both lifted evaluators return a float64 array of shape (n, n_objectives)
whose rows are in the same order as the input candidates, regardless of the
order in which workers finish.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import numpy as np

from tinynsga2.exceptions import ContractViolation

logger = logging.getLogger(__name__)

T = TypeVar("T")

BatchEvaluator = Callable[[Sequence[Any]], np.ndarray]


def validate_objectives(values: Any, n_objectives: int) -> np.ndarray:
    """Convert one evaluator result to a float vector and check its contract.

    Args:
        values: Whatever the evaluator returned.
        n_objectives: Expected number of objectives.

    Returns:
        Float64 array of shape (n_objectives,).

    Raises:
        ContractViolation: If the result is not numeric, has the wrong shape,
            or contains NaN or infinite values.
    """
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ContractViolation(f"evaluate must return numeric values, got {values!r}") from e

    if vector.shape != (n_objectives,):
        raise ContractViolation(
            f"evaluate must return {n_objectives} objective values, got shape {vector.shape}",
            {"expected": n_objectives, "shape": vector.shape},
        )
    if not np.all(np.isfinite(vector)):
        raise ContractViolation(f"evaluate must return finite values, got {vector}", {"values": vector})

    return vector


def lift(fn: Callable[[T], Any], n_objectives: int) -> BatchEvaluator:
    """Lift a per-candidate evaluator to work on a batch of candidates.

    Args:
        fn: Evaluator for a single candidate.
            Signature: (candidate,) -> (n_objectives,)
        n_objectives: Number of values fn must return.

    Returns:
        A function mapping a sequence of n candidates to an array of shape
        (n, n_objectives).

    Example:
        >>> evaluate = lift(lambda x: [x, (x - 5) ** 2], n_objectives=2)
        >>> evaluate([0.0, 5.0])
        array([[ 0., 25.],
               [ 5.,  0.]])
    """

    def lifted(candidates: Sequence[T]) -> np.ndarray:
        rows = np.empty((len(candidates), n_objectives), dtype=np.float64)
        for i, candidate in enumerate(candidates):
            rows[i] = _checked(fn(candidate), n_objectives, i)
        return rows

    return lifted


def lift_parallel(fn: Callable[[T], Any], n_objectives: int, n_workers: int) -> BatchEvaluator:
    """Lift a per-candidate evaluator to a batch evaluator with parallel workers.

    Results are collected by joblib in submission order and only then written
    into the output array, so the outcome is identical to ``lift``.

    Args:
        fn: Evaluator for a single candidate. Must be picklable.
        n_objectives: Number of values fn must return.
        n_workers: Number of parallel workers. Use -1 for all CPU cores.

    Returns:
        A function mapping a sequence of n candidates to an array of shape
        (n, n_objectives).
    """
    from joblib import Parallel, delayed

    def lifted(candidates: Sequence[T]) -> np.ndarray:
        results: list[Any] = Parallel(n_jobs=n_workers)(  # type: ignore[assignment]
            delayed(fn)(candidate) for candidate in candidates
        )
        rows = np.empty((len(candidates), n_objectives), dtype=np.float64)
        for i, values in enumerate(results):
            rows[i] = _checked(values, n_objectives, i)
        return rows

    return lifted


def _checked(values: Any, n_objectives: int, position: int) -> np.ndarray:
    try:
        return validate_objectives(values, n_objectives)
    except ContractViolation as e:
        e.details["position"] = position
        logger.error("Evaluator contract violated for candidate %d: %s", position, e.message)
        raise
