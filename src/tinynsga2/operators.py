"""Real-coded genetic operators for vector candidates.

Optional helpers for problems whose candidates are 1-D float arrays:

- SBX (Simulated Binary Crossover): produces two children whose spread around
  the parents is controlled by a distribution index
- Polynomial Mutation: a bounded perturbation with controllable spread

Both are factories returning callables that match the Crossover and Mutator
protocols, drawing all randomness from the generator the optimizer passes in.
"""

from collections.abc import Callable

import numpy as np

from tinynsga2.exceptions import ConfigurationError

Bounds = tuple[float, float] | tuple[np.ndarray, np.ndarray]
"""Bounds for decision variables.

A scalar pair ``(lower, upper)`` applies the same bounds to all variables.
A pair of arrays ``(lower_array, upper_array)`` specifies per-variable bounds;
each array must have the same length as the decision vector.
"""


def _check_bounds(bounds: Bounds) -> tuple[np.ndarray, np.ndarray]:
    lower, upper = (np.asarray(b, dtype=np.float64) for b in bounds)
    if lower.shape != upper.shape:
        raise ConfigurationError(f"bounds must have matching shapes, got {lower.shape} and {upper.shape}")
    if np.any(lower >= upper):
        raise ConfigurationError(f"lower bounds must be below upper bounds, got {bounds}")
    return lower, upper


def sbx_crossover(
    eta: float = 15.0,
    prob: float = 1.0,
    bounds: Bounds = (0.0, 1.0),
) -> Callable[[np.ndarray, np.ndarray, np.random.Generator], tuple[np.ndarray, np.ndarray]]:
    """Create a Simulated Binary Crossover (SBX) operator.

    Args:
        eta: Distribution index (default 15.0). Higher values produce children
            closer to parents; lower values allow more exploration.
            Typical range: 2-20.
        prob: Probability that a pair of parents is recombined (default 1.0).
            Otherwise the children are copies of the parents.
        bounds: Lower and upper bounds for decision variables (default (0.0, 1.0)).
            Children are clipped to these bounds.

    Returns:
        A crossover function with signature (p1, p2, rng) -> (c1, c2).

    Raises:
        ConfigurationError: If eta is negative, prob is outside [0, 1] or the
            bounds are inconsistent.

    Example:
        >>> crossover = sbx_crossover(eta=15.0, bounds=(0.0, 1.0))
        >>> c1, c2 = crossover(np.array([0.2, 0.4]), np.array([0.3, 0.5]), np.random.default_rng(42))
        >>> c1.shape
        (2,)

    References:
        Deb, K., & Agrawal, R. B. (1995). Simulated binary crossover for
        continuous search space. Complex Systems, 9(2), 115-148.
    """
    if eta < 0:
        raise ConfigurationError(f"eta must be non-negative, got {eta}")
    if not 0.0 <= prob <= 1.0:
        raise ConfigurationError(f"prob must be in [0, 1], got {prob}")
    lower, upper = _check_bounds(bounds)
    exponent = 1.0 / (eta + 1.0)

    def crossover(p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
        if rng.random() >= prob:
            return p1.copy(), p2.copy()

        u = rng.random(len(p1))
        beta = np.where(u <= 0.5, (2.0 * u) ** exponent, (1.0 / (2.0 * (1.0 - u))) ** exponent)

        c1 = 0.5 * ((1.0 + beta) * p1 + (1.0 - beta) * p2)
        c2 = 0.5 * ((1.0 - beta) * p1 + (1.0 + beta) * p2)

        return np.clip(c1, lower, upper), np.clip(c2, lower, upper)

    return crossover


def polynomial_mutation(
    eta: float = 20.0,
    prob: float | None = None,
    bounds: Bounds = (0.0, 1.0),
) -> Callable[[np.ndarray, np.random.Generator], np.ndarray]:
    """Create a polynomial mutation operator.

    Polynomial mutation applies a bounded perturbation to each variable
    with probability prob. The spread of the mutation is controlled by
    the distribution index eta.

    Args:
        eta: Distribution index (default 20.0). Higher values produce smaller
            perturbations (more local search); lower values allow larger jumps.
            Typical range: 20-100.
        prob: Mutation probability per variable (default None, which uses 1/n_vars).
        bounds: Lower and upper bounds for decision variables (default (0.0, 1.0)).

    Returns:
        A mutation function with signature (x, rng) -> x'. The input is not
        modified.

    Raises:
        ConfigurationError: If eta is negative, prob is outside [0, 1] or the
            bounds are inconsistent.

    Example:
        >>> mutate = polynomial_mutation(eta=20.0, prob=0.1, bounds=(0.0, 1.0))
        >>> mutate(np.array([0.5, 0.5, 0.5]), np.random.default_rng(42)).shape
        (3,)

    References:
        Deb, K., & Goyal, M. (1996). A combined genetic adaptive search (GeneAS)
        for engineering design. Computer Science and Informatics, 26(4), 30-45.
    """
    if eta < 0:
        raise ConfigurationError(f"eta must be non-negative, got {eta}")
    if prob is not None and not 0.0 <= prob <= 1.0:
        raise ConfigurationError(f"prob must be in [0, 1], got {prob}")
    lower, upper = _check_bounds(bounds)
    delta_max = upper - lower

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        n_vars = len(x)
        mutation_prob = prob if prob is not None else 1.0 / n_vars

        mutation_mask = rng.random(n_vars) < mutation_prob
        u = rng.random(n_vars)

        if not np.any(mutation_mask):
            return x.copy()

        delta_l = (x - lower) / delta_max
        delta_r = (upper - x) / delta_max

        # Each branch is only valid on its own half of u
        with np.errstate(invalid="ignore"):
            # Mutation towards the lower bound
            xy_left = 1.0 - delta_l
            val_left = 2.0 * u + (1.0 - 2.0 * u) * (xy_left ** (eta + 1.0))
            delta_q_left = val_left ** (1.0 / (eta + 1.0)) - 1.0

            # Mutation towards the upper bound
            xy_right = 1.0 - delta_r
            val_right = 2.0 * (1.0 - u) + 2.0 * (u - 0.5) * (xy_right ** (eta + 1.0))
            delta_q_right = 1.0 - val_right ** (1.0 / (eta + 1.0))

            delta_q = np.where(u < 0.5, delta_q_left, delta_q_right)
        mutated = np.where(mutation_mask, x + delta_q * delta_max, x)

        return np.clip(mutated, lower, upper)

    return mutate
