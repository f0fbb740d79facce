"""Exception hierarchy for tinynsga2.

All library errors inherit from NSGA2Error so callers can catch them in one
place. The two concrete families mirror the two ways a run can fail:

- ConfigurationError: invalid settings, detected before any generation runs.
- ContractViolation: a caller-supplied collaborator (evaluate, crossover,
  mutate) broke its contract during a run. These are fatal and never retried.

Both also subclass the matching builtin (ValueError / RuntimeError), so
existing ``except ValueError`` handlers keep working.

Example:
    >>> try:
    ...     evolver.initialize(10)
    ... except ConfigurationError as e:
    ...     print(e.details["population_size"])
    10
"""

from typing import Any


class NSGA2Error(Exception):
    """Base exception for all tinynsga2 errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the failure (offending values, slot
            indices, ...). Empty dict when not provided.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(NSGA2Error, ValueError):
    """Raised when the optimizer is configured with invalid settings."""


class ContractViolation(NSGA2Error, RuntimeError):
    """Raised when a caller-supplied collaborator returns an unusable result."""
