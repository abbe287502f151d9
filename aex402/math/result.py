"""Result types for pool math."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from aex402.errors import MathResultError

T = TypeVar("T")


class MathError(Enum):
    """Types of pool math failures."""

    CONVERGENCE_FAILURE = "convergence_failure"
    DOMAIN_VIOLATION = "domain_violation"


@dataclass(frozen=True)
class MathResult(Generic[T]):
    """Result of a pool math calculation.

    Solvers and simulations return this instead of raising so that a failed
    calculation can never be confused with a legitimate zero, and so that
    multi-step pipelines (calc_d -> calc_y -> simulate_swap) short-circuit on
    the first failure.

    Attributes:
        value: The computed value, or None if the calculation failed.
        error: If calculation failed, the type of error that occurred.
        error_detail: Optional human-readable detail about the error.

    Examples:
        # Successful calculation, even a zero one
        result = MathResult.with_value(0)
        assert result.is_valid
        assert result.value == 0

        # Newton solver ran out of iterations
        result = MathResult.did_not_converge("calc_d: 255 iterations")
        assert result.error is MathError.CONVERGENCE_FAILURE
    """

    value: T | None
    error: MathError | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if calculation succeeded (even if value is 0)."""
        return self.error is None

    @property
    def is_error(self) -> bool:
        """True if calculation failed with an error."""
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, raising if the calculation failed.

        Raises:
            MathResultError: If this result carries an error
        """
        if self.error is not None:
            raise MathResultError(f"{self.error.value}: {self.error_detail}")
        return self.value  # type: ignore[return-value]

    @classmethod
    def with_value(cls, value: T) -> MathResult[T]:
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def with_error(cls, error: MathError, detail: str | None = None) -> MathResult[T]:
        """Create an error result."""
        return cls(value=None, error=error, error_detail=detail)

    @classmethod
    def did_not_converge(cls, detail: str | None = None) -> MathResult[T]:
        return cls.with_error(MathError.CONVERGENCE_FAILURE, detail)

    @classmethod
    def domain_violation(cls, detail: str | None = None) -> MathResult[T]:
        return cls.with_error(MathError.DOMAIN_VIOLATION, detail)
