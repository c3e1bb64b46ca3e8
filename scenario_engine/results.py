"""Tagged success/error results returned by every calculation."""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CalculationError(ValueError):
    """Base class for reportable calculation failures."""

    code = "calculation_error"


class InvalidInputError(CalculationError):
    """An argument is outside the domain the calculation accepts."""

    code = "invalid_input"


class InvalidRateError(CalculationError):
    """The rate makes the formula undefined (zero or negative growth factor)."""

    code = "invalid_rate"


class InsufficientPaymentError(CalculationError):
    """The payment does not cover the interest, so the loan never amortizes."""

    code = "insufficient_payment"


class NoConvergenceError(CalculationError):
    """The root finder stopped without meeting its tolerance."""

    code = "no_convergence"


@dataclass(frozen=True)
class CalcResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[CalculationError] = None

    @classmethod
    def success(cls, value: T) -> "CalcResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CalculationError) -> "CalcResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def calculation(func: Callable[..., T]) -> Callable[..., CalcResult[T]]:
    """Run ``func`` and wrap its outcome in a :class:`CalcResult`.

    Domain failures raised inside the body come back as failures; anything
    else (``TypeError`` for a wrong payment kind, for instance) propagates.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> CalcResult[T]:
        try:
            value = func(*args, **kwargs)
        except (OverflowError, ZeroDivisionError) as exc:
            error: CalculationError = InvalidInputError(f"{func.__name__}: result out of range ({exc})")
        except CalculationError as exc:
            error = exc
        else:
            if isinstance(value, float) and not math.isfinite(value):
                error = InvalidInputError(f"{func.__name__}: result is not a finite number")
            else:
                return CalcResult.success(value)
        logger.debug("%s failed: %s", func.__name__, error)
        return CalcResult.failure(error)

    return wrapper
