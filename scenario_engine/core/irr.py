"""Net present value and internal rate of return (Newton-Raphson)."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from scenario_engine.core.timevalue import require_finite
from scenario_engine.results import (
    InvalidInputError,
    InvalidRateError,
    NoConvergenceError,
    calculation,
)

logger = logging.getLogger(__name__)


def _cash_flows(cash_flows: Sequence[float]) -> List[float]:
    flows = list(cash_flows)
    for index, flow in enumerate(flows):
        require_finite(**{f"cash_flows[{index}]": flow})
    return flows


def _npv_and_derivative(rate: float, flows: Sequence[float]) -> Tuple[float, float]:
    value = 0.0
    derivative = 0.0
    for index, flow in enumerate(flows):
        value += flow / (1 + rate) ** index
        derivative -= index * flow / (1 + rate) ** (index + 1)
    return value, derivative


@calculation
def npv(rate: float, cash_flows: Sequence[float]) -> float:
    """Sum of ``cash_flows[i] / (1 + rate)^i``, with the first flow undiscounted."""
    require_finite(rate=rate)
    if 1 + rate == 0:
        raise InvalidRateError("rate of -1 discounts every future cash flow to infinity")
    flows = _cash_flows(cash_flows)
    return sum((flow / (1 + rate) ** index for index, flow in enumerate(flows)), 0.0)


@calculation
def irr(
    cash_flows: Sequence[float],
    guess: float = 0.1,
    max_iterations: int = 1000,
    tolerance: float = 1e-7,
) -> float:
    """Rate at which the NPV of ``cash_flows`` is zero.

    Parameters
    ----------
    cash_flows:
        Period cash flows starting at t=0; negative for outflows.
    guess:
        Starting rate for the Newton iterations.
    max_iterations:
        Iteration budget before giving up.
    tolerance:
        Convergence threshold on the size of the Newton step.

    Series with several sign changes can have several roots; the one returned
    is whichever the iterations reach from ``guess``.
    """
    flows = _cash_flows(cash_flows)
    require_finite(guess=guess, tolerance=tolerance)
    if len(flows) < 2:
        raise InvalidInputError("IRR needs at least two cash flows")
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise InvalidInputError(f"max_iterations must be an integer, got {max_iterations!r}")
    if max_iterations <= 0 or tolerance <= 0:
        raise InvalidInputError("max_iterations and tolerance must be positive")

    rate = float(guess)
    for iteration in range(1, max_iterations + 1):
        if 1 + rate == 0:
            raise NoConvergenceError(f"IRR iteration {iteration} reached rate -1")
        try:
            value, derivative = _npv_and_derivative(rate, flows)
        except (OverflowError, ZeroDivisionError) as exc:
            raise NoConvergenceError(f"IRR diverged at rate {rate!r}: {exc}") from exc

        logger.debug("IRR iter %s: rate=%s npv=%s deriv=%s", iteration, rate, value, derivative)
        if derivative == 0.0:
            raise NoConvergenceError(f"NPV derivative is zero at rate {rate!r}")

        new_rate = rate - value / derivative
        if abs(new_rate - rate) < tolerance:
            return new_rate
        rate = new_rate

    raise NoConvergenceError(f"IRR did not converge within {max_iterations} iterations")
