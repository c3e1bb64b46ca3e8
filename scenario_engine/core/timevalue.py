"""Closed-form time-value-of-money primitives.

Every function takes an annual rate as a decimal (0.07 for 7%) and converts it
to a periodic rate with ``rate / compounding_per_year``.
"""

from __future__ import annotations

import math

from scenario_engine.results import (
    InsufficientPaymentError,
    InvalidInputError,
    InvalidRateError,
    calculation,
)


def require_finite(**values: float) -> None:
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidInputError(f"{name} must be a finite number, got {value!r}")


def require_compounding(compounding_per_year: int) -> None:
    if (
        isinstance(compounding_per_year, bool)
        or not isinstance(compounding_per_year, int)
        or compounding_per_year <= 0
    ):
        raise InvalidInputError(
            f"compounding_per_year must be a positive integer, got {compounding_per_year!r}"
        )


def periodic_rate(rate: float, compounding_per_year: int) -> float:
    """Return ``rate / compounding_per_year``, rejecting non-positive growth factors."""
    require_compounding(compounding_per_year)
    r = rate / compounding_per_year
    if 1 + r <= 0:
        raise InvalidRateError(f"periodic growth factor 1 + {r!r} must be positive")
    return r


@calculation
def future_value(
    present_value: float,
    rate: float,
    periods: float,
    compounding_per_year: int = 1,
) -> float:
    """FV = PV * (1 + r/m)^(n*m)"""
    require_finite(present_value=present_value, rate=rate, periods=periods)
    r = periodic_rate(rate, compounding_per_year)
    return present_value * (1 + r) ** (periods * compounding_per_year)


@calculation
def present_value(
    future_value: float,
    rate: float,
    periods: float,
    compounding_per_year: int = 1,
) -> float:
    """PV = FV / (1 + r/m)^(n*m)"""
    require_finite(future_value=future_value, rate=rate, periods=periods)
    r = periodic_rate(rate, compounding_per_year)
    return future_value / (1 + r) ** (periods * compounding_per_year)


@calculation
def annuity_future_value(
    payment: float,
    rate: float,
    periods: float,
    compounding_per_year: int = 12,
) -> float:
    """Future value of ``periods * compounding_per_year`` equal end-of-period payments.

    A zero rate returns the limit of the formula, ``payment * n``.
    """
    require_finite(payment=payment, rate=rate, periods=periods)
    r = periodic_rate(rate, compounding_per_year)
    n = periods * compounding_per_year
    if r == 0:
        return payment * n
    return payment * ((1 + r) ** n - 1) / r


@calculation
def annuity_present_value(
    payment: float,
    rate: float,
    periods: float,
    compounding_per_year: int = 12,
) -> float:
    """Present value of an annuity: PMT * (1 - (1 + r)^-n) / r."""
    require_finite(payment=payment, rate=rate, periods=periods)
    r = periodic_rate(rate, compounding_per_year)
    n = periods * compounding_per_year
    if r == 0:
        return payment * n
    return payment * (1 - (1 + r) ** -n) / r


@calculation
def loan_payoff_periods(
    principal: float,
    rate: float,
    payment: float,
    compounding_per_year: int = 12,
) -> float:
    """Number of payments needed to retire ``principal``.

    ln(PMT / (PMT - r*P)) / ln(1 + r). The result is fractional; the last
    payment is partial.
    """
    require_finite(principal=principal, rate=rate, payment=payment)
    if principal <= 0:
        raise InvalidInputError(f"principal must be positive, got {principal!r}")
    if payment <= 0:
        raise InvalidInputError(f"payment must be positive, got {payment!r}")
    r = periodic_rate(rate, compounding_per_year)
    if payment <= r * principal:
        raise InsufficientPaymentError(
            f"payment {payment:.2f} does not cover periodic interest {r * principal:.2f}"
        )
    if r == 0:
        return principal / payment
    return math.log(payment / (payment - r * principal)) / math.log1p(r)


@calculation
def effective_annual_rate(nominal_rate: float, compounding_per_year: int) -> float:
    """EAR = (1 + r/m)^m - 1"""
    require_finite(nominal_rate=nominal_rate)
    r = periodic_rate(nominal_rate, compounding_per_year)
    return (1 + r) ** compounding_per_year - 1


@calculation
def real_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Inflation-adjusted rate via the Fisher relation."""
    require_finite(nominal_rate=nominal_rate, inflation_rate=inflation_rate)
    if inflation_rate <= -1:
        raise InvalidRateError(f"inflation_rate must be greater than -1, got {inflation_rate!r}")
    return (1 + nominal_rate) / (1 + inflation_rate) - 1
