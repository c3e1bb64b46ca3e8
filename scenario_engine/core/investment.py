"""Investment growth with regular monthly contributions and one-time injections."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List

from scenario_engine.core.timevalue import periodic_rate, require_finite
from scenario_engine.models import (
    AccumulationResult,
    YearOffsetPayment,
    YearSnapshot,
    totals_by_timing,
)
from scenario_engine.results import InvalidInputError, calculation

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


@calculation
def calculate_investment_with_one_time_payments(
    monthly_payment: float,
    annual_rate: float,
    years: int,
    one_time_payments: Iterable[YearOffsetPayment] = (),
) -> AccumulationResult:
    """
    Simulate the investment month by month and record one snapshot per year.

    Order of operations (per year y >= 1):
      1) 12 monthly steps: value = value * (1 + annual_rate/12) + monthly_payment.
      2) Add the one-time amounts scheduled for year y, ungrown this year.
      3) Record the YearSnapshot.

    Year 0 skips step 1, so a year-0 injection shows up unchanged in
    breakdown[0]. One-time payments after ``years`` are never applied.
    """
    require_finite(monthly_payment=monthly_payment, annual_rate=annual_rate)
    if monthly_payment < 0:
        raise InvalidInputError(f"monthly_payment must be >= 0, got {monthly_payment!r}")
    if isinstance(years, bool) or not isinstance(years, int) or years < 0:
        raise InvalidInputError(f"years must be a non-negative integer, got {years!r}")

    monthly_rate = periodic_rate(annual_rate, MONTHS_PER_YEAR)
    injections = totals_by_timing(one_time_payments, YearOffsetPayment)
    total_months = years * MONTHS_PER_YEAR

    total_value = 0.0
    regular_contributions = 0.0
    one_time_contributions = 0.0
    breakdown: List[YearSnapshot] = []

    for year in range(years + 1):
        if year > 0:
            months_this_year = (total_months % MONTHS_PER_YEAR or MONTHS_PER_YEAR) if year == years else MONTHS_PER_YEAR
            for _ in range(months_this_year):
                total_value = total_value * (1 + monthly_rate) + monthly_payment
                regular_contributions += monthly_payment

        amount = injections.get(year, 0.0)
        if amount:
            total_value += amount
            one_time_contributions += amount

        breakdown.append(
            YearSnapshot(
                year=year,
                regular_contributions=regular_contributions,
                one_time_contributions=one_time_contributions,
                total_value=total_value,
            )
        )

    if not math.isfinite(total_value):
        raise InvalidInputError("investment value grew beyond floating-point range")

    ignored = sorted(year for year in injections if year > years)
    if ignored:
        logger.debug("one-time payments after year %s ignored: years %s", years, ignored)

    return AccumulationResult(future_value=total_value, breakdown=tuple(breakdown))
