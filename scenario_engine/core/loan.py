"""Loan amortization: payoff with one-time extra payments and plain schedules."""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from scenario_engine.core.timevalue import periodic_rate, require_finite
from scenario_engine.models import (
    AmortizationResult,
    MonthOffsetPayment,
    MonthSnapshot,
    SchedulePeriod,
    totals_by_timing,
)
from scenario_engine.results import (
    InsufficientPaymentError,
    InvalidInputError,
    calculation,
)

logger = logging.getLogger(__name__)

# hard ceiling on simulated periods
MAX_PERIODS = 1000
# balances at or below this are treated as paid off
PAYOFF_EPSILON = 0.01


def _validate_loan(principal: float, annual_rate: float, payment: float, payments_per_year: int) -> float:
    require_finite(principal=principal, annual_rate=annual_rate, payment=payment)
    if principal <= 0:
        raise InvalidInputError(f"principal must be positive, got {principal!r}")
    if payment <= 0:
        raise InvalidInputError(f"payment must be positive, got {payment!r}")
    rate = periodic_rate(annual_rate, payments_per_year)
    if payment <= principal * rate:
        raise InsufficientPaymentError(
            f"payment {payment:.2f} does not cover the first period's interest "
            f"{principal * rate:.2f}; the loan never amortizes"
        )
    return rate


def _not_amortized(balance: float) -> InsufficientPaymentError:
    return InsufficientPaymentError(
        f"balance {balance:.2f} still outstanding after {MAX_PERIODS} periods"
    )


@calculation
def calculate_loan_with_one_time_payments(
    principal: float,
    annual_rate: float,
    monthly_payment: float,
    one_time_payments: Iterable[MonthOffsetPayment] = (),
) -> AmortizationResult:
    """Simulate monthly payoff of ``principal``.

    ``total_payments`` counts the full scheduled payment every month, even when
    the final regular payment only needed part of it, plus the one-time amounts
    actually applied (each clamped to the balance left that month).
    """
    monthly_rate = _validate_loan(principal, annual_rate, monthly_payment, 12)
    extra_by_month = totals_by_timing(one_time_payments, MonthOffsetPayment)

    remaining_balance = float(principal)
    total_interest = 0.0
    total_payments = 0.0
    month = 0
    breakdown: List[MonthSnapshot] = []

    while remaining_balance > PAYOFF_EPSILON and month < MAX_PERIODS:
        month += 1

        interest_payment = remaining_balance * monthly_rate
        principal_payment = min(monthly_payment - interest_payment, remaining_balance)

        remaining_balance -= principal_payment
        total_interest += interest_payment
        total_payments += monthly_payment

        one_time_amount = min(extra_by_month.get(month, 0.0), remaining_balance)
        if one_time_amount > 0:
            remaining_balance -= one_time_amount
            total_payments += one_time_amount

        breakdown.append(
            MonthSnapshot(
                month=month,
                payment=monthly_payment,
                principal=principal_payment,
                interest=interest_payment,
                one_time_payment=one_time_amount,
                remaining_balance=max(0.0, remaining_balance),
            )
        )

        if remaining_balance <= 0:
            break

    if remaining_balance > PAYOFF_EPSILON:
        raise _not_amortized(remaining_balance)

    unused = sorted(m for m in extra_by_month if m > month)
    if unused:
        logger.debug("loan paid off in month %s; extra payments for months %s unused", month, unused)

    return AmortizationResult(
        total_months=month,
        total_interest=total_interest,
        total_payments=total_payments,
        breakdown=tuple(breakdown),
    )


@calculation
def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    payment_amount: float,
    payments_per_year: int = 12,
) -> Tuple[SchedulePeriod, ...]:
    """Period-by-period schedule for a fixed-payment loan.

    The last row's payment is only what was needed to clear the balance.
    """
    periodic = _validate_loan(principal, annual_rate, payment_amount, payments_per_year)

    remaining_balance = float(principal)
    schedule: List[SchedulePeriod] = []
    period = 0

    while remaining_balance > 0:
        if period >= MAX_PERIODS:
            raise _not_amortized(remaining_balance)
        period += 1

        interest_payment = remaining_balance * periodic
        principal_payment = min(payment_amount - interest_payment, remaining_balance)
        remaining_balance -= principal_payment

        schedule.append(
            SchedulePeriod(
                period=period,
                payment=principal_payment + interest_payment,
                principal=principal_payment,
                interest=interest_payment,
                remaining_balance=remaining_balance,
            )
        )

        # floating-point residue
        if remaining_balance < PAYOFF_EPSILON:
            break

    return tuple(schedule)
