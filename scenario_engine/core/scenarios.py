"""Headline figures for the investment and loan what-if scenarios."""

from __future__ import annotations

from typing import Iterable, List

from scenario_engine.core.investment import calculate_investment_with_one_time_payments
from scenario_engine.core.loan import calculate_loan_with_one_time_payments
from scenario_engine.core.timevalue import annuity_future_value, loan_payoff_periods
from scenario_engine.models import (
    AmortizationResult,
    ChartPoint,
    InvestmentSummary,
    LoanSummary,
    MonthOffsetPayment,
    YearOffsetPayment,
)
from scenario_engine.results import calculation


@calculation
def summarize_investment(
    monthly_payment: float,
    annual_rate: float,
    years: int,
    one_time_payments: Iterable[YearOffsetPayment] = (),
) -> InvestmentSummary:
    """Project the investment and compare it with the plain monthly annuity.

    ``one_time_impact`` is what the one-time contributions add over
    ``annuity_future_value(monthly_payment, annual_rate, years, 12)``.
    """
    result = calculate_investment_with_one_time_payments(
        monthly_payment, annual_rate, years, one_time_payments
    ).unwrap()
    baseline = annuity_future_value(monthly_payment, annual_rate, years, 12).unwrap()

    final = result.breakdown[-1]
    total_contributions = final.regular_contributions + final.one_time_contributions

    return InvestmentSummary(
        future_value=result.future_value,
        regular_contributions=final.regular_contributions,
        one_time_contributions=final.one_time_contributions,
        total_contributions=total_contributions,
        interest_earned=result.future_value - total_contributions,
        one_time_impact=result.future_value - baseline,
        chart=tuple(ChartPoint(year=row.year, value=row.total_value) for row in result.breakdown),
        breakdown=result.breakdown,
    )


def yearly_balances(principal: float, result: AmortizationResult) -> List[ChartPoint]:
    """Remaining balance at each year boundary, starting from ``principal`` at year 0."""
    points = [ChartPoint(year=0, value=principal)]
    years = -(-result.total_months // 12)
    for year in range(1, years + 1):
        month = min(year * 12, result.total_months)
        points.append(ChartPoint(year=year, value=result.breakdown[month - 1].remaining_balance))
    return points


@calculation
def summarize_loan(
    principal: float,
    annual_rate: float,
    monthly_payment: float,
    one_time_payments: Iterable[MonthOffsetPayment] = (),
) -> LoanSummary:
    """Project the payoff and measure what the extra payments saved.

    ``interest_saved`` compares against the closed-form payoff without extras:
    ``loan_payoff_periods(...) * monthly_payment - total_payments``.
    """
    result = calculate_loan_with_one_time_payments(
        principal, annual_rate, monthly_payment, one_time_payments
    ).unwrap()
    baseline_periods = loan_payoff_periods(principal, annual_rate, monthly_payment).unwrap()

    return LoanSummary(
        total_months=result.total_months,
        years=result.total_months // 12,
        months=result.total_months % 12,
        total_payments=result.total_payments,
        total_interest=result.total_interest,
        extra_payments=sum(row.one_time_payment for row in result.breakdown),
        interest_saved=baseline_periods * monthly_payment - result.total_payments,
        chart=tuple(yearly_balances(principal, result)),
        breakdown=result.breakdown,
    )
