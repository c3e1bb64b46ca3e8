"""Data contracts for the investment and loan scenario endpoints."""

from typing import List, Tuple

from pydantic import Field

from scenario_engine.models import (
    FrozenModel,
    MonthOffsetPayment,
    SchedulePeriod,
    YearOffsetPayment,
)


class InvestmentRequest(FrozenModel):
    """Inputs for an investment growth projection."""

    monthly_payment: float = Field(..., ge=0, description="Contribution added every month.")
    annual_rate: float = Field(
        ...,
        gt=-1,
        le=1,
        description="Annualized return rate expressed as a decimal (e.g. 0.07 for 7%).",
    )
    years: int = Field(..., ge=0, le=100, description="Number of years to project.")
    one_time_payments: List[YearOffsetPayment] = Field(
        default_factory=list,
        description="Lump sums keyed by year; year 0 is invested up front.",
    )


class LoanRequest(FrozenModel):
    """Inputs for a loan payoff projection."""

    principal: float = Field(..., gt=0, description="Outstanding balance today.")
    annual_rate: float = Field(..., gt=-1, le=1, description="Annual interest rate as a decimal.")
    monthly_payment: float = Field(..., gt=0, description="Scheduled payment every month.")
    one_time_payments: List[MonthOffsetPayment] = Field(
        default_factory=list,
        description="Extra payments keyed by month, starting at month 1.",
    )


class AmortizationScheduleRequest(FrozenModel):
    """Inputs for a fixed-payment amortization schedule."""

    principal: float = Field(..., gt=0)
    annual_rate: float = Field(..., gt=-1, le=1)
    payment_amount: float = Field(..., gt=0)
    payments_per_year: int = Field(12, ge=1, le=365)


class AmortizationScheduleResponse(FrozenModel):
    schedule: Tuple[SchedulePeriod, ...]
