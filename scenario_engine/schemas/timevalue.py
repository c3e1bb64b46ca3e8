"""Data contracts for the closed-form and cash-flow endpoints."""

from typing import Annotated, List, Literal, Union

from pydantic import Field, TypeAdapter

from scenario_engine.core import (
    annuity_future_value,
    annuity_present_value,
    effective_annual_rate,
    future_value,
    loan_payoff_periods,
    present_value,
    real_rate,
)
from scenario_engine.models import FrozenModel
from scenario_engine.results import CalcResult


class FutureValueOperation(FrozenModel):
    operation: Literal["future-value"]
    present_value: float
    rate: float
    periods: float
    compounding_per_year: int = Field(1, ge=1)

    def evaluate(self) -> CalcResult[float]:
        return future_value(self.present_value, self.rate, self.periods, self.compounding_per_year)


class PresentValueOperation(FrozenModel):
    operation: Literal["present-value"]
    future_value: float
    rate: float
    periods: float
    compounding_per_year: int = Field(1, ge=1)

    def evaluate(self) -> CalcResult[float]:
        return present_value(self.future_value, self.rate, self.periods, self.compounding_per_year)


class AnnuityFutureValueOperation(FrozenModel):
    operation: Literal["annuity-future-value"]
    payment: float
    rate: float
    periods: float
    compounding_per_year: int = Field(12, ge=1)

    def evaluate(self) -> CalcResult[float]:
        return annuity_future_value(self.payment, self.rate, self.periods, self.compounding_per_year)


class AnnuityPresentValueOperation(FrozenModel):
    operation: Literal["annuity-present-value"]
    payment: float
    rate: float
    periods: float
    compounding_per_year: int = Field(12, ge=1)

    def evaluate(self) -> CalcResult[float]:
        return annuity_present_value(self.payment, self.rate, self.periods, self.compounding_per_year)


class LoanPayoffPeriodsOperation(FrozenModel):
    operation: Literal["loan-payoff-periods"]
    principal: float
    rate: float
    payment: float
    compounding_per_year: int = Field(12, ge=1)

    def evaluate(self) -> CalcResult[float]:
        return loan_payoff_periods(self.principal, self.rate, self.payment, self.compounding_per_year)


class EffectiveAnnualRateOperation(FrozenModel):
    operation: Literal["effective-annual-rate"]
    nominal_rate: float
    compounding_per_year: int = Field(..., ge=1)

    def evaluate(self) -> CalcResult[float]:
        return effective_annual_rate(self.nominal_rate, self.compounding_per_year)


class RealRateOperation(FrozenModel):
    operation: Literal["real-rate"]
    nominal_rate: float
    inflation_rate: float

    def evaluate(self) -> CalcResult[float]:
        return real_rate(self.nominal_rate, self.inflation_rate)


TimeValueRequest = Annotated[
    Union[
        FutureValueOperation,
        PresentValueOperation,
        AnnuityFutureValueOperation,
        AnnuityPresentValueOperation,
        LoanPayoffPeriodsOperation,
        EffectiveAnnualRateOperation,
        RealRateOperation,
    ],
    Field(discriminator="operation"),
]

time_value_request = TypeAdapter(TimeValueRequest)


class TimeValueResponse(FrozenModel):
    operation: str
    value: float


class NpvRequest(FrozenModel):
    rate: float = Field(..., description="Discount rate per period as a decimal.")
    cash_flows: List[float] = Field(..., description="Cash flows starting at t=0.")


class IrrRequest(FrozenModel):
    cash_flows: List[float] = Field(..., min_length=2)
    guess: float = 0.1
    max_iterations: int = Field(1000, ge=1, le=100_000)
    tolerance: float = Field(1e-7, gt=0)


class ValueResponse(FrozenModel):
    value: float


class IrrResponse(FrozenModel):
    rate: float
