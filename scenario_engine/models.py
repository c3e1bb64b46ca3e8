from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterable, Mapping, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from scenario_engine.results import InvalidInputError


class FrozenModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class OneTimePayment(FrozenModel):
    """A single non-recurring cash injection.

    The unit of ``timing`` is carried by the subclass: use
    :class:`YearOffsetPayment` for investments and :class:`MonthOffsetPayment`
    for loans.
    """

    period_unit: ClassVar[str] = "period"

    amount: float = Field(gt=0, allow_inf_nan=False)
    timing: int = Field(ge=0)
    description: str = ""


class YearOffsetPayment(OneTimePayment):
    period_unit: ClassVar[str] = "year"

    # year 0 is injected before any growth is applied
    timing: int = Field(ge=0)

    @property
    def year(self) -> int:
        return self.timing


class MonthOffsetPayment(OneTimePayment):
    period_unit: ClassVar[str] = "month"

    timing: int = Field(ge=1)

    @property
    def month(self) -> int:
        return self.timing


def totals_by_timing(
    payments: Iterable[Union[OneTimePayment, Mapping[str, Any]]],
    kind: Type[OneTimePayment],
) -> Dict[int, float]:
    """Validate ``payments`` as ``kind`` and sum their amounts per timing.

    Mappings are validated into ``kind``; a payment of the other unit is a
    programming error and raises ``TypeError``. Malformed entries raise
    :class:`InvalidInputError`.
    """
    totals: Dict[int, float] = {}
    for payment in payments:
        if isinstance(payment, OneTimePayment) and not isinstance(payment, kind):
            raise TypeError(
                f"{type(payment).__name__} is timed in {payment.period_unit}s, "
                f"expected {kind.period_unit}s"
            )
        try:
            validated = kind.model_validate(payment)
        except ValidationError as exc:
            raise InvalidInputError(f"invalid one-time payment {payment!r}: {exc}") from exc
        totals[validated.timing] = totals.get(validated.timing, 0.0) + validated.amount
    return totals


class YearSnapshot(FrozenModel):
    year: int = Field(ge=0)
    regular_contributions: float
    one_time_contributions: float
    total_value: float


class AccumulationResult(FrozenModel):
    future_value: float
    breakdown: Tuple[YearSnapshot, ...]


class MonthSnapshot(FrozenModel):
    month: int = Field(ge=1)
    payment: float
    principal: float
    interest: float
    one_time_payment: float
    remaining_balance: float = Field(ge=0)


class AmortizationResult(FrozenModel):
    total_months: int
    total_interest: float
    total_payments: float
    breakdown: Tuple[MonthSnapshot, ...]


class SchedulePeriod(FrozenModel):
    period: int = Field(ge=1)
    payment: float
    principal: float
    interest: float
    remaining_balance: float


class ChartPoint(FrozenModel):
    year: int
    value: float


class InvestmentSummary(FrozenModel):
    future_value: float
    regular_contributions: float
    one_time_contributions: float
    total_contributions: float
    interest_earned: float
    # value added on top of the plain monthly-annuity baseline
    one_time_impact: float
    chart: Tuple[ChartPoint, ...]
    breakdown: Tuple[YearSnapshot, ...]


class LoanSummary(FrozenModel):
    total_months: int
    years: int
    months: int
    total_payments: float
    total_interest: float
    extra_payments: float
    interest_saved: float
    chart: Tuple[ChartPoint, ...]
    breakdown: Tuple[MonthSnapshot, ...]
