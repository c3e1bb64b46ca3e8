"""Financial projection engine: pure calculations, no I/O."""

from scenario_engine.core.investment import calculate_investment_with_one_time_payments
from scenario_engine.core.irr import irr, npv
from scenario_engine.core.loan import (
    MAX_PERIODS,
    calculate_loan_with_one_time_payments,
    generate_amortization_schedule,
)
from scenario_engine.core.scenarios import summarize_investment, summarize_loan
from scenario_engine.core.timevalue import (
    annuity_future_value,
    annuity_present_value,
    effective_annual_rate,
    future_value,
    loan_payoff_periods,
    present_value,
    real_rate,
)

__all__ = [
    "MAX_PERIODS",
    "annuity_future_value",
    "annuity_present_value",
    "calculate_investment_with_one_time_payments",
    "calculate_loan_with_one_time_payments",
    "effective_annual_rate",
    "future_value",
    "generate_amortization_schedule",
    "irr",
    "loan_payoff_periods",
    "npv",
    "present_value",
    "real_rate",
    "summarize_investment",
    "summarize_loan",
]
