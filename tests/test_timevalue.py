from __future__ import annotations

import math
from math import isclose

import pytest

from scenario_engine.core import (
    annuity_future_value,
    annuity_present_value,
    effective_annual_rate,
    future_value,
    loan_payoff_periods,
    present_value,
    real_rate,
)
from scenario_engine.results import (
    InsufficientPaymentError,
    InvalidInputError,
    InvalidRateError,
)


def test_future_value_annual_compounding():
    result = future_value(1000, 0.05, 10)

    assert result.ok
    assert isclose(result.value, 1000 * 1.05**10, rel_tol=1e-12)


def test_future_value_monthly_compounding():
    result = future_value(1000, 0.12, 2, 12)

    assert isclose(result.unwrap(), 1000 * 1.01**24, rel_tol=1e-12)


@pytest.mark.parametrize("rate", [0.01, 0.05, 0.12, 0.3])
@pytest.mark.parametrize("periods", [0, 1, 7, 30])
def test_present_value_undoes_future_value(rate, periods):
    grown = future_value(2500, rate, periods).unwrap()

    assert isclose(present_value(grown, rate, periods).unwrap(), 2500, rel_tol=1e-12)


def test_annuity_future_and_present_value_are_consistent():
    """The FV of an annuity is its PV carried forward n periods."""
    fv = annuity_future_value(500, 0.06, 30).unwrap()
    pv = annuity_present_value(500, 0.06, 30).unwrap()

    assert isclose(pv * (1 + 0.06 / 12) ** 360, fv, rel_tol=1e-9)


def test_annuity_zero_rate_returns_sum_of_payments():
    assert annuity_future_value(500, 0.0, 20, 12).unwrap() == 500 * 240
    assert annuity_present_value(500, 0.0, 20, 12).unwrap() == 500 * 240


def test_loan_payoff_periods_matches_closed_form():
    periods = loan_payoff_periods(20000, 0.05, 500).unwrap()

    expected = math.log(500 / (500 - 0.05 / 12 * 20000)) / math.log(1 + 0.05 / 12)
    assert isclose(periods, expected, rel_tol=1e-9)
    assert 43 < periods < 44


def test_loan_payoff_periods_zero_rate():
    assert loan_payoff_periods(12000, 0.0, 400).unwrap() == 30


def test_loan_payoff_periods_rejects_insufficient_payment():
    result = loan_payoff_periods(20000, 0.05, 80)

    assert not result.ok
    assert isinstance(result.error, InsufficientPaymentError)
    with pytest.raises(InsufficientPaymentError):
        result.unwrap()


def test_effective_annual_rate():
    assert isclose(effective_annual_rate(0.12, 12).unwrap(), 1.01**12 - 1, rel_tol=1e-12)
    assert isclose(effective_annual_rate(0.05, 1).unwrap(), 0.05, rel_tol=1e-12)


def test_real_rate():
    assert isclose(real_rate(0.07, 0.03).unwrap(), 1.07 / 1.03 - 1, rel_tol=1e-12)
    assert isclose(real_rate(0.03, 0.03).unwrap(), 0.0, abs_tol=1e-15)


def test_real_rate_rejects_total_deflation():
    assert isinstance(real_rate(0.05, -1.0).error, InvalidRateError)


def test_non_positive_growth_factor_is_invalid_rate():
    assert isinstance(future_value(100, -1.0, 5).error, InvalidRateError)
    assert isinstance(present_value(100, -24.0, 5, 12).error, InvalidRateError)
    assert isinstance(annuity_future_value(100, -12.0, 5).error, InvalidRateError)


@pytest.mark.parametrize("compounding", [0, -4, 2.5, True])
def test_bad_compounding_frequency_is_invalid_input(compounding):
    assert isinstance(future_value(100, 0.05, 5, compounding).error, InvalidInputError)


def test_non_finite_inputs_are_rejected():
    assert isinstance(future_value(float("nan"), 0.05, 5).error, InvalidInputError)
    assert isinstance(annuity_present_value(100, float("inf"), 5).error, InvalidInputError)


def test_overflow_is_reported_not_raised():
    result = future_value(1, 1e6, 1e6)

    assert isinstance(result.error, InvalidInputError)


def test_underflowing_discount_factor_is_reported_not_raised():
    assert isinstance(present_value(100, -0.99, 200).error, InvalidInputError)
    assert isinstance(present_value(100, 0.05, -20000).error, InvalidInputError)
