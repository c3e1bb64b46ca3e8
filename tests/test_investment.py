from __future__ import annotations

from math import isclose

import pytest
from pydantic import ValidationError

from scenario_engine.core import annuity_future_value, calculate_investment_with_one_time_payments
from scenario_engine.models import MonthOffsetPayment, YearOffsetPayment
from scenario_engine.results import InvalidInputError, InvalidRateError


def project(monthly_payment, rate, years, payments=()):
    return calculate_investment_with_one_time_payments(monthly_payment, rate, years, payments).unwrap()


def test_breakdown_has_one_row_per_year_including_year_zero():
    result = project(500, 0.07, 10)

    assert [row.year for row in result.breakdown] == list(range(11))
    first = result.breakdown[0]
    assert (first.regular_contributions, first.one_time_contributions, first.total_value) == (0, 0, 0)
    assert result.future_value == result.breakdown[-1].total_value


def test_zero_years_returns_single_snapshot():
    result = project(500, 0.07, 0)

    assert len(result.breakdown) == 1
    assert result.future_value == 0


def test_year_zero_payment_is_injected_without_growth():
    result = project(0, 0.07, 0, [YearOffsetPayment(amount=1000, timing=0)])

    assert result.breakdown[0].total_value == 1000
    assert result.breakdown[0].one_time_contributions == 1000


def test_future_value_strictly_increases_with_horizon():
    values = [project(250, 0.05, years).future_value for years in range(0, 15)]

    assert all(later > earlier for earlier, later in zip(values, values[1:]))


def test_zero_rate_sums_contributions():
    """
    With no growth the balance is just monthly payments plus lump sums.
    """
    result = project(100, 0.0, 5, [YearOffsetPayment(amount=500, timing=2)])

    assert isclose(result.future_value, 100 * 12 * 5 + 500, abs_tol=1e-9)
    assert isclose(result.breakdown[-1].regular_contributions, 6000, abs_tol=1e-9)
    assert isclose(result.breakdown[-1].one_time_contributions, 500, abs_tol=1e-9)


def test_one_time_payment_starts_growing_the_following_year():
    result = project(0, 0.12, 2, [YearOffsetPayment(amount=1000, timing=1)])

    assert result.breakdown[1].total_value == 1000
    assert isclose(result.breakdown[2].total_value, 1000 * 1.01**12, rel_tol=1e-12)


def test_payment_beyond_horizon_is_ignored():
    base = project(300, 0.06, 10)
    with_late = project(300, 0.06, 10, [YearOffsetPayment(amount=10_000, timing=11)])

    assert with_late.future_value == base.future_value
    assert with_late.breakdown[-1].one_time_contributions == 0


def test_payments_in_same_year_add_up():
    split = project(
        200,
        0.05,
        8,
        [YearOffsetPayment(amount=1000, timing=3), YearOffsetPayment(amount=2000, timing=3)],
    )
    combined = project(200, 0.05, 8, [YearOffsetPayment(amount=3000, timing=3)])

    assert isclose(split.future_value, combined.future_value, rel_tol=1e-12)
    assert split.breakdown[3].one_time_contributions == 3000


def test_mappings_are_accepted_as_year_payments():
    result = project(0, 0.0, 3, [{"amount": 750, "timing": 2, "description": "bonus"}])

    assert result.future_value == 750


def test_matches_closed_form_annuity():
    """
    Both the simulation and the annuity formula add each payment at the end of
    a monthly step, so across 240 steps they agree up to rounding.
    """
    simulated = project(500, 0.07, 20).future_value
    closed_form = annuity_future_value(500, 0.07, 20, 12).unwrap()

    assert isclose(simulated, closed_form, rel_tol=1e-9)


def test_loan_payments_are_rejected_on_year_timeline():
    with pytest.raises(TypeError):
        calculate_investment_with_one_time_payments(100, 0.05, 5, [MonthOffsetPayment(amount=100, timing=3)])


def test_malformed_payment_is_invalid_input():
    result = calculate_investment_with_one_time_payments(100, 0.05, 5, [{"amount": -5, "timing": 1}])

    assert isinstance(result.error, InvalidInputError)


@pytest.mark.parametrize(
    "monthly_payment, years",
    [(-1, 5), (100, -1), (100, 2.5), (float("nan"), 5)],
)
def test_invalid_inputs_are_reported(monthly_payment, years):
    result = calculate_investment_with_one_time_payments(monthly_payment, 0.05, years)

    assert not result.ok
    assert isinstance(result.error, InvalidInputError)


def test_rate_wiping_out_balance_is_invalid_rate():
    result = calculate_investment_with_one_time_payments(100, -12.0, 5)

    assert isinstance(result.error, InvalidRateError)


def test_results_are_immutable():
    result = project(100, 0.05, 2)

    with pytest.raises(ValidationError):
        result.breakdown[0].total_value = 10.0
