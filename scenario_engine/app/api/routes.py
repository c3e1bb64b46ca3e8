"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from scenario_engine.core import (
    generate_amortization_schedule,
    irr,
    npv,
    summarize_investment,
    summarize_loan,
)
from scenario_engine.results import CalculationError
from scenario_engine.schemas.ping import PingResponse
from scenario_engine.schemas.scenarios import (
    AmortizationScheduleRequest,
    AmortizationScheduleResponse,
    InvestmentRequest,
    LoanRequest,
)
from scenario_engine.schemas.timevalue import (
    IrrRequest,
    IrrResponse,
    NpvRequest,
    TimeValueResponse,
    ValueResponse,
    time_value_request,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _dump(model) -> Any:
    return jsonify(model.model_dump(mode="json", by_alias=True))


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    """Report inputs the engine cannot project (e.g. a loan that never amortizes)."""
    logger.info("%s %s rejected: %s", request.method, request.path, exc)
    return jsonify({"error": exc.code, "detail": str(exc)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong")
    return jsonify(response.model_dump())


@api_bp.post("/calc/investment")
def investment() -> Any:
    """Investment growth with monthly contributions and one-time lump sums."""
    payload = InvestmentRequest.model_validate(_payload())
    summary = summarize_investment(
        payload.monthly_payment,
        payload.annual_rate,
        payload.years,
        payload.one_time_payments,
    ).unwrap()
    return _dump(summary)


@api_bp.post("/calc/loan")
def loan() -> Any:
    """Loan payoff with one-time extra payments."""
    payload = LoanRequest.model_validate(_payload())
    summary = summarize_loan(
        payload.principal,
        payload.annual_rate,
        payload.monthly_payment,
        payload.one_time_payments,
    ).unwrap()
    return _dump(summary)


@api_bp.post("/calc/amortization-schedule")
def amortization_schedule() -> Any:
    payload = AmortizationScheduleRequest.model_validate(_payload())
    schedule = generate_amortization_schedule(
        payload.principal,
        payload.annual_rate,
        payload.payment_amount,
        payload.payments_per_year,
    ).unwrap()
    return _dump(AmortizationScheduleResponse(schedule=schedule))


@api_bp.post("/calc/time-value")
def time_value() -> Any:
    """Closed-form primitives, selected by the ``operation`` field."""
    operation = time_value_request.validate_python(_payload())
    value = operation.evaluate().unwrap()
    return _dump(TimeValueResponse(operation=operation.operation, value=value))


@api_bp.post("/calc/npv")
def net_present_value() -> Any:
    payload = NpvRequest.model_validate(_payload())
    value = npv(payload.rate, payload.cash_flows).unwrap()
    return _dump(ValueResponse(value=value))


@api_bp.post("/calc/irr")
def internal_rate_of_return() -> Any:
    payload = IrrRequest.model_validate(_payload())
    rate = irr(
        payload.cash_flows,
        guess=payload.guess,
        max_iterations=payload.max_iterations,
        tolerance=payload.tolerance,
    ).unwrap()
    return _dump(IrrResponse(rate=rate))
