"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from investcalc.core.average_cost import compute_average_cost
from investcalc.core.compounding import simulate_compounding
from investcalc.core.ping import get_ping_message, get_version
from investcalc.core.validation import InputValidationError
from investcalc.schemas.average_cost import AverageCostRequest
from investcalc.schemas.compounding import CompoundingInput
from investcalc.schemas.ping import PingResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    errors = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": errors}), HTTPStatus.UNPROCESSABLE_ENTITY


def _invalid_input(exc: InputValidationError):
    logger.info("rejected %s: %s", request.path, exc)
    return jsonify(exc.to_dict()), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message(), version=get_version())
    return jsonify(response.model_dump())


@api_bp.post("/calc/compounding")
def compounding() -> Any:
    """Simulate compounding growth and return the full period ledger."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = CompoundingInput.model_validate(raw_payload)
    outcome = simulate_compounding(
        payload,
        max_periods=current_app.config.get("MAX_TOTAL_PERIODS"),
    )
    if not outcome.ok:
        return _invalid_input(outcome.error)
    return jsonify(outcome.result.model_dump(mode="json"))


@api_bp.post("/calc/average-cost")
def average_cost() -> Any:
    """Weighted average unit price across the submitted purchases."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = AverageCostRequest.model_validate(raw_payload)
    outcome = compute_average_cost(payload.entries)
    if not outcome.ok:
        return _invalid_input(outcome.error)
    return jsonify(outcome.result.model_dump(mode="json"))
