"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from fincalc.core.registry import CALCULATORS, UnknownCalculatorError, run_calculator
from fincalc.schemas.api import CalculatorInfo, PingResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(UnknownCalculatorError)
def _handle_unknown_calculator(exc: UnknownCalculatorError):
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong")
    return jsonify(response.model_dump())


@api_bp.get("/calculators")
def calculators() -> Any:
    """List every calculator key with its display title and input fields."""
    listing = [
        CalculatorInfo(
            key=key.value,
            title=calculator.title,
            fields=list(calculator.request_model.model_fields),
        ).model_dump()
        for key, calculator in CALCULATORS.items()
    ]
    return jsonify(listing)


@api_bp.post("/calc/<calculator>")
def calculate(calculator: str) -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=True) or {}
    try:
        result = run_calculator(calculator, raw_payload)
    except (ValidationError, UnknownCalculatorError):
        raise
    except Exception:
        logger.exception("calculator %s failed", calculator)
        return jsonify({"detail": "calculation failed"}), HTTPStatus.INTERNAL_SERVER_ERROR
    # inf/nan become null in the JSON body
    return current_app.response_class(result.model_dump_json(), mimetype="application/json")
