from __future__ import annotations

import json
import math
from math import isclose

import pytest
from pydantic import ValidationError

from fincalc.core.registry import (
    CALCULATORS,
    CalculatorResult,
    CalculatorType,
    UnknownCalculatorError,
    get_calculator,
    run_calculator,
)


def test_every_calculator_type_is_registered():
    assert set(CALCULATORS) == set(CalculatorType)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        CALCULATORS["new"] = None  # type: ignore[index]


def test_unknown_key_raises():
    with pytest.raises(UnknownCalculatorError) as excinfo:
        get_calculator("lottery")
    assert excinfo.value.key == "lottery"


def test_sip_result_and_display():
    result = run_calculator("sip", {"monthly_investment": 50_000, "annual_return_percent": 12, "years": 10})

    assert result.calculator == CalculatorType.SIP
    assert isclose(result.result["future_value"], 11_616_953.8, abs_tol=50)
    assert result.result["invested"] == 6_000_000
    assert result.display["future_value"] == "₹1.16 Cr"
    assert len(result.series) == 11


def test_extra_fields_are_rejected():
    with pytest.raises(ValidationError):
        run_calculator("bmi", {"weight_kg": 70, "height_cm": 175, "age": 30})


def test_loan_variants_share_the_engine():
    payload = {"principal": 1_000_000, "annual_rate_percent": 10, "tenure_months": 60}
    emi = run_calculator("emi", payload)
    personal = run_calculator("personal-loan-emi", payload)
    home = run_calculator(
        "home-loan-emi",
        {"price": 1_200_000, "down_payment": 200_000, "annual_rate_percent": 10, "tenure_months": 60},
    )

    assert personal.calculator == CalculatorType.PERSONAL_LOAN_EMI
    assert personal.result == emi.result
    assert isclose(home.result["emi"], emi.result["emi"])
    assert len(home.series) == 5


def test_down_payment_above_price_is_rejected():
    with pytest.raises(ValidationError):
        run_calculator(
            "car-loan-emi",
            {"price": 500_000, "down_payment": 600_000, "annual_rate_percent": 9, "tenure_months": 60},
        )


def test_invalid_retirement_has_no_display():
    result = run_calculator(
        "retirement",
        {
            "current_age": 45,
            "retirement_age": 40,
            "monthly_expense": 50_000,
            "inflation_percent": 6,
            "expected_return_percent": 12,
        },
    )
    assert result.result["status"] == "invalid"
    assert result.display == {}
    assert result.series == []


def test_income_tax_display():
    result = run_calculator("income-tax", {"gross_income": 850_000})
    assert result.result["recommended"] == "new"
    assert result.display["old"] == "₹75,400"
    assert result.display["new"] == "₹28,600"


def test_walk_display():
    result = run_calculator("walk-calorie-burn", {"weight_kg": 70, "duration_minutes": 60, "speed_kmh": 5})
    assert result.display["steps"] == "~6,667"
    assert result.display["distance"] == "5.0 km"


def test_overflowed_values_serialise_as_null():
    result = CalculatorResult(calculator=CalculatorType.SIP, result={"future_value": math.inf})
    assert json.loads(result.model_dump_json())["result"]["future_value"] is None
