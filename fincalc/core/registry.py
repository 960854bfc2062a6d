"""Static dispatch from a calculator key to its request model and handler.

The set of calculators is closed; ``CALCULATORS`` is a read-only mapping
built once at import time.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Type

from pydantic import BaseModel, ConfigDict, Field

from fincalc.core import growth, health, scenarios, series, tax
from fincalc.core.formatting import format_currency, format_number, format_percent
from fincalc.schemas.calculators import (
    BmiRequest,
    BmrRequest,
    CalculatorRequest,
    CalorieRequest,
    ChildHeightRequest,
    CompoundInterestRequest,
    DiabetesRiskRequest,
    EmiRequest,
    FixedDepositRequest,
    GratuityRequest,
    IdealWeightRequest,
    IncomeTaxRequest,
    LoanEligibilityRequest,
    NpsRequest,
    PpfRequest,
    PrepaymentRequest,
    PurchaseLoanRequest,
    RecurringDepositRequest,
    RetirementRequest,
    SimpleInterestRequest,
    SipRequest,
    WalkingRequest,
)

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = scenarios.MONTHS_PER_YEAR


class CalculatorType(str, Enum):
    SIP = "sip"
    COMPOUND_INTEREST = "compound-interest"
    FIXED_DEPOSIT = "fd"
    RECURRING_DEPOSIT = "rd"
    SIMPLE_INTEREST = "simple-interest"
    PPF = "ppf"
    NPS = "nps"
    RETIREMENT = "retirement"
    EMI = "emi"
    HOME_LOAN_EMI = "home-loan-emi"
    CAR_LOAN_EMI = "car-loan-emi"
    PERSONAL_LOAN_EMI = "personal-loan-emi"
    LOAN_ELIGIBILITY = "loan-eligibility"
    LOAN_PREPAYMENT = "loan-prepayment"
    INCOME_TAX = "income-tax"
    GRATUITY = "gratuity"
    BMI = "bmi"
    BMR = "bmr"
    CALORIE = "calorie"
    IDEAL_WEIGHT = "ideal-weight"
    CHILD_HEIGHT = "child-height"
    WALK_CALORIE_BURN = "walk-calorie-burn"
    DIABETES_RISK = "diabetes-risk"


class UnknownCalculatorError(LookupError):
    def __init__(self, key: str):
        super().__init__(f"unknown calculator '{key}'")
        self.key = key


class CalculatorResult(BaseModel):
    """What a widget needs: raw numbers, display strings and a chart series."""

    model_config = ConfigDict(ser_json_inf_nan="null")

    calculator: CalculatorType
    result: Dict[str, Any]
    display: Dict[str, str] = Field(default_factory=dict)
    series: List[Dict[str, Any]] = Field(default_factory=list)


class Calculator(NamedTuple):
    title: str
    request_model: Type[CalculatorRequest]
    handler: Callable[[Any], CalculatorResult]


def _currency(values: Mapping[str, Any]) -> Dict[str, str]:
    return {key: format_currency(value) for key, value in values.items()}


def _rows(points: List[BaseModel]) -> List[Dict[str, Any]]:
    return [point.model_dump() for point in points]


# -----------------------------
# Savings and deposits
# -----------------------------


def _sip(req: SipRequest) -> CalculatorResult:
    months = req.years * MONTHS_PER_YEAR
    future_value = growth.recurring_contribution_future_value(
        req.monthly_investment,
        growth.to_periodic_rate(req.annual_return_percent),
        months,
    )
    invested = req.monthly_investment * months
    result = {
        "invested": invested,
        "wealth_gained": future_value - invested,
        "future_value": future_value,
    }
    return CalculatorResult(
        calculator=CalculatorType.SIP,
        result=result,
        display=_currency(result),
        series=_rows(series.sip_series(req.monthly_investment, req.annual_return_percent / 100, req.years)),
    )


def _compound_interest(req: CompoundInterestRequest) -> CalculatorResult:
    rate = req.annual_rate_percent / 100
    total = growth.compound_interest(req.principal, rate, req.frequency, req.years)
    result = {
        "principal": req.principal,
        "interest": total - req.principal,
        "total": total,
        "simple_interest_total": req.principal + growth.simple_interest(req.principal, rate, req.years),
    }
    return CalculatorResult(
        calculator=CalculatorType.COMPOUND_INTEREST,
        result=result,
        display=_currency(result),
        series=_rows(series.compound_series(req.principal, rate, req.frequency, req.years)),
    )


def _fixed_deposit(req: FixedDepositRequest) -> CalculatorResult:
    rate = req.annual_rate_percent / 100
    deposit = scenarios.fixed_deposit(req.principal, rate, req.frequency, req.years)
    return CalculatorResult(
        calculator=CalculatorType.FIXED_DEPOSIT,
        result=deposit.model_dump(),
        display=_currency(deposit.model_dump()),
        series=_rows(series.compound_series(req.principal, rate, req.frequency, req.years)),
    )


def _recurring_deposit(req: RecurringDepositRequest) -> CalculatorResult:
    rate = req.annual_rate_percent / 100
    months = req.years * MONTHS_PER_YEAR
    maturity = growth.recurring_deposit_maturity(req.monthly_deposit, rate, months)
    deposited = req.monthly_deposit * months
    result = {"deposited": deposited, "interest": maturity - deposited, "maturity": maturity}
    return CalculatorResult(
        calculator=CalculatorType.RECURRING_DEPOSIT,
        result=result,
        display=_currency(result),
        series=_rows(series.recurring_deposit_series(req.monthly_deposit, rate, req.years)),
    )


def _simple_interest(req: SimpleInterestRequest) -> CalculatorResult:
    rate = req.annual_rate_percent / 100
    interest = growth.simple_interest(req.principal, rate, req.years)
    result = {"principal": req.principal, "interest": interest, "total": req.principal + interest}
    return CalculatorResult(
        calculator=CalculatorType.SIMPLE_INTEREST,
        result=result,
        display=_currency(result),
        series=_rows(series.simple_interest_series(req.principal, rate, req.years)),
    )


def _ppf(req: PpfRequest) -> CalculatorResult:
    rate = req.annual_rate_percent / 100
    maturity = growth.ppf_maturity(req.yearly_deposit, rate, req.years)
    invested = req.yearly_deposit * req.years
    result = {"invested": invested, "interest": maturity - invested, "maturity": maturity}
    return CalculatorResult(
        calculator=CalculatorType.PPF,
        result=result,
        display=_currency(result),
        series=_rows(series.ppf_series(req.yearly_deposit, rate, req.years)),
    )


def _nps(req: NpsRequest) -> CalculatorResult:
    rate = req.annual_return_percent / 100
    projection = scenarios.nps_projection(req.current_age, req.monthly_contribution, rate)
    money = projection.model_dump(exclude={"months"})
    return CalculatorResult(
        calculator=CalculatorType.NPS,
        result=projection.model_dump(),
        display=_currency(money),
        series=_rows(series.nps_series(req.current_age, req.monthly_contribution, rate)),
    )


def _retirement(req: RetirementRequest) -> CalculatorResult:
    expected_return = req.expected_return_percent / 100
    plan = scenarios.retirement_plan(
        req.current_age,
        req.retirement_age,
        req.monthly_expense,
        req.inflation_percent / 100,
        expected_return,
    )
    display: Dict[str, str] = {}
    if plan.status == scenarios.ScenarioStatus.OK:
        display = _currency(
            {
                "future_monthly_expense": plan.future_monthly_expense,
                "corpus_required": plan.corpus_required,
                "monthly_sip_needed": plan.monthly_sip_needed,
            }
        )
    return CalculatorResult(
        calculator=CalculatorType.RETIREMENT,
        result=plan.model_dump(),
        display=display,
        series=_rows(series.retirement_series(plan, expected_return)),
    )


# -----------------------------
# Loans
# -----------------------------


def _principal_loan(kind: CalculatorType) -> Callable[[EmiRequest], CalculatorResult]:
    def handler(req: EmiRequest) -> CalculatorResult:
        summary = scenarios.loan_summary(req.principal, req.annual_rate_percent / 100, req.tenure_months)
        return _loan_result(kind, summary, req.annual_rate_percent, req.tenure_months)

    return handler


def _purchase_loan(kind: CalculatorType) -> Callable[[PurchaseLoanRequest], CalculatorResult]:
    def handler(req: PurchaseLoanRequest) -> CalculatorResult:
        summary = scenarios.loan_summary(
            req.price,
            req.annual_rate_percent / 100,
            req.tenure_months,
            down_payment=req.down_payment,
        )
        return _loan_result(kind, summary, req.annual_rate_percent, req.tenure_months)

    return handler


def _loan_result(
    kind: CalculatorType,
    summary: scenarios.LoanSummary,
    annual_rate_percent: float,
    tenure_months: int,
) -> CalculatorResult:
    display = _currency(
        {
            "loan_amount": summary.loan_amount,
            "emi": summary.emi,
            "total_payment": summary.total_payment,
            "total_interest": summary.total_interest,
        }
    )
    display["effective_annual_rate"] = format_percent(summary.effective_annual_rate * 100, 2)
    schedule = series.amortization_schedule(
        summary.loan_amount,
        growth.to_periodic_rate(annual_rate_percent),
        tenure_months,
        summary.emi,
    )
    return CalculatorResult(calculator=kind, result=summary.model_dump(), display=display, series=_rows(schedule))


def _loan_eligibility(req: LoanEligibilityRequest) -> CalculatorResult:
    eligibility = scenarios.loan_eligibility(
        req.monthly_income,
        req.existing_emi,
        req.annual_rate_percent / 100,
        req.tenure_months,
        req.foir_percent,
    )
    return CalculatorResult(
        calculator=CalculatorType.LOAN_ELIGIBILITY,
        result=eligibility.model_dump(),
        display=_currency(eligibility.model_dump()),
    )


def _loan_prepayment(req: PrepaymentRequest) -> CalculatorResult:
    impact = scenarios.prepayment_impact(
        req.outstanding_principal,
        req.annual_rate_percent / 100,
        req.remaining_months,
        req.prepayment_amount,
    )
    display = {"current_emi": format_currency(impact.current_emi)}
    if impact.status == scenarios.ScenarioStatus.OK:
        display["interest_saved"] = format_currency(impact.interest_saved)
        display["new_tenure"] = f"{impact.new_tenure_months} months"
    return CalculatorResult(
        calculator=CalculatorType.LOAN_PREPAYMENT,
        result=impact.model_dump(),
        display=display,
    )


# -----------------------------
# Salary and tax
# -----------------------------


def _income_tax(req: IncomeTaxRequest) -> CalculatorResult:
    comparison = tax.compare_regimes(
        req.gross_income,
        deduction_80c=req.deduction_80c,
        deduction_80d=req.deduction_80d,
        other_deductions=req.other_deductions,
    )
    return CalculatorResult(
        calculator=CalculatorType.INCOME_TAX,
        result=comparison.model_dump(),
        display=_currency(
            {
                "old": comparison.old.total_tax,
                "new": comparison.new.total_tax,
                "savings": comparison.savings,
            }
        ),
    )


def _gratuity(req: GratuityRequest) -> CalculatorResult:
    amount = tax.gratuity(req.last_salary, req.years_of_service)
    return CalculatorResult(
        calculator=CalculatorType.GRATUITY,
        result={"gratuity": amount},
        display=_currency({"gratuity": amount}),
    )


# -----------------------------
# Health
# -----------------------------


def _bmi(req: BmiRequest) -> CalculatorResult:
    value = health.bmi(req.weight_kg, req.height_cm)
    healthy = health.healthy_weight_range(req.height_cm)
    return CalculatorResult(
        calculator=CalculatorType.BMI,
        result={
            "bmi": value,
            "category": health.bmi_category(value),
            "healthy_weight": healthy.model_dump(),
        },
        display={"bmi": format_number(value, 1)},
    )


def _bmr(req: BmrRequest) -> CalculatorResult:
    value = health.bmr(req.weight_kg, req.height_cm, req.age, req.gender)
    return CalculatorResult(
        calculator=CalculatorType.BMR,
        result={"bmr": value},
        display={"bmr": f"{format_number(value)} cal/day"},
    )


def _calorie(req: CalorieRequest) -> CalculatorResult:
    targets = health.daily_calories(req.weight_kg, req.height_cm, req.age, req.gender, req.activity)
    return CalculatorResult(
        calculator=CalculatorType.CALORIE,
        result=targets.model_dump(),
        display={key: f"{format_number(value)} cal" for key, value in targets.model_dump().items()},
    )


def _ideal_weight(req: IdealWeightRequest) -> CalculatorResult:
    weights = health.ideal_weight(req.height_cm, req.gender)
    return CalculatorResult(calculator=CalculatorType.IDEAL_WEIGHT, result=weights.model_dump())


def _child_height(req: ChildHeightRequest) -> CalculatorResult:
    prediction = health.child_height(req.father_height_cm, req.mother_height_cm, req.gender)
    return CalculatorResult(
        calculator=CalculatorType.CHILD_HEIGHT,
        result=prediction.model_dump(),
        display={
            "predicted": f"{format_number(prediction.predicted)} cm",
            "range": f"{format_number(prediction.low)} - {format_number(prediction.high)} cm",
        },
    )


def _walk_calorie_burn(req: WalkingRequest) -> CalculatorResult:
    burn = health.walking_calories(req.weight_kg, req.duration_minutes, req.speed_kmh, req.incline_percent)
    return CalculatorResult(
        calculator=CalculatorType.WALK_CALORIE_BURN,
        result=burn.model_dump(),
        display={
            "calories": format_number(burn.calories),
            "distance": f"{format_number(burn.distance_km, 1)} km",
            "steps": f"~{format_number(burn.steps)}",
            "met": format_number(burn.met, 1),
        },
    )


def _diabetes_risk(req: DiabetesRiskRequest) -> CalculatorResult:
    risk = health.diabetes_risk(
        req.age,
        req.bmi,
        req.waist_cm,
        family_history=req.family_history,
        high_blood_pressure=req.high_blood_pressure,
        physically_active=req.physically_active,
    )
    return CalculatorResult(
        calculator=CalculatorType.DIABETES_RISK,
        result=risk.model_dump(),
        display={"score": f"{risk.score}/{risk.max_score}", "percentage": format_percent(risk.percentage, 0)},
    )


CALCULATORS: Mapping[CalculatorType, Calculator] = MappingProxyType(
    {
        CalculatorType.SIP: Calculator("SIP Calculator", SipRequest, _sip),
        CalculatorType.COMPOUND_INTEREST: Calculator(
            "Compound Interest Calculator", CompoundInterestRequest, _compound_interest
        ),
        CalculatorType.FIXED_DEPOSIT: Calculator("FD Calculator", FixedDepositRequest, _fixed_deposit),
        CalculatorType.RECURRING_DEPOSIT: Calculator("RD Calculator", RecurringDepositRequest, _recurring_deposit),
        CalculatorType.SIMPLE_INTEREST: Calculator(
            "Simple Interest Calculator", SimpleInterestRequest, _simple_interest
        ),
        CalculatorType.PPF: Calculator("PPF Calculator", PpfRequest, _ppf),
        CalculatorType.NPS: Calculator("NPS Calculator", NpsRequest, _nps),
        CalculatorType.RETIREMENT: Calculator("Retirement Calculator", RetirementRequest, _retirement),
        CalculatorType.EMI: Calculator("EMI Calculator", EmiRequest, _principal_loan(CalculatorType.EMI)),
        CalculatorType.HOME_LOAN_EMI: Calculator(
            "Home Loan EMI Calculator", PurchaseLoanRequest, _purchase_loan(CalculatorType.HOME_LOAN_EMI)
        ),
        CalculatorType.CAR_LOAN_EMI: Calculator(
            "Car Loan EMI Calculator", PurchaseLoanRequest, _purchase_loan(CalculatorType.CAR_LOAN_EMI)
        ),
        CalculatorType.PERSONAL_LOAN_EMI: Calculator(
            "Personal Loan EMI Calculator", EmiRequest, _principal_loan(CalculatorType.PERSONAL_LOAN_EMI)
        ),
        CalculatorType.LOAN_ELIGIBILITY: Calculator(
            "Loan Eligibility Calculator", LoanEligibilityRequest, _loan_eligibility
        ),
        CalculatorType.LOAN_PREPAYMENT: Calculator("Loan Prepayment Calculator", PrepaymentRequest, _loan_prepayment),
        CalculatorType.INCOME_TAX: Calculator("Income Tax Calculator", IncomeTaxRequest, _income_tax),
        CalculatorType.GRATUITY: Calculator("Gratuity Calculator", GratuityRequest, _gratuity),
        CalculatorType.BMI: Calculator("BMI Calculator", BmiRequest, _bmi),
        CalculatorType.BMR: Calculator("BMR Calculator", BmrRequest, _bmr),
        CalculatorType.CALORIE: Calculator("Calorie Calculator", CalorieRequest, _calorie),
        CalculatorType.IDEAL_WEIGHT: Calculator("Ideal Weight Calculator", IdealWeightRequest, _ideal_weight),
        CalculatorType.CHILD_HEIGHT: Calculator("Child Height Predictor", ChildHeightRequest, _child_height),
        CalculatorType.WALK_CALORIE_BURN: Calculator(
            "Walking Calorie Burn Calculator", WalkingRequest, _walk_calorie_burn
        ),
        CalculatorType.DIABETES_RISK: Calculator("Diabetes Risk Calculator", DiabetesRiskRequest, _diabetes_risk),
    }
)


def get_calculator(key: str) -> Calculator:
    try:
        return CALCULATORS[CalculatorType(key)]
    except ValueError:
        raise UnknownCalculatorError(key) from None


def run_calculator(key: str, payload: Dict[str, Any]) -> CalculatorResult:
    """Validate ``payload`` against the calculator's request model and run it.

    Raises ``UnknownCalculatorError`` for an unknown key and pydantic's
    ``ValidationError`` for a bad payload.
    """
    calculator = get_calculator(key)
    request = calculator.request_model.model_validate(payload)
    logger.debug("running %s", key)
    return calculator.handler(request)
