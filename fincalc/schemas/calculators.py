"""Request contracts for the calculator endpoints.

Rates arrive as percentages, the way the widgets' sliders present them; the
handlers convert to decimal fractions before calling the engine.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fincalc.core.health import ActivityLevel, Gender


class CalculatorRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")


# -----------------------------
# Savings and deposits
# -----------------------------


class SipRequest(CalculatorRequest):
    monthly_investment: float = Field(ge=0)
    annual_return_percent: float = Field(ge=0, le=50)
    years: int = Field(ge=0, le=60)


class CompoundInterestRequest(CalculatorRequest):
    principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=100)
    years: int = Field(ge=0, le=100)
    frequency: int = Field(12, ge=1, le=365, description="Compounding periods per year.")


class FixedDepositRequest(CalculatorRequest):
    principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=20)
    years: int = Field(ge=0, le=50)
    frequency: int = Field(4, ge=1, le=365)


class SimpleInterestRequest(CalculatorRequest):
    principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=100)
    years: int = Field(ge=0, le=100)


class RecurringDepositRequest(CalculatorRequest):
    monthly_deposit: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=20)
    years: int = Field(ge=0, le=30)


class PpfRequest(CalculatorRequest):
    yearly_deposit: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=20)
    years: int = Field(15, ge=0, le=50)


class NpsRequest(CalculatorRequest):
    current_age: int = Field(ge=18, le=70)
    monthly_contribution: float = Field(ge=0)
    annual_return_percent: float = Field(ge=0, le=30)


class RetirementRequest(CalculatorRequest):
    # ordering of the two ages is reported by the engine, not rejected here
    current_age: int = Field(ge=0, le=100)
    retirement_age: int = Field(ge=0, le=100)
    monthly_expense: float = Field(ge=0)
    inflation_percent: float = Field(ge=0, le=30)
    expected_return_percent: float = Field(ge=0, le=50)


# -----------------------------
# Loans
# -----------------------------


class EmiRequest(CalculatorRequest):
    principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=50)
    tenure_months: int = Field(ge=1, le=480)


class PurchaseLoanRequest(CalculatorRequest):
    price: float = Field(ge=0)
    down_payment: float = Field(0.0, ge=0)
    annual_rate_percent: float = Field(ge=0, le=50)
    tenure_months: int = Field(ge=1, le=480)

    @model_validator(mode="after")
    def ensure_down_payment(self) -> "PurchaseLoanRequest":
        if self.down_payment > self.price:
            raise ValueError("down_payment cannot exceed price")
        return self


class LoanEligibilityRequest(CalculatorRequest):
    monthly_income: float = Field(ge=0)
    existing_emi: float = Field(0.0, ge=0)
    annual_rate_percent: float = Field(ge=0, le=50)
    tenure_months: int = Field(ge=1, le=480)
    foir_percent: float = Field(50, ge=0, le=100)


class PrepaymentRequest(CalculatorRequest):
    outstanding_principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=50)
    remaining_months: int = Field(ge=0, le=480)
    prepayment_amount: float = Field(ge=0)


# -----------------------------
# Salary and tax
# -----------------------------


class GratuityRequest(CalculatorRequest):
    last_salary: float = Field(ge=0, description="Last drawn basic + DA per month.")
    years_of_service: float = Field(ge=0, le=60)


class IncomeTaxRequest(CalculatorRequest):
    gross_income: float = Field(ge=0)
    deduction_80c: float = Field(0.0, ge=0)
    deduction_80d: float = Field(0.0, ge=0)
    other_deductions: float = Field(0.0, ge=0)


# -----------------------------
# Health
# -----------------------------


class BmiRequest(CalculatorRequest):
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)


class BmrRequest(BmiRequest):
    age: int = Field(ge=1, le=120)
    gender: Gender


class CalorieRequest(BmrRequest):
    activity: ActivityLevel = ActivityLevel.SEDENTARY


class IdealWeightRequest(CalculatorRequest):
    height_cm: float = Field(gt=0)
    gender: Gender


class ChildHeightRequest(CalculatorRequest):
    father_height_cm: float = Field(gt=0)
    mother_height_cm: float = Field(gt=0)
    gender: Gender


class WalkingRequest(CalculatorRequest):
    weight_kg: float = Field(gt=0)
    duration_minutes: float = Field(ge=0)
    speed_kmh: float = Field(gt=0, le=12)
    incline_percent: float = Field(0.0, ge=0, le=15)


class DiabetesRiskRequest(CalculatorRequest):
    age: int = Field(ge=1, le=120)
    bmi: float = Field(gt=0)
    waist_cm: float = Field(gt=0)
    family_history: bool = False
    high_blood_pressure: bool = False
    physically_active: bool = True
